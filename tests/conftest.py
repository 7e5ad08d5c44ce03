"""Pytest configuration and shared fixtures for renderkit tests."""

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from renderkit.context import Context, background, with_cancel


class RecordingSink:
    """Binary sink that remembers each write separately."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.writes)


@pytest.fixture
def sink() -> io.BytesIO:
    """In-memory binary sink."""
    return io.BytesIO()


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Sink that records individual writes."""
    return RecordingSink()


@pytest.fixture
def failing_sink() -> MagicMock:
    """Sink whose writes always fail."""
    mock = MagicMock()
    mock.write.side_effect = OSError("disk full")
    return mock


@pytest.fixture
def canceled_ctx() -> Context:
    """A context that is already canceled."""
    ctx, cancel = with_cancel(background())
    cancel()
    return ctx


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Directory with a small template tree."""
    root = tmp_path / "templates"
    (root / "partials").mkdir(parents=True)
    (root / "page.html").write_text("<h1>{{ title }}</h1>\n")
    (root / "layout.html").write_text("<body>{% include 'partials/nav.html' %}</body>")
    (root / "partials" / "nav.html").write_text("<nav>{{ data.title | upper }}</nav>")
    (root / "notes.txt").write_text("plain notes")
    return root
