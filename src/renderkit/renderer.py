"""
The Renderer contract shared by every output adapter.

Subclasses implement render_context() and inherit render(), which runs
render_context() with the background context. Implementations must call
check_context() before doing any work.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Protocol

from renderkit.context import Context, background
from renderkit.options import Option, mime, mime_utf8


class Sink(Protocol):
    """Anything bytes can be written to."""

    def write(self, data: bytes, /) -> Any: ...


class Renderer(ABC):
    """Converts data plus configuration into bytes on a sink."""

    def render(self, sink: Sink | BinaryIO, data: Any, *opts: Option) -> None:
        """Render data to sink with a non-cancellable context.

        Args:
            sink: Binary writable destination
            data: Value to render
            *opts: Option combinators applied after the renderer defaults
        """
        self.render_context(background(), sink, data, *opts)

    @abstractmethod
    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        """Render data to sink, honoring ctx cancellation.

        Raises:
            Canceled: If ctx is canceled before output is produced
            DeadlineExceeded: If ctx expired before output is produced
        """


def mime_text_plain() -> Option:
    """Content type text/plain; charset=utf-8."""
    return mime_utf8("text/plain")


def mime_text_html() -> Option:
    """Content type text/html; charset=utf-8."""
    return mime_utf8("text/html")


def mime_json() -> Option:
    """Content type application/json; charset=utf-8."""
    return mime_utf8("application/json")


def mime_xml() -> Option:
    """Content type application/xml; charset=utf-8."""
    return mime_utf8("application/xml")


def mime_csv() -> Option:
    """Content type text/csv; charset=utf-8."""
    return mime_utf8("text/csv")


def mime_yaml() -> Option:
    """Content type application/yaml; charset=utf-8."""
    return mime_utf8("application/yaml")


def mime_binary() -> Option:
    """Content type application/octet-stream for binary or unknown data."""
    return mime("application/octet-stream")


def mime_stream() -> Option:
    """Content type application/octet-stream for streamed binary data."""
    return mime("application/octet-stream")


def mime_pdf() -> Option:
    """Content type application/pdf."""
    return mime("application/pdf")
