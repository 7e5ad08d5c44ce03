"""Tests for the text renderer."""

import io

import pytest

from renderkit.context import Canceled
from renderkit.errors import RenderFailedError
from renderkit.format import line_ending, pretty, textf, with_format
from renderkit.options import CapturedOptions, capture_options, mime
from renderkit.renderers import TextRenderer, text

pytestmark = pytest.mark.unit


class TestTextRenderer:
    """Tests for TextRenderer."""

    def test_format_args(self, sink: io.BytesIO) -> None:
        """Test a format string is filled with positional args."""
        text().render(sink, "Hello, %s", textf("Gophers"))
        assert sink.getvalue() == b"Hello, Gophers"

    def test_mapping_arg(self, sink: io.BytesIO) -> None:
        """Test a single mapping arg fills named placeholders."""
        text().render(sink, "%(greeting)s, %(name)s", textf({"greeting": "Hi", "name": "Ana"}))
        assert sink.getvalue() == b"Hi, Ana"

    def test_plain_string_without_args(self, sink: io.BytesIO) -> None:
        """Test a string without args is written verbatim, percent signs included."""
        text().render(sink, "100% done")
        assert sink.getvalue() == b"100% done"

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"raw bytes", b"raw bytes"),
            (bytearray(b"array"), b"array"),
            (ValueError("boom"), b"boom"),
            (None, b""),
            (42, b"42"),
            (3.5, b"3.5"),
            (["a", 1], b"['a', 1]"),
        ],
    )
    def test_capability_probing(self, sink: io.BytesIO, data: object, expected: bytes) -> None:
        """Test each supported kind of value converts to text."""
        text().render(sink, data)
        assert sink.getvalue() == expected

    def test_pretty_appends_line_ending(self, sink: io.BytesIO) -> None:
        """Test pretty mode appends one line ending."""
        text().render(sink, "line", with_format(pretty()))
        assert sink.getvalue() == b"line\n"

    def test_pretty_uses_configured_line_ending(self, sink: io.BytesIO) -> None:
        """Test pretty mode honors the line ending."""
        text().render(sink, "line", with_format(pretty(), line_ending("\r\n")))
        assert sink.getvalue() == b"line\r\n"

    def test_bad_format_string(self, sink: io.BytesIO) -> None:
        """Test a mismatched format string fails without output."""
        with pytest.raises(RenderFailedError, match="text format"):
            text().render(sink, "%d items", textf("many"))
        assert sink.getvalue() == b""

    def test_default_content_type(self, sink: io.BytesIO) -> None:
        """Test the default content type and its override."""
        captured = CapturedOptions()
        TextRenderer().render(sink, "x", capture_options(captured))
        assert captured.options.content_type == "text/plain; charset=utf-8"

        TextRenderer().render(sink, "x", mime("text/markdown"), capture_options(captured))
        assert captured.options.content_type == "text/markdown"

    def test_lone_surrogate(self, sink: io.BytesIO) -> None:
        """Test text UTF-8 cannot carry fails without output."""
        with pytest.raises(RenderFailedError, match="text encode"):
            text().render(sink, "\ud800")
        assert sink.getvalue() == b""

    def test_canceled(self, sink: io.BytesIO, canceled_ctx) -> None:
        """Test a canceled context writes nothing."""
        with pytest.raises(Canceled):
            text().render_context(canceled_ctx, sink, "hello")
        assert sink.getvalue() == b""
