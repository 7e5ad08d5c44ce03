"""Plain text renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, BinaryIO

from renderkit.context import Context, check_context
from renderkit.errors import RenderFailedError
from renderkit.format import FormatOptions
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_text_plain
from renderkit.renderers.encoding import utf8


def to_text(data: Any, fmt: FormatOptions) -> str:
    """Convert data to text by probing its capabilities in order.

    - str: used as a %-format string when positional args are set
    - bytes-like: decoded as UTF-8
    - exceptions: their message
    - None: empty text
    - anything else: str(data)
    """
    if isinstance(data, str):
        if not fmt.args:
            return data
        values: Any = tuple(fmt.args)
        if len(fmt.args) == 1 and isinstance(fmt.args[0], Mapping):
            values = fmt.args[0]
        try:
            return data % values
        except (TypeError, ValueError, KeyError) as e:
            raise RenderFailedError(f"text format: {e}") from e
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).decode("utf-8", errors="replace")
    if isinstance(data, BaseException):
        return str(data)
    if data is None:
        return ""
    return str(data)


class TextRenderer(Renderer):
    """Writes the textual representation of data.

    Content type defaults to text/plain; charset=utf-8. In pretty mode one
    line ending is appended.
    """

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        options = new_options().use(mime_text_plain()).use(*opts)

        content = to_text(data, options.format)
        if options.format.pretty:
            content += options.format.line_ending
        sink.write(utf8(content, "text encode"))


def text() -> Renderer:
    """Create a text renderer."""
    return TextRenderer()
