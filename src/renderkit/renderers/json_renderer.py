"""JSON and JSONP renderer."""

from __future__ import annotations

import json as jsonlib
from typing import Any, BinaryIO

from pydantic import BaseModel, Field, field_validator

from renderkit.context import Context, check_context
from renderkit.errors import RenderFailedError
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_json
from renderkit.renderers.encoding import json_default, utf8

# Characters escaped when the output may be embedded in HTML
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class JSONConfig(BaseModel):
    """JSON renderer configuration, fixed at construction."""

    escape_html: bool = Field(
        default=False,
        description="Escape <, > and & so output is safe inside HTML",
    )
    prefix: str = Field(
        default="",
        description="Default line prefix used in pretty mode",
    )
    indent: str = Field(
        default="",
        description="Default indentation unit used in pretty mode",
    )
    padding: str = Field(
        default="",
        description="JSONP callback name; empty produces plain JSON",
    )

    @field_validator("padding")
    @classmethod
    def validate_padding(cls, v: str) -> str:
        """Validate the callback name is a plain identifier path."""
        if v and not all(part.isidentifier() for part in v.split(".")):
            raise ValueError(f"Invalid JSONP callback name: {v!r}")
        return v


def escape_html(content: str) -> str:
    """Replace HTML-sensitive characters with JSON unicode escapes."""
    for char, escaped in _HTML_ESCAPES.items():
        content = content.replace(char, escaped)
    return content


class JSONRenderer(Renderer):
    """Writes data as JSON, optionally wrapped in a JSONP callback.

    Compact output ends with a newline. In pretty mode the prefix and indent
    set through options win over the configured defaults.
    """

    def __init__(self, config: JSONConfig | None = None):
        self.config = config or JSONConfig()

    def encode(self, data: Any, pretty: bool, prefix: str, indent: str) -> str:
        """Encode data to a JSON document terminated by a newline.

        Pretty mode only breaks lines when a prefix or indent is set. HTML
        escaping applies to the encoded document, never to the prefix.

        Raises:
            RenderFailedError: If data cannot be encoded
        """
        multiline = pretty and bool(prefix or indent)
        try:
            if multiline:
                content = jsonlib.dumps(
                    data,
                    indent=indent,
                    separators=(",", ": "),
                    ensure_ascii=False,
                    allow_nan=False,
                    default=json_default,
                )
            else:
                content = jsonlib.dumps(
                    data,
                    separators=(",", ":"),
                    ensure_ascii=False,
                    allow_nan=False,
                    default=json_default,
                )
        except (TypeError, ValueError) as e:
            raise RenderFailedError(f"json encode: {e}") from e

        if self.config.escape_html:
            content = escape_html(content)
        if multiline and prefix:
            content = content.replace("\n", "\n" + prefix)
        return content + "\n"

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        options = new_options().use(mime_json()).use(*opts)

        fmt = options.format
        content = self.encode(
            data,
            pretty=fmt.pretty,
            prefix=fmt.prefix or self.config.prefix,
            indent=fmt.indent or self.config.indent,
        )
        body = utf8(content, "json encode")

        if not self.config.padding:
            sink.write(body)
            return

        check_context(ctx)
        sink.write(f"{self.config.padding}(".encode())
        sink.write(body)
        check_context(ctx)
        sink.write(b")")


def json() -> Renderer:
    """Create a JSON renderer with web-safe defaults.

    HTML escaping is enabled and pretty mode indents with two spaces.
    """
    return JSONRenderer(JSONConfig(escape_html=True, indent="  "))
