"""YAML renderer built on PyYAML."""

from __future__ import annotations

from typing import Any, BinaryIO

import yaml as yamllib
from pydantic import BaseModel, Field, field_validator

from renderkit.context import Context, check_context
from renderkit.errors import RenderFailedError
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_yaml
from renderkit.renderers.encoding import to_plain, utf8


class YAMLConfig(BaseModel):
    """YAML renderer configuration, fixed at construction."""

    indent: int = Field(
        default=2,
        description="Spaces per nesting level",
    )
    sort_keys: bool = Field(
        default=False,
        description="Sort mapping keys instead of keeping insertion order",
    )
    explicit_start: bool = Field(
        default=False,
        description="Start the document with '---'",
    )

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: int) -> int:
        """Validate indent is within the range PyYAML accepts."""
        if not (2 <= v <= 9):
            raise ValueError("Indent must be between 2 and 9")
        return v


class YAMLRenderer(Renderer):
    """Writes data as a block-style YAML document.

    An indent set through options overrides the configured indent by its
    length. The line ending follows the format options.
    """

    def __init__(self, config: YAMLConfig | None = None):
        self.config = config or YAMLConfig()

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        options = new_options().use(mime_yaml()).use(*opts)

        fmt = options.format
        indent = self.config.indent
        if fmt.indent:
            indent = min(max(len(fmt.indent), 2), 9)

        try:
            content = yamllib.safe_dump(
                to_plain(data),
                indent=indent,
                sort_keys=self.config.sort_keys,
                explicit_start=self.config.explicit_start,
                default_flow_style=False,
                allow_unicode=True,
                line_break=fmt.line_ending,
            )
        except yamllib.YAMLError as e:
            raise RenderFailedError(f"yaml encode: {e}") from e

        if fmt.prefix:
            lines = content.split(fmt.line_ending)
            content = fmt.line_ending.join(fmt.prefix + line if line else line for line in lines)
        sink.write(utf8(content, "yaml encode"))


def yaml() -> Renderer:
    """Create a YAML renderer with default configuration."""
    return YAMLRenderer()
