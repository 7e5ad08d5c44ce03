"""
Buffered rendering with optional post-processing.

BufferRenderer wraps another renderer, renders into memory first and only
writes to the real sink once everything succeeded. Nothing reaches the sink
when the inner renderer fails, when post-processing fails, or when the
context is canceled before the final write.

Usage:
    renderer = BufferRenderer(json(), BufferConfig(post_render=minify))
    with open("out.json", "wb") as f:
        renderer.render(f, data)
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from typing import Any, BinaryIO

from pydantic import BaseModel, ConfigDict, Field

from renderkit.context import Context, ContextError, check_context
from renderkit.errors import RenderFailedError
from renderkit.options import Option
from renderkit.renderer import Renderer, Sink

logger = logging.getLogger(__name__)

PostRender = Callable[[bytes], bytes]


class BufferConfig(BaseModel):
    """BufferRenderer configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    initial_size: int = Field(
        default=0,
        ge=0,
        description="Expected output size in bytes; a sizing hint only",
    )
    post_render: PostRender | None = Field(
        default=None,
        description="Transform applied to the complete output before it is written",
    )


class BufferRenderer(Renderer):
    """Renderer decorator providing all-or-nothing delivery.

    initial_size is a hint only: io.BytesIO grows on demand and cannot reserve
    capacity up front. It is reported next to the byte count in the debug log.
    """

    def __init__(self, renderer: Renderer, config: BufferConfig | None = None):
        config = config or BufferConfig()
        self.renderer = renderer
        self.initial_size = config.initial_size
        self.post_render = config.post_render

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        """Render through the wrapped renderer, then write once.

        Raises:
            Canceled: If ctx is canceled at any checkpoint before the write
            DeadlineExceeded: If ctx expired at any checkpoint before the write
            RenderFailedError: If the wrapped renderer or post_render fails
        """
        check_context(ctx)

        buf = io.BytesIO()
        try:
            self.renderer.render_context(ctx, buf, data, *opts)
        except ContextError:
            raise
        except Exception as e:
            raise RenderFailedError(f"buffer render: {e}") from e

        content = buf.getvalue()

        if self.post_render is not None:
            check_context(ctx)
            try:
                content = self.post_render(content)
            except ContextError:
                raise
            except Exception as e:
                raise RenderFailedError(f"post-processing: {e}") from e

        check_context(ctx)
        logger.debug(f"Writing {len(content)} buffered bytes (size hint {self.initial_size})")
        sink.write(content)


def buffer(renderer: Renderer) -> BufferRenderer:
    """Wrap renderer with buffering and no post-processing."""
    return BufferRenderer(renderer, BufferConfig())
