"""Raw bytes renderer."""

from __future__ import annotations

from typing import Any, BinaryIO

from renderkit.context import Context, check_context
from renderkit.errors import InvalidDataError
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_binary

DEFAULT_CHUNK_SIZE = 64 * 1024


class BinaryRenderer(Renderer):
    """Writes bytes verbatim or copies a readable binary stream.

    Streams are copied in chunks and the context is checked before each
    chunk, so a cancellation stops the copy between chunks.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        new_options().use(mime_binary()).use(*opts)

        if isinstance(data, (bytes, bytearray, memoryview)):
            sink.write(bytes(data))
            return

        read = getattr(data, "read", None)
        if not callable(read):
            raise InvalidDataError("binary", data, "bytes-like object or readable binary stream")

        while True:
            check_context(ctx)
            chunk = read(self.chunk_size)
            if not chunk:
                break
            if isinstance(chunk, str):
                raise InvalidDataError("binary", data, "binary stream, got text stream")
            sink.write(chunk)


def binary() -> Renderer:
    """Create a binary renderer."""
    return BinaryRenderer()
