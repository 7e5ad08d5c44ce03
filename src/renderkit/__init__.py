"""renderkit - render data to bytes through one interface.

Text, JSON, XML, CSV, YAML, binary and Jinja2 templates share the Renderer
contract: render(sink, data, *options). Options are small combinators for
formatting, headers and parameters; a Context token provides cooperative
cancellation, and BufferRenderer adds all-or-nothing delivery.
"""

from renderkit.buffer import BufferConfig, BufferRenderer, buffer
from renderkit.context import (
    Canceled,
    Context,
    ContextError,
    DeadlineExceeded,
    background,
    check_context,
    with_cancel,
    with_deadline,
    with_timeout,
)
from renderkit.errors import (
    InvalidContentTypeError,
    InvalidDataError,
    InvalidParamError,
    InvalidPathError,
    InvalidRootError,
    LoaderError,
    NegativeTimeoutError,
    PathTraversalError,
    RenderError,
    RenderFailedError,
    TemplateLoadError,
    TemplateNotFoundError,
)
from renderkit.format import FormatOptions, textf, use_crlf, with_format
from renderkit.headers import HeaderOptions
from renderkit.options import (
    CapturedOptions,
    Options,
    capture_options,
    combine,
    dump,
    header,
    mime,
    mime_utf8,
    name,
    new_options,
    param,
    separator,
    timeout,
    write_response,
)
from renderkit.renderer import (
    Renderer,
    mime_binary,
    mime_csv,
    mime_json,
    mime_pdf,
    mime_stream,
    mime_text_html,
    mime_text_plain,
    mime_xml,
    mime_yaml,
)

__version__ = "0.1.0"

__all__ = [
    "BufferConfig",
    "BufferRenderer",
    "Canceled",
    "CapturedOptions",
    "Context",
    "ContextError",
    "DeadlineExceeded",
    "FormatOptions",
    "HeaderOptions",
    "InvalidContentTypeError",
    "InvalidDataError",
    "InvalidParamError",
    "InvalidPathError",
    "InvalidRootError",
    "LoaderError",
    "NegativeTimeoutError",
    "Options",
    "PathTraversalError",
    "RenderError",
    "RenderFailedError",
    "Renderer",
    "TemplateLoadError",
    "TemplateNotFoundError",
    "background",
    "buffer",
    "capture_options",
    "check_context",
    "combine",
    "dump",
    "header",
    "mime",
    "mime_binary",
    "mime_csv",
    "mime_json",
    "mime_pdf",
    "mime_stream",
    "mime_text_html",
    "mime_text_plain",
    "mime_utf8",
    "mime_xml",
    "mime_yaml",
    "name",
    "new_options",
    "param",
    "separator",
    "textf",
    "timeout",
    "use_crlf",
    "with_cancel",
    "with_deadline",
    "with_format",
    "with_timeout",
    "write_response",
]
