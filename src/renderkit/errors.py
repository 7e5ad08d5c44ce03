"""
Error types raised by renderers, options and template loaders.

Cancellation errors live in renderkit.context and are never wrapped by
anything in this package, so callers can match on them directly.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base exception for rendering errors."""

    pass


class InvalidContentTypeError(RenderError, ValueError):
    """Raised when a media type cannot be used as a Content-Type value."""

    def __init__(self, mediatype: str):
        self.mediatype = mediatype
        super().__init__(f"invalid content type: {mediatype!r}")


class InvalidParamError(RenderError, ValueError):
    """Raised when a render parameter key or value is unusable."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"invalid parameter value for {key!r}: {reason}")


class NegativeTimeoutError(RenderError, ValueError):
    """Raised when a negative timeout is supplied."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"timeout cannot be negative: {timeout}")


class RenderFailedError(RenderError):
    """Raised when the underlying encoder or template execution fails."""

    pass


class InvalidDataError(RenderError, TypeError):
    """Raised when data does not have the shape a renderer requires."""

    def __init__(self, renderer: str, data: object, expected: str):
        self.renderer = renderer
        self.expected = expected
        super().__init__(
            f"invalid data for {renderer} renderer: got {type(data).__name__}, expected {expected}"
        )


class TemplateNotFoundError(RenderError, LookupError):
    """Raised when a template cannot be found in any consulted source."""

    def __init__(self, name: str, detail: str | None = None):
        self.name = name
        message = f"template not found: {name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TemplateLoadError(RenderError):
    """Raised when templates cannot be loaded or parsed into a template set."""

    def __init__(self, message: str, name: str | None = None):
        self.name = name
        super().__init__(f"{message}" + (f": {name}" if name else ""))


class LoaderError(RenderError):
    """Base exception for template loader failures."""

    pass


class InvalidRootError(LoaderError):
    """Raised when a loader root does not exist or is not a directory."""

    def __init__(self, root: str, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"invalid root path {root!r}: {reason}")


class InvalidPathError(LoaderError):
    """Raised when a template path cannot be resolved or normalized."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid template path {path!r}: {reason}")


class PathTraversalError(LoaderError):
    """Raised when a template path escapes the loader root."""

    def __init__(self, path: str, reason: str = "attempt to read outside root directory"):
        self.path = path
        self.reason = reason
        super().__init__(f"path traversal attempt detected: {path!r}: {reason}")
