"""
Per-call render configuration.

Options aggregates the template name, timeout, format settings, headers and
free-form parameters of one render call. Renderers build a fresh instance,
apply their default content type, then fold the caller's combinators over
it with Options.use(). Later combinators win over earlier ones.

Usage:
    captured = CapturedOptions()
    json().render(sink, data, mime("application/vnd.api+json"), capture_options(captured))
    captured.options.content_type  # "application/vnd.api+json"
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, TextIO

from renderkit.errors import InvalidContentTypeError, InvalidParamError, NegativeTimeoutError
from renderkit.format import FormatOptions
from renderkit.headers import CONTENT_TYPE, HeaderOptions, format_media_type

logger = logging.getLogger(__name__)

Option = Callable[["Options"], None]
HeaderOption = Callable[[HeaderOptions], None]

SEPARATOR_PARAM = "separator"


@dataclass
class Options:
    """Configuration for a single render call."""

    name: str = ""
    """Template name to execute; empty selects the root template."""

    timeout: float = 0.0
    """Timeout in seconds; 0 means none. Recorded only, never enforced here."""

    format: FormatOptions = field(default_factory=FormatOptions)
    header: HeaderOptions = field(default_factory=HeaderOptions)
    params: dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        """The Content-Type header value, or an empty string."""
        return self.header.get(CONTENT_TYPE)

    def reset(self) -> Options:
        """Restore every field to its default and allocate fresh containers."""
        self.name = ""
        self.timeout = 0.0
        self.format = FormatOptions()
        self.header = HeaderOptions()
        self.params = {}
        return self

    def clone(self) -> Options:
        """Return a deep copy with no shared containers."""
        return Options(
            name=self.name,
            timeout=self.timeout,
            format=self.format.clone(),
            header=self.header.copy(),
            params=dict(self.params),
        )

    def use(self, *opts: Option) -> Options:
        """Apply option combinators in order and return self."""
        for opt in opts:
            opt(self)
        return self

    def __str__(self) -> str:
        lines = [
            f"Template Name: {self.name!r}",
            f"Timeout: {self.timeout}s",
            "Format:",
            f"  Pretty: {self.format.pretty}",
            f"  Indent: {self.format.indent!r}",
            f"  Prefix: {self.format.prefix!r}",
            f"  Line Ending: {self.format.line_ending!r}",
            "Headers:",
        ]
        for key, values in self.header.multi_items():
            lines.append(f"  {key}: {','.join(values)}")
        lines.append("Parameters:")
        for key, value in self.params.items():
            lines.append(f"  {key}: {value}")
        return "\n".join(lines) + "\n"


def new_options() -> Options:
    """Create an Options instance with all defaults applied."""
    return Options().reset()


@dataclass
class CapturedOptions:
    """Slot receiving a snapshot of the folded Options of a render call."""

    options: Options | None = None


def capture_options(target: CapturedOptions) -> Option:
    """Store a clone of the folded Options into target.

    Place it last so it observes every other combinator.
    """

    def apply(o: Options) -> None:
        target.options = o.clone()

    return apply


def combine(*opts: Option) -> Option:
    """Bundle several combinators into one reusable combinator."""

    def apply(o: Options) -> None:
        for opt in opts:
            opt(o)

    return apply


def dump(stream: TextIO | None = None) -> Option:
    """Print the current configuration for debugging.

    Args:
        stream: Text stream to write to; when None the dump is logged at DEBUG
    """

    def apply(o: Options) -> None:
        if stream is None:
            logger.debug(f"Render options:\n{o}")
            return
        stream.write("\n=== Template Render Options ===\n")
        stream.write(str(o))
        stream.write("================================\n")

    return apply


def header(*mutations: HeaderOption) -> Option:
    """Apply several header mutations in one combinator.

    Example:
        header(
            lambda h: h.set("Cache-Control", "no-store"),
            lambda h: h.add("Vary", "Accept"),
        )
    """

    def apply(o: Options) -> None:
        for mutate in mutations:
            mutate(o.header)

    return apply


def mime(mediatype: str, charset: str | None = None) -> Option:
    """Set the Content-Type header, replacing any previous value.

    Args:
        mediatype: Media type such as "text/plain"
        charset: Optional charset parameter such as "utf-8"

    Raises:
        InvalidContentTypeError: If the media type is malformed
    """
    params = {"charset": charset} if charset else None
    value = format_media_type(mediatype, params)
    if value is None:
        raise InvalidContentTypeError(mediatype)
    return header(lambda h: h.set(CONTENT_TYPE, value))


def mime_utf8(mediatype: str) -> Option:
    """Shorthand for mime(mediatype, "utf-8")."""
    return mime(mediatype, "utf-8")


def name(value: str) -> Option:
    """Select the template to execute."""

    def apply(o: Options) -> None:
        o.name = value

    return apply


def param(key: str, value: str) -> Option:
    """Set a free-form parameter.

    Raises:
        InvalidParamError: If key is empty
    """
    if not key:
        raise InvalidParamError(key, "parameter key cannot be empty")

    def apply(o: Options) -> None:
        o.params[key] = value

    return apply


def separator(sep: str) -> Option:
    """Set the CSV field separator; its first character is used.

    Raises:
        InvalidParamError: If sep is empty
    """
    if not sep:
        raise InvalidParamError(SEPARATOR_PARAM, "separator cannot be empty")
    return param(SEPARATOR_PARAM, sep)


def timeout(value: float | timedelta) -> Option:
    """Record a timeout for the render call.

    The value is metadata for callers; derive a context with
    renderkit.context.with_timeout() to enforce it.

    Raises:
        NegativeTimeoutError: If the timeout is negative
    """
    seconds = value.total_seconds() if isinstance(value, timedelta) else float(value)
    if seconds < 0:
        raise NegativeTimeoutError(seconds)

    def apply(o: Options) -> None:
        o.timeout = seconds

    return apply


def write_response(sink: Any) -> Option:
    """Copy every header value to an external header sink.

    Multi-value order is preserved. The sink may expose add(key, value)
    (werkzeug Headers, HeaderOptions), append(key, value) (starlette
    MutableHeaders), or plain item assignment, which receives the value list.
    """

    def apply(o: Options) -> None:
        for key, values in o.header.multi_items():
            if hasattr(sink, "add"):
                for value in values:
                    sink.add(key, value)
            elif hasattr(sink, "append"):
                for value in values:
                    sink.append(key, value)
            else:
                sink[key] = values

    return apply
