"""
Line-formatting settings shared by all renderers.

FormatOptions holds the indentation, prefix, line ending, pretty flag and
positional arguments of a render call. The functions in this module build
format combinators (callables that mutate a FormatOptions) and bridge them
into Options combinators through with_format().

Usage:
    renderer.render(sink, data, with_format(pretty(), indent("    ")))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from renderkit.options import Options

DEFAULT_LINE_ENDING = "\n"
CRLF = "\r\n"

FormatOption = Callable[["FormatOptions"], None]


@dataclass
class FormatOptions:
    """Formatting knobs for a single render call."""

    prefix: str = ""
    """Prepended to each output line."""

    newline: str = ""
    """Raw line ending; empty means unset (read through line_ending)."""

    indent: str = ""
    """Indentation unit; empty means renderer default or compact output."""

    pretty: bool = False
    """Enable multi-line, human-readable output."""

    args: list[Any] = field(default_factory=list)
    """Positional arguments for %-style text formatting."""

    @property
    def line_ending(self) -> str:
        """Line ending to emit, falling back to "\\n" when unset."""
        return self.newline or DEFAULT_LINE_ENDING

    def clone(self) -> FormatOptions:
        """Return a copy that shares no mutable state with this instance."""
        return FormatOptions(
            prefix=self.prefix,
            newline=self.newline,
            indent=self.indent,
            pretty=self.pretty,
            args=list(self.args),
        )


def args(*values: Any) -> FormatOption:
    """Set positional arguments for text formatting."""

    def apply(f: FormatOptions) -> None:
        f.args = list(values)

    return apply


def comment(marker: str) -> FormatOption:
    """Prefix each line with a comment marker followed by a space."""
    return prefix(marker + " ")


def pretty() -> FormatOption:
    """Enable pretty printing."""

    def apply(f: FormatOptions) -> None:
        f.pretty = True

    return apply


def indent(unit: str) -> FormatOption:
    """Set the indentation unit."""

    def apply(f: FormatOptions) -> None:
        f.indent = unit

    return apply


def line_ending(ending: str) -> FormatOption:
    """Set the line ending style."""

    def apply(f: FormatOptions) -> None:
        f.newline = ending

    return apply


def prefix(value: str) -> FormatOption:
    """Set the per-line prefix."""

    def apply(f: FormatOptions) -> None:
        f.prefix = value

    return apply


def with_format(*formatters: FormatOption) -> Callable[[Options], None]:
    """Apply format combinators to the Options of a render call."""

    def apply(o: Options) -> None:
        for formatter in formatters:
            formatter(o.format)

    return apply


def textf(*values: Any) -> Callable[[Options], None]:
    """Shorthand for with_format(args(*values)).

    Example:
        text().render(sink, "hello %s", textf("World"))
    """
    return with_format(args(*values))


def use_crlf() -> Callable[[Options], None]:
    """Use CRLF line endings, as RFC 4180 CSV expects."""
    return with_format(line_ending(CRLF))
