"""
Default helper functions available in every template.

DEFAULT_FUNCS is read-only; each template copies it into its own registry
at construction, where set_funcs() can extend or override entries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from types import MappingProxyType
from typing import Any

from markupsafe import Markup, escape


def to_html(value: str) -> Markup:
    """Mark a string as safe HTML so it is not escaped."""
    return Markup(value)


def nl2br(value: str) -> Markup:
    """Escape text and turn its line breaks into <br> tags.

    Example:
        nl2br("Line 1\\nLine 2") -> Markup("Line 1<br>Line 2")
    """
    value = value.replace("\r\n", "\n")
    return escape(value).replace("\n", Markup("<br>"))


def date(value: datetime, layout: str) -> str:
    """Format a datetime with a strftime layout."""
    return value.strftime(layout)


def div(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError("division by zero")
    return a / b


def total(numbers: Iterable[float]) -> float:
    return float(sum(numbers))


def avg(numbers: Iterable[float]) -> float:
    """Arithmetic mean; 0 for an empty sequence."""
    values = list(numbers)
    if not values:
        return 0.0
    return sum(values) / len(values)


DEFAULT_FUNCS: MappingProxyType[str, Callable[..., Any]] = MappingProxyType(
    {
        # Strings
        "lower": str.lower,
        "upper": str.upper,
        "trim": str.strip,
        "contains": lambda s, sub: sub in s,
        # Markup
        "to_html": to_html,
        "nl2br": nl2br,
        # Dates
        "now": datetime.now,
        "date": date,
        # Arithmetic
        "add": lambda a, b: a + b,
        "sub": lambda a, b: a - b,
        "mul": lambda a, b: a * b,
        "div": div,
        "sum": total,
        "avg": avg,
    }
)
