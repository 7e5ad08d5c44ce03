"""
Header container used by Options to carry content type and metadata.

HeaderOptions extends the websockets Headers multidict: keys are
case-insensitive, assignment appends, and insertion order is kept. Keys are
stored in canonical form ("content-type" becomes "Content-Type").
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from websockets.datastructures import Headers

CONTENT_TYPE = "Content-Type"

# RFC 2045 token characters
_TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def canonical_key(key: str) -> str:
    """Return the canonical MIME header form of a key.

    Keys containing characters outside the token set are returned unchanged.
    """
    if not _TOKEN_PATTERN.match(key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def is_token(value: str) -> bool:
    """Return True if value is a non-empty RFC 2045 token."""
    return bool(_TOKEN_PATTERN.match(value))


def format_media_type(mediatype: str, params: dict[str, str] | None = None) -> str | None:
    """Serialize a media type and its parameters.

    The type and parameter names are lowercased, parameters are sorted by
    name, and values that are not tokens are quoted.

    Args:
        mediatype: Media type such as "text/plain"
        params: Optional parameters such as {"charset": "utf-8"}

    Returns:
        Formatted value like "text/plain; charset=utf-8", or None if the
        media type or a parameter name is malformed.
    """
    major, sep, sub = mediatype.strip().partition("/")
    if not sep or not is_token(major) or not is_token(sub):
        return None

    parts = [f"{major.lower()}/{sub.lower()}"]
    for attribute in sorted(params or {}, key=str.lower):
        value = (params or {})[attribute]
        if not is_token(attribute):
            return None
        if not is_token(value):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            value = f'"{escaped}"'
        parts.append(f"{attribute.lower()}={value}")
    return "; ".join(parts)


class HeaderOptions(Headers):
    """Case-insensitive multi-value header map with canonical keys.

    Item assignment appends, as in Headers. Reading a key that holds several
    values with [] raises MultipleValuesError; use get() or get_all().
    """

    def __setitem__(self, key: str, value: str) -> None:
        super().__setitem__(canonical_key(key), value)

    def set(self, key: str, value: str) -> None:
        """Replace every value of key with a single value."""
        self.delete(key)
        self[key] = value

    def add(self, key: str, value: str) -> None:
        """Append a value to key."""
        self[key] = value

    def get(self, key: str, default: str = "") -> str:  # type: ignore[override]
        """Return the first value of key, or default."""
        values = self.get_all(key)
        return values[0] if values else default

    def get_all(self, key: str) -> list[str]:
        """Return a copy of every value of key."""
        return list(super().get_all(key))

    def delete(self, key: str) -> None:
        """Remove key and all of its values; missing keys are ignored."""
        if key in self:
            del self[key]

    def multi_items(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate (key, values) pairs in first-insertion order.

        Keys are canonical and each values list is a fresh copy.
        """
        grouped: dict[str, list[str]] = {}
        for key, value in self.raw_items():
            grouped.setdefault(key, []).append(value)
        yield from grouped.items()

    def copy(self) -> HeaderOptions:
        """Return an independent copy with no shared value lists."""
        return HeaderOptions(list(self.raw_items()))
