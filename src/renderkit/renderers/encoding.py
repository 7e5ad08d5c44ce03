"""
Conversion of rich Python values into encoder-friendly plain data.

Pydantic models, dataclasses, enums, datetimes, paths and sets are not
understood by json or yaml directly; these helpers turn them into dicts,
lists and scalars first. utf8() turns rendered text into the bytes written
to a sink.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import PurePath
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from renderkit.errors import RenderFailedError


def json_default(obj: Any) -> Any:
    """Fallback hook for json.dumps.

    Raises:
        TypeError: If obj has no known plain representation
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, (UUID, PurePath, Decimal)):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not serializable")


def to_plain(data: Any) -> Any:
    """Recursively convert data to dicts, lists and scalars.

    Unknown objects are returned unchanged so the encoder can reject them.
    """
    if isinstance(data, BaseModel):
        return to_plain(data.model_dump(mode="json"))
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return to_plain(dataclasses.asdict(data))
    if isinstance(data, Mapping):
        return {to_plain(key): to_plain(value) for key, value in data.items()}
    if isinstance(data, (list, tuple, set, frozenset)):
        return [to_plain(item) for item in data]
    if isinstance(data, enum.Enum):
        return to_plain(data.value)
    if isinstance(data, (UUID, PurePath, Decimal)):
        return str(data)
    return data


def utf8(content: str, label: str) -> bytes:
    """Encode rendered text for the sink.

    Args:
        content: Rendered text
        label: Error message prefix, e.g. "json encode"

    Raises:
        RenderFailedError: If content holds text UTF-8 cannot carry, such as a lone surrogate
    """
    try:
        return content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise RenderFailedError(f"{label}: {e}") from e
