"""
Loader contract and shared loader behavior.

A Loader lists template names and reads their content. Names are always
relative to the loader root and use forward slashes.
"""

from __future__ import annotations

import fnmatch
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, field_validator

from renderkit.errors import InvalidPathError


@runtime_checkable
class Loader(Protocol):
    """Source of named templates."""

    def load(self, pattern: str = "") -> list[str]:
        """Return template names matching pattern (empty matches all)."""
        ...

    def read(self, name: str) -> bytes:
        """Return template content; raises TemplateNotFoundError when absent."""
        ...

    def extension(self) -> str:
        """Return the extension templates are filtered by, or ""."""
        ...


class LoaderConfig(BaseModel):
    """Where templates live and which files count as templates."""

    root: str = Field(
        default=".",
        description="Base directory (filesystem) or package subdirectory (resources)",
    )
    extension: str = Field(
        default="",
        description="Only names ending with this extension are templates; empty keeps all",
    )

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Validate the extension includes its leading dot."""
        if v and not v.startswith("."):
            raise ValueError(f"Extension must start with '.': {v!r}")
        return v


class BaseLoader:
    """Root and extension handling shared by loader implementations."""

    def __init__(self, config: LoaderConfig | None = None):
        config = config or LoaderConfig()
        self.root = config.root or "."
        self._extension = config.extension

    def extension(self) -> str:
        return self._extension

    def has_valid_extension(self, name: str) -> bool:
        """Return True if name ends with the configured extension."""
        if not self._extension:
            return True
        return name.endswith(self._extension)

    def matches(self, name: str, pattern: str) -> bool:
        """Return True if name passes the extension and glob filters."""
        if not self.has_valid_extension(name):
            return False
        return not pattern or fnmatch.fnmatchcase(name, pattern)

    @staticmethod
    def normalize_name(name: str) -> str:
        """Return name with forward slashes.

        Raises:
            InvalidPathError: If name is empty or contains a NUL byte
        """
        if not name:
            raise InvalidPathError(name, "template name cannot be empty")
        if "\x00" in name:
            raise InvalidPathError(name, "template name contains a NUL byte")
        return name.replace("\\", "/")
