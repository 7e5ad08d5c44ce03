"""Filesystem template loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from renderkit.errors import InvalidRootError, LoaderError, PathTraversalError, TemplateNotFoundError

from .base import BaseLoader, LoaderConfig

logger = logging.getLogger(__name__)


class FSLoader(BaseLoader):
    """Loads templates from a directory on disk.

    Every read is confined to the root directory: names that resolve outside
    it, directly or through symlinks, are rejected.

    Example usage:
        ```python
        loader = FSLoader(LoaderConfig(root="templates", extension=".html"))
        loader.load()                   # ["layouts/base.html", "users/index.html"]
        loader.read("users/index.html")
        ```
    """

    def __init__(self, config: LoaderConfig | None = None):
        """Initialize the loader.

        Args:
            config: Root directory and extension filter

        Raises:
            InvalidRootError: If the root does not exist, is not a directory,
                or cannot be accessed
        """
        super().__init__(config)
        path = Path(self.root)
        try:
            if not path.exists():
                raise InvalidRootError(self.root, "root directory does not exist")
            if not path.is_dir():
                raise InvalidRootError(self.root, "root path is not a directory")
            self._root_path = path.resolve()
        except OSError as e:
            raise InvalidRootError(self.root, f"cannot access root directory: {e}") from e

    def _check_inside_root(self, path: Path, name: str) -> Path:
        resolved = path.resolve()
        if not resolved.is_relative_to(self._root_path):
            raise PathTraversalError(name)
        return resolved

    def load(self, pattern: str = "") -> list[str]:
        """List templates under the root, sorted, as forward-slash names.

        Raises:
            PathTraversalError: If a symlinked template points outside the root
            LoaderError: If the directory tree cannot be walked
        """
        names: list[str] = []

        def on_error(err: OSError) -> None:
            raise LoaderError(f"failed to walk directory: {err}") from err

        for dirpath, _dirnames, filenames in os.walk(self._root_path, onerror=on_error):
            for filename in filenames:
                path = Path(dirpath) / filename
                name = path.relative_to(self._root_path).as_posix()
                if not self.matches(name, pattern):
                    continue
                if path.is_symlink():
                    self._check_inside_root(path, name)
                names.append(name)

        names.sort()
        logger.debug(f"Found {len(names)} template(s) under {self._root_path}")
        return names

    def read(self, name: str) -> bytes:
        """Read a template by its root-relative name.

        Raises:
            InvalidPathError: If name is empty or malformed
            PathTraversalError: If name resolves outside the root
            TemplateNotFoundError: If no such file exists
            LoaderError: If the file exists but cannot be read
        """
        name = self.normalize_name(name)
        path = self._check_inside_root(self._root_path / name, name)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise TemplateNotFoundError(name) from e
        except OSError as e:
            raise LoaderError(f"failed to read template {name}: {e}") from e
