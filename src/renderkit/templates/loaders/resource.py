"""Template loader for files shipped inside a Python package."""

from __future__ import annotations

import logging
import posixpath
from importlib.resources import files
from importlib.resources.abc import Traversable
from types import ModuleType

from renderkit.errors import InvalidRootError, LoaderError, PathTraversalError, TemplateNotFoundError

from .base import BaseLoader, LoaderConfig

logger = logging.getLogger(__name__)


def _is_escaping(path: str) -> bool:
    return path.startswith("/") or path == ".." or path.startswith("../")


class ResourceLoader(BaseLoader):
    """Loads templates from package resources via importlib.resources.

    The configured root is a subdirectory of the package. Resource paths
    always use forward slashes; backslashes in names are converted.

    Example usage:
        ```python
        loader = ResourceLoader("myapp", LoaderConfig(root="templates", extension=".html"))
        ```
    """

    def __init__(
        self,
        package: str | ModuleType | Traversable,
        config: LoaderConfig | None = None,
    ):
        """Initialize the loader.

        Args:
            package: Package name, module, or an already resolved Traversable
            config: Root subdirectory and extension filter

        Raises:
            InvalidRootError: If the root escapes the package or is not a directory
        """
        super().__init__(config)
        base = files(package) if isinstance(package, (str, ModuleType)) else package

        root = posixpath.normpath(self.root.replace("\\", "/"))
        if _is_escaping(root):
            raise InvalidRootError(self.root, "root must stay inside the package")
        if root != ".":
            base = base.joinpath(*root.split("/"))
        if not base.is_dir():
            raise InvalidRootError(self.root, "root directory does not exist in package")
        self._base = base

    def _walk(self, node: Traversable, prefix: str, pattern: str, names: list[str]) -> None:
        for child in node.iterdir():
            name = f"{prefix}{child.name}"
            if child.is_dir():
                self._walk(child, f"{name}/", pattern, names)
            elif self.matches(name, pattern):
                names.append(name)

    def load(self, pattern: str = "") -> list[str]:
        """List templates under the root, sorted, as forward-slash names.

        Raises:
            LoaderError: If the resource tree cannot be walked
        """
        names: list[str] = []
        try:
            self._walk(self._base, "", pattern, names)
        except OSError as e:
            raise LoaderError(f"failed to walk package resources: {e}") from e
        names.sort()
        logger.debug(f"Found {len(names)} packaged template(s) under {self.root}")
        return names

    def read(self, name: str) -> bytes:
        """Read a packaged template by its root-relative name.

        Raises:
            InvalidPathError: If name is empty or malformed
            PathTraversalError: If name points outside the root
            TemplateNotFoundError: If no such resource exists
            LoaderError: If the resource cannot be read
        """
        name = self.normalize_name(name)
        clean = posixpath.normpath(name)
        if _is_escaping(clean):
            raise PathTraversalError(name)

        node = self._base.joinpath(*clean.split("/"))
        if not node.is_file():
            raise TemplateNotFoundError(name)
        try:
            return node.read_bytes()
        except OSError as e:
            raise LoaderError(f"failed to read packaged template {name}: {e}") from e
