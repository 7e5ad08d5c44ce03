"""
Priority-ordered composition of template loaders.

Earlier loaders win: a template found in the first loader hides any
template of the same name in later ones. This allows project templates to
override bundled defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from renderkit.errors import LoaderError, TemplateNotFoundError

from .base import BaseLoader, Loader, LoaderConfig

logger = logging.getLogger(__name__)


class CompositeLoader(BaseLoader):
    """Combines loaders, querying them in priority order.

    Example usage:
        ```python
        loader = CompositeLoader(
            [project_loader, bundled_loader],
            LoaderConfig(extension=".html"),
        )
        ```
    """

    def __init__(self, loaders: Sequence[Loader], config: LoaderConfig | None = None):
        super().__init__(config)
        self._loaders: tuple[Loader, ...] = tuple(loaders)

    @property
    def loaders(self) -> tuple[Loader, ...]:
        """Child loaders in priority order."""
        return self._loaders

    def load(self, pattern: str = "") -> list[str]:
        """List template names from every loader, first occurrence wins.

        Raises:
            LoaderError: If any child loader fails
        """
        seen: set[str] = set()
        templates: list[str] = []

        for loader in self._loaders:
            try:
                names = loader.load(pattern)
            except Exception as e:
                raise LoaderError(f"composite load error: {e}") from e

            for name in names:
                if name in seen or not self.has_valid_extension(name):
                    continue
                seen.add(name)
                templates.append(name)

        return templates

    def read(self, name: str) -> bytes:
        """Read name from the first loader that has it.

        Raises:
            TemplateNotFoundError: If no loader has the template
            LoaderError: If the last loader failed for another reason
        """
        last_error: Exception | None = None

        for index, loader in enumerate(self._loaders):
            try:
                return loader.read(name)
            except Exception as e:
                logger.debug(f"Loader {index} could not read {name!r}: {e}")
                last_error = e

        if last_error is None or isinstance(last_error, TemplateNotFoundError):
            raise TemplateNotFoundError(name, "in any loader") from last_error
        raise LoaderError(f"composite read error: {last_error}") from last_error
