"""In-memory template loader."""

from __future__ import annotations

from collections.abc import Mapping

from renderkit.errors import TemplateNotFoundError

from .base import BaseLoader, LoaderConfig


class StringLoader(BaseLoader):
    """Serves templates defined in code.

    Names keep the insertion order of the mapping.

    Example usage:
        ```python
        loader = StringLoader({
            "welcome.html": "Hello {{ name }}",
            "layout.html": "<body>{% include 'welcome.html' %}</body>",
        }, LoaderConfig(extension=".html"))
        ```
    """

    def __init__(self, templates: Mapping[str, str], config: LoaderConfig | None = None):
        super().__init__(config)
        self._templates = dict(templates)

    def load(self, pattern: str = "") -> list[str]:
        return [name for name in self._templates if self.matches(name, pattern)]

    def read(self, name: str) -> bytes:
        try:
            return self._templates[name].encode("utf-8")
        except KeyError:
            raise TemplateNotFoundError(name) from None
