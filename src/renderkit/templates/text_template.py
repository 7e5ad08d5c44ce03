"""Plain text template renderer."""

from __future__ import annotations

from .base import BaseTemplate, TemplateOption


class TextTemplate(BaseTemplate):
    """Renders text verbatim, without escaping."""


def text(name: str, *opts: TemplateOption) -> TextTemplate:
    return TextTemplate(name, *opts)
