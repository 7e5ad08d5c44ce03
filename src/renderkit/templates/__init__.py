"""
Template renderers backed by Jinja2.

Templates are loaded from any Loader (filesystem, package resources,
strings or a composite of them) and rendered with a shared set of helper
functions.
"""

from .base import BaseTemplate, TemplateOption, load, set_delims, set_funcs, template_context
from .funcs import DEFAULT_FUNCS
from .html_template import HTMLTemplate, html
from .loaders import (
    BaseLoader,
    CompositeLoader,
    FSLoader,
    Loader,
    LoaderConfig,
    ResourceLoader,
    StringLoader,
)
from .text_template import TextTemplate, text

__all__ = [
    "DEFAULT_FUNCS",
    "BaseLoader",
    "BaseTemplate",
    "CompositeLoader",
    "FSLoader",
    "HTMLTemplate",
    "Loader",
    "LoaderConfig",
    "ResourceLoader",
    "StringLoader",
    "TemplateOption",
    "TextTemplate",
    "html",
    "load",
    "set_delims",
    "set_funcs",
    "template_context",
    "text",
]
