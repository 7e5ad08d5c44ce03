"""
Template sources.

Provides loaders for the filesystem, package resources and in-memory
strings, plus CompositeLoader to layer them with priority.
"""

from .base import BaseLoader, Loader, LoaderConfig
from .composite import CompositeLoader
from .fs import FSLoader
from .resource import ResourceLoader
from .string import StringLoader

__all__ = [
    "BaseLoader",
    "CompositeLoader",
    "FSLoader",
    "Loader",
    "LoaderConfig",
    "ResourceLoader",
    "StringLoader",
]
