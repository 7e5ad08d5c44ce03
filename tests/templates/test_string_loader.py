"""Tests for StringLoader."""

import pytest

from renderkit.errors import TemplateNotFoundError
from renderkit.templates.loaders import LoaderConfig, StringLoader

pytestmark = pytest.mark.unit


class TestStringLoader:
    """Tests for in-memory templates."""

    def test_keeps_insertion_order(self) -> None:
        """Test names are listed in insertion order."""
        loader = StringLoader({"b.html": "B", "a.html": "A", "c.txt": "C"})
        assert loader.load() == ["b.html", "a.html", "c.txt"]

    def test_extension_and_pattern(self) -> None:
        """Test the extension filter and glob pattern apply."""
        loader = StringLoader(
            {"mail/a.html": "A", "b.html": "B", "c.txt": "C"}, LoaderConfig(extension=".html")
        )
        assert loader.load() == ["mail/a.html", "b.html"]
        assert loader.load("mail/*") == ["mail/a.html"]

    def test_read(self) -> None:
        """Test content is returned as UTF-8 bytes."""
        assert StringLoader({"a": "héllo"}).read("a") == "héllo".encode()

    def test_missing(self) -> None:
        """Test unknown names raise TemplateNotFoundError."""
        with pytest.raises(TemplateNotFoundError, match="template not found: x"):
            StringLoader({}).read("x")

    def test_source_mapping_copied(self) -> None:
        """Test later changes to the source mapping are not seen."""
        source = {"a": "A"}
        loader = StringLoader(source)
        source["b"] = "B"
        assert loader.load() == ["a"]
