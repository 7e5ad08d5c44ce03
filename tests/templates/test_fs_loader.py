"""Tests for FSLoader."""

import os
from pathlib import Path

import pytest

from renderkit.errors import (
    InvalidPathError,
    InvalidRootError,
    PathTraversalError,
    TemplateNotFoundError,
)
from renderkit.templates.loaders import FSLoader, Loader, LoaderConfig

pytestmark = pytest.mark.integration


class TestFSLoaderInit:
    """Tests for root validation."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test a missing root is rejected."""
        with pytest.raises(InvalidRootError, match="does not exist"):
            FSLoader(LoaderConfig(root=str(tmp_path / "missing")))

    def test_file_root(self, tmp_path: Path) -> None:
        """Test a file root is rejected."""
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(InvalidRootError, match="not a directory"):
            FSLoader(LoaderConfig(root=str(path)))

    def test_satisfies_protocol(self, template_dir: Path) -> None:
        """Test FSLoader is a Loader."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        assert isinstance(loader, Loader)
        assert loader.extension() == ""

    def test_extension_must_start_with_dot(self) -> None:
        """Test extensions without a dot are rejected."""
        with pytest.raises(ValueError):
            LoaderConfig(extension="html")


class TestFSLoaderLoad:
    """Tests for listing templates."""

    def test_lists_all_sorted(self, template_dir: Path) -> None:
        """Test every file is listed with forward slashes, sorted."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        assert loader.load() == ["layout.html", "notes.txt", "page.html", "partials/nav.html"]

    def test_extension_filter(self, template_dir: Path) -> None:
        """Test only files with the extension are listed."""
        loader = FSLoader(LoaderConfig(root=str(template_dir), extension=".html"))
        assert loader.load() == ["layout.html", "page.html", "partials/nav.html"]

    def test_pattern(self, template_dir: Path) -> None:
        """Test the glob pattern filters names."""
        loader = FSLoader(LoaderConfig(root=str(template_dir), extension=".html"))
        assert loader.load("partials/*") == ["partials/nav.html"]

    def test_symlink_outside_root(self, tmp_path: Path, template_dir: Path) -> None:
        """Test symlinks escaping the root are rejected."""
        outside = tmp_path / "secret.html"
        outside.write_text("secret")
        os.symlink(outside, template_dir / "leak.html")

        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        with pytest.raises(PathTraversalError):
            loader.load()


class TestFSLoaderRead:
    """Tests for reading templates."""

    def test_read(self, template_dir: Path) -> None:
        """Test reading returns the raw bytes."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        assert loader.read("page.html") == b"<h1>{{ title }}</h1>\n"

    def test_read_backslash_name(self, template_dir: Path) -> None:
        """Test backslashes are treated as separators."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        assert loader.read("partials\\nav.html").startswith(b"<nav>")

    def test_missing(self, template_dir: Path) -> None:
        """Test a missing file raises TemplateNotFoundError."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        with pytest.raises(TemplateNotFoundError) as exc_info:
            loader.read("missing.html")
        assert exc_info.value.name == "missing.html"

    def test_directory_is_not_a_template(self, template_dir: Path) -> None:
        """Test directories are not readable templates."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        with pytest.raises(TemplateNotFoundError):
            loader.read("partials")

    @pytest.mark.parametrize("name", ["../secret.html", "partials/../../secret.html", "/etc/passwd"])
    def test_traversal(self, tmp_path: Path, template_dir: Path, name: str) -> None:
        """Test names resolving outside the root are rejected."""
        (tmp_path / "secret.html").write_text("secret")
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        with pytest.raises(PathTraversalError):
            loader.read(name)

    @pytest.mark.parametrize("name", ["", "bad\x00name"])
    def test_invalid_names(self, template_dir: Path, name: str) -> None:
        """Test empty names and NUL bytes are rejected."""
        loader = FSLoader(LoaderConfig(root=str(template_dir)))
        with pytest.raises(InvalidPathError):
            loader.read(name)
