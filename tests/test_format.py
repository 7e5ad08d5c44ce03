"""Tests for FormatOptions and format combinators."""

import pytest

from renderkit.format import (
    CRLF,
    FormatOptions,
    args,
    comment,
    indent,
    line_ending,
    prefix,
    pretty,
    textf,
    use_crlf,
    with_format,
)
from renderkit.options import new_options

pytestmark = pytest.mark.unit


class TestFormatOptions:
    """Tests for the FormatOptions dataclass."""

    def test_line_ending_defaults_to_newline(self) -> None:
        """Test an unset line ending reads as LF."""
        fmt = FormatOptions()
        assert fmt.newline == ""
        assert fmt.line_ending == "\n"

    def test_line_ending_set(self) -> None:
        """Test an explicit line ending is returned."""
        fmt = FormatOptions()
        line_ending("\r\n")(fmt)
        assert fmt.line_ending == "\r\n"

    def test_clone_copies_args(self) -> None:
        """Test cloned args are independent."""
        fmt = FormatOptions(args=["a"])
        clone = fmt.clone()
        clone.args.append("b")
        assert fmt.args == ["a"]

    def test_clone_keeps_unset_newline(self) -> None:
        """Test the raw empty line ending survives a clone."""
        assert FormatOptions().clone().newline == ""


class TestCombinators:
    """Tests for format combinators."""

    def test_last_prefix_wins(self) -> None:
        """Test later combinators overwrite earlier ones."""
        fmt = FormatOptions()
        for apply in (prefix("a"), prefix("b")):
            apply(fmt)
        assert fmt.prefix == "b"

    def test_comment(self) -> None:
        """Test comment adds a trailing space to the marker."""
        fmt = FormatOptions()
        comment("#")(fmt)
        assert fmt.prefix == "# "

    def test_pretty_and_indent(self) -> None:
        """Test pretty and indent set their fields."""
        fmt = FormatOptions()
        pretty()(fmt)
        indent("\t")(fmt)
        assert fmt.pretty is True
        assert fmt.indent == "\t"

    def test_args(self) -> None:
        """Test args replaces the argument list."""
        fmt = FormatOptions()
        args(1, "two")(fmt)
        assert fmt.args == [1, "two"]


class TestOptionBridges:
    """Tests for combinators that lift format settings into Options."""

    def test_with_format_applies_in_order(self) -> None:
        """Test with_format folds format combinators left to right."""
        options = new_options().use(with_format(pretty(), indent("  "), indent("\t")))
        assert options.format.pretty is True
        assert options.format.indent == "\t"

    def test_textf(self) -> None:
        """Test textf sets format arguments."""
        options = new_options().use(textf("Gophers", 3))
        assert options.format.args == ["Gophers", 3]

    def test_use_crlf(self) -> None:
        """Test use_crlf sets the CRLF line ending."""
        options = new_options().use(use_crlf())
        assert options.format.newline == CRLF
        assert options.format.line_ending == "\r\n"
