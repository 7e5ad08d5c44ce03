"""Tests for the default template helper functions."""

from datetime import datetime

import pytest
from markupsafe import Markup

from renderkit.templates.funcs import DEFAULT_FUNCS

pytestmark = pytest.mark.unit


class TestDefaultFuncs:
    """Tests for DEFAULT_FUNCS."""

    def test_string_helpers(self) -> None:
        """Test case conversion, trimming and containment."""
        assert DEFAULT_FUNCS["lower"]("HeLLo") == "hello"
        assert DEFAULT_FUNCS["upper"]("HeLLo") == "HELLO"
        assert DEFAULT_FUNCS["trim"]("  x \n") == "x"
        assert DEFAULT_FUNCS["contains"]("haystack", "st") is True
        assert DEFAULT_FUNCS["contains"]("haystack", "needle") is False

    def test_to_html(self) -> None:
        """Test to_html marks text as safe markup."""
        result = DEFAULT_FUNCS["to_html"]("<b>x</b>")
        assert isinstance(result, Markup)
        assert str(result) == "<b>x</b>"

    def test_nl2br(self) -> None:
        """Test nl2br escapes and converts line breaks."""
        assert DEFAULT_FUNCS["nl2br"]("a\r\nb\n<c>") == Markup("a<br>b<br>&lt;c&gt;")

    def test_date(self) -> None:
        """Test date formats with a strftime layout."""
        assert DEFAULT_FUNCS["date"](datetime(2024, 1, 2, 15, 4), "%Y-%m-%d %H:%M") == "2024-01-02 15:04"

    def test_now(self) -> None:
        """Test now returns the current datetime."""
        assert isinstance(DEFAULT_FUNCS["now"](), datetime)

    def test_arithmetic(self) -> None:
        """Test the arithmetic helpers."""
        assert DEFAULT_FUNCS["add"](2, 3) == 5
        assert DEFAULT_FUNCS["sub"](2, 3) == -1
        assert DEFAULT_FUNCS["mul"](2, 3) == 6
        assert DEFAULT_FUNCS["div"](3, 2) == 1.5
        assert DEFAULT_FUNCS["sum"]([1, 2, 3.5]) == 6.5
        assert DEFAULT_FUNCS["avg"]([1, 2, 3]) == 2.0
        assert DEFAULT_FUNCS["avg"]([]) == 0.0

    def test_div_by_zero(self) -> None:
        """Test dividing by zero raises."""
        with pytest.raises(ZeroDivisionError):
            DEFAULT_FUNCS["div"](1, 0)

    def test_table_is_read_only(self) -> None:
        """Test the shared table cannot be modified."""
        with pytest.raises(TypeError):
            DEFAULT_FUNCS["lower"] = str.upper  # type: ignore[index]
