"""
Tests for display formatting.
"""

import pytest

from tutormath.text.display import format_math_for_display


class TestFormatMathForDisplay:
    """Test rendering of answers as inline LaTeX."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty(self, raw):
        """Test that empty answers format to ''."""
        assert format_math_for_display(raw) == ""

    def test_existing_latex_unchanged(self):
        """Test that answers already in math mode are returned as is."""
        assert format_math_for_display("$x^2$") == "$x^2$"
        assert format_math_for_display("\\(\\frac{1}{2}\\)") == "\\(\\frac{1}{2}\\)"

    def test_plain_text_unchanged(self):
        """Test that text without math is returned as is."""
        assert format_math_for_display("hello world") == "hello world"

    def test_square_root(self):
        """Test that √ becomes \\sqrt."""
        assert format_math_for_display("√4") == "\\(\\sqrt{4}\\)"

    def test_pi(self):
        """Test that π becomes \\pi."""
        assert format_math_for_display("π") == "\\(\\pi\\)"

    def test_power(self):
        """Test that powers are wrapped in inline math."""
        assert format_math_for_display("x^2") == "\\(x^{2}\\)"

    def test_fraction(self):
        """Test that a slash fraction renders as \\frac."""
        assert format_math_for_display("1/2") == "\\(\\frac{1}{2}\\)"

    def test_times(self):
        """Test that × renders as a multiplication."""
        assert "\\cdot" in format_math_for_display("2 × 3")

    def test_unparseable_falls_back_to_symbols(self):
        """Test the symbol fallback for answers the parser rejects."""
        result = format_math_for_display("x ≤ 3")
        assert result.startswith("\\(")
        assert "\\leq" in result

    def test_fallback_closes_braces(self):
        """Test that the fallback leaves braces balanced."""
        result = format_math_for_display("√")
        assert result.count("{") == result.count("}")

    def test_too_many_variables_falls_back(self):
        """Test that answers with many variables keep their original spelling."""
        assert format_math_for_display("a+b+c") == "\\(a+b+c\\)"
