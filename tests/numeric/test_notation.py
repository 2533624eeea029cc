"""
Tests for the numeric notation sub-parsers.
"""

import pytest

from tutormath.numeric.notation import (
    PercentValue,
    parse_fraction,
    parse_mixed_number,
    parse_percentage,
    parse_plain_number,
    parse_scientific_notation,
)


class TestPlainNumber:
    """Test plain decimal literals."""

    @pytest.mark.parametrize(
        "text,expected",
        [("5", 5.0), ("-3.14", -3.14), ("+2", 2.0), (".5", 0.5), ("7.", 7.0), (" 42 ", 42.0)],
    )
    def test_valid(self, text, expected):
        """Test that signed decimals parse."""
        assert parse_plain_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "1/2", "1e5", "--5", "nan", "inf", "9" * 400, None, 5])
    def test_invalid(self, text):
        """Test that anything else, including overflow, is rejected."""
        assert parse_plain_number(text) is None


class TestFraction:
    """Test a/b fractions."""

    @pytest.mark.parametrize(
        "text,expected",
        [("1/2", 0.5), ("-3/4", -0.75), ("3 / 4", 0.75), ("1.5/3", 0.5), ("10/4", 2.5)],
    )
    def test_valid(self, text, expected):
        """Test that fractions parse to their value."""
        assert parse_fraction(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["1/0", "0/0", "1/", "/2", "1/2/3", "x/2", "1 1/2", ""])
    def test_invalid(self, text):
        """Test that zero denominators and non-fractions are rejected."""
        assert parse_fraction(text) is None


class TestMixedNumber:
    """Test mixed numbers."""

    @pytest.mark.parametrize(
        "text,expected",
        [("1 1/2", 1.5), ("2 3/4", 2.75), ("-1 1/2", -1.5), ("3-1/4", 3.25)],
    )
    def test_valid(self, text, expected):
        """Test 'w n/d' and 'w-n/d' forms."""
        assert parse_mixed_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["1/2", "1 1/0", "1.5 1/2", "a 1/2", "1 1"])
    def test_invalid(self, text):
        """Test that other shapes are rejected."""
        assert parse_mixed_number(text) is None


class TestPercentage:
    """Test percentages."""

    def test_value_is_fraction(self):
        """Test that 50% is 0.5 and flagged as a percentage."""
        assert parse_percentage("50%") == PercentValue(value=0.5)
        assert parse_percentage("50%").is_percent

    @pytest.mark.parametrize("text,expected", [("12.5 %", 0.125), ("-20%", -0.2), ("100%", 1.0)])
    def test_valid(self, text, expected):
        """Test percentage variants."""
        assert parse_percentage(text).value == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["50", "%", "fifty%", "50%%"])
    def test_invalid(self, text):
        """Test that non-percentages are rejected."""
        assert parse_percentage(text) is None


class TestScientificNotation:
    """Test scientific notation."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.5e3", 1500.0),
            ("1.5E3", 1500.0),
            ("2 e -2", 0.02),
            ("3*10^5", 300000.0),
            ("3×10^5", 300000.0),
            ("3x10^-2", 0.03),
            ("4*10^(2)", 400.0),
            ("-2.5e-1", -0.25),
        ],
    )
    def test_valid(self, text, expected):
        """Test E and times-ten-to-the forms."""
        assert parse_scientific_notation(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["1e99999", "1*10^99999", "e5", "1e", "3*10", "3*11^2", ""])
    def test_invalid(self, text):
        """Test that overflow and malformed forms are rejected."""
        assert parse_scientific_notation(text) is None
