"""
Tests for the layered equivalence tiers.
"""

import math

import pytest

from tutormath.answer import (
    Confidence,
    MatchType,
    compare_math_answers,
    compare_numeric_answers,
    is_unevaluated_expression,
    match_exact_answer,
    match_math_answers,
    match_numeric_answer,
)
from tutormath.config import MatchingMode


class TestMathTiers:
    """Test which tier matches for short and expression answers."""

    @pytest.mark.parametrize(
        "user,correct,match_type",
        [
            ("5", "5", MatchType.EXACT),
            ("$x^2$", "x^{2}", MatchType.EXACT),
            ("1/2", "0.5", MatchType.FRACTION),
            ("0.5", "1/2", MatchType.FRACTION),
            ("\\frac{1}{2}", "0.5", MatchType.FRACTION),
            ("50%", "0.5", MatchType.PERCENTAGE),
            ("1.5e3", "1500", MatchType.SCIENTIFIC),
            ("3×10^5", "300000", MatchType.SCIENTIFIC),
            ("1 1/2", "1.5", MatchType.MIXED_NUMBER),
            ("1½", "1.5", MatchType.MIXED_NUMBER),
            ("5.0", "5", MatchType.NUMERIC),
            ("x^2+2x+1", "(x+1)^2", MatchType.EXPRESSION),
        ],
    )
    def test_tier(self, user, correct, match_type):
        """Test the first tier that accepts each pair."""
        result = match_math_answers(user, correct, mode=MatchingMode.PERMISSIVE)
        assert result.is_correct
        assert result.match_type == match_type

    def test_confidence(self):
        """Test the confidence attached to each kind of match."""
        assert match_math_answers("1/2", "0.5").confidence == Confidence.HIGH
        assert match_math_answers("3.14159", "3.1416").confidence == Confidence.MEDIUM
        assert match_math_answers("2x+2", "2(x+1)").confidence == Confidence.MEDIUM
        assert match_math_answers("7", "8").confidence == Confidence.LOW

    @pytest.mark.parametrize(
        "user,correct",
        [("3.2", "3"), ("x+1", "x+2"), ("2", "x"), ("abc", "abd"), ("1/3", "0.3")],
    )
    def test_no_match(self, user, correct):
        """Test pairs that are not equivalent."""
        result = match_math_answers(user, correct)
        assert not result.is_correct
        assert result.match_type == MatchType.NONE
        assert result.confidence == Confidence.LOW

    @pytest.mark.parametrize("user", [None, "", "   ", "$$", "\u200b"])
    def test_empty_user_answer(self, user):
        """Test that an empty answer is never correct."""
        assert not compare_math_answers(user, "")
        assert not compare_math_answers(user, "5")

    @pytest.mark.parametrize(
        "a,b",
        [("1/2", "0.5"), ("50%", "0.5"), ("1 1/2", "1.5"), ("2x", "x*2"), ("0.999", "1"), ("1e3", "1000")],
    )
    def test_symmetric(self, a, b):
        """Test that swapping the sides gives the same verdict."""
        assert compare_math_answers(a, b) == compare_math_answers(b, a)

    def test_invisible_characters_ignored(self):
        """Test that zero-width characters do not change the verdict."""
        assert compare_math_answers("1\u200b/2", "0.5")

    def test_tolerance_boundary(self):
        """Test the smart tolerance edge for decimal answers."""
        assert compare_math_answers("0.99", "0.9909")
        assert not compare_math_answers("0.99", "0.992")


class TestMatchingMode:
    """Test strict and permissive policies."""

    @pytest.mark.parametrize("user,correct", [("50%", "0.5"), ("1.5e3", "1500"), ("x^2+2x+1", "(x+1)^2")])
    def test_strict_disables_tiers(self, user, correct):
        """Test that strict mode rejects percentages, scientific notation and expressions."""
        assert compare_math_answers(user, correct, mode=MatchingMode.PERMISSIVE)
        assert not compare_math_answers(user, correct, mode=MatchingMode.STRICT)

    @pytest.mark.parametrize("user,correct", [("1/2", "0.5"), ("1 1/2", "1.5"), ("5.0", "5")])
    def test_strict_keeps_core_tiers(self, user, correct):
        """Test that fractions, mixed numbers and numbers still match in strict mode."""
        assert compare_math_answers(user, correct, mode="strict")

    def test_unknown_mode_uses_default(self, monkeypatch, reset_settings):
        """Test that an unknown mode string falls back to the configured mode."""
        monkeypatch.setenv("TUTORMATH_MATCHING_MODE", "strict")
        assert not compare_math_answers("50%", "0.5", mode="lenient")


class TestAlternates:
    """Test alternate accepted answers."""

    def test_text_alternate(self):
        """Test that an alternate spelling matches."""
        result = match_math_answers("two", "x=2", ["two"])
        assert result.is_correct
        assert result.match_type == MatchType.ALTERNATE

    def test_numeric_alternate(self):
        """Test that alternates are compared numerically."""
        result = match_math_answers("0.75", "three quarters", ["3/4"])
        assert result.match_type == MatchType.ALTERNATE

    def test_blank_alternates_ignored(self):
        """Test that empty alternates never match."""
        assert not compare_math_answers("7", "8", ["", None])

    def test_alternate_with_empty_correct(self):
        """Test that alternates are still checked when the correct answer is empty."""
        assert compare_math_answers("4", "", ["4"])


class TestExactAnswer:
    """Test the exact answer type."""

    def test_normalized_equality(self):
        """Test that formatting differences are ignored."""
        assert match_exact_answer("\\frac{1}{2}", "1/2").match_type == MatchType.EXACT
        assert match_exact_answer(" (2, 3) ", "(3,2)").is_correct

    def test_no_numeric_tiers(self):
        """Test that equal values written differently do not match."""
        assert not match_exact_answer("0.5", "1/2").is_correct

    def test_alternates(self):
        """Test exact alternates."""
        assert match_exact_answer("b", "a", ["B"]).match_type == MatchType.ALTERNATE


class TestNumericAnswer:
    """Test numeric questions."""

    @pytest.mark.parametrize(
        "user,expected,match_type",
        [
            ("32", 32, MatchType.EXACT),
            ("0.5", 0.5, MatchType.EXACT),
            ("1/2", 0.5, MatchType.FRACTION),
            ("50%", 0.5, MatchType.PERCENTAGE),
            ("3.2e4", 32000, MatchType.SCIENTIFIC),
            ("2 1/2", 2.5, MatchType.MIXED_NUMBER),
            ("3.14", math.pi, MatchType.NUMERIC),
            ("5 m", 5, MatchType.EXACT),
            ("1,000", 1000, MatchType.EXACT),
        ],
    )
    def test_accepted(self, user, expected, match_type):
        """Test accepted notations."""
        result = match_numeric_answer(user, expected, mode=MatchingMode.PERMISSIVE)
        assert result.is_correct
        assert result.match_type == match_type

    def test_inexact_confidence(self):
        """Test that a value within tolerance is medium confidence."""
        assert match_numeric_answer("3.14", math.pi).confidence == Confidence.MEDIUM

    def test_outside_tolerance(self):
        """Test that values outside the smart tolerance are rejected."""
        assert not compare_numeric_answers("3.1", math.pi)
        assert not compare_numeric_answers("1/3", 0.3)

    def test_explicit_tolerance(self):
        """Test an explicit tolerance."""
        assert compare_numeric_answers("9.5", 10, tolerance=0.5)
        assert not compare_numeric_answers("9.4", 10, tolerance=0.5)

    @pytest.mark.parametrize("user", ["2^5", "16*2", "30+2", "64/2", "sqrt(1024)", "\\frac{64}{2}", "64÷2"])
    def test_unevaluated_rejected(self, user):
        """Test that restating the computation is not accepted."""
        assert not compare_numeric_answers(user, 32)

    def test_allow_expressions(self):
        """Test that computations are evaluated when expressions are allowed."""
        result = match_numeric_answer("2^5", 32, allow_expressions=True)
        assert result.is_correct
        assert result.match_type == MatchType.EXPRESSION
        assert compare_numeric_answers("64/2", 32, allow_expressions=True)

    def test_allow_expressions_requires_permissive(self):
        """Test that strict mode does not evaluate expressions."""
        assert not compare_numeric_answers("2^5", 32, allow_expressions=True, mode="strict")

    def test_strict_rejects_percentage(self):
        """Test that percentages are not accepted in strict mode."""
        assert not compare_numeric_answers("50%", 0.5, mode=MatchingMode.STRICT)

    def test_negative(self):
        """Test that a signed number is a result, not a computation."""
        assert compare_numeric_answers("-4", -4)
        assert compare_numeric_answers("−4", -4)

    @pytest.mark.parametrize("expected", [float("nan"), float("inf"), "abc", None])
    def test_bad_expected(self, expected):
        """Test that a missing or non-finite expected value never matches."""
        assert not compare_numeric_answers("5", expected)


class TestUnevaluatedExpression:
    """Test detection of answers that restate a computation."""

    @pytest.mark.parametrize(
        "answer",
        ["2+3", "2*3", "2^5", "10/2", "\\frac{10}{2}", "6÷3", "3 \\div 4", "sqrt(4)", "-2+5", "(1+2)"],
    )
    def test_unevaluated(self, answer):
        """Test computations."""
        assert is_unevaluated_expression(answer)

    @pytest.mark.parametrize(
        "answer",
        ["5", "-5", "+5", "0.5", "1/2", "-3/4", "1 1/2", "1.5e3", "3*10^5", "50%", "", "x"],
    )
    def test_results(self, answer):
        """Test plain results in accepted notations."""
        assert not is_unevaluated_expression(answer)
