"""
Tests for point-sampling expression equivalence.
"""

import pytest

from tutormath.numeric.sampling import evaluate_constant, expressions_equivalent, sample_bindings, try_parse


class TestSampleBindings:
    """Test the sample grid."""

    def test_one_variable(self):
        """Test that one variable takes each sample value."""
        assert list(sample_bindings(["x"])) == [{"x": 0.7}, {"x": 1.9}, {"x": 3.3}]

    def test_two_variables(self):
        """Test that two variables take the full grid."""
        bindings = list(sample_bindings(["x", "y"]))
        assert len(bindings) == 9
        assert {"x": 0.7, "y": 0.4} in bindings

    def test_no_variables(self):
        """Test that a constant expression gets one empty binding."""
        assert list(sample_bindings([])) == [{}]


class TestExpressionsEquivalent:
    """Test algebraic equivalence by sampling."""

    @pytest.mark.parametrize(
        "a,b",
        [
            ("x^2+2x+1", "(x+1)^2"),
            ("2x", "x*2"),
            ("x*y", "y*x"),
            ("sqrt(x)", "x^(1/2)"),
            ("1/x", "x^-1"),
            ("sin(x)^2+cos(x)^2", "1"),
            ("2(x+y)", "2x+2y"),
            ("ln(e^x)", "x"),
        ],
    )
    def test_equivalent(self, a, b):
        """Test pairs that agree at every sample point."""
        assert expressions_equivalent(a, b)

    @pytest.mark.parametrize("a,b", [("x+1", "x+2"), ("x^2", "2x"), ("sin(x)", "cos(x)"), ("x", "y")])
    def test_not_equivalent(self, a, b):
        """Test pairs that differ."""
        assert not expressions_equivalent(a, b)

    def test_too_many_variables(self):
        """Test that more than two variables fails closed."""
        assert not expressions_equivalent("x+y+z", "z+y+x")

    def test_domain_error_fails_closed(self):
        """Test that a domain error at any sample point means not equivalent."""
        assert not expressions_equivalent("sqrt(x-1)", "sqrt(x-1)")
        assert not expressions_equivalent("1/(x-0.7)", "1/(x-0.7)")

    def test_parse_failure_fails_closed(self):
        """Test that unparseable input is never equivalent."""
        assert not expressions_equivalent("x+", "x")
        assert not expressions_equivalent("x<3", "x<3")


class TestEvaluateConstant:
    """Test constant evaluation."""

    def test_values(self):
        """Test expressions without variables."""
        assert evaluate_constant("2^5") == pytest.approx(32)
        assert evaluate_constant("2pi") == pytest.approx(6.283185307)
        assert evaluate_constant("sqrt(16)") == pytest.approx(4)

    @pytest.mark.parametrize("text", ["x+1", "1/0", "((", "", "10^400"])
    def test_no_value(self, text):
        """Test that free variables, errors and bad syntax give None."""
        assert evaluate_constant(text) is None

    def test_try_parse(self):
        """Test that try_parse swallows parse errors."""
        assert try_parse("+") is None
        assert try_parse("x+1") is not None
