"""
Tests for the grammar context.
"""

import dataclasses

import pytest

from tutormath.parser import Context, get_context
from tutormath.parser.context import Associativity


class TestAnswerGrammar:
    """Test the packaged answer grammar."""

    def test_cached(self):
        """Test that the context is loaded once."""
        assert get_context() is get_context()

    def test_precedence(self):
        """Test operator precedence."""
        context = get_context()
        assert context.get_operator_precedence("+") < context.get_operator_precedence("*")
        assert context.get_operator_precedence("*") < context.get_operator_precedence("-", is_unary=True)
        assert context.get_operator_precedence("-", is_unary=True) < context.get_operator_precedence("^")
        assert context.get_operator_precedence("%") == 0

    def test_associativity(self):
        """Test that power is right-associative."""
        context = get_context()
        assert context.get_operator_associativity("^") == Associativity.RIGHT
        assert context.get_operator_associativity("-") == Associativity.LEFT

    def test_names(self):
        """Test functions, constants and named variables."""
        context = get_context()
        assert context.is_function("sqrt")
        assert context.is_constant("pi")
        assert context.is_named_variable("theta")
        assert not context.is_function("eval")
        assert {"sqrt", "pi", "theta"} <= context.reserved_names

    def test_sample_points(self):
        """Test that there is a sample row per allowed variable."""
        context = get_context()
        assert context.max_variables == 2
        assert len(context.sample_points) >= context.max_variables

    def test_immutable(self):
        """Test that the shared context cannot be changed."""
        context = get_context()
        with pytest.raises(TypeError):
            context.constants["pi"] = 3
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.max_variables = 10


class TestFromDict:
    """Test building a context from data."""

    def test_minimal(self):
        """Test a small grammar."""
        context = Context.from_dict(
            {
                "name": "Tiny",
                "constants": {"tau": 6.283},
                "functions": ["sin", {"name": "root", "min_args": 2, "max_args": 2}],
                "max_variables": 1,
                "sample_points": [[1.5]],
            }
        )
        assert context.constants["tau"] == pytest.approx(6.283)
        assert context.functions["sin"].max_args == 1
        assert context.functions["root"].min_args == 2

    def test_missing_sample_points(self):
        """Test that too few sample rows is rejected."""
        with pytest.raises(ValueError):
            Context.from_dict({"name": "Broken", "max_variables": 2, "sample_points": [[1.0]]})
