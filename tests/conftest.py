"""
Shared pytest fixtures for the tutormath test suite.

This module provides:
- A helper for asserting pydantic validation failures on spec models
- The adversarial input corpus used by the never-raises tests
- A fixture that restores the cached engine settings after env overrides
"""

import pytest
from typing import Any, Type

from pydantic import BaseModel, ValidationError

from tutormath.config import get_settings


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
    ) -> ValidationError:
        """
        Assert that validating ``data`` as ``model_class`` raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to validate
            expected_field: Expected field name in error (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class.model_validate(data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e["loc"] and e["loc"][0] == expected_field]
            assert field_errors, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation


HOSTILE_INPUTS = [
    "",
    "   ",
    "\\frac{",
    "\\frac{1}{",
    "}}}{{{",
    "{{{{{{5",
    "\\sqrt{" * 100,
    "\\frac{" * 80 + "1" + "}" * 80,
    "(" * 200 + "x",
    "(" * 200 + "1" + ")" * 200,
    "((((((((((((((((((((((((((((((((((((((((((((((((((((((((((((((((((((x))))))))))))))))))))))))))))))))))))))))))))))))))))))))))))))))))))",
    "'; DROP TABLE answers; --",
    "<script>alert(1)</script>",
    "${7*7}",
    "__import__('os').system('ls')",
    "\x00\x01\x02\u200b\ufeff",
    "∞∞∞",
    "√√√√",
    "⁻⁻⁻",
    "1/0",
    "0/0",
    "10^10^10",
    "e^e^e^e^e^e^e^e",
    "exp(exp(exp(10)))",
    "sqrt(-1)",
    "ln(0)",
    "1e99999",
    "9" * 400,
    "1" * 20_000,
    "x" * 5_000,
    "1 " * 3_000 + "m",
    "(" + ",".join("1" * 3 for _ in range(3_000)),
    "a" + " " * 8_000 + "or b",
    "+-",
    "±",
    "½½½",
    "\\left(\\right)",
    "\\begin{matrix}1&2\\end{matrix}",
    "%",
    "--5",
    "1,,2",
]


@pytest.fixture(params=HOSTILE_INPUTS, ids=lambda value: repr(value[:20]))
def hostile_input(request) -> str:
    """Malformed and adversarial answers."""
    return request.param


@pytest.fixture
def reset_settings():
    """Clear the cached engine settings before and after a test that changes env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
