"""
Engine exceptions.

These stay inside the engine: the public matching functions catch them and
report "no match" instead of raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tutormath.parser.tokenizer import Token


class MathInputError(Exception):
    """Base exception for answers the engine cannot interpret."""


class ParseError(MathInputError):
    """Exception raised during tokenizing or parsing, including cap overruns."""

    def __init__(self, message: str, token: Token | None = None):
        self.message = message
        self.token = token
        if token is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} at position {token.pos}: '{token.value}'")


class EvaluationError(MathInputError):
    """Exception raised when an expression has no finite real value."""
