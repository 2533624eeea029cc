"""
Layered answer equivalence.

Both sides are normalized, then the tiers run in order until one matches:

1. exact string equality
2. notation: one side is a fraction, percentage, scientific notation or mixed
   number whose value matches the other side
3. both sides plain numbers within tolerance
4. algebraic expressions equal at every sample point
5. alternates: normalized or numeric equality with an accepted alternate

Strict matching mode switches off the percentage, scientific and expression
tiers. Numeric questions also reject answers that restate the computation
(``2+3`` for ``5``) unless expressions are explicitly allowed.

Example:
    >>> compare_math_answers("1/2", "0.5")
    True
    >>> compare_numeric_answers("2^5", 32)
    False
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, NamedTuple, Sequence

from tutormath.config import MatchingMode, resolve_mode
from tutormath.numeric.notation import (
    parse_fraction,
    parse_mixed_number,
    parse_percentage,
    parse_plain_number,
    parse_scientific_notation,
)
from tutormath.numeric.sampling import evaluate_constant, expressions_equivalent
from tutormath.numeric.tolerance import within_expected, within_tolerance
from tutormath.text.normalizer import normalize_math_answer
from tutormath.text.sanitizer import sanitize_answer_input

from .result import ValidationResult
from .types import Confidence, MatchType

logger = logging.getLogger(__name__)

_OPERATOR = re.compile(r"[-+*/^]")
_FUNCTION_CALL = re.compile(r"[a-z]+\(")
# A division typed with the division sign is always a computation
_DIVISION_SIGN = re.compile(r"÷|\\div(?![a-zA-Z])")


class NotationValue(NamedTuple):
    match_type: MatchType
    value: float


def notation_value(text: str, mode: MatchingMode) -> NotationValue | None:
    """Read ``text`` in the first notation that fits it, if any."""
    value = parse_fraction(text)
    if value is not None:
        return NotationValue(MatchType.FRACTION, value)

    if mode is MatchingMode.PERMISSIVE:
        percent = parse_percentage(text)
        if percent is not None:
            return NotationValue(MatchType.PERCENTAGE, percent.value)
        value = parse_scientific_notation(text)
        if value is not None:
            return NotationValue(MatchType.SCIENTIFIC, value)

    value = parse_mixed_number(text)
    if value is not None:
        return NotationValue(MatchType.MIXED_NUMBER, value)
    return None


def numeric_value(text: str, mode: MatchingMode) -> float | None:
    """Value of ``text`` as a plain number or an accepted notation."""
    value = parse_plain_number(text)
    if value is not None:
        return value
    notation = notation_value(text, mode)
    return notation.value if notation is not None else None


def _is_accepted_notation(text: str, mode: MatchingMode) -> bool:
    if parse_plain_number(text) is not None:
        return True
    if parse_fraction(text) is not None or parse_mixed_number(text) is not None:
        return True
    if parse_scientific_notation(text) is not None:
        return True
    return mode is MatchingMode.PERMISSIVE and parse_percentage(text) is not None


def _is_whole_division(text: str) -> bool:
    """``20/4``: a slash fraction that is really a division with a whole result."""
    value = parse_fraction(text)
    return value is not None and float(value).is_integer()


def _looks_unevaluated(raw: str, text: str, mode: MatchingMode) -> bool:
    if not text:
        return False
    if _DIVISION_SIGN.search(raw):
        return True
    if _is_accepted_notation(text, mode):
        return _is_whole_division(text)
    body = text[1:] if text[0] in "+-" else text
    return bool(_OPERATOR.search(body) or _FUNCTION_CALL.search(body))


def is_unevaluated_expression(answer: Any, *, mode: MatchingMode | str | None = None) -> bool:
    """
    Check whether an answer restates a computation instead of its result.

    Plain and signed numbers, fractions, mixed numbers and scientific notation
    (and percentages in permissive mode) are results. Anything else holding an
    operator after the leading sign, or a function call, is a computation.
    """
    return _looks_unevaluated(sanitize_answer_input(answer), normalize_math_answer(answer), resolve_mode(mode))


def _numeric_result(actual: float, expected: float) -> ValidationResult:
    confidence = Confidence.HIGH if actual == expected else Confidence.MEDIUM
    return ValidationResult.matched(MatchType.NUMERIC, confidence)


def _match_normalized(user: str, correct: str, mode: MatchingMode) -> ValidationResult | None:
    if user == correct:
        return ValidationResult.matched(MatchType.EXACT)

    for side, other in ((user, correct), (correct, user)):
        notation = notation_value(side, mode)
        if notation is None:
            continue
        other_value = numeric_value(other, mode)
        if other_value is not None and within_tolerance(notation.value, other_value):
            return ValidationResult.matched(notation.match_type)

    user_value = parse_plain_number(user)
    correct_value = parse_plain_number(correct)
    if user_value is not None and correct_value is not None:
        if within_tolerance(user_value, correct_value):
            return _numeric_result(user_value, correct_value)
        return None

    if mode is MatchingMode.PERMISSIVE and expressions_equivalent(user, correct):
        return ValidationResult.matched(MatchType.EXPRESSION)

    return None


def _matches_alternate(user: str, alternates: Sequence[Any] | None, mode: MatchingMode) -> bool:
    if not alternates:
        return False
    user_value = numeric_value(user, mode)
    for alternate in alternates:
        candidate = normalize_math_answer(alternate)
        if not candidate:
            continue
        if candidate == user:
            return True
        if user_value is not None:
            candidate_value = numeric_value(candidate, mode)
            if candidate_value is not None and within_tolerance(user_value, candidate_value):
                return True
    return False


def match_math_answers(
    user_answer: Any,
    correct_answer: Any,
    alternates: Sequence[Any] | None = None,
    *,
    mode: MatchingMode | str | None = None,
) -> ValidationResult:
    """
    Compare a student answer with the correct one through all tiers.

    Args:
        user_answer: Raw student answer
        correct_answer: Raw correct answer
        alternates: Other accepted answers
        mode: Matching mode (defaults to the configured mode)

    Returns:
        ValidationResult naming the tier that matched, or a "none" result
    """
    mode = resolve_mode(mode)
    user = normalize_math_answer(user_answer)
    if not user:
        return ValidationResult.no_match()

    correct = normalize_math_answer(correct_answer)
    if correct:
        result = _match_normalized(user, correct, mode)
        if result is not None:
            return result

    if _matches_alternate(user, alternates, mode):
        return ValidationResult.matched(MatchType.ALTERNATE)

    return ValidationResult.no_match()


def compare_math_answers(
    user_answer: Any,
    correct_answer: Any,
    alternates: Sequence[Any] | None = None,
    *,
    mode: MatchingMode | str | None = None,
) -> bool:
    """Return whether ``user_answer`` matches ``correct_answer`` (see match_math_answers)."""
    return match_math_answers(user_answer, correct_answer, alternates, mode=mode).is_correct


def match_exact_answer(
    user_answer: Any,
    correct_answer: Any,
    alternates: Sequence[Any] | None = None,
) -> ValidationResult:
    """Exact and alternate tiers only: the normalized strings must be equal."""
    user = normalize_math_answer(user_answer)
    if not user:
        return ValidationResult.no_match()
    if user == normalize_math_answer(correct_answer):
        return ValidationResult.matched(MatchType.EXACT)
    if any(user == normalize_math_answer(alternate) for alternate in alternates or ()):
        return ValidationResult.matched(MatchType.ALTERNATE)
    return ValidationResult.no_match()


def _format_expected(expected: float) -> str:
    if expected.is_integer():
        return str(int(expected))
    return repr(expected)


def match_numeric_answer(
    user_answer: Any,
    expected: float,
    tolerance: float | None = None,
    *,
    allow_expressions: bool = False,
    mode: MatchingMode | str | None = None,
) -> ValidationResult:
    """
    Compare a student answer with an expected number.

    Args:
        user_answer: Raw student answer
        expected: The expected value
        tolerance: Explicit tolerance; defaults to the smart tolerance of ``expected``
        allow_expressions: Accept computations such as ``2+3`` and evaluate them
        mode: Matching mode (defaults to the configured mode)

    Returns:
        ValidationResult naming the tier that matched, or a "none" result
    """
    mode = resolve_mode(mode)
    try:
        expected = float(expected)
    except (TypeError, ValueError):
        logger.warning("Expected value is not a number: %r", expected)
        return ValidationResult.no_match()
    if not math.isfinite(expected):
        logger.warning("Expected value is not finite: %r", expected)
        return ValidationResult.no_match()

    raw = sanitize_answer_input(user_answer)
    user = normalize_math_answer(raw)
    if not user:
        return ValidationResult.no_match()

    if not allow_expressions and _looks_unevaluated(raw, user, mode):
        logger.debug("Rejected unevaluated expression: %r", user)
        return ValidationResult.no_match()

    if user == _format_expected(expected):
        return ValidationResult.matched(MatchType.EXACT)

    notation = notation_value(user, mode)
    if notation is not None:
        if within_expected(notation.value, expected, tolerance):
            return ValidationResult.matched(notation.match_type)
        return ValidationResult.no_match()

    value = parse_plain_number(user)
    if value is not None:
        if within_expected(value, expected, tolerance):
            return _numeric_result(value, expected)
        return ValidationResult.no_match()

    if allow_expressions and mode is MatchingMode.PERMISSIVE:
        value = evaluate_constant(user)
        if value is not None and within_expected(value, expected, tolerance):
            return ValidationResult.matched(MatchType.EXPRESSION)

    return ValidationResult.no_match()


def compare_numeric_answers(
    user_answer: Any,
    expected: float,
    tolerance: float | None = None,
    *,
    allow_expressions: bool = False,
    mode: MatchingMode | str | None = None,
) -> bool:
    """Return whether ``user_answer`` matches ``expected`` (see match_numeric_answer)."""
    return match_numeric_answer(
        user_answer, expected, tolerance, allow_expressions=allow_expressions, mode=mode
    ).is_correct
