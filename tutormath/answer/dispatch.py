"""
Answer validation entry point.

:func:`validate_answer` coerces the stored correct-answer data into the spec
variant for the question's answer type and routes the student's answer to the
matching tier or structured validator. Unknown answer types and malformed
specs yield an incorrect, low-confidence result and a warning log.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from tutormath.config import MatchingMode, resolve_mode
from tutormath.numeric.sampling import evaluate_constant
from tutormath.text.normalizer import normalize_math_answer

from .equivalence import match_exact_answer, match_math_answers, match_numeric_answer, numeric_value
from .result import ValidationResult
from .types import (
    AnswerSpec,
    AnswerType,
    Confidence,
    ExactSpec,
    ExpressionSpec,
    FillBlankSpec,
    MatchingSpec,
    MatchType,
    MultipleChoiceSpec,
    NumericSpec,
    ShortAnswerSpec,
    TrueFalseSpec,
    build_answer_spec,
)
from .validators import validate_fill_blank, validate_matching, validate_multiple_choice, validate_true_false

logger = logging.getLogger(__name__)


def expected_number(raw: Any) -> float | None:
    """Read the expected value of a numeric question from its stored form."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    text = normalize_math_answer(raw)
    if not text:
        return None
    value = numeric_value(text, MatchingMode.PERMISSIVE)
    if value is None:
        value = evaluate_constant(text)
    return value


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _numeric(student: Any, correct: Any, spec: NumericSpec, mode: MatchingMode) -> ValidationResult:
    expected = expected_number(_first_present(spec.value, correct))
    if expected is None:
        logger.warning("Numeric question has no usable expected value: %r", _first_present(spec.value, correct))
        return ValidationResult.no_match()
    return match_numeric_answer(
        student, expected, spec.tolerance, allow_expressions=spec.allow_expressions, mode=mode
    )


def _math(
    student: Any, correct: Any, spec: ShortAnswerSpec | ExpressionSpec, mode: MatchingMode
) -> ValidationResult:
    return match_math_answers(student, _first_present(correct, spec.value), spec.alternates, mode=mode)


def _exact(student: Any, correct: Any, spec: ExactSpec, mode: MatchingMode) -> ValidationResult:
    return match_exact_answer(student, _first_present(correct, spec.value), spec.alternates)


def _long_answer(student: Any, correct: Any, spec: Any, mode: MatchingMode) -> ValidationResult:
    return ValidationResult(
        is_correct=False,
        match_type=MatchType.MANUAL_GRADING_REQUIRED,
        confidence=Confidence.LOW,
    )


def _multiple_choice(student: Any, correct: Any, spec: MultipleChoiceSpec, mode: MatchingMode) -> ValidationResult:
    if validate_multiple_choice(student, _first_present(spec.correct_index, correct)):
        return ValidationResult.matched(MatchType.EXACT)
    return ValidationResult.no_match()


def _true_false(student: Any, correct: Any, spec: TrueFalseSpec, mode: MatchingMode) -> ValidationResult:
    if validate_true_false(student, _first_present(spec.value, correct)):
        return ValidationResult.matched(MatchType.EXACT)
    return ValidationResult.no_match()


def _fill_blank(student: Any, correct: Any, spec: FillBlankSpec, mode: MatchingMode) -> ValidationResult:
    if spec.blanks:
        return validate_fill_blank(student, spec.blanks, mode=mode).to_validation_result()
    # No blank data: compare against the single stored value
    return match_math_answers(student, correct, mode=mode)


def _matching(student: Any, correct: Any, spec: MatchingSpec, mode: MatchingMode) -> ValidationResult:
    if not spec.correct_matches:
        logger.warning("Matching question has no correct matches")
        return ValidationResult.no_match()
    return validate_matching(student, spec.correct_matches, spec.pairs).to_validation_result()


_HANDLERS: dict[AnswerType, Callable[[Any, Any, Any, MatchingMode], ValidationResult]] = {
    AnswerType.EXACT: _exact,
    AnswerType.NUMERIC: _numeric,
    AnswerType.MULTIPLE_CHOICE: _multiple_choice,
    AnswerType.SHORT_ANSWER: _math,
    AnswerType.EXPRESSION: _math,
    AnswerType.LONG_ANSWER: _long_answer,
    AnswerType.TRUE_FALSE: _true_false,
    AnswerType.FILL_BLANK: _fill_blank,
    AnswerType.MATCHING: _matching,
}


def validate_answer(
    student_answer: Any,
    correct_answer: Any,
    answer_type: AnswerType | str,
    spec: AnswerSpec | dict[str, Any] | None = None,
    *,
    mode: MatchingMode | str | None = None,
) -> ValidationResult:
    """
    Validate a student's answer for a question.

    Args:
        student_answer: Raw answer (a list for fill-in-the-blank or matching)
        correct_answer: The stored correct answer text
        answer_type: The question's answer type
        spec: Stored correct-answer data (mapping or spec model)
        mode: Matching mode (defaults to the configured mode)

    Returns:
        ValidationResult; never raises
    """
    try:
        kind = AnswerType(answer_type)
    except ValueError:
        logger.warning("Unknown answer type: %r", answer_type)
        return ValidationResult.no_match()

    try:
        answer_spec = build_answer_spec(kind, spec)
    except ValueError as exc:
        logger.warning("Malformed %s answer spec: %s", kind.value, exc)
        return ValidationResult.no_match()

    return _HANDLERS[kind](student_answer, correct_answer, answer_spec, resolve_mode(mode))
