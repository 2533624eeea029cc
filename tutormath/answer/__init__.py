"""
Answer validation: correct-answer specs, equivalence tiers and structured
validators.
"""

from .dispatch import validate_answer
from .equivalence import (
    compare_math_answers,
    compare_numeric_answers,
    is_unevaluated_expression,
    match_exact_answer,
    match_math_answers,
    match_numeric_answer,
)
from .result import FillBlankResult, MatchingResult, ValidationResult
from .types import AnswerSpec, AnswerType, Confidence, MatchType, build_answer_spec
from .validators import validate_fill_blank, validate_matching, validate_multiple_choice, validate_true_false

__all__ = [
    "validate_answer",
    "compare_math_answers",
    "compare_numeric_answers",
    "is_unevaluated_expression",
    "match_exact_answer",
    "match_math_answers",
    "match_numeric_answer",
    "ValidationResult",
    "FillBlankResult",
    "MatchingResult",
    "AnswerSpec",
    "AnswerType",
    "Confidence",
    "MatchType",
    "build_answer_spec",
    "validate_fill_blank",
    "validate_matching",
    "validate_multiple_choice",
    "validate_true_false",
]
