"""
tutormath - answer equivalence engine for a math tutoring platform.

Decides whether a student's answer is mathematically equivalent to the
expected one, tolerating notation differences (LaTeX or Unicode, fractions,
percentages, scientific notation, mixed numbers) while refusing answers that
merely restate the computation.

Example:
    >>> from tutormath import validate_answer
    >>> validate_answer("1/2", "0.5", "short_answer").is_correct
    True
"""

from .answer import (
    AnswerType,
    Confidence,
    MatchType,
    ValidationResult,
    compare_math_answers,
    compare_numeric_answers,
    is_unevaluated_expression,
    validate_answer,
    validate_fill_blank,
    validate_matching,
)
from .config import EngineSettings, MatchingMode, get_settings
from .errors import EvaluationError, MathInputError, ParseError
from .numeric import (
    get_smart_tolerance,
    parse_fraction,
    parse_mixed_number,
    parse_percentage,
    parse_scientific_notation,
)
from .text import format_math_for_display, normalize_math_answer, sanitize_answer_input

__version__ = "0.1.0"

__all__ = [
    "validate_answer",
    "compare_math_answers",
    "compare_numeric_answers",
    "is_unevaluated_expression",
    "validate_fill_blank",
    "validate_matching",
    "normalize_math_answer",
    "format_math_for_display",
    "sanitize_answer_input",
    "parse_fraction",
    "parse_mixed_number",
    "parse_percentage",
    "parse_scientific_notation",
    "get_smart_tolerance",
    "AnswerType",
    "MatchType",
    "Confidence",
    "ValidationResult",
    "MatchingMode",
    "EngineSettings",
    "get_settings",
    "MathInputError",
    "ParseError",
    "EvaluationError",
]
