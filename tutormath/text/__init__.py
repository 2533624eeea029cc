"""
Answer text handling: sanitizing, normalizing and display formatting.
"""

from .display import format_math_for_display
from .normalizer import normalize_math_answer
from .sanitizer import sanitize_answer_input

__all__ = [
    "format_math_for_display",
    "normalize_math_answer",
    "sanitize_answer_input",
]
