"""
Render a student's answer as inline LaTeX for review screens.
"""

from __future__ import annotations

from typing import Any

from tutormath.numeric.sampling import try_parse
from tutormath.parser import get_context
from tutormath.parser.visitors import free_variables, to_tex
from tutormath.text import symbols
from tutormath.text.normalizer import normalize_math_answer
from tutormath.text.sanitizer import sanitize_answer_input


def _close_braces(text: str) -> str:
    depth = 0
    for char in text:
        if char == "{":
            depth += 1
        elif char == "}" and depth:
            depth -= 1
    return text + "}" * depth


def _render(text: str) -> str:
    tree = try_parse(normalize_math_answer(text))
    if tree is not None and len(free_variables(tree)) <= get_context().max_variables:
        return to_tex(tree)
    return _close_braces(symbols.apply_rules(text, symbols.DISPLAY_RULES))


def format_math_for_display(answer: Any) -> str:
    """
    Format an answer for display.

    Text that already carries LaTeX delimiters, and text with no math in it,
    is returned as is. Otherwise the answer is rendered to LaTeX (through the
    expression parser when it parses) and wrapped in ``\\( ... \\)``.
    """
    text = sanitize_answer_input(answer).strip()
    if not text:
        return ""
    if symbols.LATEX_DELIMITERS.search(text):
        return text
    if not symbols.DISPLAY_MATH_HINT.search(text):
        return text
    return f"\\({_render(text)}\\)"
