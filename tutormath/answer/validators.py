"""
Structured answer validators.

Per-answer-type checks that do not go through the equivalence tiers directly:
multiple choice by index, true/false by strict token, fill-in-the-blank by
positional sub-answers and matching by index pairs. None of them raise on
malformed input; it is simply incorrect.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from tutormath.config import MatchingMode
from tutormath.text.sanitizer import sanitize_answer_input

from .equivalence import compare_math_answers
from .result import BlankDetail, FillBlankResult, MatchDetail, MatchingResult
from .types import BlankSpec, MatchPair

# Nine digits at most; longer indices are never valid
_INTEGER = re.compile(r"[-+]?\d{1,9}")

DEFAULT_DELIMITERS: tuple[str, ...] = (",", ";", "|")


def parse_index(value: Any) -> int | None:
    """Read an integer index from an int or an integer string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = sanitize_answer_input(value).strip()
        if _INTEGER.fullmatch(text):
            return int(text)
    return None


def validate_multiple_choice(answer: Any, correct_index: Any) -> bool:
    """
    Check a multiple choice answer.

    Args:
        answer: The selected index, as an int or an integer string
        correct_index: Index of the correct choice

    Returns:
        True only when both parse as integers and are equal
    """
    selected = parse_index(answer)
    expected = parse_index(correct_index)
    return selected is not None and expected is not None and selected == expected


def _truth_value(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
    return None


def validate_true_false(answer: Any, correct_value: Any) -> bool:
    """
    Check a true/false answer.

    Only the complete words ``true`` and ``false`` are accepted (any case,
    surrounding whitespace ignored); ``t``, ``yes`` or ``1`` are incorrect.
    """
    if not isinstance(answer, str):
        return False
    token = sanitize_answer_input(answer).strip().lower()
    if token not in ("true", "false"):
        return False
    expected = _truth_value(correct_value)
    return expected is not None and (token == "true") == expected


def split_answers(user_answer: Any, delimiters: Sequence[str] = DEFAULT_DELIMITERS) -> list[str]:
    """Split a delimited answer string, or pass a list through as strings."""
    if user_answer is None:
        return []
    if isinstance(user_answer, (list, tuple)):
        return [sanitize_answer_input(item).strip() for item in user_answer]
    text = sanitize_answer_input(user_answer)
    if not text.strip():
        return []
    if not delimiters:
        return [text.strip()]
    pattern = "|".join(re.escape(delimiter) for delimiter in delimiters)
    return [part.strip() for part in re.split(pattern, text)]


def _as_blank(blank: Any) -> BlankSpec:
    if isinstance(blank, BlankSpec):
        return blank
    if isinstance(blank, dict):
        return BlankSpec.model_validate(blank)
    return BlankSpec(value="" if blank is None else str(blank))


def validate_fill_blank(
    user_answer: Any,
    blanks: Sequence[Any],
    delimiters: Sequence[str] = DEFAULT_DELIMITERS,
    *,
    mode: MatchingMode | str | None = None,
) -> FillBlankResult:
    """
    Check a fill-in-the-blank answer position by position.

    Args:
        user_answer: A delimited string or a list of answers
        blanks: Blank specs (or mappings with ``value``/``alternates``/``position``)
        delimiters: Separators for string answers
        mode: Matching mode for each blank; ``None`` uses the configured one

    Returns:
        FillBlankResult with per-blank details; correct only if every blank is
    """
    specs = [_as_blank(blank) for blank in blanks]
    answers = split_answers(user_answer, delimiters)

    details: list[BlankDetail] = []
    for index, spec in enumerate(specs):
        given = answers[index] if index < len(answers) else ""
        is_correct = bool(given) and compare_math_answers(given, spec.value, spec.alternates, mode=mode)
        details.append(
            BlankDetail(
                position=spec.position if spec.position is not None else index,
                user_answer=given,
                correct_answer=spec.value,
                is_correct=is_correct,
            )
        )

    blanks_correct = sum(1 for detail in details if detail.is_correct)
    blanks_total = len(specs)
    return FillBlankResult(
        is_correct=blanks_total > 0 and blanks_correct == blanks_total,
        blanks_correct=blanks_correct,
        blanks_total=blanks_total,
        details=details,
    )


def _parse_matches(user_matches: Any) -> list[int | None]:
    if user_matches is None:
        return []
    if isinstance(user_matches, str):
        text = sanitize_answer_input(user_matches)
        if not text.strip():
            return []
        return [parse_index(part) for part in text.split(",")]
    if isinstance(user_matches, (list, tuple)):
        return [parse_index(item) for item in user_matches]
    return [parse_index(user_matches)]


def _as_pair(pair: Any) -> MatchPair | None:
    if isinstance(pair, MatchPair):
        return pair
    if isinstance(pair, dict):
        return MatchPair(left=str(pair.get("left") or ""), right=str(pair.get("right") or ""))
    return None


def validate_matching(
    user_matches: Any,
    correct_matches: Sequence[Any],
    pairs: Sequence[Any] | None = None,
) -> MatchingResult:
    """
    Check a matching answer position by position.

    Args:
        user_matches: Chosen right-item indices (list or comma-separated string)
        correct_matches: Correct right-item index for each position
        pairs: Optional left/right pairs, echoed into the details

    Returns:
        MatchingResult with per-position details; correct only if every
        position is
    """
    chosen = _parse_matches(user_matches)
    expected = [parse_index(item) for item in correct_matches]
    pair_specs = [_as_pair(pair) for pair in pairs or ()]

    details: list[MatchDetail] = []
    for position, correct in enumerate(expected):
        if correct is None:
            continue
        given = chosen[position] if position < len(chosen) else None
        pair = pair_specs[position] if position < len(pair_specs) else None
        details.append(
            MatchDetail(
                position=position,
                user_match=given,
                correct_match=correct,
                is_correct=given is not None and given == correct,
                left=pair.left if pair is not None else None,
                right=pair.right if pair is not None else None,
            )
        )

    matches_correct = sum(1 for detail in details if detail.is_correct)
    matches_total = len(details)
    return MatchingResult(
        is_correct=matches_total > 0 and matches_correct == matches_total,
        matches_correct=matches_correct,
        matches_total=matches_total,
        details=details,
    )
