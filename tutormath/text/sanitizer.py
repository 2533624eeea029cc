"""
Input sanitizer.

Strips zero-width and control characters from untrusted answer text and
truncates it, so downstream regexes and the expression parser always work on
bounded input. Visually identical answers that differ only by invisible
characters become identical here.
"""

from __future__ import annotations

import re
from typing import Any

from tutormath.config import get_settings

# U+200B..U+200D zero-width space/joiners, U+FEFF byte order mark
_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\ufeff]")

# C0 controls except tab/newline/carriage return, DEL and the C1 block
_CONTROL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_answer_input(raw: Any, max_length: int | None = None) -> str:
    """
    Clean a raw answer string.

    Args:
        raw: Untrusted input. ``None`` becomes the empty string, other
            non-string scalars are converted with ``str()``.
        max_length: Truncation length (defaults to the configured maximum)

    Returns:
        The sanitized string, never longer than ``max_length``
    """
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)
    if max_length is None:
        max_length = get_settings().MAX_INPUT_LENGTH

    # Bound the regex work before stripping, then truncate the cleaned text
    text = text[: max_length * 2]
    text = _ZERO_WIDTH.sub("", text)
    text = _CONTROL.sub("", text)
    return text[:max_length]
