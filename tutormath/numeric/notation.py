"""
Numeric notation sub-parsers.

Each parser recognises one way of writing a number and returns its value, or
``None`` when the whole string is not in that notation. They never raise and
never accept ``nan`` or ``inf``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"

_PLAIN = re.compile(rf"[-+]?{_NUMBER}")
_FRACTION = re.compile(rf"([-+]?)({_NUMBER})\s*/\s*({_NUMBER})")
_MIXED = re.compile(r"(-?)(\d+)(?:\s+|-)(\d+)\s*/\s*(\d+)")
_PERCENT = re.compile(rf"([-+]?{_NUMBER})\s*%")
_SCIENTIFIC_E = re.compile(rf"([-+]?{_NUMBER})\s*e\s*([-+]?\d+)", re.IGNORECASE)
_SCIENTIFIC_POWER = re.compile(
    rf"([-+]?{_NUMBER})\s*[*×·x]\s*10\s*\^\s*(?:\(\s*([-+]?\d+)\s*\)|([-+]?\d+))"
)


@dataclass(frozen=True)
class PercentValue:
    """A parsed percentage: ``value`` is the fraction (``50%`` -> 0.5)."""

    value: float
    is_percent: bool = True


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _prepare(text: object) -> str | None:
    if not isinstance(text, str):
        return None
    text = text.strip()
    return text or None


def parse_plain_number(text: str) -> float | None:
    """Parse a signed decimal literal such as ``-3.14``."""
    text = _prepare(text)
    if text is None or not _PLAIN.fullmatch(text):
        return None
    return _finite(float(text))


def parse_fraction(text: str) -> float | None:
    """
    Parse ``[-]a/b``.

    Returns ``None`` for a zero denominator.
    """
    text = _prepare(text)
    if text is None:
        return None
    match = _FRACTION.fullmatch(text)
    if match is None:
        return None
    sign, numerator, denominator = match.groups()
    denominator_value = float(denominator)
    if denominator_value == 0:
        return None
    value = float(numerator) / denominator_value
    return _finite(-value if sign == "-" else value)


def parse_mixed_number(text: str) -> float | None:
    """Parse ``[-]w n/d`` or ``w-n/d`` as ``sign * (w + n/d)``."""
    text = _prepare(text)
    if text is None:
        return None
    match = _MIXED.fullmatch(text)
    if match is None:
        return None
    sign, whole, numerator, denominator = match.groups()
    if float(denominator) == 0:
        return None
    value = float(whole) + float(numerator) / float(denominator)
    return _finite(-value if sign == "-" else value)


def parse_percentage(text: str) -> PercentValue | None:
    """Parse ``number%`` into its fractional value."""
    text = _prepare(text)
    if text is None:
        return None
    match = _PERCENT.fullmatch(text)
    if match is None:
        return None
    value = _finite(float(match.group(1)) / 100)
    if value is None:
        return None
    return PercentValue(value=value)


def parse_scientific_notation(text: str) -> float | None:
    """Parse ``aEb``, ``a e b``, ``a*10^b``, ``a×10^b`` or ``a*10^(b)``."""
    text = _prepare(text)
    if text is None:
        return None

    match = _SCIENTIFIC_E.fullmatch(text)
    if match is not None:
        try:
            return _finite(float(f"{match.group(1)}e{match.group(2)}"))
        except ValueError:
            return None

    match = _SCIENTIFIC_POWER.fullmatch(text)
    if match is not None:
        mantissa = float(match.group(1))
        try:
            return _finite(mantissa * 10.0 ** float(match.group(2) or match.group(3)))
        except OverflowError:
            return None

    return None
