"""
Magnitude-dependent tolerance model.

Small numbers are compared with a tight absolute tolerance that loosens with
magnitude; from 100 upwards the tolerance is relative (0.1%).
"""

from __future__ import annotations

import math

# (upper bound of |magnitude|, absolute tolerance)
TOLERANCE_BANDS: tuple[tuple[float, float], ...] = (
    (1.0, 0.001),
    (10.0, 0.01),
    (100.0, 0.05),
)

RELATIVE_TOLERANCE = 0.001

# Float slack so that boundary values like 1.0 vs 1.01 compare inclusively
_FLOAT_SLACK = 1e-12


def get_smart_tolerance(magnitude: float) -> float:
    """
    Return the tolerance for a value of the given magnitude.

    Example:
        >>> get_smart_tolerance(5)
        0.01
        >>> get_smart_tolerance(1000)
        1.0
    """
    size = abs(magnitude)
    for upper, tolerance in TOLERANCE_BANDS:
        if size < upper:
            return tolerance
    return size * RELATIVE_TOLERANCE


def within_tolerance(a: float, b: float, tolerance: float | None = None) -> bool:
    """
    Check whether two values agree.

    The smart tolerance is taken from the larger magnitude of the two so the
    comparison is symmetric. An explicit ``tolerance`` overrides it.
    """
    if not (math.isfinite(a) and math.isfinite(b)):
        return False
    if tolerance is None:
        tolerance = get_smart_tolerance(max(abs(a), abs(b)))
    return abs(a - b) <= tolerance + _FLOAT_SLACK * max(1.0, abs(a), abs(b))


def within_expected(actual: float, expected: float, tolerance: float | None = None) -> bool:
    """Compare a student value against an expected one, banded on ``expected``."""
    if not (math.isfinite(actual) and math.isfinite(expected)):
        return False
    if tolerance is None:
        tolerance = get_smart_tolerance(expected)
    return abs(actual - expected) <= tolerance + _FLOAT_SLACK * max(1.0, abs(expected))
