"""
Numeric notation parsers, tolerance model and expression sampling.
"""

from .notation import (
    PercentValue,
    parse_fraction,
    parse_mixed_number,
    parse_percentage,
    parse_plain_number,
    parse_scientific_notation,
)
from .tolerance import get_smart_tolerance, within_expected, within_tolerance

__all__ = [
    "PercentValue",
    "parse_fraction",
    "parse_mixed_number",
    "parse_percentage",
    "parse_plain_number",
    "parse_scientific_notation",
    "get_smart_tolerance",
    "within_expected",
    "within_tolerance",
]
