"""
Static symbol tables for answer normalization and display.

Every table here is an immutable constant: tuples of ``(pattern, replacement)``
rules compiled at import time, or read-only mappings. The normalizer applies
them in order through :func:`apply_rules`.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable

Rule = tuple[re.Pattern[str], str]


def _rules(pairs: Iterable[tuple[str, str]]) -> tuple[Rule, ...]:
    return tuple((re.compile(pattern), replacement) for pattern, replacement in pairs)


def apply_rules(text: str, rules: Iterable[Rule]) -> str:
    """Apply ``rules`` to ``text`` in order."""
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


# Greek letter names shared by the LaTeX and Unicode tables
GREEK_NAMES: tuple[str, ...] = (
    "alpha", "beta", "gamma", "delta", "epsilon", "varepsilon", "zeta", "eta",
    "theta", "vartheta", "iota", "kappa", "lambda", "mu", "nu", "xi", "omicron",
    "pi", "rho", "sigma", "tau", "upsilon", "phi", "varphi", "chi", "psi", "omega",
)

# LaTeX commands with a plain replacement (command names are lowercased)
LATEX_COMMANDS = MappingProxyType(
    {
        **{name: name for name in GREEK_NAMES if not name.startswith("var")},
        "varepsilon": "epsilon",
        "vartheta": "theta",
        "varphi": "phi",
        # Operators
        "times": "*",
        "cdot": "*",
        "ast": "*",
        "div": "/",
        "pm": "+-",
        "mp": "-+",
        # Comparisons
        "leq": "<=",
        "le": "<=",
        "leqslant": "<=",
        "geq": ">=",
        "ge": ">=",
        "geqslant": ">=",
        "neq": "!=",
        "ne": "!=",
        "approx": "~=",
        "lt": "<",
        "gt": ">",
        # Functions
        "sin": "sin",
        "cos": "cos",
        "tan": "tan",
        "sec": "sec",
        "csc": "csc",
        "cot": "cot",
        "arcsin": "arcsin",
        "arccos": "arccos",
        "arctan": "arctan",
        "sinh": "sinh",
        "cosh": "cosh",
        "tanh": "tanh",
        "log": "log",
        "ln": "ln",
        "exp": "exp",
        # Symbols
        "infty": "infinity",
        "displaystyle": "",
        "textstyle": "",
        "circ": "deg",
        "degree": "deg",
        "percent": "%",
        "in": "in",
        "cup": "union",
        "cap": "intersect",
        "subset": "subset",
        "supset": "superset",
        "emptyset": "emptyset",
        "varnothing": "emptyset",
    }
)

# Commands that wrap their argument without changing it
LATEX_WRAPPERS: frozenset[str] = frozenset(
    {"text", "textrm", "mathrm", "mathit", "mathbf", "mathsf", "operatorname", "boldsymbol"}
)

LATEX_FRACTIONS: frozenset[str] = frozenset({"frac", "dfrac", "tfrac", "cfrac"})

# Spacing commands and line breaks are dropped
LATEX_SPACING = re.compile(r"\\[,:;! ]|\\\\|\\quad\b|\\qquad\b")

# Math-mode delimiters, removed without touching their content
LATEX_DELIMITERS = re.compile(r"\$\$|\$|\\\(|\\\)|\\\[|\\\]")

# \left( ... \right) sizing prefixes
LATEX_SIZING = re.compile(r"\\(?:left|right|big|bigg|big[lr]|bigg[lr])\s*(\\[{}]|[()\[\]|.])")

_SUPERSCRIPT_DIGITS = {
    "⁰": "0", "¹": "1", "²": "2", "³": "3", "⁴": "4",
    "⁵": "5", "⁶": "6", "⁷": "7", "⁸": "8", "⁹": "9", "⁻": "-",
}

# Vulgar fractions: standalone form (decimal literal) and mixed-number form
VULGAR_FRACTIONS = MappingProxyType(
    {
        "½": ("0.5", "1/2"),
        "¼": ("0.25", "1/4"),
        "¾": ("0.75", "3/4"),
        "⅓": ("0.333333", "1/3"),
        "⅔": ("0.666667", "2/3"),
        "⅕": ("0.2", "1/5"),
        "⅖": ("0.4", "2/5"),
        "⅗": ("0.6", "3/5"),
        "⅘": ("0.8", "4/5"),
        "⅙": ("0.166667", "1/6"),
        "⅚": ("0.833333", "5/6"),
        "⅛": ("0.125", "1/8"),
        "⅜": ("0.375", "3/8"),
        "⅝": ("0.625", "5/8"),
        "⅞": ("0.875", "7/8"),
    }
)

# Single-character Unicode replacements
UNICODE_SYMBOLS = MappingProxyType(
    {
        # Operators
        "×": "*",
        "·": "*",
        "⋅": "*",
        "∗": "*",
        "÷": "/",
        "∕": "/",
        "−": "-",
        "–": "-",
        "—": "-",
        "‐": "-",
        "±": "+-",
        "∓": "-+",
        # Comparisons
        "≤": "<=",
        "≥": ">=",
        "≠": "!=",
        "≈": "~=",
        # Roots (after the parenthesising rules below)
        "√": "sqrt",
        "∛": "cbrt",
        # Symbols
        "∞": "infinity",
        "°": "deg",
        "∑": "sum",
        "∈": "in",
        "∪": "union",
        "∩": "intersect",
        "⊂": "subset",
        "⊆": "subset",
        "⊃": "superset",
        "⊇": "superset",
        "∅": "emptyset",
        # Blackboard bold, emitted lower-case so a second lowercase pass keeps them
        "ℝ": "r",
        "ℤ": "z",
        "ℕ": "n",
        "ℂ": "c",
        "ℚ": "q",
        # Greek (input is already lowercased, so uppercase forms arrive lowercase)
        "α": "alpha",
        "β": "beta",
        "γ": "gamma",
        "δ": "delta",
        "ε": "epsilon",
        "ϵ": "epsilon",
        "ζ": "zeta",
        "η": "eta",
        "θ": "theta",
        "ϑ": "theta",
        "ι": "iota",
        "κ": "kappa",
        "λ": "lambda",
        "μ": "mu",
        "ν": "nu",
        "ξ": "xi",
        "π": "pi",
        "ρ": "rho",
        "σ": "sigma",
        "ς": "sigma",
        "τ": "tau",
        "υ": "upsilon",
        "φ": "phi",
        "ϕ": "phi",
        "χ": "chi",
        "ψ": "psi",
        "ω": "omega",
        # Quotes and primes that show up in copied answers
        "′": "'",
        "’": "'",
    }
)

_root_arg = r"(\d+(?:\.\d+)?|[a-z](?![a-z]))"

UNICODE_RULES: tuple[Rule, ...] = _rules(
    [
        # √16 -> sqrt(16), ∛x -> cbrt(x)
        (rf"√\s*{_root_arg}", r"sqrt(\1)"),
        (rf"∛\s*{_root_arg}", r"cbrt(\1)"),
        # 1½ -> 1 1/2 (mixed number); standalone ½ handled by the symbol table
        *[(rf"(\d)\s*{glyph}", rf"\1 {fraction}") for glyph, (_, fraction) in VULGAR_FRACTIONS.items()],
        *[(glyph, decimal) for glyph, (decimal, _) in VULGAR_FRACTIONS.items()],
    ]
)

# Superscript runs: x⁻¹ -> x^-1, x²³ -> x^23
SUPERSCRIPT_RUN = re.compile("[⁻]?[⁰¹²³⁴⁵⁶⁷⁸⁹]+")

UNICODE_SYMBOL_PATTERN = re.compile("|".join(re.escape(ch) for ch in UNICODE_SYMBOLS))

# ASCII power operator, whitespace tolerant so it is stable across passes
ASCII_POWER = re.compile(r"\*\s*\*")


def superscript_to_power(match: re.Match[str]) -> str:
    """Translate a run of superscript characters into ``^digits``."""
    return "^" + "".join(_SUPERSCRIPT_DIGITS[ch] for ch in match.group(0))


# Trailing measurement units, matched after whitespace is removed from the unit
UNIT_NAMES: frozenset[str] = frozenset(
    {
        # Length
        "m", "meter", "meters", "metre", "metres",
        "cm", "centimeter", "centimeters", "centimetre", "centimetres",
        "mm", "millimeter", "millimeters", "millimetre", "millimetres",
        "km", "kilometer", "kilometers", "kilometre", "kilometres",
        "ft", "foot", "feet", "in", "inch", "inches",
        "yd", "yard", "yards", "mi", "mile", "miles",
        # Time
        "s", "sec", "secs", "second", "seconds",
        "min", "mins", "minute", "minutes",
        "h", "hr", "hrs", "hour", "hours",
        "d", "day", "days", "wk", "week", "weeks",
        "yr", "yrs", "year", "years",
        # Mass
        "g", "gram", "grams", "kg", "kilogram", "kilograms",
        "mg", "milligram", "milligrams",
        "lb", "lbs", "pound", "pounds", "oz", "ounce", "ounces",
        # Volume
        "l", "liter", "liters", "litre", "litres",
        "ml", "milliliter", "milliliters", "millilitre", "millilitres",
        "gal", "gallon", "gallons",
        # Angles
        "deg", "degree", "degrees", "rad", "radian", "radians",
    }
)

UNIT_PREFIXES: tuple[str, ...] = ("square", "sq", "cubic", "cu")

PERCENT_WORDS: frozenset[str] = frozenset({"percent", "pct"})

# Unicode -> LaTeX conversions used by the display formatter
DISPLAY_RULES: tuple[Rule, ...] = _rules(
    [
        (r"√\s*(\d+(?:\.\d+)?|[A-Za-z])", r"\\sqrt{\1}"),
        (r"√\(([^()]*)\)", r"\\sqrt{\1}"),
        (r"∛\s*(\d+(?:\.\d+)?|[A-Za-z])", r"\\sqrt[3]{\1}"),
        (r"√", r"\\sqrt{"),
        (r"×", r"\\times "),
        (r"[·⋅]", r"\\cdot "),
        (r"÷", r"\\div "),
        (r"[−–—]", "-"),
        (r"π", r"\\pi "),
        (r"∞", r"\\infty "),
        (r"≤", r"\\leq "),
        (r"≥", r"\\geq "),
        (r"≠", r"\\neq "),
        (r"≈", r"\\approx "),
        (r"±", r"\\pm "),
        (r"°", r"^\\circ "),
        (r"²", "^2"),
        (r"³", "^3"),
        (r"⁴", "^4"),
        (r"α", r"\\alpha "),
        (r"β", r"\\beta "),
        (r"γ", r"\\gamma "),
        (r"θ", r"\\theta "),
        (r"Δ", r"\\Delta "),
        (r"λ", r"\\lambda "),
        (r"μ", r"\\mu "),
        (r"σ", r"\\sigma "),
        (r"ω", r"\\omega "),
        (r"∑", r"\\sum "),
    ]
)

# Characters that mark a string as containing math worth rendering
DISPLAY_MATH_HINT = re.compile(r"[\d√∛×÷π∞±²³⁴αβγθΔλμσω∑^_=+*/<>]")
