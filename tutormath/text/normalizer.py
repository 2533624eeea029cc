"""
Answer normalizer.

Maps a raw student answer to a canonical string through a fixed, ordered
pipeline:

1. trim and lowercase
2. strip math delimiters (``$``, ``$$``, ``\\(``, ``\\)``, ``\\[``, ``\\]``)
3. LaTeX commands to plain operators (``\\frac{a}{b}`` -> ``a/b``)
4. Unicode symbols to canonical tokens (``×`` -> ``*``, ``π`` -> ``pi``)
5. strip a trailing unit after a number
6. canonicalize coordinate and list answers
7. remove whitespace, keeping the space of a mixed number (``1 1/2``)

The pipeline is total: malformed LaTeX, unbalanced braces and unknown
commands degrade to plain text instead of raising. Every stage emits text the
earlier stages leave alone, so normalizing twice gives the same result.

Example:
    >>> normalize_math_answer("\\\\frac{1}{2}")
    '1/2'
    >>> normalize_math_answer("x = 2 or x = 3")
    '2,3'
"""

from __future__ import annotations

import re
from typing import Any

from tutormath.config import get_settings
from tutormath.numeric.notation import parse_plain_number
from tutormath.text import symbols
from tutormath.text.sanitizer import sanitize_answer_input

# Nesting beyond this depth is flattened instead of expanded
_MAX_LATEX_DEPTH = 32

_COMMAND = re.compile(r"\\([a-z]+)")
_ATOM = re.compile(r"[-+]?(?:\d+(?:\.\d+)?|\.\d+|[a-z]+)")
_LATEX_RESIDUE = re.compile(r"[\\{}]")

# Only short answers can be a number with a unit
_MAX_UNIT_ANSWER = 64

_UNIT_TAIL = re.compile(
    r"^(?P<prefix>x\s*=\s*)?"
    r"(?P<number>[-+]?\s*(?:\d[\d.,/ ]*|\.\d+)(?:e[-+]?\d+)?)"
    r"\s*(?P<unit>[a-z][a-z ]*?)(?:\^?[23])?\.?$"
)

_CONNECTIVE = re.compile(r"\s+(?:or|and)\s+")
_ASSIGNMENT = re.compile(r"(^|,)\s*x\s*=\s*")
_PLUS_MINUS = re.compile(r"^\+\s*-\s*(\d+(?:\.\d+)?)$")
_THOUSANDS = re.compile(r"^-?[1-9]\d{0,2}(?:,\d{3})+(?:\.\d+)?$")

_MIXED_NUMBER = re.compile(r"^(-?\d+)\s+(\d+/\d+)$")
_WHITESPACE = re.compile(r"\s+")
_WRAPPED_NUMBER = re.compile(r"^(\(*)([-+]?(?:\d+(?:\.\d+)?|\.\d+))(\)*)$")


def normalize_math_answer(answer: Any) -> str:
    """
    Normalize a raw answer for comparison.

    Args:
        answer: Untrusted answer text (``None`` gives ``""``)

    Returns:
        Canonical answer string
    """
    text = sanitize_answer_input(answer).strip().lower()
    if not text:
        return ""

    text = symbols.LATEX_DELIMITERS.sub("", text)
    text = _convert_latex(text)
    text = _convert_unicode(text)
    text = _strip_unit(text)
    text = _canonicalize_list(text)
    text = _remove_whitespace(text)

    return text[: get_settings().MAX_INPUT_LENGTH]


# ---------------------------------------------------------------------------
# Step 3: LaTeX
# ---------------------------------------------------------------------------


def _convert_latex(text: str) -> str:
    if "\\" not in text and "{" not in text and "}" not in text:
        return text
    text = symbols.LATEX_SPACING.sub("", text)
    text = symbols.LATEX_SIZING.sub(_sizing_delimiter, text)
    return _expand_latex(text, 0)


def _sizing_delimiter(match: re.Match[str]) -> str:
    delimiter = match.group(1)
    if delimiter == ".":
        return ""
    return delimiter.lstrip("\\")


def _expand_latex(text: str, depth: int) -> str:
    """Expand LaTeX commands and brace groups in ``text``."""
    if depth > _MAX_LATEX_DEPTH:
        return _LATEX_RESIDUE.sub("", text)

    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == "\\":
            match = _COMMAND.match(text, i)
            if match is None:
                # Escaped symbol or stray backslash
                i += 1
                continue
            i = _expand_command(text, match, out, depth)
            continue

        if ch == "{":
            group, i = _read_group(text, i)
            out.append(_expand_latex(group, depth + 1))
            continue

        if ch == "}":
            i += 1
            continue

        if ch in "^_":
            j = _skip_spaces(text, i + 1)
            if j < n and text[j] == "{":
                # x^{2} -> x^2, e^{2x} -> e^(2x)
                group, i = _read_group(text, j)
                group = _expand_latex(group, depth + 1).strip()
                out.append(ch + _parenthesize(group) if group else ch)
                continue

        out.append(ch)
        i += 1

    return "".join(out)


def _expand_command(text: str, match: re.Match[str], out: list[str], depth: int) -> int:
    """Expand one command into ``out``; returns the index after it."""
    name = match.group(1)
    i = match.end()

    if name in symbols.LATEX_FRACTIONS:
        numerator, i = _read_argument(text, i)
        denominator, i = _read_argument(text, i)
        numerator = _expand_latex(numerator, depth + 1).strip()
        denominator = _expand_latex(denominator, depth + 1).strip()
        if not numerator or not denominator:
            out.append(numerator + denominator)
            return i

        fraction = f"{_parenthesize(numerator)}/{_parenthesize(denominator)}"
        previous = "".join(out).rstrip()[-1:]
        following = text[i:].lstrip()[:1]
        if previous in ("^", "/") or following == "^":
            fraction = f"({fraction})"
        elif previous.isdigit():
            # 1\frac{1}{2} is a mixed number
            fraction = " " + fraction
        out.append(fraction)
        return i

    if name == "sqrt":
        index = ""
        j = _skip_spaces(text, i)
        if j < len(text) and text[j] == "[":
            close = text.find("]", j)
            if close == -1:
                close = len(text)
            index = _expand_latex(text[j + 1 : close], depth + 1).strip()
            i = close + 1
        radicand, i = _read_argument(text, i)
        radicand = _expand_latex(radicand, depth + 1).strip()
        if index:
            out.append(f"root({radicand},{index})")
        else:
            out.append(f"sqrt({radicand})")
        return i

    if name in symbols.LATEX_WRAPPERS:
        content, i = _read_argument(text, i)
        out.append(_expand_latex(content, depth + 1))
        return i

    replacement = symbols.LATEX_COMMANDS.get(name)
    if replacement is not None:
        out.append(replacement)
        return i

    # \pix, \sinx: a known name run together with what follows
    for end in range(len(name) - 1, 0, -1):
        prefix = symbols.LATEX_COMMANDS.get(name[:end])
        if prefix is not None and prefix.isalpha():
            out.append(prefix + name[end:])
            return i

    # Unknown commands lose their backslash
    out.append(name)
    return i


def _skip_spaces(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def _read_group(text: str, start: int) -> tuple[str, int]:
    """Read a brace group starting at ``text[start] == '{'``."""
    depth = 0
    for j in range(start, len(text)):
        if text[j] == "{":
            depth += 1
        elif text[j] == "}":
            depth -= 1
            if depth == 0:
                return text[start + 1 : j], j + 1
    # Unterminated group: take the rest
    return text[start + 1 :], len(text)


def _read_argument(text: str, i: int) -> tuple[str, int]:
    """Read one command argument: a brace group, a command or a character."""
    i = _skip_spaces(text, i)
    if i >= len(text):
        return "", i
    if text[i] == "{":
        return _read_group(text, i)
    if text[i] == "\\":
        match = _COMMAND.match(text, i)
        if match is not None:
            return match.group(0), match.end()
        return "", i + 1
    return text[i], i + 1


def _parenthesize(part: str) -> str:
    if _ATOM.fullmatch(part):
        return part
    if part.startswith("(") and part.endswith(")") and _balanced(part[1:-1]):
        return part
    return f"({part})"


def _balanced(text: str) -> bool:
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


# ---------------------------------------------------------------------------
# Step 4: Unicode
# ---------------------------------------------------------------------------


def _convert_unicode(text: str) -> str:
    if text.isascii():
        return symbols.ASCII_POWER.sub("^", text)
    text = symbols.apply_rules(text, symbols.UNICODE_RULES)
    text = symbols.SUPERSCRIPT_RUN.sub(symbols.superscript_to_power, text)
    text = symbols.UNICODE_SYMBOL_PATTERN.sub(lambda m: symbols.UNICODE_SYMBOLS[m.group(0)], text)
    return symbols.ASCII_POWER.sub("^", text)


# ---------------------------------------------------------------------------
# Step 5: units
# ---------------------------------------------------------------------------


def _strip_unit(text: str) -> str:
    # Measured without whitespace so a second pass sees the same length
    if len(_WHITESPACE.sub("", text)) > _MAX_UNIT_ANSWER:
        return text
    match = _UNIT_TAIL.match(_WHITESPACE.sub(" ", text).strip())
    if match is None:
        return text

    unit = _WHITESPACE.sub("", match.group("unit"))
    prefix = match.group("prefix") or ""
    number = match.group("number").strip()

    if unit in symbols.PERCENT_WORDS:
        return f"{prefix}{number}%"

    for area_prefix in symbols.UNIT_PREFIXES:
        if unit.startswith(area_prefix) and unit[len(area_prefix) :] in symbols.UNIT_NAMES:
            return prefix + number
    if unit in symbols.UNIT_NAMES:
        return prefix + number
    return text


# ---------------------------------------------------------------------------
# Step 6: coordinates and lists
# ---------------------------------------------------------------------------


def _canonicalize_list(text: str) -> str:
    text = _WHITESPACE.sub(" ", text)
    # Commas written by "or"/"and" never separate thousands
    connected = _CONNECTIVE.search(text) is not None
    text = _CONNECTIVE.sub(",", text)
    text = _ASSIGNMENT.sub(r"\1", text)

    # (2, 3) -> 2, 3
    stripped = text.strip()
    if stripped.startswith("(") and stripped.endswith(")"):
        inner = stripped[1:-1]
        if "," in inner and "(" not in inner and ")" not in inner:
            text = inner

    match = _PLUS_MINUS.match(text.strip())
    if match is not None:
        return f"-{match.group(1)},{match.group(1)}"

    compact = text.strip()
    if not connected and _THOUSANDS.match(compact):
        return compact.replace(",", "")

    if "," not in text:
        return text

    items = [item.strip() for item in text.split(",")]
    values = [parse_plain_number(item) for item in items]
    if all(value is not None for value in values):
        items = [item for _, item in sorted(zip(values, items), key=lambda pair: pair[0])]
    return ",".join(items)


# ---------------------------------------------------------------------------
# Step 7: whitespace
# ---------------------------------------------------------------------------


def _remove_whitespace(text: str) -> str:
    items = []
    for item in text.split(","):
        item = item.strip()
        mixed = _MIXED_NUMBER.match(item)
        if mixed is not None:
            items.append(f"{mixed.group(1)} {mixed.group(2)}")
        else:
            items.append(_WHITESPACE.sub("", item))
    text = _join_items(items)

    # (5) -> 5
    wrapped = _WRAPPED_NUMBER.match(text)
    if wrapped is not None and len(wrapped.group(1)) == len(wrapped.group(3)):
        return wrapped.group(2)
    return text


def _join_items(items: list[str]) -> str:
    # A list that reads as one thousands-separated number keeps its spaces
    joined = ",".join(items)
    if len(items) > 1 and _THOUSANDS.match(joined):
        return ", ".join(items)
    return joined
