"""
Point-sampling equivalence of expressions.

Two expressions are taken as equivalent when they agree, within tolerance, at
a fixed set of sample points for their free variables. This is a bounded
numeric check rather than a symbolic proof, and it fails closed: a parse
failure, a domain error at any sample point, or too many variables all mean
"not equivalent".
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator

from tutormath.errors import EvaluationError, ParseError
from tutormath.parser import Context, get_context, parse_expression
from tutormath.parser.ast import ASTNode
from tutormath.parser.visitors import evaluate, free_variables

from .tolerance import within_tolerance

logger = logging.getLogger(__name__)


def sample_bindings(names: list[str], context: Context | None = None) -> Iterator[dict[str, float]]:
    """
    Yield variable bindings for the sample grid.

    One variable takes each value of the first sample row; two variables take
    the full grid of the first two rows.
    """
    context = context or get_context()
    rows = context.sample_points[: len(names)]
    for values in itertools.product(*rows):
        yield dict(zip(names, values))


def try_parse(expression: str) -> ASTNode | None:
    """Parse ``expression``, returning ``None`` on failure."""
    try:
        return parse_expression(expression)
    except ParseError as exc:
        logger.debug("Expression did not parse: %s", exc)
        return None


def evaluate_constant(expression: str) -> float | None:
    """Evaluate an expression without free variables, or return ``None``."""
    tree = try_parse(expression)
    if tree is None or free_variables(tree):
        return None
    try:
        return evaluate(tree)
    except EvaluationError as exc:
        logger.debug("Expression has no value: %s", exc)
        return None


def expressions_equivalent(a: str, b: str, tolerance: float | None = None) -> bool:
    """
    Check whether two normalized expressions agree at every sample point.

    Args:
        a: First expression
        b: Second expression
        tolerance: Explicit tolerance (defaults to the smart tolerance)

    Returns:
        True only if both parse, share at most the allowed number of
        variables, and match at every sample point
    """
    left = try_parse(a)
    right = try_parse(b)
    if left is None or right is None:
        return False

    context = get_context()
    names = sorted(free_variables(left) | free_variables(right))
    if len(names) > context.max_variables:
        logger.debug("Too many variables to compare: %s", names)
        return False

    for bindings in sample_bindings(names, context):
        try:
            left_value = evaluate(left, bindings)
            right_value = evaluate(right, bindings)
        except EvaluationError as exc:
            logger.debug("Sample %s failed: %s", bindings, exc)
            return False
        if not within_tolerance(left_value, right_value, tolerance):
            return False

    return True
