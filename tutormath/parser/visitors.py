"""
AST Visitor implementations.

- EvalVisitor: evaluate a tree to a real number under variable bindings
- TeXVisitor: render a tree as LaTeX
- VariableCollector: collect the free variables of a tree

Evaluation is real-valued only: anything that would leave the reals (square
root of a negative, log of a non-positive, overflow) raises EvaluationError.
"""

from __future__ import annotations

import math
from typing import Callable

from tutormath.errors import EvaluationError

from .ast import ASTNode, BinaryOp, Constant, FunctionCall, Number, UnaryOp, Variable
from .context import Context, get_context


def _checked(value: float) -> float:
    if isinstance(value, complex) or not math.isfinite(value):
        raise EvaluationError(f"Non-finite result: {value}")
    return value


def _sqrt(x: float) -> float:
    if x < 0:
        raise EvaluationError(f"Square root of negative number: {x}")
    return math.sqrt(x)


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1 / 3), x)


def _root(x: float, n: float) -> float:
    if n == 0:
        raise EvaluationError("Zeroth root")
    if x >= 0:
        return x ** (1 / n)
    # Odd integer roots of negatives stay real
    if n.is_integer() and int(n) % 2 == 1:
        return -((-x) ** (1 / n))
    raise EvaluationError(f"Even root of negative number: {x}")


def _log(base: Callable[[float], float]) -> Callable[[float], float]:
    def log(x: float) -> float:
        if x <= 0:
            raise EvaluationError(f"Logarithm of non-positive number: {x}")
        return base(x)

    return log


def _reciprocal(func: Callable[[float], float], name: str) -> Callable[[float], float]:
    def reciprocal(x: float) -> float:
        value = func(x)
        if value == 0:
            raise EvaluationError(f"{name} undefined at {x}")
        return 1 / value

    return reciprocal


FUNCTIONS: dict[str, Callable[..., float]] = {
    "sqrt": _sqrt,
    "cbrt": _cbrt,
    "root": _root,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "sec": _reciprocal(math.cos, "sec"),
    "csc": _reciprocal(math.sin, "csc"),
    "cot": _reciprocal(math.tan, "cot"),
    "arcsin": math.asin,
    "arccos": math.acos,
    "arctan": math.atan,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "log": _log(math.log10),
    "ln": _log(math.log),
    "exp": math.exp,
    "abs": abs,
}


class EvalVisitor:
    """
    Evaluate AST to a real number.

    Args:
        bindings: Variable name → value mappings
        context: Grammar context supplying constant values
    """

    def __init__(self, bindings: dict[str, float] | None = None, context: Context | None = None):
        self.bindings = bindings or {}
        self.context = context or get_context()

    def visit_number(self, node: Number) -> float:
        return node.value

    def visit_variable(self, node: Variable) -> float:
        if node.name in self.bindings:
            return self.bindings[node.name]
        raise EvaluationError(f"Undefined variable: {node.name}")

    def visit_constant(self, node: Constant) -> float:
        if self.context.is_constant(node.name):
            return self.context.constants[node.name]
        raise EvaluationError(f"Undefined constant: {node.name}")

    def visit_binary_op(self, node: BinaryOp) -> float:
        left = node.left.accept(self)
        right = node.right.accept(self)

        if node.op == "+":
            return _checked(left + right)
        elif node.op == "-":
            return _checked(left - right)
        elif node.op == "*":
            return _checked(left * right)
        elif node.op == "/":
            if right == 0:
                raise EvaluationError("Division by zero")
            return _checked(left / right)
        elif node.op == "^":
            if left == 0 and right < 0:
                raise EvaluationError("Zero to a negative power")
            if left < 0 and not float(right).is_integer():
                raise EvaluationError("Fractional power of negative number")
            return _checked(math.pow(left, right))
        raise EvaluationError(f"Unknown operator: {node.op}")

    def visit_unary_op(self, node: UnaryOp) -> float:
        operand = node.operand.accept(self)
        if node.op == "-":
            return -operand
        elif node.op == "+":
            return operand
        raise EvaluationError(f"Unknown unary operator: {node.op}")

    def visit_function_call(self, node: FunctionCall) -> float:
        args = [arg.accept(self) for arg in node.args]
        function = FUNCTIONS.get(node.name)
        if function is None:
            raise EvaluationError(f"Unknown function: {node.name}")
        return _checked(function(*args))


def evaluate(node: ASTNode, bindings: dict[str, float] | None = None) -> float:
    """
    Evaluate ``node`` under ``bindings``.

    Raises:
        EvaluationError: For any domain failure or non-finite result
    """
    try:
        return _checked(node.accept(EvalVisitor(bindings)))
    except (ValueError, OverflowError, ZeroDivisionError) as exc:
        raise EvaluationError(str(exc)) from exc


class VariableCollector:
    """Collect the names of free variables in a tree."""

    def visit_number(self, node: Number) -> set[str]:
        return set()

    def visit_variable(self, node: Variable) -> set[str]:
        return {node.name}

    def visit_constant(self, node: Constant) -> set[str]:
        return set()

    def visit_binary_op(self, node: BinaryOp) -> set[str]:
        return node.left.accept(self) | node.right.accept(self)

    def visit_unary_op(self, node: UnaryOp) -> set[str]:
        return node.operand.accept(self)

    def visit_function_call(self, node: FunctionCall) -> set[str]:
        names: set[str] = set()
        for arg in node.args:
            names |= arg.accept(self)
        return names


def free_variables(node: ASTNode) -> set[str]:
    """Return the free variable names of ``node``."""
    return node.accept(VariableCollector())


class TeXVisitor:
    """
    Convert AST to LaTeX representation.

    Examples:
    - BinaryOp(Number(2), '*', Variable('x')) → "2x"
    - FunctionCall('sqrt', [Number(2)]) → "\\sqrt{2}"
    - BinaryOp(Variable('x'), '^', Number(2)) → "x^{2}"
    """

    GREEK = frozenset(
        {
            "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta",
            "iota", "kappa", "lambda", "mu", "nu", "xi", "rho", "sigma", "tau",
            "upsilon", "phi", "chi", "psi", "omega",
        }
    )

    STANDARD_FUNCTIONS = frozenset(
        {
            "sin", "cos", "tan", "sec", "csc", "cot", "sinh", "cosh", "tanh",
            "ln", "log", "exp", "arcsin", "arccos", "arctan",
        }
    )

    def __init__(self, context: Context | None = None):
        self.context = context or get_context()

    def visit_number(self, node: Number) -> str:
        if node.value.is_integer():
            return str(int(node.value))
        return repr(node.value)

    def visit_variable(self, node: Variable) -> str:
        if node.name.lower() in self.GREEK:
            return f"\\{node.name.lower()}"
        if len(node.name) > 1:
            return f"\\mathrm{{{node.name}}}"
        return node.name

    def visit_constant(self, node: Constant) -> str:
        if node.name == "pi":
            return r"\pi"
        return node.name

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)

        if node.op == "*":
            if isinstance(node.left, Number) and isinstance(node.right, (Variable, Constant, FunctionCall)):
                return f"{left_str}{right_str}"
            left_str = self._wrap(node.left, node.op, left_str)
            right_str = self._wrap(node.right, node.op, right_str, right=True)
            return f"{left_str} \\cdot {right_str}"

        elif node.op == "^":
            if isinstance(node.left, (BinaryOp, UnaryOp)):
                left_str = f"\\left({left_str}\\right)"
            return f"{left_str}^{{{right_str}}}"

        elif node.op == "/":
            return f"\\frac{{{left_str}}}{{{right_str}}}"

        # + and -
        right_str = self._wrap(node.right, node.op, right_str, right=True)
        return f"{left_str} {node.op} {right_str}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)
        if isinstance(node.operand, BinaryOp) and node.operand.op in ("+", "-"):
            operand_str = f"\\left({operand_str}\\right)"
        return f"{node.op}{operand_str}"

    def visit_function_call(self, node: FunctionCall) -> str:
        func_name = node.name
        args = [arg.accept(self) for arg in node.args]

        if func_name in self.STANDARD_FUNCTIONS:
            arg_str = args[0]
            if isinstance(node.args[0], (BinaryOp, UnaryOp)):
                arg_str = f"\\left({arg_str}\\right)"
            return f"\\{func_name} {arg_str}"

        if func_name == "sqrt":
            return f"\\sqrt{{{args[0]}}}"
        elif func_name == "cbrt":
            return f"\\sqrt[3]{{{args[0]}}}"
        elif func_name == "root":
            return f"\\sqrt[{args[1]}]{{{args[0]}}}"
        elif func_name == "abs":
            return f"\\left|{args[0]}\\right|"

        return f"\\mathrm{{{func_name}}}\\left({', '.join(args)}\\right)"

    def _wrap(self, child: ASTNode, op: str, text: str, right: bool = False) -> str:
        """Parenthesize ``child`` when it binds looser than ``op``."""
        if not isinstance(child, BinaryOp):
            return text
        child_prec = self.context.get_operator_precedence(child.op)
        op_prec = self.context.get_operator_precedence(op)
        if child_prec < op_prec or (right and child_prec == op_prec and op in ("-", "/")):
            return f"\\left({text}\\right)"
        return text


def to_tex(node: ASTNode) -> str:
    """Render ``node`` as LaTeX."""
    return node.accept(TeXVisitor())
