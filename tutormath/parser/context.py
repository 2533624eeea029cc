"""
Grammar context for answer expressions.

The context defines the closed grammar the parser accepts:
- Constants and their values
- Functions with their arities
- Operator precedence and associativity
- Multi-letter variable names (Greek letters)
- The free-variable limit and the sample points used for comparison

It is loaded from ``grammar.yaml`` once and is immutable afterwards, so it is
safe to share between concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

GRAMMAR_PATH = Path(__file__).with_name("grammar.yaml")


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorConfig:
    """Configuration for an operator."""

    symbol: str
    precedence: int
    associativity: Associativity
    binary: bool = True  # True for binary, False for unary


@dataclass(frozen=True)
class FunctionConfig:
    """Configuration for a function."""

    name: str
    min_args: int = 1
    max_args: int = 1


@dataclass(frozen=True)
class Context:
    """
    Immutable grammar definition.

    Attributes:
        name: Context name
        constants: Named constants and their values
        functions: Available functions and their arities
        operators: Operator precedence and associativity (unary keys end in ``u``)
        named_variables: Multi-letter names read as one variable
        max_variables: Limit on distinct free variables in a comparison
        sample_points: Sample values, one sequence per variable slot
    """

    name: str
    constants: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    functions: Mapping[str, FunctionConfig] = field(default_factory=lambda: MappingProxyType({}))
    operators: Mapping[str, OperatorConfig] = field(default_factory=lambda: MappingProxyType({}))
    named_variables: frozenset[str] = frozenset()
    max_variables: int = 2
    sample_points: tuple[tuple[float, ...], ...] = ()

    @classmethod
    def from_yaml(cls, path: str | Path) -> Context:
        """
        Load context from YAML file.

        Args:
            path: Path to YAML grammar file

        Returns:
            Context instance
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Context:
        """Build a context from already-parsed grammar data."""
        constants = {name: float(value) for name, value in data.get("constants", {}).items()}

        functions = {}
        for func_data in data.get("functions", []):
            if isinstance(func_data, str):
                functions[func_data] = FunctionConfig(name=func_data)
            else:
                name = func_data["name"]
                functions[name] = FunctionConfig(
                    name=name,
                    min_args=func_data.get("min_args", 1),
                    max_args=func_data.get("max_args", 1),
                )

        operators = {}
        for op_data in data.get("operators", []):
            symbol = op_data["symbol"]
            operators[symbol] = OperatorConfig(
                symbol=symbol,
                precedence=op_data["precedence"],
                associativity=Associativity(op_data.get("associativity", "left")),
                binary=op_data.get("binary", True),
            )

        sample_points = tuple(tuple(float(v) for v in row) for row in data.get("sample_points", []))
        max_variables = int(data.get("max_variables", 2))
        if len(sample_points) < max_variables:
            raise ValueError(
                f"Grammar '{data['name']}' needs sample points for {max_variables} variables"
            )

        return cls(
            name=data["name"],
            constants=MappingProxyType(constants),
            functions=MappingProxyType(functions),
            operators=MappingProxyType(operators),
            named_variables=frozenset(data.get("named_variables", [])),
            max_variables=max_variables,
            sample_points=sample_points,
        )

    def get_operator_precedence(self, op: str, is_unary: bool = False) -> int:
        """
        Get the precedence of an operator.

        Returns:
            Precedence value (higher = binds tighter), 0 when unknown
        """
        key = f"{op}u" if is_unary else op
        if key in self.operators:
            return self.operators[key].precedence
        return 0

    def get_operator_associativity(self, op: str, is_unary: bool = False) -> Associativity:
        """Get the associativity of an operator."""
        key = f"{op}u" if is_unary else op
        if key in self.operators:
            return self.operators[key].associativity
        return Associativity.LEFT

    def is_constant(self, name: str) -> bool:
        """Check if name is a constant in this context."""
        return name in self.constants

    def is_function(self, name: str) -> bool:
        """Check if name is a function in this context."""
        return name in self.functions

    def is_named_variable(self, name: str) -> bool:
        """Check if name is a multi-letter variable such as ``theta``."""
        return name in self.named_variables

    @property
    def reserved_names(self) -> frozenset[str]:
        """Every multi-letter name the tokenizer keeps whole."""
        return frozenset(self.constants) | frozenset(self.functions) | self.named_variables


@lru_cache()
def get_context() -> Context:
    """Get the cached answer grammar."""
    return Context.from_yaml(GRAMMAR_PATH)
