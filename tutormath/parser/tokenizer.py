"""
Tokenizer for answer expressions.

Regex-based tokenization over the closed answer grammar: numbers, names,
``+ - * / ^``, parentheses and commas. Anything else is a parse error.

Letter runs are split into grammar names and single-letter variables
(``xy`` -> ``x y``, ``2pir`` -> ``2 pi r``), and implicit multiplication
tokens are inserted between adjacent operands.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from tutormath.config import get_settings
from tutormath.errors import ParseError

from .context import Context, get_context


class TokenType(Enum):
    """Token types for answer expressions."""

    # Literals
    NUMBER = auto()
    VARIABLE = auto()
    CONSTANT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    POWER = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Special
    FUNCTION = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        value: The string value of the token
        pos: Position in the source string (for error reporting)
    """

    type: TokenType
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, '{self.value}', pos={self.pos})"


# Operand boundaries for implicit multiplication
_ENDS_OPERAND = frozenset({TokenType.NUMBER, TokenType.VARIABLE, TokenType.CONSTANT, TokenType.RPAREN})
_STARTS_OPERAND = frozenset(
    {TokenType.VARIABLE, TokenType.CONSTANT, TokenType.FUNCTION, TokenType.LPAREN}
)


class Tokenizer:
    """
    Tokenizes answer expressions against a grammar context.

    The tokenizer handles:
    - Numbers (integers, decimals, ``1e-3`` exponents)
    - Constants, functions and variables, splitting run-together names
    - Operators and parentheses
    - Implicit multiplication (2x, xy, (x+1)(x-1), 2(x+1))
    """

    PATTERNS = {
        "NUMBER": r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?",
        "NAME": r"[A-Za-z]+",
        "POWER": r"\^",
        "PLUS": r"\+",
        "MINUS": r"-",
        "MULTIPLY": r"\*",
        "DIVIDE": r"/",
        "LPAREN": r"\(",
        "RPAREN": r"\)",
        "COMMA": r",",
        "WHITESPACE": r"\s+",
    }

    _combined_pattern = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in PATTERNS.items()))

    def __init__(self, context: Context | None = None, max_tokens: int | None = None):
        """
        Initialize tokenizer.

        Args:
            context: Grammar context (defaults to the answer grammar)
            max_tokens: Token cap (defaults to the configured cap)
        """
        self.context = context or get_context()
        self.max_tokens = max_tokens or get_settings().MAX_TOKENS
        # Longest names first so "exp" wins over "e"
        self._names = sorted(self.context.reserved_names, key=len, reverse=True)

    def tokenize(self, expression: str) -> list[Token]:
        """
        Tokenize an expression.

        Args:
            expression: The expression to tokenize

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: On an invalid character or when the token cap is exceeded
        """
        tokens: list[Token] = []
        pos = 0

        while pos < len(expression):
            match = self._combined_pattern.match(expression, pos)
            if not match:
                raise ParseError(
                    f"Invalid character '{expression[pos]}'", Token(TokenType.EOF, expression[pos], pos)
                )

            kind = match.lastgroup
            value = match.group()
            token_pos = pos
            pos = match.end()

            if kind == "WHITESPACE":
                continue
            if kind == "NAME":
                tokens.extend(self._split_name(value, token_pos))
            else:
                tokens.append(Token(TokenType[kind], value, token_pos))

            if len(tokens) > self.max_tokens:
                raise ParseError(f"Expression exceeds {self.max_tokens} tokens", tokens[-1])

        tokens.append(Token(TokenType.EOF, "", len(expression)))
        tokens = self._insert_implicit_multiplication(tokens)

        if len(tokens) > self.max_tokens:
            raise ParseError(f"Expression exceeds {self.max_tokens} tokens", tokens[-1])
        return tokens

    def _split_name(self, word: str, start: int) -> list[Token]:
        """
        Split a letter run into grammar names and single-letter variables.

        Examples:
        - sin → [FUNCTION sin]
        - xy → [VARIABLE x, VARIABLE y]
        - pir → [CONSTANT pi, VARIABLE r]
        """
        tokens: list[Token] = []
        i = 0
        lowered = word.lower()
        while i < len(word):
            name = next((n for n in self._names if lowered.startswith(n, i)), None)
            if name is None:
                tokens.append(Token(TokenType.VARIABLE, word[i], start + i))
                i += 1
                continue

            if self.context.is_function(name):
                token_type = TokenType.FUNCTION
            elif self.context.is_constant(name):
                token_type = TokenType.CONSTANT
            else:
                token_type = TokenType.VARIABLE
            tokens.append(Token(token_type, name, start + i))
            i += len(name)
        return tokens

    def _insert_implicit_multiplication(self, tokens: list[Token]) -> list[Token]:
        """
        Insert implicit multiplication tokens where appropriate.

        Examples:
        - 2x → 2 * x
        - (x+1)(x-1) → (x+1) * (x-1)
        - 2(x) → 2 * (x)
        - x y → x * y
        - (x)2 → (x) * 2

        Two adjacent numbers are left alone so ``1 1/2`` does not parse.
        """
        result: list[Token] = []

        for i, token in enumerate(tokens):
            result.append(token)
            if token.type == TokenType.EOF or i >= len(tokens) - 1:
                continue

            next_token = tokens[i + 1]
            should_insert = token.type in _ENDS_OPERAND and next_token.type in _STARTS_OPERAND
            if token.type == TokenType.RPAREN and next_token.type == TokenType.NUMBER:
                should_insert = True

            if should_insert:
                result.append(Token(TokenType.MULTIPLY, "*", token.pos + len(token.value)))

        return result
