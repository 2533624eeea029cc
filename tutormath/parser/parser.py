"""
Recursive descent parser for answer expressions.

Uses operator precedence climbing to build an AST from the token stream:
- Binary and unary operators with precedence from the grammar context
- Function calls, with or without parentheses (``sin(x)``, ``sqrt2``)
- Parenthesized grouping

Nesting depth and node count are capped so adversarial input cannot make the
parser recurse or allocate without bound. Exceeding a cap raises ParseError.
"""

from __future__ import annotations

from tutormath.config import get_settings
from tutormath.errors import ParseError

from .ast import ASTNode, BinaryOp, Constant, FunctionCall, Number, UnaryOp, Variable
from .context import Associativity, Context, get_context
from .tokenizer import Token, TokenType, Tokenizer

_BINARY_OPERATORS = frozenset(
    {TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.POWER}
)


class Parser:
    """
    Recursive descent parser with operator precedence climbing.

    A parser instance is cheap and holds per-parse state, so create one per
    call rather than sharing it between threads.
    """

    def __init__(
        self,
        context: Context | None = None,
        max_depth: int | None = None,
        max_nodes: int | None = None,
    ):
        """
        Initialize parser.

        Args:
            context: Grammar context (defaults to the answer grammar)
            max_depth: Nesting cap (defaults to the configured cap)
            max_nodes: AST size cap (defaults to the configured cap)
        """
        settings = get_settings()
        self.context = context or get_context()
        self.max_depth = max_depth or settings.MAX_PARSE_DEPTH
        self.max_nodes = max_nodes or settings.MAX_AST_NODES
        self.tokens: list[Token] = []
        self.pos = 0
        self.depth = 0
        self.node_count = 0

    def parse(self, expression: str) -> ASTNode:
        """
        Parse an expression string to an AST.

        Args:
            expression: The expression

        Returns:
            Root AST node

        Raises:
            ParseError: If the expression is invalid or exceeds a cap
        """
        self.tokens = Tokenizer(self.context).tokenize(expression)
        self.pos = 0
        self.depth = 0
        self.node_count = 0

        if self.current().type == TokenType.EOF:
            raise ParseError("Empty expression", self.current())

        ast = self.parse_expression(0)

        if self.current().type != TokenType.EOF:
            raise ParseError("Unexpected token", self.current())

        return ast

    def current(self) -> Token:
        """Get current token without consuming it."""
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        """
        Consume a token of the expected type.

        Raises:
            ParseError: If current token doesn't match expected type
        """
        token = self.current()
        if token.type != token_type:
            raise ParseError(f"Expected {token_type.name}, got {token.type.name}", token)
        return self.advance()

    def node(self, node: ASTNode) -> ASTNode:
        """Count a newly built node against the size cap."""
        self.node_count += 1
        if self.node_count > self.max_nodes:
            raise ParseError(f"Expression exceeds {self.max_nodes} nodes", self.current())
        return node

    def parse_expression(self, min_precedence: int = 0) -> ASTNode:
        """
        Parse an expression using operator precedence climbing.

        Args:
            min_precedence: Minimum precedence to consider

        Returns:
            AST node
        """
        self.depth += 1
        if self.depth > self.max_depth:
            raise ParseError(f"Expression nested deeper than {self.max_depth}", self.current())

        left = self.parse_prefix()

        while True:
            token = self.current()
            if token.type not in _BINARY_OPERATORS:
                break

            precedence = self.context.get_operator_precedence(token.value)
            if precedence < min_precedence:
                break

            op_token = self.advance()
            assoc = self.context.get_operator_associativity(op_token.value)
            next_min_prec = precedence + (1 if assoc == Associativity.LEFT else 0)

            right = self.parse_expression(next_min_prec)
            left = self.node(BinaryOp(left, op_token.value, right))

        self.depth -= 1
        return left

    def parse_prefix(self) -> ASTNode:
        """Parse unary signs, then an atom."""
        token = self.current()

        if token.type in (TokenType.MINUS, TokenType.PLUS):
            op_token = self.advance()
            precedence = self.context.get_operator_precedence(op_token.value, is_unary=True)
            # -x^2 is -(x^2); -2x is (-2)x
            operand = self.parse_expression(precedence)
            return self.node(UnaryOp(op_token.value, operand))

        return self.parse_atom()

    def parse_atom(self) -> ASTNode:
        """Parse a number, name, function call or parenthesized expression."""
        token = self.current()

        if token.type == TokenType.NUMBER:
            self.advance()
            return self.node(Number(float(token.value)))

        if token.type == TokenType.CONSTANT:
            self.advance()
            return self.node(Constant(token.value))

        if token.type == TokenType.VARIABLE:
            self.advance()
            return self.node(Variable(token.value))

        if token.type == TokenType.FUNCTION:
            return self.parse_function_call()

        if token.type == TokenType.LPAREN:
            self.advance()
            if self.current().type == TokenType.RPAREN:
                raise ParseError("Empty parentheses", self.current())
            inner = self.parse_expression()
            self.expect(TokenType.RPAREN)
            return inner

        raise ParseError("Unexpected token in atom", token)

    def parse_function_call(self) -> ASTNode:
        """
        Parse a function call: ``func(arg1, ...)`` or ``func arg``.

        Without parentheses the argument binds like a unary sign, so
        ``sin x^2`` is ``sin(x^2)`` and ``sin 2x`` is ``sin(2)*x``.
        """
        func_token = self.advance()
        config = self.context.functions[func_token.value]
        args: list[ASTNode] = []

        if self.current().type == TokenType.LPAREN:
            self.advance()
            if self.current().type != TokenType.RPAREN:
                args.append(self.parse_expression())
                while self.current().type == TokenType.COMMA:
                    self.advance()
                    args.append(self.parse_expression())
            self.expect(TokenType.RPAREN)
        else:
            precedence = self.context.get_operator_precedence("-", is_unary=True)
            args.append(self.parse_expression(precedence))

        if not config.min_args <= len(args) <= config.max_args:
            raise ParseError(
                f"{func_token.value}() takes {config.min_args}-{config.max_args} arguments, got {len(args)}",
                func_token,
            )

        return self.node(FunctionCall(func_token.value, args))


def parse_expression(expression: str) -> ASTNode:
    """Parse ``expression`` with the answer grammar."""
    return Parser().parse(expression)
