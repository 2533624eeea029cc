"""
Expression parser package.

Tokenizer, AST, precedence-climbing parser and visitors for the closed
answer-expression grammar. Nothing here evaluates host code.
"""

from .ast import ASTNode, BinaryOp, Constant, FunctionCall, Number, UnaryOp, Variable
from .context import Context, get_context
from .parser import Parser, parse_expression
from .tokenizer import Token, TokenType, Tokenizer
from .visitors import EvalVisitor, TeXVisitor, evaluate, free_variables, to_tex

__all__ = [
    "ASTNode",
    "Number",
    "Variable",
    "Constant",
    "BinaryOp",
    "UnaryOp",
    "FunctionCall",
    "Token",
    "TokenType",
    "Tokenizer",
    "Parser",
    "parse_expression",
    "Context",
    "get_context",
    "EvalVisitor",
    "TeXVisitor",
    "evaluate",
    "free_variables",
    "to_tex",
]
