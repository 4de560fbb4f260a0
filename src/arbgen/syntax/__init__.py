"""ICU message syntax package.

Provides the tokenizer, parser, AST definitions and visitor pattern.
Separate from the model and codegen layers so messages can be parsed and
inspected on their own.

Python 3.13+.
"""

from .ast import (
    ArgumentExpr,
    ASTNode,
    Branch,
    Element,
    Expression,
    Message,
    PlaceholderRef,
    PluralExpr,
    SelectExpr,
    Span,
    Text,
)
from .lexer import Token, tokenize
from .parser import MessageParser, parse_message
from .visitor import ASTVisitor

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "ArgumentExpr",
    "Branch",
    "Element",
    "Expression",
    "Message",
    "MessageParser",
    "PlaceholderRef",
    "PluralExpr",
    "SelectExpr",
    "Span",
    "Text",
    "Token",
    "parse_message",
    "tokenize",
]
