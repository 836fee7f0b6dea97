"""
totx intermediate representation.

Runtime values, tokens, and the expression tree shared by every stage.
"""

from .expressions import BinaryExpr, Expr, GroupingExpr, LiteralExpr, UnaryExpr
from .tokens import KEYWORDS, Token, TokenKind
from .values import INT64_MAX, INT64_MIN, Literal, LiteralKind, fits_int64

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "KEYWORDS",
    "BinaryExpr",
    "Expr",
    "GroupingExpr",
    "Literal",
    "LiteralExpr",
    "LiteralKind",
    "Token",
    "TokenKind",
    "UnaryExpr",
    "fits_int64",
]
