"""
Expression types for the totx IR.

Supports:
- Literals: numbers, strings, true, false, null
- Grouping: ( expr )
- Unary operators: ! -
- Binary operators: , == != > >= < <= + - * /

Each node owns its children; trees are built bottom-up by the parser and
only read afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from totx.core.ir.tokens import Token
from totx.core.ir.values import Literal


class LiteralExpr(BaseModel):
    """A literal value in source."""

    value: Literal = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)


class GroupingExpr(BaseModel):
    """Parenthesized expression: ( inner )."""

    inner: Expr

    model_config = ConfigDict(frozen=True)


class UnaryExpr(BaseModel):
    """Prefix operation: op operand."""

    operator: Token
    operand: Expr

    model_config = ConfigDict(frozen=True)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    operator: Token
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = BinaryExpr | GroupingExpr | LiteralExpr | UnaryExpr

# Rebuild models for recursive forward references
GroupingExpr.model_rebuild()
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
