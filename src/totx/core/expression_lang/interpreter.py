"""
Expression evaluator for the totx expression language.

Evaluates expression AST nodes to a runtime ``Literal``.
Pure evaluation: no I/O, no environment, no side effects.
"""

from __future__ import annotations

import logging

from totx.core.errors import (
    DivisionByZeroError,
    EvaluationDepthError,
    InvalidOperatorError,
    NumericOverflowError,
    TypeMismatchError,
)
from totx.core.ir import (
    BinaryExpr,
    Expr,
    GroupingExpr,
    Literal,
    LiteralExpr,
    LiteralKind,
    Token,
    TokenKind,
    UnaryExpr,
    fits_int64,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


class Interpreter:
    """Tree-walking evaluator with an explicit nesting bound."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self._depth = 0
        self._line = 1

    def evaluate(self, expr: Expr) -> Literal:
        """Evaluate ``expr``.

        Raises:
            EvaluationError: On a type mismatch, division by zero, overflow,
                excessive nesting, or an operator the node cannot carry.
        """
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise EvaluationDepthError(self._line)
            return self._dispatch(expr)
        finally:
            self._depth -= 1

    def _dispatch(self, expr: Expr) -> Literal:
        if isinstance(expr, LiteralExpr):
            return expr.value

        if isinstance(expr, GroupingExpr):
            return self.evaluate(expr.inner)

        if isinstance(expr, UnaryExpr):
            self._line = expr.operator.line
            return self._evaluate_unary(expr)

        if isinstance(expr, BinaryExpr):
            self._line = expr.operator.line
            return self._evaluate_binary(expr)

        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _evaluate_unary(self, expr: UnaryExpr) -> Literal:
        op = expr.operator
        operand = self.evaluate(expr.operand)

        if op.kind == TokenKind.BANG:
            return Literal.boolean(not operand.is_truthy)
        if op.kind == TokenKind.MINUS:
            return _number(op, -_check_number(op, operand))
        raise InvalidOperatorError(op)

    def _evaluate_binary(self, expr: BinaryExpr) -> Literal:
        """Evaluate a left-associative chain without recursing down its left spine.

        Each level evaluates its right operand before its left one, so the
        right operands are taken outermost first, then the innermost left
        operand, and the chain is folded back up from the inside.
        """
        spine = [expr]
        while isinstance(spine[-1].left, BinaryExpr):
            spine.append(spine[-1].left)

        rights = [self.evaluate(node.right) for node in spine]
        result = self.evaluate(spine[-1].left)
        for node, right in zip(reversed(spine), reversed(rights)):
            self._line = node.operator.line
            result = _combine(node.operator, result, right)
        return result


def _combine(op: Token, left: Literal, right: Literal) -> Literal:
    """Apply binary operator ``op`` to two evaluated operands."""
    if op.kind == TokenKind.COMMA:
        return right

    if op.kind == TokenKind.EQUAL_EQUAL:
        return Literal.boolean(_is_equal(left, right))
    if op.kind == TokenKind.BANG_EQUAL:
        return Literal.boolean(not _is_equal(left, right))

    if op.kind == TokenKind.PLUS:
        return _add(op, left, right)

    if op.kind in (
        TokenKind.MINUS,
        TokenKind.STAR,
        TokenKind.SLASH,
        TokenKind.GREATER,
        TokenKind.GREATER_EQUAL,
        TokenKind.LESS,
        TokenKind.LESS_EQUAL,
    ):
        a, b = _check_numbers(op, left, right)
        return _arithmetic_or_compare(op, a, b)

    raise InvalidOperatorError(op)


def _arithmetic_or_compare(op: Token, a: int, b: int) -> Literal:
    if op.kind == TokenKind.MINUS:
        return _number(op, a - b)
    if op.kind == TokenKind.STAR:
        return _number(op, a * b)
    if op.kind == TokenKind.SLASH:
        if b == 0:
            raise DivisionByZeroError(op)
        return _number(op, _truncating_div(a, b))
    if op.kind == TokenKind.GREATER:
        return Literal.boolean(a > b)
    if op.kind == TokenKind.GREATER_EQUAL:
        return Literal.boolean(a >= b)
    if op.kind == TokenKind.LESS:
        return Literal.boolean(a < b)
    if op.kind == TokenKind.LESS_EQUAL:
        return Literal.boolean(a <= b)
    raise InvalidOperatorError(op)


def _add(op: Token, left: Literal, right: Literal) -> Literal:
    """Number + Number or String + String; nothing else."""
    if left.kind == LiteralKind.NUMBER and right.kind == LiteralKind.NUMBER:
        return _number(op, left.value + right.value)  # type: ignore[operator]
    if left.kind == LiteralKind.STRING and right.kind == LiteralKind.STRING:
        return Literal.string(left.value + right.value)  # type: ignore[operator]
    raise TypeMismatchError("Operands must be two numbers or two strings.", op)


def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as 64-bit integer division does."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _number(op: Token, value: int) -> Literal:
    if not fits_int64(value):
        raise NumericOverflowError(op)
    return Literal.number(value)


def _check_number(op: Token, operand: Literal) -> int:
    if operand.kind != LiteralKind.NUMBER:
        raise TypeMismatchError("Operand must be a number.", op)
    return operand.value  # type: ignore[return-value]


def _check_numbers(op: Token, left: Literal, right: Literal) -> tuple[int, int]:
    if left.kind != LiteralKind.NUMBER or right.kind != LiteralKind.NUMBER:
        raise TypeMismatchError("Operands must be numbers.", op)
    return left.value, right.value  # type: ignore[return-value]


def _is_equal(left: Literal, right: Literal) -> bool:
    """Same variant and equal payload; no coercion between variants."""
    return left.kind == right.kind and left.value == right.value


def evaluate(expr: Expr, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Literal:
    """Evaluate an expression AST to a runtime value.

    Args:
        expr: Parsed expression AST.
        max_depth: Maximum nesting the evaluator will descend. Left-associative
            operator chains are folded in place and do not count.

    Returns:
        The computed value.

    Raises:
        EvaluationError: If evaluation fails.
    """
    result = Interpreter(max_depth=max_depth).evaluate(expr)
    logger.debug("Evaluated %s to %r", type(expr).__name__, result)
    return result
