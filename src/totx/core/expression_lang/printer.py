"""
Text renderings of an expression tree.

Both printers are pure; they are used for diagnostics and as test oracles.
They walk the tree with an explicit stack, so long operator chains (which
the parser builds as deep left spines) print without recursion.
"""

from __future__ import annotations

from totx.core.ir import BinaryExpr, Expr, GroupingExpr, LiteralExpr, UnaryExpr

# Work items are either a node still to render or a 1-tuple of finished text.
_Item = Expr | tuple[str]


def to_parenthesized(expr: Expr) -> str:
    """Render ``expr`` in parenthesized prefix form, e.g. ``(* (- 123) (group 123))``."""
    parts: list[str] = []
    stack: list[_Item] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, tuple):
            parts.append(item[0])
        elif isinstance(item, BinaryExpr):
            stack += [(")",), item.right, (" ",), item.left, (f"({item.operator.lexeme} ",)]
        elif isinstance(item, GroupingExpr):
            stack += [(")",), item.inner, ("(group ",)]
        elif isinstance(item, UnaryExpr):
            stack += [(")",), item.operand, (f"({item.operator.lexeme} ",)]
        elif isinstance(item, LiteralExpr):
            parts.append(str(item.value))
        else:
            raise TypeError(f"Unknown expression type: {type(item).__name__}")
    return "".join(parts)


def to_rpn(expr: Expr) -> str:
    """Render ``expr`` in reverse Polish notation, e.g. ``1 2 + 4 3 - *``.

    Grouping is transparent: parentheses only shape the tree.
    """
    parts: list[str] = []
    stack: list[_Item] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, tuple):
            parts.append(item[0])
        elif isinstance(item, BinaryExpr):
            stack += [(f" {item.operator.lexeme}",), item.right, (" ",), item.left]
        elif isinstance(item, GroupingExpr):
            stack.append(item.inner)
        elif isinstance(item, UnaryExpr):
            stack += [(f" {item.operator.lexeme}",), item.operand]
        elif isinstance(item, LiteralExpr):
            parts.append(str(item.value))
        else:
            raise TypeError(f"Unknown expression type: {type(item).__name__}")
    return "".join(parts)
