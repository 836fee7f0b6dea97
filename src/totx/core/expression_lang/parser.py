"""
Recursive descent parser for the totx expression language.

Grammar (precedence low to high):
    script      → (expression (";" | EOF))* EOF
    expression  → comma
    comma       → equality ("," equality)*
    equality    → comparison (("==" | "!=") comparison)*
    comparison  → term ((">" | ">=" | "<" | "<=") term)*
    term        → factor (("+" | "-") factor)*
    factor      → unary (("*" | "/") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "null" | "(" expression ")"

The comma level is optional and skipped when ``comma_operator`` is off.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from totx.core.config import DEFAULT_MAX_DEPTH
from totx.core.errors import ParseError, ParseErrors
from totx.core.ir import (
    BinaryExpr,
    Expr,
    GroupingExpr,
    Literal,
    LiteralExpr,
    Token,
    TokenKind,
    UnaryExpr,
)

logger = logging.getLogger(__name__)

EQUALITY_OPERATORS = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenKind.GREATER,
    TokenKind.GREATER_EQUAL,
    TokenKind.LESS,
    TokenKind.LESS_EQUAL,
)
TERM_OPERATORS = (TokenKind.MINUS, TokenKind.PLUS)
FACTOR_OPERATORS = (TokenKind.SLASH, TokenKind.STAR)
UNARY_OPERATORS = (TokenKind.BANG, TokenKind.MINUS)

# Tokens that begin a statement in the wider language; recovery stops before them.
_STATEMENT_STARTS = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)


class Parser:
    """Recursive descent parser over a scanned token list."""

    def __init__(
        self,
        tokens: list[Token],
        *,
        comma_operator: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token list must end with EOF")
        self.tokens = tokens
        self.pos = 0
        self.comma_operator = comma_operator
        self.max_depth = max_depth
        self._depth = 0

    # -- Token cursor --

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def check(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def advance(self) -> Token:
        tok = self.current
        if not self.is_at_end():
            self.pos += 1
        return tok

    def match(self, *kinds: TokenKind) -> Token | None:
        """Consume and return the current token if it is one of ``kinds``."""
        if self.current.kind in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(message, self.current)

    # -- Entry points --

    def parse(self) -> Expr:
        """Parse the whole token list as one expression, with an optional trailing ``;``."""
        expr = self.parse_expression()
        self.match(TokenKind.SEMICOLON)
        if not self.is_at_end():
            raise ParseError("Expect end of expression.", self.current)
        return expr

    def parse_script(self) -> list[Expr]:
        """
        Parse ``;``-separated expressions, recovering after each syntax error.

        Raises:
            ParseErrors: With every error found, if there was at least one.
        """
        exprs: list[Expr] = []
        errors: list[ParseError] = []

        while not self.is_at_end():
            try:
                expr = self.parse_expression()
                if self.match(TokenKind.SEMICOLON) is None and not self.is_at_end():
                    raise ParseError("Expect ';' after expression.", self.current)
                exprs.append(expr)
            except ParseError as e:
                logger.debug("Recovering from syntax error: %s", e)
                errors.append(e)
                self._depth = 0
                self._synchronize()

        if errors:
            raise ParseErrors(errors)
        return exprs

    def _synchronize(self) -> None:
        """Discard tokens until just after a ``;`` or before a statement keyword."""
        self.advance()
        while not self.is_at_end():
            if self.previous.kind == TokenKind.SEMICOLON:
                return
            if self.current.kind in _STATEMENT_STARTS:
                return
            self.advance()

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        if self.comma_operator:
            return self.parse_comma()
        return self.parse_equality()

    def parse_comma(self) -> Expr:
        """equality ("," equality)*"""
        return self._left_assoc(self.parse_equality, (TokenKind.COMMA,))

    def parse_equality(self) -> Expr:
        """comparison (("==" | "!=") comparison)*"""
        return self._left_assoc(self.parse_comparison, EQUALITY_OPERATORS)

    def parse_comparison(self) -> Expr:
        """term ((">" | ">=" | "<" | "<=") term)*"""
        return self._left_assoc(self.parse_term, COMPARISON_OPERATORS)

    def parse_term(self) -> Expr:
        """factor (("+" | "-") factor)*"""
        return self._left_assoc(self.parse_factor, TERM_OPERATORS)

    def parse_factor(self) -> Expr:
        """unary (("*" | "/") unary)*"""
        return self._left_assoc(self.parse_unary, FACTOR_OPERATORS)

    def _left_assoc(self, operand: Callable[[], Expr], operators: tuple[TokenKind, ...]) -> Expr:
        left = operand()
        while (op := self.match(*operators)) is not None:
            right = operand()
            left = BinaryExpr(operator=op, left=left, right=right)
        return left

    def parse_unary(self) -> Expr:
        """("!" | "-") unary | primary"""
        if (op := self.match(*UNARY_OPERATORS)) is not None:
            self._enter(op)
            operand = self.parse_unary()
            self._depth -= 1
            return UnaryExpr(operator=op, operand=operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """NUMBER | STRING | "true" | "false" | "null" | "(" expression ")" """
        tok = self.current

        if tok.kind == TokenKind.TRUE:
            self.advance()
            return LiteralExpr(value=Literal.boolean(True))
        if tok.kind == TokenKind.FALSE:
            self.advance()
            return LiteralExpr(value=Literal.boolean(False))
        if tok.kind == TokenKind.NULL:
            self.advance()
            return LiteralExpr(value=Literal.none())
        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING):
            self.advance()
            return LiteralExpr(value=tok.literal)

        if tok.kind == TokenKind.LEFT_PAREN:
            self.advance()
            self._enter(tok)
            inner = self.parse_expression()
            self.expect(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            self._depth -= 1
            return GroupingExpr(inner=inner)

        raise ParseError("Expect expression.", tok)

    def _enter(self, tok: Token) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            raise ParseError("Expression nesting too deep.", tok)


def parse(
    tokens: list[Token],
    *,
    comma_operator: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Expr:
    """Parse a token list into a single expression AST.

    Args:
        tokens: Scanner output, ending with EOF.
        comma_operator: Whether ``,`` is accepted as the lowest-precedence operator.
        max_depth: Maximum nesting of parentheses and prefix operators.

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: On the first syntax error.
    """
    parser = Parser(tokens, comma_operator=comma_operator, max_depth=max_depth)
    expr = parser.parse()
    logger.debug("Parsed %d tokens into %s", len(tokens), type(expr).__name__)
    return expr


def parse_script(
    tokens: list[Token],
    *,
    comma_operator: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Expr]:
    """Parse a token list into ``;``-separated expression ASTs.

    Raises:
        ParseErrors: Every syntax error found, after recovery.
    """
    parser = Parser(tokens, comma_operator=comma_operator, max_depth=max_depth)
    exprs = parser.parse_script()
    logger.debug("Parsed script into %d expressions", len(exprs))
    return exprs
