"""
Token types shared by the scanner and the parser.
"""

from __future__ import annotations

from enum import StrEnum, auto

from pydantic import BaseModel, ConfigDict, Field

from totx.core.ir.values import Literal


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    STRING = auto()
    NUMBER = auto()
    IDENTIFIER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NULL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # End of input
    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "fun": TokenKind.FUN,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "null": TokenKind.NULL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}


class Token(BaseModel):
    """
    A single token scanned from source.

    Attributes:
        kind: Type of token
        lexeme: Exact source text the token was scanned from
        literal: Value for STRING and NUMBER tokens, None otherwise
        line: Line number (1-indexed)
    """

    kind: TokenKind
    lexeme: str
    literal: Literal = Field(default_factory=Literal.none)
    line: int = 1

    model_config = ConfigDict(frozen=True)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, {self.literal!r}, line={self.line})"

    def __str__(self) -> str:
        return f"{self.kind.name} {self.lexeme} {self.literal!r}"
