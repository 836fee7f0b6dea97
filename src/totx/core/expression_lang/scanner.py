"""
Scanner for the totx expression language.

Converts source text into a list of tokens in one left-to-right pass.
The returned list always ends with exactly one EOF token.
"""

from __future__ import annotations

import logging

from totx.core.errors import (
    InvalidNumberError,
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from totx.core.ir import KEYWORDS, Literal, Token, TokenKind, fits_int64

logger = logging.getLogger(__name__)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# First char -> (kind when followed by "=", kind otherwise)
_ONE_OR_TWO: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}


def _is_digit(c: str | None) -> bool:
    return c is not None and "0" <= c <= "9"


def _is_alpha(c: str | None) -> bool:
    return c is not None and (("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_")


def _is_alphanumeric(c: str | None) -> bool:
    return _is_alpha(c) or _is_digit(c)


class Scanner:
    """
    Scanner for totx source.

    ``start`` marks the first character of the lexeme being scanned and
    ``current`` the character under consideration.
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens: list[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def peek(self) -> str | None:
        """Current character or None at end of input."""
        if self.is_at_end():
            return None
        return self.source[self.current]

    def peek_next(self) -> str | None:
        if self.current + 1 >= len(self.source):
            return None
        return self.source[self.current + 1]

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def add_token(self, kind: TokenKind, literal: Literal | None = None) -> None:
        text = self.source[self.start : self.current]
        if literal is None:
            literal = Literal.none()
        self.tokens.append(Token(kind=kind, lexeme=text, literal=literal, line=self.line))

    def scan_tokens(self) -> list[Token]:
        """
        Scan the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            LexError: On the first lexical error; no partial list is returned
        """
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(kind=TokenKind.EOF, lexeme="", line=self.line))
        logger.debug("Scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens

    def scan_token(self) -> None:
        c = self.advance()

        if c in _SINGLE_CHAR:
            self.add_token(_SINGLE_CHAR[c])
        elif c in _ONE_OR_TWO:
            two, one = _ONE_OR_TWO[c]
            self.add_token(two if self.match("=") else one)
        elif c == "/":
            if self.match("/"):
                self.skip_line_comment()
            elif self.match("*"):
                self.skip_block_comment()
            else:
                self.add_token(TokenKind.SLASH)
        elif c in (" ", "\t", "\r"):
            pass
        elif c == "\n":
            self.line += 1
        elif c == '"':
            self.read_string()
        elif _is_digit(c):
            self.read_number()
        elif _is_alpha(c):
            self.read_identifier()
        else:
            raise UnexpectedCharacterError(self.line, c)

    def skip_line_comment(self) -> None:
        # Stops before the newline; scan_token counts it.
        while self.peek() not in ("\n", None):
            self.advance()

    def skip_block_comment(self) -> None:
        """Skip to the closing ``*/``. Block comments do not nest."""
        while not self.is_at_end():
            if self.peek() == "*" and self.peek_next() == "/":
                self.current += 2
                return
            if self.advance() == "\n":
                self.line += 1
        raise UnterminatedCommentError(self.line)

    def read_string(self) -> None:
        """Read a string literal. No escape sequences; newlines are allowed."""
        while self.peek() not in ('"', None):
            if self.advance() == "\n":
                self.line += 1

        if self.is_at_end():
            raise UnterminatedStringError(self.line)

        self.advance()  # closing quote
        value = self.source[self.start + 1 : self.current - 1]
        self.add_token(TokenKind.STRING, Literal.string(value))

    def read_number(self) -> None:
        """
        Read a number lexeme: a digit run, optionally ``.`` and another digit run.

        Numbers are signed 64-bit integers, so a fractional part or an
        out-of-range value is rejected here.
        """
        while _is_digit(self.peek()):
            self.advance()

        fractional = False
        if self.peek() == "." and _is_digit(self.peek_next()):
            fractional = True
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        text = self.source[self.start : self.current]
        if fractional:
            raise InvalidNumberError("Fractional numbers are not supported.", self.line, text)

        # 2**63 has 19 digits; longer runs are out of range without converting.
        digits = text.lstrip("0") or "0"
        if len(digits) > 19 or not fits_int64(int(digits)):
            raise InvalidNumberError("Number literal out of range.", self.line, text)
        self.add_token(TokenKind.NUMBER, Literal.number(int(digits)))

    def read_identifier(self) -> None:
        """Read an identifier or keyword."""
        while _is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start : self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))


def scan(source: str) -> list[Token]:
    """Scan a source string into a list of tokens ending with EOF."""
    return Scanner(source).scan_tokens()
