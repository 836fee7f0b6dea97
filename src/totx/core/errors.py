"""
Error types for totx scanning, parsing, and evaluation.

Every stage of the pipeline reports failures through one structured
shape: the source line, a location hint, and a message.
"""

from __future__ import annotations

from dataclasses import dataclass

from totx.core.ir.tokens import Token, TokenKind


@dataclass(frozen=True)
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        location: Free-form location hint, e.g. `` at end`` or `` at '+'``
    """

    line: int
    location: str = ""

    def format(self, message: str) -> str:
        """Render the canonical ``[Line - N ] Error <location> : <message>`` form."""
        return f"[Line - {self.line} ] Error {self.location} : {message}"


class TotxError(Exception):
    """Base exception for all totx errors raised from source text."""

    def __init__(self, message: str, line: int, location: str = ""):
        self.message = message
        self.context = ErrorContext(line=line, location=location)
        super().__init__(self.context.format(message))

    @property
    def line(self) -> int:
        return self.context.line

    @property
    def location(self) -> str:
        return self.context.location


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


class LexError(TotxError):
    """
    Raised when source text cannot be split into tokens.

    Examples:
    - Unterminated string or block comment
    - Unexpected character
    - Number literal the integer domain cannot hold
    """


class UnterminatedStringError(LexError):
    def __init__(self, line: int):
        super().__init__("Unterminated string.", line)


class UnterminatedCommentError(LexError):
    def __init__(self, line: int):
        super().__init__("Unterminated block comment.", line)


class UnexpectedCharacterError(LexError):
    def __init__(self, line: int, char: str):
        self.char = char
        super().__init__(f"Unexpected character {char!r}.", line)


class InvalidNumberError(LexError):
    def __init__(self, message: str, line: int, lexeme: str):
        self.lexeme = lexeme
        super().__init__(message, line, f" at '{lexeme}'")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class ParseError(TotxError):
    """
    Raised when a token sequence is not a valid expression.

    The location is `` at end`` when the offending token is EOF and
    `` at '<lexeme>'`` otherwise.
    """

    def __init__(self, message: str, token: Token):
        self.token = token
        if token.kind == TokenKind.EOF:
            location = " at end"
        else:
            location = f" at '{token.lexeme}'"
        super().__init__(message, token.line, location)


class ParseErrors(ParseError):
    """Several syntax errors collected in script mode, in source order."""

    def __init__(self, errors: list[ParseError]):
        first = errors[0]
        self.errors = errors
        TotxError.__init__(self, first.message, first.line, first.location)
        self.token = first.token

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.errors)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class EvaluationError(TotxError):
    """
    Raised when a well-formed expression cannot be evaluated.

    Examples:
    - Operand of the wrong type
    - Division by zero
    - Integer overflow
    """

    def __init__(self, message: str, token: Token):
        self.token = token
        super().__init__(message, token.line, f" at '{token.lexeme}'")


class TypeMismatchError(EvaluationError):
    pass


class DivisionByZeroError(EvaluationError):
    def __init__(self, token: Token):
        super().__init__("Division by zero.", token)


class NumericOverflowError(EvaluationError):
    def __init__(self, token: Token):
        super().__init__("Integer overflow.", token)


class EvaluationDepthError(EvaluationError):
    # Grouping nodes carry no token, so only the line is known here.
    def __init__(self, line: int):
        self.token = None
        TotxError.__init__(self, "Expression nesting too deep.", line)


class InvalidOperatorError(EvaluationError):
    """An operator token the parser never produces for this node type."""

    def __init__(self, token: Token):
        super().__init__(f"Invalid operator {token.lexeme!r}.", token)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when totx.toml holds an invalid value."""
