"""
Runtime value type for totx.

A value is one of String, Number (signed 64-bit integer), Bool, or None.
Scanned tokens carry one, literal nodes hold one, and evaluation produces one.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def fits_int64(value: int) -> bool:
    """True when ``value`` is representable as a signed 64-bit integer."""
    return INT64_MIN <= value <= INT64_MAX


class LiteralKind(StrEnum):
    """Variants a runtime value can take."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NONE = "none"


_PAYLOAD_TYPES: dict[LiteralKind, type | None] = {
    LiteralKind.STRING: str,
    LiteralKind.NUMBER: int,
    LiteralKind.BOOL: bool,
    LiteralKind.NONE: None,
}


class Literal(BaseModel):
    """
    A runtime value: String, Number, Bool, or None.

    The ``kind`` tag decides the variant, so ``Number(0)`` and
    ``Bool(false)`` never compare equal even though Python's ``0 == False``.

    Examples:
        - Literal.number(10) → Number(10)
        - Literal.string("test") → String('test')
        - Literal.none() → None
    """

    kind: LiteralKind = Field(default=LiteralKind.NONE, description="Value variant")
    value: str | int | bool | None = Field(default=None, description="Payload")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_payload(self) -> Literal:
        want = _PAYLOAD_TYPES[self.kind]
        got = None if self.value is None else type(self.value)
        if got is not want:
            raise ValueError(f"{self.kind} literal cannot hold {self.value!r}")
        if self.kind == LiteralKind.NUMBER and not fits_int64(self.value):  # type: ignore[arg-type]
            raise ValueError(f"number literal out of 64-bit range: {self.value}")
        return self

    @classmethod
    def string(cls, value: str) -> Literal:
        return cls(kind=LiteralKind.STRING, value=value)

    @classmethod
    def number(cls, value: int) -> Literal:
        return cls(kind=LiteralKind.NUMBER, value=value)

    @classmethod
    def boolean(cls, value: bool) -> Literal:
        return cls(kind=LiteralKind.BOOL, value=value)

    @classmethod
    def none(cls) -> Literal:
        return cls()

    @property
    def is_truthy(self) -> bool:
        """``false`` and null are falsy; everything else, ``0`` and ``""`` included, is truthy."""
        if self.kind == LiteralKind.NONE:
            return False
        if self.kind == LiteralKind.BOOL:
            return bool(self.value)
        return True

    def __str__(self) -> str:
        if self.kind == LiteralKind.NONE:
            return ""
        if self.kind == LiteralKind.BOOL:
            return "true" if self.value else "false"
        return str(self.value)

    def __repr__(self) -> str:
        if self.kind == LiteralKind.NONE:
            return "None"
        return f"{self.kind.name.title()}({self.value!r})"
