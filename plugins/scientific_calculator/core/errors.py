"""Failure taxonomy shared by the calculator core."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    SYNTAX = "Syntax"
    DOMAIN = "Domain"
    ARITHMETIC = "Arithmetic"


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated.

    ``position`` is the offset into the trimmed, normalized text at which the
    failure was detected, when one is known.
    """

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(self, message: str, *, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "position": self.position,
        }


class ExpressionSyntaxError(ExpressionError):
    """The grammar could not consume the whole input."""

    kind = ErrorKind.SYNTAX


class DomainError(ExpressionError):
    """A function received an argument outside its domain."""

    kind = ErrorKind.DOMAIN


class DivisionByZeroError(ExpressionError):
    """Right operand of ``/`` was exactly zero."""

    kind = ErrorKind.ARITHMETIC


__all__ = [
    "ErrorKind",
    "ExpressionError",
    "ExpressionSyntaxError",
    "DomainError",
    "DivisionByZeroError",
]
