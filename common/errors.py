"""Error types rendered into the JSON failure envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping

from werkzeug.exceptions import HTTPException


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Invalid user input, including expressions the calculator rejects."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class PayloadTooLargeAppError(AppError):
    code: str = "payload_too_large"
    status_code: int = 413


@dataclass(slots=True)
class InternalAppError(AppError):
    """Generic internal error wrapper to avoid leaking implementation details."""

    code: str = "internal_error"
    status_code: int = 500


def ensure_app_error(error: AppError | Exception, *, fallback_code: str) -> AppError:
    """Coerce arbitrary exceptions into :class:`AppError` instances.

    HTTP exceptions keep their status code; anything else becomes a 500
    without exposing the original message.
    """

    if isinstance(error, AppError):
        return error
    if isinstance(error, HTTPException):
        status = error.code or 500
        message = error.description or error.name
        if status == 404:
            return NotFoundAppError(message=message)
        if status == 413:
            return PayloadTooLargeAppError(message=message)
        return AppError(message=message, code=f"http_{status}", status_code=status)
    return InternalAppError(code=fallback_code, message="Internal server error")


__all__ = [
    "AppError",
    "ValidationAppError",
    "NotFoundAppError",
    "PayloadTooLargeAppError",
    "InternalAppError",
    "ensure_app_error",
]
