"""Request payload validation for plugin APIs."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when a request payload does not match its schema."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def _error_details(exc: pydantic.ValidationError) -> dict[str, Any]:
    # pydantic error dicts may carry exception objects under "ctx"; keep JSON types only.
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return {"errors": errors}


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid request payload", details=_error_details(exc)) from exc


__all__ = ["ValidationError", "SchemaModel", "parse_model"]
