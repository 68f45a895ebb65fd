"""Standardized JSON response envelopes."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Response, g, has_request_context, jsonify

from .errors import AppError


def _request_id() -> str | None:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)


def ok(data: Any, *, status: int = 200) -> Response:
    """Return a success envelope."""

    response = jsonify({"success": True, "data": data})
    response.status_code = status
    return response


def fail(error: AppError | Mapping[str, Any], *, status: int | None = None) -> Response:
    """Return a failure envelope carrying the request id for log correlation."""

    if isinstance(error, AppError):
        body = dict(error.to_dict())
        default_status = error.status_code
    else:
        body = dict(error)
        default_status = 400

    request_id = _request_id()
    if request_id:
        body["request_id"] = request_id

    response = jsonify({"success": False, "error": body})
    response.status_code = status or default_status
    return response


__all__ = ["ok", "fail"]
