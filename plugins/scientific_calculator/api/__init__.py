"""API routes for the Scientific Calculator plugin."""

from __future__ import annotations

import math
from typing import Any, Literal

from flask import Blueprint, Response, current_app, request

from common.errors import ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    CalculatorSettings,
    ErrorKind,
    ExpressionError,
    FunctionKind,
    SamplingError,
    count_segments,
    evaluate,
    format_result,
    load_settings,
    normalize,
    sample_curve,
    to_bases,
)

logger = get_logger()

_DEFAULT_MAX_EXPRESSION_LENGTH = 1024
_DEFAULT_MAX_SAMPLES = 5000

_ERROR_CODES = {
    ErrorKind.SYNTAX: "sci_calc.syntax_error",
    ErrorKind.DOMAIN: "sci_calc.domain_error",
    ErrorKind.ARITHMETIC: "sci_calc.arithmetic_error",
}


class SettingsPayload(SchemaModel):
    angle_unit: Literal["deg", "rad"] | None = None
    precision: int | None = None
    thousands_sep: bool | None = None


class EvaluatePayload(SettingsPayload):
    expression: str


class FormatPayload(SchemaModel):
    value: float | None
    precision: int | None = None
    thousands_sep: bool | None = None


class PlotPayload(SchemaModel):
    expression: str
    angle_unit: Literal["deg", "rad"] | None = None
    x_min: float = -10.0
    x_max: float = 10.0
    samples: int = 401


class BasesPayload(SchemaModel):
    expression: str | None = None
    value: float | None = None
    angle_unit: Literal["deg", "rad"] | None = None


api_bp = Blueprint("scientific_calculator_api", __name__, url_prefix="/api/scientific_calculator")


def _plugin_settings() -> dict[str, Any]:
    return current_app.config.get("PLUGIN_SETTINGS", {}).get("scientific_calculator", {}) or {}


def _limit(key: str, default: int) -> int:
    try:
        return max(int(_plugin_settings().get(key, default)), 1)
    except (TypeError, ValueError):
        return default


def _settings(payload: SchemaModel) -> CalculatorSettings:
    base = load_settings(_plugin_settings().get("defaults"))
    return base.merged(
        angle_unit=getattr(payload, "angle_unit", None),
        precision=getattr(payload, "precision", None),
        thousands_sep=getattr(payload, "thousands_sep", None),
    )


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="sci_calc.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


def _expression_failure(exc: ExpressionError) -> Response:
    logger.info(
        "expression rejected: %s",
        exc.message,
        extra={"kind": exc.kind.value, "position": exc.position},
    )
    return fail(
        ValidationAppError(
            message=exc.message,
            code=_ERROR_CODES[exc.kind],
            details={"kind": exc.kind.value, "position": exc.position},
        )
    )


def _check_length(expression: str) -> Response | None:
    if len(expression) > _limit("max_expression_length", _DEFAULT_MAX_EXPRESSION_LENGTH):
        return fail(ValidationAppError(message="Expression is too long", code="sci_calc.expression_too_long"))
    return None


@api_bp.post("/evaluate")
def evaluate_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    too_long = _check_length(payload.expression)
    if too_long is not None:
        return too_long

    settings = _settings(payload)
    try:
        result = evaluate(payload.expression, settings)
    except ExpressionError as exc:
        return _expression_failure(exc)
    return ok(
        {
            "result": _finite_or_none(result),
            "formatted": format_result(result, settings),
            "normalized": normalize(payload.expression.strip()),
            "angle_unit": settings.angle_unit,
        }
    )


@api_bp.post("/format")
def format_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(FormatPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    return ok({"formatted": format_result(payload.value, _settings(payload))})


@api_bp.post("/plot")
def plot_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(PlotPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    too_long = _check_length(payload.expression)
    if too_long is not None:
        return too_long

    max_samples = _limit("max_samples", _DEFAULT_MAX_SAMPLES)
    if payload.samples > max_samples:
        return fail(
            ValidationAppError(
                message=f"At most {max_samples} samples are allowed",
                code="sci_calc.too_many_samples",
            )
        )

    settings = _settings(payload)
    try:
        curve = sample_curve(
            payload.expression,
            (payload.x_min, payload.x_max),
            payload.samples,
            settings,
        )
    except SamplingError as exc:
        return fail(ValidationAppError(message=str(exc), code="sci_calc.invalid_domain"))

    points = list(curve)
    plotted = sum(1 for point in points if point.present)
    return ok(
        {
            "expression": payload.expression,
            "angle_unit": settings.angle_unit,
            "domain": [curve.x_min, curve.x_max],
            "samples": len(points),
            "plotted": plotted,
            "gaps": len(points) - plotted,
            "segments": count_segments(points),
            "series": [{"x": point.x, "y": point.y} for point in points],
        }
    )


@api_bp.post("/bases")
def bases_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(BasesPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    if (payload.expression is None) == (payload.value is None):
        return fail(
            ValidationAppError(
                message="Provide exactly one of expression or value",
                code="sci_calc.invalid_request",
            )
        )

    value = payload.value
    if payload.expression is not None:
        too_long = _check_length(payload.expression)
        if too_long is not None:
            return too_long
        try:
            value = evaluate(payload.expression, _settings(payload))
        except ExpressionError as exc:
            return _expression_failure(exc)

    bases = to_bases(value)
    if bases is None:
        return fail(ValidationAppError(message="Value is not finite", code="sci_calc.not_finite"))
    return ok({"value": value, "bases": bases})


@api_bp.get("/functions")
def functions_endpoint() -> Response:
    return ok(
        {
            "functions": [kind.value for kind in FunctionKind],
            "constants": ["pi", "π", "e"],
            "operators": ["+", "-", "*", "/", "%", "^", "×", "÷", "−", "√("],
        }
    )


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "bases_endpoint",
    "evaluate_endpoint",
    "format_endpoint",
    "functions_endpoint",
    "plot_endpoint",
]
