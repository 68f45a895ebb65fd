"""Unary function library with angle-unit handling and domain checks."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable

from .errors import DomainError
from .settings import CalculatorSettings

# Below this |cos| the tangent is treated as undefined (90°, 270°, ...).
TAN_ASYMPTOTE_EPSILON = 1e-10


class FunctionKind(str, Enum):
    """Functions recognised by the grammar.

    Declaration order is the matching order, so ``asin`` is tried before
    ``sin``.
    """

    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"
    ABS = "abs"
    CEIL = "ceil"
    FLOOR = "floor"
    ROUND = "round"

    @classmethod
    def match(cls, text: str, pos: int) -> "FunctionKind | None":
        """Return the function whose name starts at ``pos`` (case-insensitive)."""

        for kind in cls:
            name = kind.value
            if text[pos : pos + len(name)].lower() == name:
                return kind
        return None


def _ieee(fn: Callable[[float], float], value: float) -> float:
    # math raises where IEEE 754 would quietly produce NaN or infinity.
    try:
        return fn(value)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_radians(value: float, settings: CalculatorSettings) -> float:
    return math.radians(value) if settings.use_degrees else value


def _from_radians(value: float, settings: CalculatorSettings) -> float:
    return math.degrees(value) if settings.use_degrees else value


def _sin(value: float, settings: CalculatorSettings) -> float:
    return _ieee(math.sin, _to_radians(value, settings))


def _cos(value: float, settings: CalculatorSettings) -> float:
    return _ieee(math.cos, _to_radians(value, settings))


def _tan(value: float, settings: CalculatorSettings) -> float:
    rad = _to_radians(value, settings)
    if abs(_ieee(math.cos, rad)) < TAN_ASYMPTOTE_EPSILON:
        raise DomainError("tan is undefined at odd multiples of 90°")
    return _ieee(math.tan, rad)


def _asin(value: float, settings: CalculatorSettings) -> float:
    return _from_radians(_ieee(math.asin, value), settings)


def _acos(value: float, settings: CalculatorSettings) -> float:
    return _from_radians(_ieee(math.acos, value), settings)


def _atan(value: float, settings: CalculatorSettings) -> float:
    return _from_radians(_ieee(math.atan, value), settings)


def _log(value: float, settings: CalculatorSettings) -> float:
    if value <= 0:
        raise DomainError("log is undefined for values ≤ 0")
    return _ieee(math.log10, value)


def _ln(value: float, settings: CalculatorSettings) -> float:
    if value <= 0:
        raise DomainError("ln is undefined for values ≤ 0")
    return _ieee(math.log, value)


def _sqrt(value: float, settings: CalculatorSettings) -> float:
    if value < 0:
        raise DomainError("sqrt is undefined for negative numbers")
    return _ieee(math.sqrt, value)


def _abs(value: float, settings: CalculatorSettings) -> float:
    return abs(value)


def _ceil(value: float, settings: CalculatorSettings) -> float:
    if not math.isfinite(value):
        return value
    return float(math.ceil(value))


def _floor(value: float, settings: CalculatorSettings) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value))


def _round(value: float, settings: CalculatorSettings) -> float:
    # Half-way cases go towards +inf: round(2.5) == 3, round(-2.5) == -2.
    if not math.isfinite(value):
        return value
    lower = math.floor(value)
    return float(lower + 1 if value - lower >= 0.5 else lower)


_DISPATCH: dict[FunctionKind, Callable[[float, CalculatorSettings], float]] = {
    FunctionKind.ASIN: _asin,
    FunctionKind.ACOS: _acos,
    FunctionKind.ATAN: _atan,
    FunctionKind.SIN: _sin,
    FunctionKind.COS: _cos,
    FunctionKind.TAN: _tan,
    FunctionKind.LOG: _log,
    FunctionKind.LN: _ln,
    FunctionKind.SQRT: _sqrt,
    FunctionKind.ABS: _abs,
    FunctionKind.CEIL: _ceil,
    FunctionKind.FLOOR: _floor,
    FunctionKind.ROUND: _round,
}


def apply_function(kind: FunctionKind, value: float, settings: CalculatorSettings) -> float:
    """Apply ``kind`` to ``value`` under ``settings``; raises :class:`DomainError`."""

    try:
        rule = _DISPATCH[kind]
    except KeyError as exc:
        raise LookupError(f"No evaluation rule for function {kind!r}") from exc
    return rule(value, settings)


__all__ = ["FunctionKind", "TAN_ASYMPTOTE_EPSILON", "apply_function"]
