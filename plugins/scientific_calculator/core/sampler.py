"""Sample a single-variable expression over a domain for plotting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple

import numpy as np

from .errors import ExpressionError
from .formatting import positional
from .grammar import evaluate
from .settings import CalculatorSettings

VARIABLE = "x"
DEFAULT_DOMAIN = (-10.0, 10.0)
DEFAULT_SAMPLES = 401


class SamplingError(ValueError):
    """Raised when a curve request itself is invalid (not a single sample)."""


class CurvePoint(NamedTuple):
    x: float
    y: float | None

    @property
    def present(self) -> bool:
        return self.y is not None


def _literal(value: float) -> str:
    # The grammar has no exponent syntax.
    return f"({positional(value)})"


def substitute(template: str, value: float) -> str:
    """Replace every ``x`` in ``template`` with ``value`` in parentheses."""

    return template.replace(VARIABLE, _literal(value))


def sample_point(template: str, x: float, settings: CalculatorSettings) -> CurvePoint:
    try:
        y = evaluate(substitute(template, x), settings)
    except (ExpressionError, ArithmeticError, RecursionError):
        return CurvePoint(x, None)
    if not math.isfinite(y):
        return CurvePoint(x, None)
    return CurvePoint(x, y)


@dataclass(frozen=True, slots=True)
class Curve:
    """Lazy, restartable sequence of :class:`CurvePoint` in increasing ``x``.

    Failed or non-finite samples are yielded with ``y=None`` so consumers can
    break the plotted line there and resume at the next present point.
    """

    template: str
    x_min: float
    x_max: float
    sample_count: int
    settings: CalculatorSettings

    def xs(self) -> np.ndarray:
        return np.linspace(self.x_min, self.x_max, self.sample_count)

    def __iter__(self) -> Iterator[CurvePoint]:
        for x in self.xs():
            yield sample_point(self.template, float(x), self.settings)

    def __len__(self) -> int:
        return self.sample_count


def sample_curve(
    template: str,
    domain: tuple[float, float] = DEFAULT_DOMAIN,
    sample_count: int = DEFAULT_SAMPLES,
    settings: CalculatorSettings | None = None,
) -> Curve:
    """Build a :class:`Curve` for ``template`` over ``domain``.

    Only the request is validated here; evaluating the samples happens on
    iteration and never raises.
    """

    x_min, x_max = (float(bound) for bound in domain)
    if not (math.isfinite(x_min) and math.isfinite(x_max)):
        raise SamplingError("Domain bounds must be finite")
    if x_min >= x_max:
        raise SamplingError("x_min must be less than x_max")
    if int(sample_count) < 2:
        raise SamplingError("At least two samples are required")
    return Curve(
        template=template,
        x_min=x_min,
        x_max=x_max,
        sample_count=int(sample_count),
        settings=settings or CalculatorSettings(),
    )


def count_segments(points: Iterator[CurvePoint] | list[CurvePoint]) -> int:
    """Number of contiguous runs of present points."""

    segments = 0
    previous_present = False
    for point in points:
        if point.present and not previous_present:
            segments += 1
        previous_present = point.present
    return segments


__all__ = [
    "Curve",
    "CurvePoint",
    "DEFAULT_DOMAIN",
    "DEFAULT_SAMPLES",
    "SamplingError",
    "count_segments",
    "sample_curve",
    "sample_point",
    "substitute",
]
