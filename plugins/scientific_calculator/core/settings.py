"""Settings snapshot handed to every calculator call."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Mapping

AngleUnit = Literal["deg", "rad"]

_ANGLE_ALIASES: dict[str, AngleUnit] = {
    "deg": "deg",
    "degree": "deg",
    "degrees": "deg",
    "rad": "rad",
    "radian": "rad",
    "radians": "rad",
}

DEFAULT_PRECISION = 8
MIN_PRECISION = 1
MAX_PRECISION = 17


@dataclass(frozen=True, slots=True)
class CalculatorSettings:
    """Read-only view of the user preferences the core depends on."""

    angle_unit: AngleUnit = "deg"
    precision: int = DEFAULT_PRECISION
    thousands_sep: bool = True

    @property
    def use_degrees(self) -> bool:
        return self.angle_unit == "deg"

    @property
    def significant_digits(self) -> int:
        return min(max(self.precision, MIN_PRECISION), MAX_PRECISION)

    def merged(
        self,
        *,
        angle_unit: str | None = None,
        precision: int | None = None,
        thousands_sep: bool | None = None,
    ) -> "CalculatorSettings":
        """Return a copy with the non-``None`` overrides applied."""

        changes: dict[str, object] = {}
        if angle_unit is not None:
            changes["angle_unit"] = coerce_angle_unit(angle_unit)
        if precision is not None:
            changes["precision"] = max(int(precision), 0)
        if thousands_sep is not None:
            changes["thousands_sep"] = bool(thousands_sep)
        return replace(self, **changes) if changes else self


def coerce_angle_unit(value: str) -> AngleUnit:
    unit = _ANGLE_ALIASES.get(str(value).strip().lower())
    if unit is None:
        raise ValueError("angle_unit must be 'deg' or 'rad'")
    return unit


def load_settings(raw: Mapping[str, object] | None) -> CalculatorSettings:
    """Build settings from a ``config.yml`` mapping.

    Missing or malformed values fall back to the defaults so a bad config
    never breaks start-up.
    """

    raw = raw or {}
    defaults = CalculatorSettings()

    try:
        angle_unit = coerce_angle_unit(str(raw.get("angle_unit", defaults.angle_unit)))
    except ValueError:
        angle_unit = defaults.angle_unit

    try:
        precision = max(int(float(raw.get("precision", defaults.precision))), 0)
    except (TypeError, ValueError):
        precision = defaults.precision

    thousands_sep = raw.get("thousands_sep", defaults.thousands_sep)
    if not isinstance(thousands_sep, bool):
        thousands_sep = str(thousands_sep).strip().lower() in {"1", "true", "yes", "on"}

    return CalculatorSettings(
        angle_unit=angle_unit,
        precision=precision,
        thousands_sep=thousands_sep,
    )


__all__ = [
    "AngleUnit",
    "CalculatorSettings",
    "DEFAULT_PRECISION",
    "coerce_angle_unit",
    "load_settings",
]
