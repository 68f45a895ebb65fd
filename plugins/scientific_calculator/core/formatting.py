"""Display formatting for calculator results."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real

from .settings import CalculatorSettings

ERROR_TEXT = "Error"
POSITIVE_INFINITY_TEXT = "∞"
NEGATIVE_INFINITY_TEXT = "-∞"

SCIENTIFIC_UPPER = 1e15
SCIENTIFIC_LOWER = 1e-10
SCIENTIFIC_DIGITS = 6


def _round_significant(value: float, digits: int) -> Decimal:
    # Decimal(value) is the exact binary expansion; halves round away from zero.
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.rounding = ROUND_HALF_UP
        return (+Decimal(value)).normalize()


def _scientific(value: float) -> str:
    rounded = _round_significant(value, SCIENTIFIC_DIGITS + 1)
    return format(rounded, f".{SCIENTIFIC_DIGITS}e")


def _fixed(value: float, digits: int) -> str:
    rounded = _round_significant(value, digits)
    if rounded == 0:
        return "0"
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def positional(value: float) -> str:
    """Plain decimal text for a finite float, without exponent or trailing zeros."""

    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def group_thousands(text: str) -> str:
    """Insert ``,`` every three digits of the integer part of ``text``."""

    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    integer, dot, fraction = text.partition(".")
    return f"{sign}{int(integer):,}{dot}{fraction}"


def format_result(value: object, settings: CalculatorSettings | None = None) -> str:
    """Render ``value`` for display. Never raises.

    Non-numbers and NaN become ``"Error"``; infinities become ``"∞"`` /
    ``"-∞"``. Very large or very small magnitudes use scientific notation
    with six fractional digits, everything else is rounded to
    ``settings.precision`` significant digits with trailing zeros removed.
    """

    settings = settings or CalculatorSettings()
    if isinstance(value, bool) or not isinstance(value, Real):
        return ERROR_TEXT
    try:
        number = float(value)
    except OverflowError:
        # Integers and fractions beyond the float range.
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT
    if math.isnan(number):
        return ERROR_TEXT
    if math.isinf(number):
        return POSITIVE_INFINITY_TEXT if number > 0 else NEGATIVE_INFINITY_TEXT

    magnitude = abs(number)
    if magnitude >= SCIENTIFIC_UPPER or (magnitude < SCIENTIFIC_LOWER and number != 0):
        return _scientific(number)

    text = _fixed(number, settings.significant_digits)
    if settings.thousands_sep:
        text = group_thousands(text)
    return text


__all__ = [
    "ERROR_TEXT",
    "NEGATIVE_INFINITY_TEXT",
    "POSITIVE_INFINITY_TEXT",
    "format_result",
    "group_thousands",
    "positional",
]
