"""Integer base view used by programmer mode."""

from __future__ import annotations

import math


def to_bases(value: float) -> dict[str, str] | None:
    """Truncate ``value`` toward zero and render it in bases 16, 10, 8 and 2.

    Returns ``None`` for NaN and infinities.
    """

    if not math.isfinite(value):
        return None
    number = math.trunc(value)
    return {
        "hex": format(number, "X"),
        "dec": format(number, "d"),
        "oct": format(number, "o"),
        "bin": format(number, "b"),
    }


__all__ = ["to_bases"]
