"""Keypad session: expression buffer, live preview and memory register.

This is the caller-side glue the evaluator expects around it. Live preview
tolerates half-typed input, ``%`` on the keypad means postfix percent, and
``=`` surfaces failures.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .errors import ExpressionError
from .formatting import format_result, positional
from .grammar import evaluate
from .programmer import to_bases
from .settings import CalculatorSettings

CLEAR_KEYS = frozenset({"AC", "C"})
BACKSPACE_KEY = "⌫"
EQUALS_KEY = "="
SIGN_KEY = "±"
PERCENT_KEY = "%"
MEMORY_KEYS = frozenset({"MC", "MR", "M+", "M-", "MS"})


@dataclass(slots=True)
class MemoryRegister:
    value: float = 0.0
    has_value: bool = False

    def clear(self) -> None:
        self.value = 0.0
        self.has_value = False

    def store(self, value: float) -> None:
        self.value = value
        self.has_value = True

    def add(self, value: float) -> None:
        self.store(self.value + value)

    def subtract(self, value: float) -> None:
        self.store(self.value - value)

    def recall(self) -> float | None:
        return self.value if self.has_value else None


class CalculatorSession:
    """State of one calculator keypad."""

    def __init__(self, settings: CalculatorSettings | None = None) -> None:
        self.settings = settings or CalculatorSettings()
        self.expression = ""
        self.display = "0"
        self.value = 0.0
        self.error: ExpressionError | None = None
        self.preview_error: ExpressionError | None = None
        self.memory = MemoryRegister()

    # ---- keypad ----------------------------------------------------------
    def press(self, key: str) -> str:
        """Apply one key and return the resulting display text."""

        if key in CLEAR_KEYS:
            self.clear()
            return self.display
        if key == EQUALS_KEY:
            return self.commit()
        if key in MEMORY_KEYS:
            self.memory_key(key)
            return self.display

        if key == BACKSPACE_KEY:
            self.expression = self.expression[:-1]
        elif key == SIGN_KEY:
            self._toggle_sign()
        elif key == PERCENT_KEY:
            self._apply_percent()
        else:
            self.expression += key
        self._preview()
        return self.display

    def press_all(self, keys: list[str]) -> str:
        for key in keys:
            self.press(key)
        return self.display

    def clear(self) -> None:
        self.expression = ""
        self.display = "0"
        self.value = 0.0
        self.error = None
        self.preview_error = None

    def commit(self) -> str:
        """Evaluate the buffer (the ``=`` key)."""

        if not self.expression:
            return self.display
        try:
            result = evaluate(self.expression, self.settings)
        except ExpressionError as exc:
            self.error = exc
            return self.display
        self.error = None
        self.preview_error = None
        self.value = result
        self.display = format_result(result, self.settings)
        self.expression = ""
        return self.display

    def _toggle_sign(self) -> None:
        if not self.expression:
            return
        if self.expression.startswith("-"):
            self.expression = self.expression[1:]
        else:
            self.expression = "-" + self.expression

    def _apply_percent(self) -> None:
        if not self.expression:
            return
        try:
            value = evaluate(self.expression, self.settings) / 100
        except ExpressionError as exc:
            self.preview_error = exc
            return
        if math.isfinite(value):
            self.expression = positional(value)

    def _preview(self) -> None:
        self.error = None
        if not self.expression:
            self.preview_error = None
            return
        try:
            result = evaluate(self.expression, self.settings)
        except ExpressionError as exc:
            # Half-typed input is expected to fail; keep the last display.
            self.preview_error = exc
            return
        self.preview_error = None
        self.value = result
        self.display = format_result(result, self.settings)

    # ---- memory ----------------------------------------------------------
    def _memory_operand(self) -> float:
        try:
            value = evaluate(self.expression, self.settings)
        except ExpressionError:
            return 0.0
        if value and not math.isnan(value):
            return value
        try:
            shown = float(self.display.replace(",", ""))
        except ValueError:
            return 0.0
        return shown if shown and not math.isnan(shown) else 0.0

    def memory_key(self, key: str) -> None:
        if key == "MC":
            self.memory.clear()
        elif key == "MR":
            recalled = self.memory.recall()
            if recalled is not None and math.isfinite(recalled):
                self.expression = positional(recalled)
        elif key == "M+":
            self.memory.add(self._memory_operand())
        elif key == "M-":
            self.memory.subtract(self._memory_operand())
        elif key == "MS":
            self.memory.store(self._memory_operand())
        else:
            raise ValueError(f"Unknown memory key: {key}")

    # ---- views -----------------------------------------------------------
    def bases(self) -> dict[str, str] | None:
        return to_bases(self.value)

    def snapshot(self) -> dict[str, Any]:
        memory = self.memory.recall()
        return {
            "expression": self.expression,
            "display": self.display,
            "value": self.value if math.isfinite(self.value) else None,
            "error": self.error.to_dict() if self.error else None,
            "memory": format_result(memory, self.settings) if memory is not None else None,
        }


__all__ = ["CalculatorSession", "MemoryRegister", "MEMORY_KEYS"]
