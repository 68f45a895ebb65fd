"""Recursive-descent grammar that evaluates calculator expressions as it parses.

Precedence, lowest to highest::

    expr    := addsub
    addsub  := muldiv (("+" | "-") muldiv)*
    muldiv  := power (("*" | "/" | "%") power)*     "%" only when not the last character
    power   := unary ("^" unary)?                   a single exponent per power
    unary   := "-" atom | "+" atom | atom
    atom    := "(" expr ")" | function "(" expr ")" | constant | number

Two consequences are intentional: ``2^3^2`` leaves ``^2`` unconsumed and
fails, and ``-2^2`` is ``(-2)^2 == 4``.

``a % b`` is "a percent of b", i.e. ``a * b / 100``. A trailing ``%`` is
not consumed; callers wanting postfix percent handle it themselves.
"""

from __future__ import annotations

import math

from .errors import DivisionByZeroError, ExpressionSyntaxError
from .functions import FunctionKind, apply_function
from .normalize import normalize
from .settings import CalculatorSettings

_NUMBER_CHARS = frozenset("0123456789.")
_DIGITS = frozenset("0123456789")

MAX_NESTING = 64


def ieee_pow(base: float, exponent: float) -> float:
    """``base ** exponent`` with IEEE 754 results instead of exceptions."""

    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base with a fractional exponent.
        return math.nan


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


class ExpressionParser:
    """Single-use parser over one normalized, trimmed source string."""

    def __init__(self, text: str, settings: CalculatorSettings):
        self.text = text.strip()
        self.pos = 0
        self.settings = settings
        self.depth = 0

    def parse(self) -> float:
        value = self._expr()
        if self.pos < len(self.text):
            raise ExpressionSyntaxError(
                f"Unexpected character '{self.text[self.pos]}' at position {self.pos}",
                position=self.pos,
            )
        return value

    # ---- helpers ---------------------------------------------------------
    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _expect_close(self, message: str) -> None:
        if self._peek() != ")":
            raise ExpressionSyntaxError(message, position=self.pos)
        self.pos += 1
        self.depth -= 1

    def _open(self) -> None:
        if self.depth >= MAX_NESTING:
            raise ExpressionSyntaxError("Expression is nested too deeply", position=self.pos)
        self.depth += 1
        self.pos += 1

    # ---- grammar rules ---------------------------------------------------
    def _expr(self) -> float:
        return self._add_sub()

    def _add_sub(self) -> float:
        left = self._mul_div()
        while True:
            ch = self._peek()
            if ch == "+":
                self.pos += 1
                left += self._mul_div()
            elif ch == "-":
                self.pos += 1
                left -= self._mul_div()
            else:
                return left

    def _mul_div(self) -> float:
        left = self._power()
        while True:
            ch = self._peek()
            if ch == "*":
                self.pos += 1
                left *= self._power()
            elif ch == "/":
                operator_pos = self.pos
                self.pos += 1
                right = self._power()
                if right == 0:
                    raise DivisionByZeroError("divide by zero", position=operator_pos)
                left /= right
            elif ch == "%" and self.pos < len(self.text) - 1:
                self.pos += 1
                left = left * self._power() / 100
            else:
                return left

    def _power(self) -> float:
        base = self._unary()
        if self._peek() == "^":
            self.pos += 1
            base = ieee_pow(base, self._unary())
        return base

    def _unary(self) -> float:
        ch = self._peek()
        if ch == "-":
            self.pos += 1
            return -self._atom()
        if ch == "+":
            self.pos += 1
        return self._atom()

    def _atom(self) -> float:
        if self._peek() == "(":
            self._open()
            value = self._expr()
            self._expect_close(f"Missing closing parenthesis at position {self.pos}")
            return value

        kind = FunctionKind.match(self.text, self.pos)
        if kind is not None:
            return self._call(kind)

        if self.text.startswith("pi", self.pos):
            self.pos += 2
            return math.pi
        if self._peek() == "e" and self._peek(1) not in _DIGITS:
            self.pos += 1
            return math.e

        return self._number()

    def _call(self, kind: FunctionKind) -> float:
        name = kind.value
        self.pos += len(name)
        if self._peek() != "(":
            raise ExpressionSyntaxError(f"Expected ( after {name}", position=self.pos)
        self._open()
        argument = self._expr()
        self._expect_close(f"Missing closing parenthesis for {name}")
        return apply_function(kind, argument, self.settings)

    def _number(self) -> float:
        start = self.pos
        while self._peek() and self._peek() in _NUMBER_CHARS:
            self.pos += 1
        if self.pos == start:
            raise ExpressionSyntaxError(f"Expected number at position {start}", position=start)
        token = self.text[start : self.pos]
        try:
            return float(token)
        except ValueError as exc:
            raise ExpressionSyntaxError(f"Invalid number: {token}", position=start) from exc


def evaluate(text: str, settings: CalculatorSettings | None = None) -> float:
    """Evaluate raw calculator input.

    Display glyphs are normalized first. Blank input evaluates to ``0``.
    Raises :class:`~.errors.ExpressionError` subclasses on failure, including
    input nested deeper than ``MAX_NESTING`` parentheses.
    """

    if not text or not text.strip():
        return 0.0
    parser = ExpressionParser(normalize(text), settings or CalculatorSettings())
    try:
        return parser.parse()
    except RecursionError as exc:
        raise ExpressionSyntaxError("Expression is nested too deeply", position=parser.pos) from exc


__all__ = ["MAX_NESTING", "ExpressionParser", "evaluate", "ieee_pow"]
