"""Exports for scientific calculator core."""

from .errors import (
    DivisionByZeroError,
    DomainError,
    ErrorKind,
    ExpressionError,
    ExpressionSyntaxError,
)
from .formatting import format_result, group_thousands, positional
from .functions import FunctionKind, apply_function
from .grammar import ExpressionParser, evaluate
from .normalize import normalize
from .programmer import to_bases
from .sampler import Curve, CurvePoint, SamplingError, count_segments, sample_curve
from .session import CalculatorSession, MemoryRegister
from .settings import CalculatorSettings, coerce_angle_unit, load_settings

__all__ = [
    "CalculatorSession",
    "CalculatorSettings",
    "Curve",
    "CurvePoint",
    "DivisionByZeroError",
    "DomainError",
    "ErrorKind",
    "ExpressionError",
    "ExpressionParser",
    "ExpressionSyntaxError",
    "FunctionKind",
    "MemoryRegister",
    "SamplingError",
    "apply_function",
    "coerce_angle_unit",
    "count_segments",
    "evaluate",
    "format_result",
    "group_thousands",
    "load_settings",
    "normalize",
    "positional",
    "sample_curve",
    "to_bases",
]
