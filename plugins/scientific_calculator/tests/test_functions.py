import math

import pytest

from plugins.scientific_calculator.core import (
    CalculatorSettings,
    DomainError,
    FunctionKind,
    apply_function,
    evaluate,
)

RAD = CalculatorSettings(angle_unit="rad")
DEG = CalculatorSettings(angle_unit="deg")


def test_match_prefers_inverse_trig_and_ignores_case():
    assert FunctionKind.match("asin(1)", 0) is FunctionKind.ASIN
    assert FunctionKind.match("SIN(1)", 0) is FunctionKind.SIN
    assert FunctionKind.match("2*ln(3)", 2) is FunctionKind.LN
    assert FunctionKind.match("pi", 0) is None


@pytest.mark.parametrize("expression", ["tan(90)", "tan(270)", "tan(-90)"])
def test_tan_asymptotes_in_degrees(expression):
    with pytest.raises(DomainError):
        evaluate(expression, DEG)


def test_tan_asymptote_in_radians():
    with pytest.raises(DomainError):
        evaluate("tan(pi/2)", RAD)


def test_tan_regular_values():
    assert evaluate("tan(45)", DEG) == pytest.approx(1.0)
    assert evaluate("tan(0)", RAD) == 0


def test_inverse_trig_converts_output():
    assert evaluate("asin(1)", DEG) == pytest.approx(90.0)
    assert evaluate("acos(0)", DEG) == pytest.approx(90.0)
    assert evaluate("atan(1)", RAD) == pytest.approx(math.pi / 4)


def test_logarithms():
    assert evaluate("log(1000)") == pytest.approx(3.0)
    assert evaluate("ln(e)") == pytest.approx(1.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(2.5, 3.0), (-2.5, -2.0), (-2.6, -3.0), (2.4, 2.0), (0.49999999999999994, 0.0)],
)
def test_round_goes_half_up(value, expected):
    assert apply_function(FunctionKind.ROUND, value, DEG) == expected


def test_rounding_family():
    assert evaluate("ceil(1.2)") == 2
    assert evaluate("floor(0-1.2)") == -2
    assert evaluate("abs(0-3)") == 3
    assert evaluate("abs(-3)") == 3


def test_nan_propagates_through_functions():
    assert math.isnan(apply_function(FunctionKind.SQRT, math.nan, DEG))
    assert math.isnan(apply_function(FunctionKind.SIN, math.inf, RAD))
    assert math.isnan(apply_function(FunctionKind.FLOOR, math.nan, DEG))


def test_every_kind_has_a_rule():
    for kind in FunctionKind:
        assert isinstance(apply_function(kind, 0.5, RAD), float)
