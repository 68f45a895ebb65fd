import math

import pytest

from plugins.scientific_calculator.core import (
    CalculatorSettings,
    evaluate,
    format_result,
    group_thousands,
    positional,
)

PLAIN = CalculatorSettings(thousands_sep=False)


def test_precision_and_thousands_separator():
    settings = CalculatorSettings(precision=8, thousands_sep=True)
    assert format_result(1234567.891, settings) == "1,234,567.9"
    assert format_result(-1234567, settings) == "-1,234,567"
    assert format_result(1234.5, PLAIN) == "1234.5"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (math.nan, "Error"),
        (math.inf, "∞"),
        (-math.inf, "-∞"),
        (None, "Error"),
        ("12", "Error"),
        (True, "Error"),
        (10**400, "∞"),
        (-(10**400), "-∞"),
    ],
)
def test_non_finite_and_non_numeric(value, expected):
    assert format_result(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1e15, "1.000000e+15"),
        (-2.5e20, "-2.500000e+20"),
        (1.5e-11, "1.500000e-11"),
        (123456789012345678, "1.234568e+17"),
    ],
)
def test_scientific_notation_bounds(value, expected):
    assert format_result(value) == expected


def test_fixed_notation_trims_trailing_zeros():
    assert format_result(0) == "0"
    assert format_result(-0.0) == "0"
    assert format_result(0.1 + 0.2) == "0.3"
    assert format_result(100) == "100"
    assert format_result(1 / 3) == "0.33333333"
    assert format_result(2 / 3, CalculatorSettings(precision=4)) == "0.6667"
    assert format_result(0.000123456789) == "0.00012345679"
    assert format_result(1e14) == "100,000,000,000,000"


def test_half_way_digits_round_away_from_zero():
    assert format_result(2.5, CalculatorSettings(precision=1)) == "3"
    assert format_result(-2.5, CalculatorSettings(precision=1)) == "-3"


def test_precision_zero_behaves_as_one_digit():
    assert format_result(0.5, CalculatorSettings(precision=0)) == "0.5"
    assert format_result(1234, CalculatorSettings(precision=0, thousands_sep=False)) == "1000"


@pytest.mark.parametrize("value", [1234567.891, 0.000123456789, -98765.4321, math.pi, 42.0])
def test_format_then_parse_round_trips(value):
    settings = CalculatorSettings(precision=8, thousands_sep=True)
    text = format_result(value, settings).replace(",", "")
    assert evaluate(text) == pytest.approx(value, rel=1e-7)


def test_helpers():
    assert positional(1e-05) == "0.00001"
    assert positional(-10.0) == "-10"
    assert positional(2.5) == "2.5"
    assert group_thousands("1234.5678") == "1,234.5678"
    assert group_thousands("-999") == "-999"
