import math

import pytest

from plugins.scientific_calculator.core import (
    CalculatorSettings,
    CurvePoint,
    SamplingError,
    count_segments,
    sample_curve,
)
from plugins.scientific_calculator.core import sampler
from plugins.scientific_calculator.core.sampler import substitute

RAD = CalculatorSettings(angle_unit="rad")


def test_sine_curve_never_raises_and_is_ordered():
    curve = sample_curve("sin(x)", (-10, 10), 201, RAD)
    points = list(curve)
    assert len(points) == len(curve) == 201
    assert points[0].x == -10 and points[-1].x == 10
    assert all(a.x < b.x for a, b in zip(points, points[1:]))
    assert all(p.y is None or math.isfinite(p.y) for p in points)
    assert points[100].y == pytest.approx(0.0, abs=1e-12)
    assert count_segments(points) == 1


def test_curve_is_restartable():
    curve = sample_curve("x^2+1", (-2, 2), 9, RAD)
    assert list(curve) == list(curve)


def test_negative_samples_keep_precedence():
    ys = [point.y for point in sample_curve("x^2", (-3, 3), 3, RAD)]
    assert ys == [9.0, 0.0, 9.0]


def test_domain_errors_become_gaps():
    points = list(sample_curve("sqrt(x)", (-1, 1), 5, RAD))
    assert [p.present for p in points] == [False, False, True, True, True]
    assert points[0] == CurvePoint(-1.0, None)
    assert points[-1].y == pytest.approx(1.0)
    assert count_segments(points) == 1


def test_division_by_zero_splits_the_line():
    points = list(sample_curve("1/x", (-1, 1), 3, RAD))
    assert [p.y for p in points] == [-1.0, None, 1.0]
    assert count_segments(points) == 2


def test_syntax_error_yields_only_gaps():
    points = list(sample_curve("sin(x", (-1, 1), 4, RAD))
    assert all(not p.present for p in points)
    assert count_segments(points) == 0


def test_deeply_nested_template_yields_only_gaps():
    template = "(" * 300 + "x" + ")" * 300
    points = list(sample_curve(template, (-1, 1), 3, RAD))
    assert [p.x for p in points] == [-1.0, 0.0, 1.0]
    assert count_segments(points) == 0


def test_unexpected_evaluator_failure_is_a_gap(monkeypatch):
    def fake_evaluate(text, settings):
        if "(0)" in text:
            raise OverflowError("numerical result out of range")
        return 1.0

    monkeypatch.setattr(sampler, "evaluate", fake_evaluate)
    points = list(sample_curve("x", (-1, 1), 3, RAD))
    assert [p.y for p in points] == [1.0, None, 1.0]


def test_tiny_samples_use_positional_notation():
    points = list(sample_curve("x", (0, 1e-6), 3, RAD))
    assert [p.y for p in points] == pytest.approx([0.0, 5e-7, 1e-6])


def test_degree_mode_is_default():
    points = list(sample_curve("sin(x)", (0, 90), 2))
    assert points[-1].y == pytest.approx(1.0)


def test_substitute_parenthesizes_values():
    assert substitute("x+x", 2.0) == "(2)+(2)"
    assert substitute("-x", -0.5) == "-(-0.5)"


@pytest.mark.parametrize(
    ("domain", "count"),
    [((1, 1), 10), ((2, 1), 10), ((0, 1), 1), ((0, math.inf), 10), ((math.nan, 1), 10)],
)
def test_invalid_requests_raise_eagerly(domain, count):
    with pytest.raises(SamplingError):
        sample_curve("x", domain, count)
