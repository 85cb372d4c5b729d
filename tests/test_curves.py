import math

import numpy as np
import pytest

from swatch_studio.curves import (
    Bezier,
    CurveKind,
    EaseIn,
    EaseInOut,
    EaseOut,
    Linear,
    curve_from_kind,
    curve_param,
    parse_curve_kind,
    plot_curve,
    with_param,
)


def test_linear_scales_by_factor():
    assert Linear().sample(0.3) == pytest.approx(0.3)
    assert Linear(2.0).sample(0.25) == pytest.approx(0.5)
    # no clamping: extrapolation relies on values past 1
    assert Linear(2.0).sample(0.75) == pytest.approx(1.5)


def test_ease_in_out_are_mirrors():
    assert EaseIn(2.0).sample(0.5) == pytest.approx(0.25)
    assert EaseOut(2.0).sample(0.5) == pytest.approx(0.75)
    for e in (0.5, 2.0, 3.3):
        for t in np.linspace(0.0, 1.0, 11):
            t = float(t)
            assert EaseOut(e).sample(t) == pytest.approx(1.0 - EaseIn(e).sample(1.0 - t))


def test_ease_in_out_continuous_at_half():
    c = EaseInOut(3.0)
    assert c.sample(0.0) == pytest.approx(0.0)
    assert c.sample(1.0) == pytest.approx(1.0)
    assert c.sample(0.5) == pytest.approx(0.5)
    assert c.sample(0.5 - 1e-9) == pytest.approx(0.5, abs=1e-6)
    assert c.sample(0.25) == pytest.approx(0.5 * 0.5**3)
    assert c.sample(0.75) == pytest.approx(1.0 - 0.5 * 0.5**3)


def test_bezier_is_scalar_cubic():
    b = Bezier()
    assert b.sample(0.0) == pytest.approx(0.0)
    assert b.sample(1.0) == pytest.approx(1.0)
    assert b.sample(0.5) == pytest.approx(0.5)
    # Bernstein weights sum to one
    flat = Bezier(0.2, 0.2, 0.2, 0.2)
    for t in (0.0, 0.3, 0.9):
        assert flat.sample(t) == pytest.approx(0.2)


def test_defaults_per_kind():
    for kind in CurveKind:
        assert curve_from_kind(kind).kind is kind
    assert curve_from_kind(CurveKind.LINEAR) == Linear(1.0)
    assert curve_from_kind(CurveKind.EASE_OUT) == EaseOut(2.0)
    assert curve_from_kind(CurveKind.BEZIER) == Bezier(0.0, 0.0, 1.0, 1.0)


def test_with_param_keeps_kind():
    assert with_param(Linear(), 1.5) == Linear(1.5)
    assert with_param(EaseInOut(), 4) == EaseInOut(4.0)
    assert with_param(Linear(1.5), math.nan) == Linear(1.5)
    assert with_param(Bezier(), 3.0) == Bezier()
    assert curve_param(EaseIn(1.25)) == 1.25
    assert curve_param(Bezier()) is None


def test_parse_curve_kind():
    assert parse_curve_kind("EaseInOut") is CurveKind.EASE_IN_OUT
    assert parse_curve_kind("ease_in") is CurveKind.EASE_IN
    assert parse_curve_kind("BEZIER") is CurveKind.BEZIER
    assert parse_curve_kind("wiggle") is CurveKind.LINEAR


def test_plot_curve():
    assert plot_curve(Linear(), 3) == [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0)]
    pts = plot_curve(EaseIn(), 0)
    assert len(pts) == 2 and pts[-1] == (1.0, 1.0)


def test_with_param_clamps_to_editor_range():
    assert with_param(Linear(), math.inf) == Linear(2.0)
    assert with_param(Linear(), -3.0) == Linear(0.1)
    assert with_param(EaseIn(), -1.0) == EaseIn(0.5)
    assert with_param(EaseOut(), 1e9) == EaseOut(5.0)


def test_integer_powers_keep_negative_bases():
    assert EaseIn(2.0).sample(-0.5) == pytest.approx(0.25)
    assert EaseIn(3.0).sample(-0.5) == pytest.approx(-0.125)
    assert EaseOut(2.0).sample(1.5) == pytest.approx(0.75)
    # fractional powers of a negative base stay real
    assert EaseIn(0.5).sample(-0.25) == 0.0


@pytest.mark.parametrize("curve", [EaseIn(-1.0), EaseOut(-1.0), EaseInOut(-2.5)])
def test_negative_exponents_do_not_raise(curve):
    values = [curve.sample(t) for t in (0.0, 1e-300, 0.5, 1.0)]
    assert all(isinstance(v, float) for v in values)
    assert math.inf in values or -math.inf in values
