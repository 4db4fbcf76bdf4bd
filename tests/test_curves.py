"""Tests for canvas point mapping and curve strategies."""

from __future__ import annotations

import pytest

from balancechart.charting.bounds import compute_bounds
from balancechart.charting.curves import (
    LinearCurve,
    SmoothCurve,
    build_curve,
    canvas_points,
    centered_marker,
    get_curve_strategy,
    list_curve_strategies,
    register_curve_strategy,
)
from balancechart.charting.types import CanvasSize, CurveTo, LineTo, MoveTo, Point, points_from_pairs

from factories import make_series

SIZE = CanvasSize(216, 116)  # inner 200 x 100 with 8 padding


def test_canvas_points_positions():
    series = make_series([100, 110, 90])
    pts = canvas_points(series, compute_bounds(series), SIZE)
    assert pts == [Point(8, 58), Point(108, 8), Point(208, 108)]


@pytest.mark.parametrize("strategy", ["linear", "smooth"])
def test_both_strategies_yield_n_points_with_increasing_x(strategy):
    series = make_series([5, 3, 9, 9, 1, 4, 7])
    path = build_curve(series, compute_bounds(series), SIZE, strategy)
    ends = path.endpoints()
    assert len(ends) == len(series)
    assert all(a.x < b.x for a, b in zip(ends, ends[1:]))
    assert isinstance(path.commands[0], MoveTo)


def test_linear_emits_straight_segments():
    series = make_series([1, 2, 3, 2])
    path = build_curve(series, compute_bounds(series), SIZE, "linear")
    assert all(isinstance(c, LineTo) for c in path.commands[1:])


def _xy(p):
    return (p.x, p.y)


def test_smooth_control_points_use_tension_and_clamped_neighbours():
    pts = points_from_pairs([(0, 0), (10, 10), (20, 0)])
    curve = SmoothCurve(tension=0.3)
    # first segment: the missing left neighbour is points[0]
    c1, c2 = curve.control_points(pts, 0)
    assert _xy(c1) == pytest.approx((3.0, 3.0))
    assert _xy(c2) == pytest.approx((4.0, 10.0))
    # last segment: the missing right neighbour is points[-1]
    c1, c2 = curve.control_points(pts, 1)
    assert _xy(c1) == pytest.approx((16.0, 10.0))
    assert _xy(c2) == pytest.approx((17.0, 3.0))


def test_smooth_path_uses_cubic_segments():
    series = make_series([1, 4, 2, 8])
    path = build_curve(series, compute_bounds(series), SIZE, SmoothCurve())
    assert [type(c) for c in path.commands] == [MoveTo, CurveTo, CurveTo, CurveTo]


def test_single_sample_builds_no_path():
    series = make_series([50])
    assert build_curve(series, compute_bounds(series), SIZE) is None
    assert canvas_points(series, compute_bounds(series), SIZE) == []
    assert centered_marker(SIZE) == Point(108, 58)


def test_flat_series_sits_on_vertical_center():
    series = make_series([7, 7, 7])
    pts = canvas_points(series, compute_bounds(series), SIZE)
    assert {p.y for p in pts} == {58}


def test_strategy_registry():
    assert {"linear", "smooth"} <= set(list_curve_strategies())
    assert isinstance(get_curve_strategy("linear"), LinearCurve)
    with pytest.raises(KeyError):
        get_curve_strategy("spline.unknown")
    with pytest.raises(ValueError):
        register_curve_strategy(LinearCurve())
