"""Tests for value bounds and vertical normalization."""

from __future__ import annotations

import pytest

from balancechart.charting.bounds import Bounds, compute_bounds
from balancechart.charting.types import SampleSeries

from factories import make_series


def test_three_point_scenario_bounds_and_midline():
    series = make_series([100, 110, 90])
    b = compute_bounds(series)
    assert (b.min_value, b.max_value) == (90, 110)
    assert b.normalized_y(100) == 0.5


def test_extremes_map_to_top_and_bottom():
    b = compute_bounds(make_series([3.5, -2.0, 7.25, 1.0]))
    assert b.normalized_y(7.25) == 0.0
    assert b.normalized_y(-2.0) == 1.0


def test_flat_series_maps_to_midline():
    series = make_series([42, 42, 42, 42])
    b = compute_bounds(series)
    assert b.is_flat
    assert all(b.normalized_y(v) == 0.5 for v in series.values())


def test_empty_series_does_not_raise():
    b = compute_bounds(SampleSeries())
    assert b == Bounds(0.0, 0.0)
    assert b.normalized_y(123) == 0.5


def test_value_at_inverts_normalized_y():
    b = Bounds(90.0, 110.0)
    for v in (90.0, 95.5, 100.0, 110.0):
        assert b.value_at(b.normalized_y(v)) == pytest.approx(v)


def test_decimal_values_accepted():
    from decimal import Decimal

    b = compute_bounds(make_series([Decimal("10.50"), Decimal("12.50")]))
    assert b.min_value == 10.5 and b.max_value == 12.5


def test_padding_widens_range():
    b = compute_bounds(make_series([100, 200]), padding_fraction=0.1)
    assert b.min_value == pytest.approx(90)
    assert b.max_value == pytest.approx(210)


def test_min_range_keeps_flat_series_visible():
    b = compute_bounds(make_series([1000, 1000]), padding_fraction=0.1, min_range_fraction=0.02)
    # effective range 20 -> padding 2 each side
    assert b.min_value == pytest.approx(998)
    assert b.max_value == pytest.approx(1002)
    assert not b.is_flat
    assert b.normalized_y(1000) == pytest.approx(0.5)


def test_invalid_bounds_rejected():
    with pytest.raises(ValueError):
        Bounds(5.0, 1.0)
    with pytest.raises(ValueError):
        compute_bounds(make_series([1, 2]), padding_fraction=-0.1)
