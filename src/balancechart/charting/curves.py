"""Curve construction: canvas points and interchangeable path strategies.

Two strategies are registered by default:

 - ``linear``: straight segments between consecutive points (sparkline).
 - ``smooth``: cubic segments with Catmull-Rom derived control points and a
   fixed tension (interactive chart). Missing neighbours at either end are
   clamped to the nearest endpoint, never extrapolated.

Strategies expose per-segment emission (``append_segment``) so the reveal
animator and the gap overlay can reuse exactly the same geometry as the full
path.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from balancechart.config import settings

from .bounds import Bounds
from .types import CanvasSize, ChartPath, Point, SampleSeries

__all__ = [
    "CurveStrategy",
    "LinearCurve",
    "SmoothCurve",
    "canvas_points",
    "build_curve",
    "centered_marker",
    "register_curve_strategy",
    "get_curve_strategy",
    "list_curve_strategies",
]

log = logging.getLogger(__name__)


class CurveStrategy(Protocol):  # pragma: no cover - structural only
    name: str

    def append_segment(self, path: ChartPath, points: Sequence[Point], i: int) -> None:
        """Append the segment from ``points[i]`` to ``points[i + 1]``."""
        ...

    def build(self, points: Sequence[Point]) -> ChartPath: ...


class _SegmentCurve:
    name = "base"

    def append_segment(self, path: ChartPath, points: Sequence[Point], i: int) -> None:
        raise NotImplementedError

    def build(self, points: Sequence[Point]) -> ChartPath:
        path = ChartPath()
        if len(points) < 2:
            return path
        path.move_to(points[0])
        for i in range(len(points) - 1):
            self.append_segment(path, points, i)
        return path


class LinearCurve(_SegmentCurve):
    name = "linear"

    def append_segment(self, path: ChartPath, points: Sequence[Point], i: int) -> None:
        path.line_to(points[i + 1])


class SmoothCurve(_SegmentCurve):
    name = "smooth"

    def __init__(self, tension: float = settings.SMOOTH_TENSION) -> None:
        self.tension = tension

    def control_points(self, points: Sequence[Point], i: int) -> tuple[Point, Point]:
        last = len(points) - 1
        p0 = points[max(i - 1, 0)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(i + 2, last)]
        c1 = p1 + (p2 - p0).scaled(self.tension)
        c2 = p2 - (p3 - p1).scaled(self.tension)
        return c1, c2

    def append_segment(self, path: ChartPath, points: Sequence[Point], i: int) -> None:
        c1, c2 = self.control_points(points, i)
        path.curve_to(c1, c2, points[i + 1])


# ---------------- Strategy registry ------------------------------------------

_STRATEGIES: Dict[str, CurveStrategy] = {}


def register_curve_strategy(strategy: CurveStrategy) -> None:
    if strategy.name in _STRATEGIES:
        raise ValueError(f"Curve strategy already registered: {strategy.name}")
    _STRATEGIES[strategy.name] = strategy


def get_curve_strategy(name: str) -> CurveStrategy:
    strategy = _STRATEGIES.get(name)
    if strategy is None:
        raise KeyError(f"Unknown curve strategy: {name}")
    return strategy


def list_curve_strategies() -> List[str]:
    return sorted(_STRATEGIES)


register_curve_strategy(LinearCurve())
register_curve_strategy(SmoothCurve())


# ---------------- Geometry ---------------------------------------------------


def canvas_points(series: SampleSeries, bounds: Bounds, size: CanvasSize) -> List[Point]:
    """Map each sample onto the padded drawing rectangle.

    Returns an empty list for fewer than two samples; x positions are evenly
    spaced by index, not by timestamp.
    """
    n = len(series)
    if n < 2:
        return []
    pad = size.padding
    width = size.inner_width
    height = size.inner_height
    return [
        Point(
            pad + (i / (n - 1)) * width,
            pad + bounds.normalized_y(sample.as_float) * height,
        )
        for i, sample in enumerate(series)
    ]


def build_curve(
    series: SampleSeries,
    bounds: Bounds,
    size: CanvasSize,
    strategy: CurveStrategy | str = "linear",
) -> Optional[ChartPath]:
    """Full path for ``series`` or ``None`` when no curve can be drawn."""
    if isinstance(strategy, str):
        strategy = get_curve_strategy(strategy)
    if len(series) < 2:
        log.debug("build_curve: %d sample(s), no path constructed", len(series))
        return None
    return strategy.build(canvas_points(series, bounds, size))


def centered_marker(size: CanvasSize) -> Point:
    """Position of the static marker drawn for a single-sample series."""
    return size.center
