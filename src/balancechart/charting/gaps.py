"""Gap styling for interpolated (estimated) samples.

A segment borders a gap when either of its endpoints is interpolated. The
overlay is an extra render pass on the same geometry as the primary curve;
the primary path itself is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .curves import CurveStrategy, get_curve_strategy
from .reveal import revealed_point_count
from .types import ChartPath, Point, SampleSeries

__all__ = ["GapStyle", "gap_segments", "gap_overlay_path"]


@dataclass(frozen=True)
class GapStyle:
    opacity: float = 0.5
    dash: Tuple[float, float] = (4.0, 4.0)
    line_width: float = 2.0


def gap_segments(series: SampleSeries) -> List[Tuple[int, int]]:
    out: List[Tuple[int, int]] = []
    for i in range(len(series) - 1):
        if series[i].is_interpolated or series[i + 1].is_interpolated:
            out.append((i, i + 1))
    return out


def gap_overlay_path(
    series: SampleSeries,
    points: Sequence[Point],
    strategy: CurveStrategy | str = "linear",
    progress: float = 1.0,
) -> ChartPath:
    """Disjoint sub-paths covering every gap segment already revealed.

    A segment joins the overlay once the reveal has fully passed its end
    point.
    """
    if isinstance(strategy, str):
        strategy = get_curve_strategy(strategy)
    path = ChartPath()
    if len(points) < 2 or len(points) != len(series):
        return path
    reached = revealed_point_count(points, progress)
    for i, j in gap_segments(series):
        if j >= reached:
            break
        path.move_to(points[i])
        strategy.append_segment(path, points, i)
    return path
