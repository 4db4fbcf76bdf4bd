"""Progressive reveal of a chart path.

Reveal pacing uses the cumulative straight-line distance between canvas
points, not the Bezier arc length. The segment crossing the target length is
emitted as a straight line to the chord position, so with the smooth strategy
the leading fragment is always straight while the animation runs.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .curves import CurveStrategy, get_curve_strategy
from .types import CanvasSize, ChartPath, Point

__all__ = [
    "clamp_progress",
    "segment_lengths",
    "reveal_path",
    "revealed_point_count",
    "fill_region",
]


def clamp_progress(progress: float) -> float:
    p = float(progress)
    if math.isnan(p) or p <= 0.0:
        return 0.0
    if p >= 1.0:
        return 1.0
    return p


def segment_lengths(points: Sequence[Point]) -> List[float]:
    return [points[i].distance_to(points[i + 1]) for i in range(len(points) - 1)]


def _reveal_cut(points: Sequence[Point], progress: float) -> Tuple[int, float]:
    """Return (complete segment count, fraction of the next segment)."""
    lengths = segment_lengths(points)
    target = sum(lengths) * progress
    current = 0.0
    for i, seg in enumerate(lengths):
        if current + seg <= target:
            current += seg
            continue
        remaining = target - current
        fraction = remaining / seg if seg > 0 else 0.0
        return i, fraction
    return len(lengths), 0.0


def reveal_path(
    points: Sequence[Point],
    progress: float,
    strategy: CurveStrategy | str = "linear",
) -> ChartPath:
    """Partial path representing what has animated into view at ``progress``.

    ``progress`` is clamped to [0, 1]. 0 yields an empty path, 1 the complete
    strategy path.
    """
    if isinstance(strategy, str):
        strategy = get_curve_strategy(strategy)
    p = clamp_progress(progress)
    if len(points) < 2 or p == 0.0:
        return ChartPath()
    if p == 1.0:
        return strategy.build(points)
    complete, fraction = _reveal_cut(points, p)
    path = ChartPath()
    path.move_to(points[0])
    for i in range(complete):
        strategy.append_segment(path, points, i)
    if complete < len(points) - 1 and fraction > 0.0:
        path.line_to(points[complete].lerp(points[complete + 1], fraction))
    return path


def revealed_point_count(points: Sequence[Point], progress: float) -> int:
    """Number of canvas points fully reached by the reveal at ``progress``."""
    p = clamp_progress(progress)
    if len(points) < 2 or p == 0.0:
        return 0
    if p == 1.0:
        return len(points)
    complete, _fraction = _reveal_cut(points, p)
    return complete + 1


def fill_region(revealed: ChartPath, size: CanvasSize) -> ChartPath:
    """Close the revealed stroke down to the canvas baseline for a gradient fill."""
    ends = revealed.endpoints()
    if len(ends) < 2:
        return ChartPath()
    region = ChartPath(list(revealed.commands))
    region.line_to(Point(ends[-1].x, size.height))
    region.line_to(Point(ends[0].x, size.height))
    region.close()
    return region
