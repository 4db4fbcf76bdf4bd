"""Chart variant registry and the render function.

A variant bundles the knobs that distinguish the sparkline from the
interactive chart (curve strategy, bounds padding, overlays, reveal pacing).
``render_chart`` is the single pure entry point the consumer calls on every
redraw trigger: series change, resize, reveal tick or scrub update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, List, Optional

from balancechart.config import settings

from .bounds import Bounds, compute_bounds
from .curves import canvas_points, centered_marker, get_curve_strategy
from .gaps import gap_overlay_path
from .reveal import clamp_progress, fill_region, reveal_path
from .scrub import ScrubState
from .types import CanvasSize, ChartPath, Point, SampleSeries

__all__ = [
    "ChartVariant",
    "ChartGeometry",
    "register_chart_variant",
    "get_chart_variant",
    "list_chart_variants",
    "render_chart",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartVariant:
    """Rendering profile.

    Attributes:
        name: Registry key (e.g. 'sparkline').
        strategy: Curve strategy name ('linear' / 'smooth').
        description: Human readable summary.
        bounds_padding: Fraction of the range added above and below.
        bounds_min_range: Minimum visible range as a fraction of |max|.
        show_end_marker: Draw a dot at the last point once fully revealed.
        gap_overlay: Produce the dashed overlay for interpolated samples.
        reveal_ms / reveal_delay_ms: Suggested reveal pacing for the owner clock.
    """

    name: str
    strategy: str
    description: str = ""
    bounds_padding: float = 0.0
    bounds_min_range: float = 0.0
    show_end_marker: bool = True
    gap_overlay: bool = False
    reveal_ms: int = settings.INTERACTIVE_REVEAL_MS
    reveal_delay_ms: int = 0


@dataclass
class ChartGeometry:
    """Everything a rendering surface needs for one frame."""

    stroke: ChartPath = field(default_factory=ChartPath)
    fill: ChartPath = field(default_factory=ChartPath)
    gap_overlay: ChartPath = field(default_factory=ChartPath)
    bounds: Optional[Bounds] = None
    points: List[Point] = field(default_factory=list)
    end_marker: Optional[Point] = None
    single_marker: Optional[Point] = None
    crosshair: Optional[Point] = None
    progress: float = 0.0
    reveal_complete: bool = False
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.stroke.is_empty and self.single_marker is None


_VARIANTS: Dict[str, ChartVariant] = {}


def register_chart_variant(variant: ChartVariant) -> None:
    if variant.name in _VARIANTS:
        raise ValueError(f"Chart variant already registered: {variant.name}")
    get_curve_strategy(variant.strategy)  # fail fast on unknown strategy
    _VARIANTS[variant.name] = variant


def get_chart_variant(name: str) -> ChartVariant:
    variant = _VARIANTS.get(name)
    if variant is None:
        raise KeyError(f"Unknown chart variant: {name}")
    return variant


def list_chart_variants() -> Dict[str, str]:
    return {k: v.description for k, v in _VARIANTS.items()}


def variant_bounds(series: SampleSeries, variant: ChartVariant) -> Bounds:
    return compute_bounds(
        series,
        padding_fraction=variant.bounds_padding,
        min_range_fraction=variant.bounds_min_range,
    )


def render_chart(
    series: SampleSeries,
    size: CanvasSize,
    progress: float = 1.0,
    variant: ChartVariant | str = "sparkline",
    *,
    bounds: Bounds | None = None,
    scrub: ScrubState | None = None,
    transitioning: bool = False,
) -> ChartGeometry:
    """Compute the frame geometry: (series, bounds, progress, scrub) -> geometry.

    ``bounds`` defaults to the variant's padded bounds over ``series``. The
    crosshair is suppressed while ``transitioning`` (timeframe switch in
    flight) and whenever the series cannot be scrubbed.
    """
    if isinstance(variant, str):
        variant = get_chart_variant(variant)
    start = perf_counter()
    p = clamp_progress(progress)
    geo = ChartGeometry(progress=p)
    geo.meta["variant"] = variant.name
    if series.is_empty:
        log.debug("render_chart: empty series, nothing to draw")
        geo.meta["build_ms"] = (perf_counter() - start) * 1000.0
        return geo
    geo.bounds = bounds or variant_bounds(series, variant)
    if series.is_degenerate:
        geo.single_marker = centered_marker(size)
        geo.reveal_complete = p >= 1.0
        geo.meta["build_ms"] = (perf_counter() - start) * 1000.0
        return geo

    strategy = get_curve_strategy(variant.strategy)
    geo.points = canvas_points(series, geo.bounds, size)
    geo.stroke = reveal_path(geo.points, p, strategy)
    geo.fill = fill_region(geo.stroke, size)
    if variant.gap_overlay and series.has_gaps:
        geo.gap_overlay = gap_overlay_path(series, geo.points, strategy, p)
    geo.reveal_complete = p >= 1.0
    if geo.reveal_complete and variant.show_end_marker:
        geo.end_marker = geo.points[-1]
    if scrub is not None and scrub.is_active and not transitioning:
        geo.crosshair = scrub.canvas_position(size)
    geo.meta["build_ms"] = (perf_counter() - start) * 1000.0
    return geo


# ---------------- Built-in variants -----------------------------------------

register_chart_variant(
    ChartVariant(
        name="sparkline",
        strategy="linear",
        description="Compact axis-free balance trend",
        reveal_ms=settings.SPARKLINE_REVEAL_MS,
        reveal_delay_ms=settings.SPARKLINE_REVEAL_DELAY_MS,
    )
)
register_chart_variant(
    ChartVariant(
        name="interactive",
        strategy="smooth",
        description="Smooth scrubbable performance chart",
        bounds_padding=settings.BOUNDS_PADDING_FRACTION,
        bounds_min_range=settings.BOUNDS_MIN_RANGE_FRACTION,
        gap_overlay=True,
        reveal_ms=settings.INTERACTIVE_REVEAL_MS,
    )
)
