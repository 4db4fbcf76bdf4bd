"""Charting engine.

Pure geometry for the balance sparkline and the interactive performance
chart. Nothing here imports Qt or matplotlib; the widgets in
``balancechart.components`` and ``charting.export`` consume the output.
"""

from .bounds import Bounds, compute_bounds  # noqa: F401
from .curves import build_curve, canvas_points, centered_marker, get_curve_strategy  # noqa: F401
from .gaps import GapStyle, gap_overlay_path, gap_segments  # noqa: F401
from .registry import ChartGeometry, ChartVariant, get_chart_variant, render_chart  # noqa: F401
from .reveal import fill_region, reveal_path  # noqa: F401
from .scrub import (  # noqa: F401
    PointerEvent,
    PointerKind,
    ResolutionPolicy,
    ScrubController,
    ScrubPhase,
    ScrubState,
)
from .types import CanvasSize, ChartPath, Point, Sample, SampleSeries  # noqa: F401
