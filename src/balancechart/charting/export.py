"""Static chart export (PNG / SVG snapshots).

Draws a ``ChartGeometry`` with matplotlib path patches in canvas
coordinates (y grows downward, so the axes are inverted). Used for report
snapshots and visual baselines; the interactive surface is the Qt widget.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle, PathPatch
from matplotlib.path import Path as MplPath

from .gaps import GapStyle
from .registry import ChartGeometry
from .types import CanvasSize, ChartPath, ClosePath, CurveTo, LineTo, MoveTo

__all__ = ["to_mpl_path", "export_chart", "POSITIVE_COLOR", "NEGATIVE_COLOR"]

POSITIVE_COLOR = "#33b366"  # growth green
NEGATIVE_COLOR = "#f28073"  # soft coral


def to_mpl_path(path: ChartPath) -> MplPath:
    verts: list[Tuple[float, float]] = []
    codes: list[int] = []
    for cmd in path.commands:
        if isinstance(cmd, MoveTo):
            verts.append((cmd.to.x, cmd.to.y))
            codes.append(MplPath.MOVETO)
        elif isinstance(cmd, LineTo):
            verts.append((cmd.to.x, cmd.to.y))
            codes.append(MplPath.LINETO)
        elif isinstance(cmd, CurveTo):
            verts.extend(
                [
                    (cmd.control1.x, cmd.control1.y),
                    (cmd.control2.x, cmd.control2.y),
                    (cmd.to.x, cmd.to.y),
                ]
            )
            codes.extend([MplPath.CURVE4] * 3)
        elif isinstance(cmd, ClosePath):
            verts.append((0.0, 0.0))  # ignored by CLOSEPOLY
            codes.append(MplPath.CLOSEPOLY)
    if not verts:
        return MplPath(np.zeros((0, 2)))
    return MplPath(np.asarray(verts, dtype=float), codes)


def export_chart(
    geometry: ChartGeometry,
    size: CanvasSize,
    path: str,
    *,
    format: str = "png",
    dpi: int = 120,
    positive: bool = True,
    gap_style: GapStyle = GapStyle(),
) -> None:
    """Write ``geometry`` to ``path`` as PNG or SVG."""
    fmt = format.lower()
    if fmt not in {"png", "svg"}:
        raise ValueError("format must be 'png' or 'svg'")
    color = POSITIVE_COLOR if positive else NEGATIVE_COLOR
    fig = Figure(figsize=(size.width / dpi, size.height / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, size.width)
    ax.set_ylim(size.height, 0)
    ax.set_axis_off()
    if not geometry.fill.is_empty:
        ax.add_patch(PathPatch(to_mpl_path(geometry.fill), facecolor=color, alpha=0.15, lw=0))
    if not geometry.stroke.is_empty:
        ax.add_patch(
            PathPatch(
                to_mpl_path(geometry.stroke),
                facecolor="none",
                edgecolor=color,
                lw=2.5,
                capstyle="round",
                joinstyle="round",
            )
        )
    if not geometry.gap_overlay.is_empty:
        ax.add_patch(
            PathPatch(
                to_mpl_path(geometry.gap_overlay),
                facecolor="none",
                edgecolor=color,
                alpha=gap_style.opacity,
                lw=gap_style.line_width,
                linestyle=(0, gap_style.dash),
            )
        )
    for marker in (geometry.end_marker, geometry.single_marker):
        if marker is not None:
            ax.add_patch(Circle((marker.x, marker.y), 8, color=color, alpha=0.2))
            ax.add_patch(Circle((marker.x, marker.y), 4, color=color))
    if geometry.crosshair is not None:
        ax.axvline(geometry.crosshair.x, color="black", alpha=0.3, lw=1)
        ax.add_patch(Circle((geometry.crosshair.x, geometry.crosshair.y), 6, color=color))
    fig.savefig(path, format=fmt, dpi=dpi if fmt == "png" else None)
