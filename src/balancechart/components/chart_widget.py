"""Chart widgets.

Thin PyQt6 surfaces over the pure geometry core:

 - ``SparklineWidget``: linear, no scrubbing, reveal after a short delay.
 - ``PerformanceChartWidget``: smooth curve, gradient fill, dashed gap
   overlay and long-press scrubbing with a crosshair.

Each widget owns one ``EventBus`` shared by its RevealTimeline and
ScrubController and re-emits those chart events as Qt signals. Geometry is
recomputed on every paint from (series, size, progress, scrub state); the
widget never caches paths across frames.

API:
    w = PerformanceChartWidget()
    w.set_series(series)          # restarts the reveal, aborts any scrub
    w.scrubChanged.connect(...)   # ScrubState while dragging
    w.scrubEnded.connect(...)     # revert readout to latest value
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from PyQt6.QtCore import QElapsedTimer, QPointF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QLinearGradient, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import QWidget

from balancechart.charting.gaps import GapStyle
from balancechart.charting.registry import ChartGeometry, get_chart_variant, render_chart, variant_bounds
from balancechart.charting.scrub import PointerEvent, PointerKind, ScrubController, ScrubState
from balancechart.charting.types import CanvasSize, ChartPath, ClosePath, CurveTo, LineTo, MoveTo, SampleSeries
from balancechart.config import settings
from balancechart.design.reduced_motion import is_reduced_motion
from balancechart.design.reveal_clock import RevealTimeline
from balancechart.services.event_bus import ChartEvent, Event, EventBus

__all__ = ["to_qpainter_path", "SparklineWidget", "PerformanceChartWidget"]

log = logging.getLogger(__name__)

_POSITIVE = QColor(51, 179, 102)
_NEGATIVE = QColor(242, 128, 115)


def to_qpainter_path(path: ChartPath) -> QPainterPath:
    qp = QPainterPath()
    for cmd in path.commands:
        if isinstance(cmd, MoveTo):
            qp.moveTo(cmd.to.x, cmd.to.y)
        elif isinstance(cmd, LineTo):
            qp.lineTo(cmd.to.x, cmd.to.y)
        elif isinstance(cmd, CurveTo):
            qp.cubicTo(
                cmd.control1.x, cmd.control1.y, cmd.control2.x, cmd.control2.y, cmd.to.x, cmd.to.y
            )
        elif isinstance(cmd, ClosePath):
            qp.closeSubpath()
    return qp


class _ChartWidget(QWidget):
    revealCompleted = pyqtSignal()

    VARIANT = "sparkline"
    LINE_WIDTH = 2.0

    def __init__(self, parent: Optional[QWidget] = None, *, positive: bool = True) -> None:
        super().__init__(parent)
        self._variant = get_chart_variant(self.VARIANT)
        self._series = SampleSeries()
        self._positive = positive
        self._bus = EventBus()
        self._timeline = RevealTimeline(
            self._variant.reveal_ms, delay_ms=self._variant.reveal_delay_ms, bus=self._bus
        )
        self._clock = QElapsedTimer()
        self._clock.start()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, 1000 // max(1, settings.REVEAL_FPS)))
        self._frame_timer.timeout.connect(self._on_frame)  # type: ignore[attr-defined]
        self._bus.subscribe(ChartEvent.REVEAL_COMPLETED, self._on_reveal_completed)

    # Data ---------------------------------------------------------------
    def set_series(self, series: SampleSeries) -> None:
        log.debug("%s: new series with %d sample(s)", self._variant.name, len(series))
        self._series = series
        self._on_data_changed()
        self._timeline.restart(self.now_ms())
        if is_reduced_motion():
            self._timeline.finish()
        else:
            self._frame_timer.start()
        self.update()

    def series(self) -> SampleSeries:
        return self._series

    def set_positive(self, positive: bool) -> None:
        self._positive = positive
        self.update()

    def bus(self) -> EventBus:
        return self._bus

    def progress(self) -> float:
        return self._timeline.progress

    def canvas_size(self) -> CanvasSize:
        return CanvasSize(float(self.width()), float(self.height()))

    def now_ms(self) -> float:
        return float(self._clock.elapsed())

    def geometry_for_frame(self) -> ChartGeometry:
        return render_chart(
            self._series, self.canvas_size(), self._timeline.progress, self._variant
        )

    # Hooks ----------------------------------------------------------------
    def _on_data_changed(self) -> None:
        pass

    def _on_frame(self) -> None:
        self._timeline.progress_at(self.now_ms())
        if self._timeline.is_complete:
            self._frame_timer.stop()
        self.update()

    def _on_reveal_completed(self, _evt: Event) -> None:
        self.revealCompleted.emit()

    # Painting -----------------------------------------------------------
    def _line_color(self) -> QColor:
        return QColor(_POSITIVE if self._positive else _NEGATIVE)

    def paintEvent(self, event) -> None:  # noqa: N802 - Qt override
        geo = self.geometry_for_frame()
        if geo.is_empty:
            return
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            self._paint_geometry(painter, geo)
        finally:
            painter.end()

    def _paint_geometry(self, painter: QPainter, geo: ChartGeometry) -> None:
        color = self._line_color()
        if not geo.fill.is_empty:
            grad = QLinearGradient(0, 0, 0, self.height())
            for stop, alpha in ((0.0, 0.3), (0.5, 0.1), (1.0, 0.0)):
                c = QColor(color)
                c.setAlphaF(alpha)
                grad.setColorAt(stop, c)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(grad))
            painter.drawPath(to_qpainter_path(geo.fill))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        if not geo.stroke.is_empty:
            pen = QPen(color, self.LINE_WIDTH)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.drawPath(to_qpainter_path(geo.stroke))
        for marker in (geo.end_marker, geo.single_marker):
            if marker is None:
                continue
            halo = QColor(color)
            halo.setAlphaF(0.2)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(halo)
            painter.drawEllipse(QPointF(marker.x, marker.y), 8.0, 8.0)
            painter.setBrush(color)
            painter.drawEllipse(QPointF(marker.x, marker.y), 4.0, 4.0)


class SparklineWidget(_ChartWidget):
    VARIANT = "sparkline"
    LINE_WIDTH = 2.0

    def __init__(self, parent: Optional[QWidget] = None, *, positive: bool = True) -> None:
        super().__init__(parent, positive=positive)
        self.setMinimumHeight(60)


class PerformanceChartWidget(_ChartWidget):
    scrubStarted = pyqtSignal()
    scrubChanged = pyqtSignal(object)  # ScrubState
    scrubSelectionChanged = pyqtSignal(int)
    scrubEnded = pyqtSignal()

    VARIANT = "interactive"
    LINE_WIDTH = 2.5

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        positive: bool = True,
        gap_style: GapStyle = GapStyle(),
    ) -> None:
        super().__init__(parent, positive=positive)
        self._gap_style = gap_style
        self._transitioning = False
        self._scrub = ScrubController(bus=self._bus)
        self._arm_timer = QTimer(self)
        self._arm_timer.setSingleShot(True)
        # coarse timers may fire up to 5% early, before the press qualifies
        self._arm_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._arm_timer.timeout.connect(self._on_arm_timeout)  # type: ignore[attr-defined]
        self._bus.subscribe(ChartEvent.SCRUB_STARTED, lambda _e: self.scrubStarted.emit())
        self._bus.subscribe(ChartEvent.SCRUB_CHANGED, self._on_scrub_changed)
        self._bus.subscribe(
            ChartEvent.SCRUB_SELECTION_CHANGED,
            lambda e: self.scrubSelectionChanged.emit(int(e.payload)),
        )
        self._bus.subscribe(ChartEvent.SCRUB_ENDED, self._on_scrub_ended)
        self.setMinimumHeight(160)

    # Scrub --------------------------------------------------------------
    def scrub_controller(self) -> ScrubController:
        return self._scrub

    def scrub_state(self) -> Optional[ScrubState]:
        return self._scrub.state

    def set_transitioning(self, transitioning: bool) -> None:
        """Hide the crosshair while a timeframe switch is in flight."""
        self._transitioning = transitioning
        self.update()

    def feed_pointer(self, event: PointerEvent) -> Optional[ScrubState]:
        state = self._scrub.handle(event)
        self.update()
        return state

    def _sync_scrub_data(self) -> None:
        self._scrub.update_data(
            self._series, variant_bounds(self._series, self._variant), self.canvas_size()
        )

    def _on_data_changed(self) -> None:
        self._arm_timer.stop()
        self._sync_scrub_data()

    def _on_arm_timeout(self) -> None:
        now = self.now_ms()
        if not self._scrub.tick(now):
            remaining = self._scrub.activation_remaining(now)
            if remaining:
                self._arm_timer.start(max(1, int(math.ceil(remaining))))
        self.update()

    def _on_scrub_changed(self, evt: Event) -> None:
        self.scrubChanged.emit(evt.payload)

    def _on_scrub_ended(self, _evt: Event) -> None:
        self._arm_timer.stop()
        self.scrubEnded.emit()

    def geometry_for_frame(self) -> ChartGeometry:
        return render_chart(
            self._series,
            self.canvas_size(),
            self._timeline.progress,
            self._variant,
            scrub=self._scrub.state,
            transitioning=self._transitioning,
        )

    # Qt events ----------------------------------------------------------
    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self._sync_scrub_data()

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        pos = event.position()
        self.feed_pointer(PointerEvent(PointerKind.DOWN, pos.x(), pos.y(), self.now_ms()))
        self._arm_timer.start(int(settings.SCRUB_ACTIVATION_MS))

    def mouseMoveEvent(self, event) -> None:  # noqa: N802
        pos = event.position()
        self.feed_pointer(PointerEvent(PointerKind.MOVE, pos.x(), pos.y(), self.now_ms()))

    def mouseReleaseEvent(self, event) -> None:  # noqa: N802
        self._arm_timer.stop()
        pos = event.position()
        self.feed_pointer(PointerEvent(PointerKind.UP, pos.x(), pos.y(), self.now_ms()))

    def leaveEvent(self, event) -> None:  # noqa: N802
        super().leaveEvent(event)
        if self._scrub.state is not None:
            self.feed_pointer(PointerEvent(PointerKind.CANCEL))

    # Painting -----------------------------------------------------------
    def _paint_geometry(self, painter: QPainter, geo: ChartGeometry) -> None:
        super()._paint_geometry(painter, geo)
        color = self._line_color()
        if not geo.gap_overlay.is_empty:
            dashed = QColor(color)
            dashed.setAlphaF(self._gap_style.opacity)
            pen = QPen(dashed, self._gap_style.line_width)
            # Qt dash lengths are in units of pen width
            pen.setDashPattern([d / self._gap_style.line_width for d in self._gap_style.dash])
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawPath(to_qpainter_path(geo.gap_overlay))
        if geo.crosshair is not None:
            guide = QColor(0, 0, 0)
            guide.setAlphaF(0.3)
            painter.setPen(QPen(guide, 1.0))
            painter.drawLine(QPointF(geo.crosshair.x, 0), QPointF(geo.crosshair.x, self.height()))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QColor(255, 255, 255))
            painter.drawEllipse(QPointF(geo.crosshair.x, geo.crosshair.y), 10.0, 10.0)
            painter.setBrush(color)
            painter.drawEllipse(QPointF(geo.crosshair.x, geo.crosshair.y), 6.0, 6.0)
