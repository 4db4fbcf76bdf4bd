"""Scrub gesture state machine.

Translates a generic pointer stream (down / move / up / cancel, in
rectangle-local coordinates) into a clamped chart-space position and a
resolved sample.

Phases::

    IDLE --(contact held >= activation_ms within jitter)--> ARMED
    ARMED --(move)--> ACTIVE
    ARMED / ACTIVE --(up | cancel | data change)--> IDLE

Arming is time based. The caller's clock reports elapsed time via ``tick``;
a move event arriving after the threshold also arms the gesture first. Moving
beyond the jitter tolerance before arming fails the gesture (it was a pan)
until the next pointer down.

Side effects are only *signalled* on the event bus:

 - ``SCRUB_STARTED`` on arming (consumer plays a haptic)
 - ``SCRUB_CHANGED`` whenever the ScrubState actually changes
 - ``SCRUB_SELECTION_CHANGED`` when the resolved sample index changes
 - ``SCRUB_ENDED`` on release, cancel or invalidation (consumer reverts its
   readout to the latest value)

Resolution policy defaults to NEAREST: ``round_half_up(x * (n - 1))``.
BLEND interpolates the value between the two bounding samples and reports
the nearest sample for labelling.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from balancechart.config import settings
from balancechart.services.event_bus import ChartEvent, EventBus

from .bounds import Bounds, compute_bounds
from .types import CanvasSize, Point, Sample, SampleSeries

__all__ = [
    "ScrubPhase",
    "PointerKind",
    "PointerEvent",
    "ResolutionPolicy",
    "ScrubResolution",
    "ScrubState",
    "ScrubController",
    "resolve_sample",
]

log = logging.getLogger(__name__)


class ScrubPhase(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    ACTIVE = "active"


class PointerKind(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    timestamp_ms: float = 0.0


class ResolutionPolicy(str, Enum):
    NEAREST = "nearest"
    BLEND = "blend"


@dataclass(frozen=True)
class ScrubResolution:
    index: int
    sample: Sample
    value: float


@dataclass(frozen=True)
class ScrubState:
    is_active: bool
    normalized_x: float
    normalized_y: float
    index: int
    sample: Sample
    resolved_value: float

    def canvas_position(self, size: CanvasSize) -> Point:
        return Point(
            size.padding + self.normalized_x * size.inner_width,
            size.padding + self.normalized_y * size.inner_height,
        )


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def resolve_sample(
    series: SampleSeries,
    normalized_x: float,
    policy: ResolutionPolicy = ResolutionPolicy.NEAREST,
) -> Optional[ScrubResolution]:
    """Resolve a normalized x position to a displayed sample / value."""
    n = len(series)
    if n == 0:
        return None
    pos = _clamp01(normalized_x) * (n - 1)
    nearest = min(max(int(math.floor(pos + 0.5)), 0), n - 1)
    sample = series[nearest]
    if policy is ResolutionPolicy.NEAREST or n == 1:
        return ScrubResolution(nearest, sample, sample.as_float)
    lo = min(int(math.floor(pos)), n - 1)
    hi = min(lo + 1, n - 1)
    frac = pos - lo
    v_lo = series[lo].as_float
    v_hi = series[hi].as_float
    return ScrubResolution(nearest, sample, v_lo + frac * (v_hi - v_lo))


class ScrubController:
    """Finite state machine for long-press-then-drag scrubbing."""

    def __init__(
        self,
        series: SampleSeries | None = None,
        bounds: Bounds | None = None,
        size: CanvasSize | None = None,
        *,
        bus: EventBus | None = None,
        activation_ms: float = settings.SCRUB_ACTIVATION_MS,
        jitter_tolerance: float = settings.SCRUB_JITTER_TOLERANCE,
        policy: ResolutionPolicy = ResolutionPolicy.NEAREST,
    ) -> None:
        if activation_ms < 0:
            raise ValueError("activation_ms must be >= 0")
        if jitter_tolerance < 0:
            raise ValueError("jitter_tolerance must be >= 0")
        self._series = series or SampleSeries()
        self._bounds = bounds or compute_bounds(self._series)
        self._size = size or CanvasSize(0.0, 0.0)
        self._bus = bus or EventBus()
        self._activation_ms = activation_ms
        self._jitter = jitter_tolerance
        self._policy = policy
        self._phase = ScrubPhase.IDLE
        self._state: ScrubState | None = None
        self._press: tuple[float, float, float] | None = None  # x, y, ts
        self._failed = False
        self._last_index = -1

    # Accessors --------------------------------------------------------
    @property
    def phase(self) -> ScrubPhase:
        return self._phase

    @property
    def state(self) -> ScrubState | None:
        return self._state

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def policy(self) -> ResolutionPolicy:
        return self._policy

    def can_scrub(self) -> bool:
        return len(self._series) >= 2

    def normalized_x_for(self, pointer_x: float) -> float:
        width = self._size.inner_width
        if width <= 0:
            return 0.0
        return _clamp01((pointer_x - self._size.padding) / width)

    # Event stream -----------------------------------------------------
    def handle(self, event: PointerEvent) -> ScrubState | None:
        if event.kind is PointerKind.DOWN:
            self.pointer_down(event.x, event.y, event.timestamp_ms)
        elif event.kind is PointerKind.MOVE:
            self.pointer_move(event.x, event.y, event.timestamp_ms)
        elif event.kind is PointerKind.UP:
            self.pointer_up()
        elif event.kind is PointerKind.CANCEL:
            self.cancel()
        return self._state

    def pointer_down(self, x: float, y: float, timestamp_ms: float) -> None:
        if self._phase is not ScrubPhase.IDLE:
            return  # second contact while scrubbing
        self._press = (x, y, timestamp_ms)
        self._failed = False

    def pointer_move(self, x: float, y: float, timestamp_ms: float) -> None:
        if self._phase is ScrubPhase.IDLE:
            if self._press is None or self._failed:
                return
            px, py, pts = self._press
            if timestamp_ms - pts >= self._activation_ms:
                if not self._arm():
                    return
            elif math.hypot(x - px, y - py) > self._jitter:
                self._failed = True
                return
            else:
                return
        self._phase = ScrubPhase.ACTIVE
        self._update(x)

    def tick(self, now_ms: float) -> bool:
        """Advance the activation timer; returns True if this call armed."""
        if self._phase is not ScrubPhase.IDLE or self._press is None or self._failed:
            return False
        if now_ms - self._press[2] < self._activation_ms:
            return False
        return self._arm()

    def activation_remaining(self, now_ms: float) -> float | None:
        """Milliseconds until a pending press may arm; None when nothing is pending."""
        if self._phase is not ScrubPhase.IDLE or self._press is None or self._failed:
            return None
        return max(0.0, self._activation_ms - (now_ms - self._press[2]))

    def pointer_up(self) -> None:
        self._end("released")

    def cancel(self) -> None:
        self._end("cancelled")

    def reset(self) -> None:
        """Drop every bit of gesture state without signalling."""
        self._phase = ScrubPhase.IDLE
        self._state = None
        self._press = None
        self._failed = False
        self._last_index = -1

    def update_data(
        self,
        series: SampleSeries,
        bounds: Bounds | None = None,
        size: CanvasSize | None = None,
    ) -> None:
        """Swap in new data / geometry; aborts a gesture in progress."""
        new_bounds = bounds or compute_bounds(series)
        new_size = size or self._size
        if series == self._series and new_bounds == self._bounds and new_size == self._size:
            return
        self._series = series
        self._bounds = new_bounds
        self._size = new_size
        if self._phase is not ScrubPhase.IDLE:
            log.debug("scrub invalidated by data/size change")
            self._end("invalidated")
        elif self._press is not None:
            self._failed = True

    # Internals --------------------------------------------------------
    def _arm(self) -> bool:
        if not self.can_scrub():
            log.debug("scrub not armed: %d sample(s)", len(self._series))
            self._failed = True
            return False
        if self._press is None:
            return False
        self._phase = ScrubPhase.ARMED
        self._bus.publish(ChartEvent.SCRUB_STARTED, None)
        self._update(self._press[0])
        return True

    def _update(self, pointer_x: float) -> None:
        nx = self.normalized_x_for(pointer_x)
        res = resolve_sample(self._series, nx, self._policy)
        if res is None:
            return
        state = ScrubState(
            is_active=True,
            normalized_x=nx,
            normalized_y=self._bounds.normalized_y(res.value),
            index=res.index,
            sample=res.sample,
            resolved_value=res.value,
        )
        if state == self._state:
            return
        self._state = state
        self._bus.publish(ChartEvent.SCRUB_CHANGED, state)
        if res.index != self._last_index:
            self._last_index = res.index
            self._bus.publish(ChartEvent.SCRUB_SELECTION_CHANGED, res.index)

    def _end(self, reason: str) -> None:
        was_scrubbing = self._phase is not ScrubPhase.IDLE
        self.reset()
        if was_scrubbing:
            self._bus.publish(ChartEvent.SCRUB_ENDED, {"reason": reason})
