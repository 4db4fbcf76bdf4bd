"""Reveal progress pacing.

The geometry core is a pure function of progress; this module produces the
progress values. Two shapes are offered:

 - ``reveal_samples``: deterministic list of per-frame progress values
   (fixed timestep, default 60 FPS) for tests and offline rendering.
 - ``RevealTimeline``: wall-clock driven; the owner passes ``now_ms`` from
   whatever timer it uses (QTimer, test harness). Restarted on every data
   change; publishes ``REVEAL_COMPLETED`` exactly once per run.

Reduced motion collapses both to an immediate full reveal.
"""

from __future__ import annotations

import math
from typing import List, Optional

from balancechart.config import settings
from balancechart.services.event_bus import ChartEvent, EventBus

from .easing import get_easing
from .reduced_motion import adjust_duration

__all__ = ["reveal_samples", "RevealTimeline"]


def reveal_samples(
    duration_ms: int,
    *,
    fps: int = settings.REVEAL_FPS,
    delay_ms: int = 0,
    easing: str = "ease-out",
) -> List[float]:
    """Per-frame progress values from 0.0 to exactly 1.0 (non-decreasing).

    Frames covering ``delay_ms`` hold at 0.0.
    """
    if fps <= 0:
        raise ValueError("fps must be > 0")
    if duration_ms < 0 or delay_ms < 0:
        raise ValueError("duration_ms and delay_ms must be >= 0")
    ease = get_easing(easing)
    duration_ms = adjust_duration(duration_ms)
    delay_ms = adjust_duration(delay_ms)
    if duration_ms == 0:
        return [0.0, 1.0]
    delay_frames = int(round(delay_ms * fps / 1000.0))
    frames = max(1, int(math.ceil(duration_ms * fps / 1000.0)))
    samples = [0.0] * delay_frames
    samples.extend(ease(i / frames) for i in range(frames + 1))
    samples[-1] = 1.0
    return samples


class RevealTimeline:
    def __init__(
        self,
        duration_ms: int = settings.INTERACTIVE_REVEAL_MS,
        *,
        delay_ms: int = 0,
        easing: str = "ease-out",
        bus: EventBus | None = None,
    ) -> None:
        if duration_ms < 0 or delay_ms < 0:
            raise ValueError("duration_ms and delay_ms must be >= 0")
        self._duration_ms = duration_ms
        self._delay_ms = delay_ms
        self._ease = get_easing(easing)
        self._bus = bus or EventBus()
        self._start_ms: Optional[float] = None
        self._completed = False
        self._last = 0.0

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def is_running(self) -> bool:
        return self._start_ms is not None and not self._completed

    @property
    def is_complete(self) -> bool:
        return self._completed

    @property
    def progress(self) -> float:
        """Last computed progress."""
        return self._last

    def start(self, now_ms: float) -> None:
        """(Re)start from 0; called whenever the plotted series changes."""
        self._start_ms = now_ms
        self._completed = False
        self._last = 0.0

    restart = start

    def finish(self) -> None:
        """Jump straight to the fully revealed state."""
        if self._start_ms is None:
            self._start_ms = 0.0
        self._set(1.0)

    def progress_at(self, now_ms: float) -> float:
        if self._start_ms is None:
            return 0.0
        if self._completed:
            return 1.0
        duration = adjust_duration(self._duration_ms)
        if duration == 0:
            return self._set(1.0)
        elapsed = now_ms - self._start_ms - adjust_duration(self._delay_ms)
        raw = min(1.0, max(0.0, elapsed / duration))
        # wall clocks can step backwards; never un-draw within one run
        return self._set(max(self._last, self._ease(raw) if raw < 1.0 else 1.0))

    def _set(self, value: float) -> float:
        self._last = value
        if value >= 1.0 and not self._completed:
            self._completed = True
            self._bus.publish(ChartEvent.REVEAL_COMPLETED, None)
        return value
