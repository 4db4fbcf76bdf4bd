"""Tests for the scrub gesture state machine."""

from __future__ import annotations

import pytest

from balancechart.charting.bounds import compute_bounds
from balancechart.charting.scrub import (
    PointerEvent,
    PointerKind,
    ResolutionPolicy,
    ScrubController,
    ScrubPhase,
    resolve_sample,
)
from balancechart.charting.types import CanvasSize, Point
from balancechart.services.event_bus import ChartEvent, EventBus

from factories import make_series

SIZE = CanvasSize(216, 116)  # inner width 200 starting at x=8
FIVE = make_series([0, 10, 20, 30, 40])


def _x(normalized: float) -> float:
    return 8 + normalized * 200


def _controller(series=FIVE, **kw):
    bus = EventBus()
    log = []
    for evt in ChartEvent:
        bus.subscribe(evt, lambda e: log.append((e.name, e.payload)))
    ctl = ScrubController(series, compute_bounds(series), SIZE, bus=bus, **kw)
    return ctl, log


def _names(log):
    return [name for name, _ in log]


def _arm(ctl, x=_x(0.5), y=50.0):
    ctl.pointer_down(x, y, 0)
    assert ctl.tick(200) is True


def test_nearest_policy_resolves_documented_samples():
    assert resolve_sample(FIVE, 0.5).index == 2
    assert resolve_sample(FIVE, 0.6).index == 2
    assert resolve_sample(FIVE, 0.65).index == 3
    # exact half rounds up
    assert resolve_sample(FIVE, 0.625).index == 3
    assert resolve_sample(FIVE, 0.5).value == 20.0


def test_blend_policy_interpolates_value():
    res = resolve_sample(FIVE, 0.6, ResolutionPolicy.BLEND)
    assert res.value == pytest.approx(24.0)
    assert res.index == 2
    assert resolve_sample(FIVE, 1.0, ResolutionPolicy.BLEND).value == 40.0


def test_long_press_arms_and_emits_started():
    ctl, log = _controller()
    ctl.pointer_down(_x(0.5), 50, 0)
    assert ctl.tick(100) is False
    assert ctl.phase is ScrubPhase.IDLE
    assert ctl.tick(150) is True
    assert ctl.phase is ScrubPhase.ARMED
    assert _names(log)[:2] == [ChartEvent.SCRUB_STARTED.value, ChartEvent.SCRUB_CHANGED.value]
    state = ctl.state
    assert state.is_active and state.index == 2
    assert state.normalized_x == pytest.approx(0.5)
    assert state.normalized_y == pytest.approx(0.5)
    assert state.resolved_value == 20.0


def test_drag_activates_and_updates():
    ctl, log = _controller()
    _arm(ctl)
    ctl.pointer_move(_x(0.9), 40, 250)
    assert ctl.phase is ScrubPhase.ACTIVE
    assert ctl.state.index == 4
    assert ctl.state.normalized_y == pytest.approx(0.0)
    assert ctl.state.canvas_position(SIZE) == Point(_x(0.9), 8)


def test_pointer_clamped_outside_rectangle():
    ctl, _ = _controller()
    _arm(ctl)
    ctl.pointer_move(-500, 10, 300)
    assert ctl.state.normalized_x == 0.0
    assert ctl.state.index == 0
    ctl.pointer_move(10_000, 10, 310)
    assert ctl.state.normalized_x == 1.0
    assert ctl.state.index == 4


def test_release_ends_and_clears_state():
    ctl, log = _controller()
    _arm(ctl)
    ctl.handle(PointerEvent(PointerKind.UP, _x(0.5), 50, 400))
    assert ctl.phase is ScrubPhase.IDLE
    assert ctl.state is None
    assert log[-1] == (ChartEvent.SCRUB_ENDED.value, {"reason": "released"})


def test_movement_before_activation_fails_gesture():
    ctl, log = _controller(jitter_tolerance=10)
    ctl.pointer_down(_x(0.2), 50, 0)
    ctl.pointer_move(_x(0.2) + 30, 50, 50)
    assert ctl.tick(500) is False
    ctl.pointer_move(_x(0.6), 50, 600)
    assert ctl.phase is ScrubPhase.IDLE
    assert log == []


def test_small_jitter_still_arms():
    ctl, _ = _controller(jitter_tolerance=10)
    ctl.pointer_down(_x(0.2), 50, 0)
    ctl.pointer_move(_x(0.2) + 3, 52, 60)
    assert ctl.tick(160) is True


def test_late_move_arms_without_tick():
    ctl, log = _controller()
    ctl.pointer_down(_x(0.0), 50, 0)
    ctl.pointer_move(_x(1.0), 50, 400)
    assert ctl.phase is ScrubPhase.ACTIVE
    assert ctl.state.index == 4
    assert ChartEvent.SCRUB_STARTED.value in _names(log)


def test_quick_tap_emits_nothing():
    ctl, log = _controller()
    ctl.handle(PointerEvent(PointerKind.DOWN, _x(0.5), 50, 0))
    ctl.handle(PointerEvent(PointerKind.UP, _x(0.5), 50, 80))
    assert log == []


def test_never_arms_with_fewer_than_two_samples():
    ctl, log = _controller(make_series([50]))
    ctl.pointer_down(_x(0.5), 50, 0)
    assert ctl.tick(1000) is False
    ctl.pointer_move(_x(0.7), 50, 1100)
    assert ctl.phase is ScrubPhase.IDLE
    assert ctl.state is None
    assert log == []


def test_updates_are_idempotent():
    ctl, log = _controller()
    _arm(ctl)
    ctl.pointer_move(_x(0.7), 50, 300)
    count = len(log)
    ctl.pointer_move(_x(0.7), 80, 310)  # same x, different y
    assert len(log) == count


def test_selection_changed_only_on_index_change():
    ctl, log = _controller()
    _arm(ctl, x=_x(0.5))
    ctl.pointer_move(_x(0.55), 50, 300)  # still index 2
    ctl.pointer_move(_x(0.8), 50, 310)  # index 3
    ticks = [p for n, p in log if n == ChartEvent.SCRUB_SELECTION_CHANGED.value]
    assert ticks == [2, 3]


def test_data_change_mid_gesture_aborts_scrub():
    ctl, log = _controller()
    _arm(ctl)
    ctl.pointer_move(_x(0.9), 50, 300)
    new_series = make_series([1, 2, 3])
    ctl.update_data(new_series, compute_bounds(new_series), SIZE)
    assert ctl.phase is ScrubPhase.IDLE
    assert ctl.state is None
    assert log[-1] == (ChartEvent.SCRUB_ENDED.value, {"reason": "invalidated"})
    # the stale drag does not resume against the new bounds
    ctl.pointer_move(_x(0.5), 50, 320)
    assert ctl.state is None


def test_resize_mid_gesture_aborts_scrub():
    ctl, log = _controller()
    _arm(ctl)
    ctl.update_data(FIVE, compute_bounds(FIVE), CanvasSize(400, 116))
    assert ctl.phase is ScrubPhase.IDLE
    assert _names(log)[-1] == ChartEvent.SCRUB_ENDED.value


def test_unchanged_data_keeps_scrub():
    ctl, _ = _controller()
    _arm(ctl)
    ctl.update_data(FIVE, compute_bounds(FIVE), SIZE)
    assert ctl.phase is ScrubPhase.ARMED


def test_cancel_event():
    ctl, log = _controller()
    _arm(ctl)
    ctl.handle(PointerEvent(PointerKind.CANCEL))
    assert log[-1] == (ChartEvent.SCRUB_ENDED.value, {"reason": "cancelled"})


def test_zero_width_canvas_does_not_divide_by_zero():
    ctl = ScrubController(FIVE, compute_bounds(FIVE), CanvasSize(10, 10))
    assert ctl.normalized_x_for(100) == 0.0


def test_invalid_thresholds_rejected():
    with pytest.raises(ValueError):
        ScrubController(FIVE, activation_ms=-1)
    with pytest.raises(ValueError):
        ScrubController(FIVE, jitter_tolerance=-0.5)


def test_activation_remaining_tracks_pending_press():
    ctl, _log = _controller()
    assert ctl.activation_remaining(0) is None
    ctl.pointer_down(_x(0.5), 50, 100)
    assert ctl.activation_remaining(243) == pytest.approx(7)
    assert ctl.tick(243) is False
    assert ctl.activation_remaining(400) == 0.0
    assert ctl.tick(400) is True
    assert ctl.activation_remaining(500) is None


def test_activation_remaining_none_after_failed_press():
    ctl, _log = _controller()
    ctl.pointer_down(_x(0.5), 50, 0)
    ctl.pointer_move(_x(0.5) + 40, 50, 20)
    assert ctl.activation_remaining(30) is None


def test_tick_without_press_does_not_arm():
    ctl, log = _controller()
    assert ctl.tick(1000) is False
    assert ctl.phase is ScrubPhase.IDLE
    assert log == []
