"""Reduced motion preference.

Single source of truth for whether the reveal animation should run. When
reduced motion is on, charts appear fully drawn at once.

Environment bootstrap: ``BALANCECHART_PREFER_REDUCED_MOTION=1`` (or
"true"/"yes"/"on", case-insensitive) enables it at import time.
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

__all__ = [
    "set_reduced_motion",
    "is_reduced_motion",
    "adjust_duration",
    "temporarily_reduced_motion",
]

_reduced_motion_enabled: bool = False

_env_value = os.getenv("BALANCECHART_PREFER_REDUCED_MOTION", "").strip().lower()
if _env_value in {"1", "true", "yes", "on"}:
    _reduced_motion_enabled = True


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion_enabled
    _reduced_motion_enabled = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion_enabled


def adjust_duration(ms: int, minimum_ms: int = 0) -> int:
    """Return ``ms`` (clamped >= 0), or ``minimum_ms`` when motion is reduced."""
    if minimum_ms < 0:
        minimum_ms = 0
    if ms < 0:
        ms = 0
    return minimum_ms if _reduced_motion_enabled else ms


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    prev = _reduced_motion_enabled
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)
