"""Easing curves for the reveal animation.

Easing tokens use the CSS ``cubic-bezier(x1, y1, x2, y2)`` notation. The
curve is evaluated by solving x(t) = progress with Newton iterations and a
bisection fallback, then returning y(t).
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

__all__ = [
    "CubicBezier",
    "EASING_TOKENS",
    "parse_cubic_bezier",
    "cubic_bezier_easing",
    "get_easing",
]

CubicBezier = Tuple[float, float, float, float]

EASING_TOKENS: Dict[str, str] = {
    "linear": "cubic-bezier(0, 0, 1, 1)",
    "ease-out": "cubic-bezier(0, 0, 0.58, 1)",
    "ease-in-out": "cubic-bezier(0.42, 0, 0.58, 1)",
    "standard": "cubic-bezier(0.2, 0, 0, 1)",
}


def parse_cubic_bezier(spec: str) -> CubicBezier:
    s = spec.strip().lower()
    if not s.startswith("cubic-bezier(") or not s.endswith(")"):
        raise ValueError(f"Invalid cubic-bezier format: {spec}")
    parts = [p.strip() for p in s[len("cubic-bezier(") : -1].split(",")]
    if len(parts) != 4:
        raise ValueError(f"cubic-bezier requires 4 components, got {len(parts)}: {spec}")
    try:
        x1, y1, x2, y2 = (float(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"Non-numeric cubic-bezier value in {spec}") from e
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError(f"cubic-bezier x components must be within [0, 1]: {spec}")
    return x1, y1, x2, y2


def _bezier(a: float, b: float, t: float) -> float:
    # 1D cubic with fixed endpoints 0 and 1
    mt = 1.0 - t
    return 3 * mt * mt * t * a + 3 * mt * t * t * b + t * t * t


def _bezier_slope(a: float, b: float, t: float) -> float:
    mt = 1.0 - t
    return 3 * mt * mt * a + 6 * mt * t * (b - a) + 3 * t * t * (1.0 - b)


def cubic_bezier_easing(curve: CubicBezier, epsilon: float = 1e-6) -> Callable[[float], float]:
    x1, y1, x2, y2 = curve

    def ease(progress: float) -> float:
        if progress <= 0.0:
            return 0.0
        if progress >= 1.0:
            return 1.0
        t = progress
        for _ in range(8):
            err = _bezier(x1, x2, t) - progress
            if abs(err) < epsilon:
                return _bezier(y1, y2, t)
            slope = _bezier_slope(x1, x2, t)
            if abs(slope) < epsilon:
                break
            t = min(1.0, max(0.0, t - err / slope))
        lo, hi = 0.0, 1.0
        t = progress
        while hi - lo > epsilon:
            if _bezier(x1, x2, t) < progress:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2
        return _bezier(y1, y2, t)

    return ease


def get_easing(name: str) -> Callable[[float], float]:
    raw = EASING_TOKENS.get(name)
    if raw is None:
        raise KeyError(f"Unknown easing token: {name}")
    return cubic_bezier_easing(parse_cubic_bezier(raw))
