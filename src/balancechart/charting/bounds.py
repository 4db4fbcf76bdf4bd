"""Value range calculation and vertical normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .types import SampleSeries

__all__ = ["Bounds", "compute_bounds"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """[min, max] value range used to map values onto the canvas height.

    ``normalized_y`` is screen oriented: 0.0 is the top (max value) and 1.0
    the bottom (min value). A flat range maps every value to the 0.5 midline.
    """

    min_value: float
    max_value: float

    def __post_init__(self) -> None:
        if self.max_value < self.min_value:
            raise ValueError(
                f"max_value ({self.max_value}) must be >= min_value ({self.min_value})"
            )

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    @property
    def is_flat(self) -> bool:
        return self.span <= 0

    def normalized_y(self, value: float) -> float:
        span = self.span
        if span <= 0:
            return 0.5
        return (self.max_value - float(value)) / span

    def value_at(self, normalized_y: float) -> float:
        """Inverse of ``normalized_y`` (flat ranges return the shared value)."""
        return self.max_value - float(normalized_y) * self.span


def compute_bounds(
    series: SampleSeries,
    *,
    padding_fraction: float = 0.0,
    min_range_fraction: float = 0.0,
) -> Bounds:
    """Derive the value range of ``series``.

    Without fractions the raw [min, max] is returned. The interactive chart
    passes ``padding_fraction`` to keep the curve off the rectangle edges and
    ``min_range_fraction`` (relative to |max|) so that a flat series is still
    drawn inside a visible band instead of collapsing. An empty series yields
    the flat ``Bounds(0, 0)``.
    """
    if padding_fraction < 0 or min_range_fraction < 0:
        raise ValueError("padding fractions must be >= 0")
    values = series.values()
    if not values:
        log.debug("compute_bounds: empty series, using flat zero bounds")
        return Bounds(0.0, 0.0)
    raw_min = min(values)
    raw_max = max(values)
    if padding_fraction == 0 and min_range_fraction == 0:
        return Bounds(raw_min, raw_max)
    effective_range = max(raw_max - raw_min, abs(raw_max) * min_range_fraction)
    pad = effective_range * padding_fraction
    return Bounds(raw_min - pad, raw_max + pad)
