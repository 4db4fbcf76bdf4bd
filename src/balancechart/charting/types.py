"""Core charting types.

Samples and series are immutable and owned by the presenting collaborator;
points and paths are recomputed for every render and never mutated
externally.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from balancechart.config import settings

__all__ = [
    "Sample",
    "SampleSeries",
    "Point",
    "CanvasSize",
    "MoveTo",
    "LineTo",
    "CurveTo",
    "ClosePath",
    "PathCommand",
    "ChartPath",
    "points_from_pairs",
]

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class Sample:
    """One dated observation.

    Attributes:
        timestamp: When the value was observed.
        value: Balance / performance figure (Decimal accepted as-is).
        is_interpolated: True if the value was estimated to fill a data gap.
    """

    timestamp: datetime
    value: Number
    is_interpolated: bool = False

    @property
    def as_float(self) -> float:
        return float(self.value)


class SampleSeries:
    """Immutable, chronologically ordered collection of samples.

    Ordering is the caller's responsibility; duplicate timestamps are not
    detected.
    """

    __slots__ = ("_samples",)

    def __init__(self, samples: Iterable[Sample] = ()) -> None:
        self._samples: Tuple[Sample, ...] = tuple(samples)

    @classmethod
    def from_values(
        cls,
        values: Iterable[Number],
        *,
        end: Optional[datetime] = None,
        step: timedelta = timedelta(days=1),
    ) -> "SampleSeries":
        """Build a series from raw values with synthetic dates ending at ``end``."""
        vals = list(values)
        last = end or datetime.now()
        count = len(vals)
        return cls(
            Sample(timestamp=last - step * (count - 1 - idx), value=v)
            for idx, v in enumerate(vals)
        )

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> Sample:
        return self._samples[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleSeries):
            return NotImplemented
        return self._samples == other._samples

    def __hash__(self) -> int:
        return hash(self._samples)

    def __repr__(self) -> str:
        return f"SampleSeries(n={len(self._samples)})"

    def values(self) -> List[float]:
        return [s.as_float for s in self._samples]

    @property
    def is_empty(self) -> bool:
        return not self._samples

    @property
    def is_degenerate(self) -> bool:
        """Exactly one sample: no curve, only a static marker."""
        return len(self._samples) == 1

    @property
    def has_gaps(self) -> bool:
        return any(s.is_interpolated for s in self._samples)

    @property
    def latest(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def lerp(self, other: "Point", fraction: float) -> "Point":
        return Point(
            self.x + fraction * (other.x - self.x),
            self.y + fraction * (other.y - self.y),
        )


@dataclass(frozen=True)
class CanvasSize:
    """Drawing rectangle with a fixed inner padding on every side."""

    width: float
    height: float
    padding: float = settings.CANVAS_PADDING

    @property
    def inner_width(self) -> float:
        return max(0.0, self.width - 2 * self.padding)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.height - 2 * self.padding)

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)


# ---------------- Path commands ---------------------------------------------


@dataclass(frozen=True)
class MoveTo:
    to: Point


@dataclass(frozen=True)
class LineTo:
    to: Point


@dataclass(frozen=True)
class CurveTo:
    control1: Point
    control2: Point
    to: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CurveTo, ClosePath]


@dataclass
class ChartPath:
    """Backend-neutral path: an ordered list of drawing commands."""

    commands: List[PathCommand] = field(default_factory=list)

    def move_to(self, p: Point) -> None:
        self.commands.append(MoveTo(p))

    def line_to(self, p: Point) -> None:
        self.commands.append(LineTo(p))

    def curve_to(self, c1: Point, c2: Point, p: Point) -> None:
        self.commands.append(CurveTo(c1, c2, p))

    def close(self) -> None:
        self.commands.append(ClosePath())

    @property
    def is_empty(self) -> bool:
        return not self.commands

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], ClosePath)

    def endpoints(self) -> List[Point]:
        """End point of every move/line/curve command, in order."""
        return [c.to for c in self.commands if not isinstance(c, ClosePath)]

    def straight_length(self) -> float:
        """Sum of chord lengths between consecutive endpoints.

        Move commands start a new sub-path and contribute no length.
        """
        total = 0.0
        prev: Point | None = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                prev = cmd.to
            elif isinstance(cmd, (LineTo, CurveTo)):
                if prev is not None:
                    total += prev.distance_to(cmd.to)
                prev = cmd.to
        return total

    def __len__(self) -> int:
        return len(self.commands)


def points_from_pairs(pairs: Sequence[Tuple[float, float]]) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in pairs]
