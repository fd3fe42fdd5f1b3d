"""Unit-tagged benchmark timings and the relative-speed ratios derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from criterion_table.errors import UnrecognizedTimeUnitError

_PROMOTION_THRESHOLD = 1000.0


class TimeUnit(Enum):
    SECOND = ("s", 1_000_000_000_000.0)
    MILLISECOND = ("ms", 1_000_000_000.0)
    MICROSECOND = ("us", 1_000_000.0)
    NANOSECOND = ("ns", 1_000.0)
    PICOSECOND = ("ps", 1.0)

    def __init__(self, suffix: str, picoseconds: float):
        self.suffix = suffix
        self.picoseconds = picoseconds

    @classmethod
    def from_label(cls, label: str) -> "TimeUnit":
        for unit in cls:
            if unit.suffix == label:
                return unit
        raise UnrecognizedTimeUnitError(label)

    @property
    def larger(self) -> "TimeUnit | None":
        return _NEXT_LARGER.get(self)


_NEXT_LARGER = {
    TimeUnit.PICOSECOND: TimeUnit.NANOSECOND,
    TimeUnit.NANOSECOND: TimeUnit.MICROSECOND,
    TimeUnit.MICROSECOND: TimeUnit.MILLISECOND,
    TimeUnit.MILLISECOND: TimeUnit.SECOND,
}


@dataclass(frozen=True)
class TimeMeasurement:
    magnitude: float
    unit: TimeUnit

    @classmethod
    def parse(cls, magnitude: float, unit_label: str) -> "TimeMeasurement":
        """Build a measurement from a raw ``(estimate, unit)`` pair.

        Values above 1000 in any unit smaller than seconds are re-expressed in
        the next larger unit until they fit, so ``1500 ns`` becomes ``1.5 us``.
        """
        return cls(float(magnitude), TimeUnit.from_label(unit_label)).normalized()

    def normalized(self) -> "TimeMeasurement":
        magnitude, unit = self.magnitude, self.unit
        while unit.larger is not None and magnitude > _PROMOTION_THRESHOLD:
            magnitude, unit = magnitude / 1000.0, unit.larger
        if unit is self.unit:
            return self
        return TimeMeasurement(magnitude, unit)

    def as_picoseconds(self) -> float:
        return self.magnitude * self.unit.picoseconds

    def display_width(self) -> int:
        return len(str(self))

    def __truediv__(self, other: "TimeMeasurement") -> float:
        return ratio(self, other)

    def __str__(self) -> str:
        return f"{self.magnitude:.2f} {self.unit.suffix}"


def ratio(a: TimeMeasurement, b: TimeMeasurement) -> float:
    numerator, denominator = a.as_picoseconds(), b.as_picoseconds()
    if denominator == 0.0:
        return math.nan if numerator == 0.0 else math.copysign(math.inf, numerator)
    return numerator / denominator


class Direction(Enum):
    FASTER = "faster"
    SLOWER = "slower"
    EVEN = "even"


@dataclass(frozen=True)
class Comparison:
    ratio: float = 1.0

    @property
    def direction(self) -> Direction:
        if self.ratio > 1.0:
            return Direction.FASTER
        if self.ratio < 1.0:
            return Direction.SLOWER
        return Direction.EVEN

    def display_width(self) -> int:
        return len(str(self))

    def __str__(self) -> str:
        direction = self.direction
        if direction is Direction.FASTER:
            return f"{self.ratio:.2f}x faster"
        if direction is Direction.SLOWER:
            inverse = 1.0 / self.ratio if self.ratio else math.inf
            return f"{inverse:.2f}x slower"
        return f"{self.ratio:.2f}x"


def compare_to_baseline(baseline: TimeMeasurement | None, measurement: TimeMeasurement) -> Comparison:
    """Ratio of a row's baseline time to ``measurement``; 1.0 when the row has no baseline yet."""
    if baseline is None:
        return Comparison(1.0)
    return Comparison(ratio(baseline, measurement))
