"""Half-open integer intervals.

Pure value types with zero domain dependencies.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Interval:
    """Half-open range ``[start, end)`` of non-negative integers."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"interval start must be non-negative, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"interval end {self.end} precedes start {self.start}")

    @classmethod
    def from_length(cls, start: int, length: int) -> Interval:
        return cls(start, start + length)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end

    def intersection(self, other: Interval) -> Interval | None:
        """Return the overlap with *other*, or None when they are disjoint."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start >= end:
            return None
        return Interval(start, end)

    def shifted(self, offset: int) -> Interval:
        return Interval(self.start + offset, self.end + offset)


def total_length(intervals: Iterable[Interval]) -> int:
    """Sum of lengths. Overlaps are counted once per interval."""
    return sum(iv.length for iv in intervals)
