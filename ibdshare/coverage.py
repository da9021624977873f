"""Counting how many query intervals overlap each of a set of target intervals."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from intervaltree import Interval, IntervalTree


class CovCounter:
    """Coverage counts over a fixed collection of half-open intervals."""

    def __init__(self, intervals: Iterable[tuple[int, int]]) -> None:
        self._tree = IntervalTree(
            Interval(start, end, idx) for idx, (start, end) in enumerate(intervals)
        )
        self._sorted = sorted(self._tree)
        self._counts = [0] * len(self._sorted)

    @classmethod
    def from_range(cls, start: int, end: int, step: int) -> CovCounter:
        """Unit-length intervals at ``start, start + step, ...`` below ``end``."""
        if step <= 0:
            raise ValueError("step must be positive")
        return cls((x, x + 1) for x in range(start, end, step))

    def count_over_interval(self, start: int, end: int) -> None:
        """Add one to every interval that overlaps ``[start, end)``."""
        for iv in self._tree.overlap(start, end):
            self._counts[iv.data] += 1

    def counts(self) -> list[int]:
        """Counts in the order the intervals were given."""
        return list(self._counts)

    def intervals(self) -> list[tuple[int, int]]:
        """Intervals sorted by position."""
        return [(iv.begin, iv.end) for iv in self._sorted]

    def n_intervals(self) -> int:
        return len(self._sorted)

    def iter_sorted_start_end_count(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(start, end, count)`` in position order."""
        for iv in self._sorted:
            yield iv.begin, iv.end, self._counts[iv.data]

    def median_count(self) -> float:
        """Median of the counts."""
        if not self._counts:
            raise ValueError("no intervals to take a median of")
        ordered = sorted(self._counts)
        mid = len(ordered) // 2
        if len(ordered) % 2 == 0:
            return (ordered[mid - 1] + ordered[mid]) / 2.0
        return float(ordered[mid])

    def mean_count(self) -> float:
        """Mean of the counts; NaN when there are no intervals."""
        if not self._counts:
            return math.nan
        return sum(self._counts) / len(self._counts)