"""Filtering IBD peak regions by significant X_iR,s sites."""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterable

from .xirs import XirsResult, _fdiv


def filter_peaks(peaks: Iterable[tuple[int, int]], xirs: XirsResult) -> list[tuple[int, int]]:
    """Keep the half-open peak regions that contain at least one significant site.

    P-values are adjusted as ``p * n / rank`` with ranks counted from zero in
    ascending p-value order, so the smallest p-value is never significant.
    A site is significant when its adjusted p-value is below 0.05.
    """
    pvals = list(xirs.pval)
    if any(math.isnan(p) for p in pvals):
        raise ValueError("p-values must not be NaN")
    n = len(pvals)
    adjusted = [0.0] * n
    for rank, idx in enumerate(sorted(range(n), key=lambda i: pvals[i])):
        adjusted[idx] = _fdiv(pvals[idx] * n, rank)

    hits = sorted(pos for pos, adj in zip(xirs.gw_pos, adjusted) if adj < 0.05)

    def has_hit(start: int, end: int) -> bool:
        k = bisect_left(hits, start)
        return k < len(hits) and hits[k] < end

    return [(start, end) for start, end in peaks if has_hit(start, end)]