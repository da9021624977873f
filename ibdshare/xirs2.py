"""X_iR,s statistics computed from per-site sums of squared deviations.

This variant computes, for every site, the squared deviation of the
pair-centred and site-centred IBD indicators, summed over all pairs and
scaled by ``p(1 - p)``. It works from aggregates of the IBD segments, so
no pair-by-site matrix is ever built. Normalisation, squaring and p-values
follow the same steps as :class:`ibdshare.xirs.XirsBuilder`.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ibdset import IbdSet
from .xirs import (
    XirsResult,
    _assemble,
    _n_haplotypes,
    _pair_column,
    _site_range,
    _validate,
)


class XirsBuilder2:
    """Compute X_iR,s statistics for sites from an IBD set sorted by haplotype pairs.

    ``n_individuals`` is the number of individuals the IBD set refers to and
    ``chrom_starts`` the sorted genome-wide start of each chromosome.
    """

    def __init__(
        self,
        afreq: Sequence[float],
        positions: Sequence[int],
        ibd: IbdSet,
        n_individuals: int,
        chrom_starts: Sequence[int],
    ) -> None:
        self._afreq = list(afreq)
        self._positions = list(positions)
        _validate(self._afreq, self._positions, ibd)
        nhap = _n_haplotypes(ibd, n_individuals)
        self._npairs = nhap * (nhap - 1) // 2
        if self._npairs == 0:
            raise ValueError("at least two haplotypes are required")
        self._ibd = ibd
        self._chrom_starts = list(chrom_starts)

    def _raw(self) -> list[float]:
        p = self._positions
        m = len(p)
        n = self._npairs
        ploidy = self._ibd.ploidy_status

        ranges = [(_site_range(p, seg), _pair_column(seg, ploidy)) for seg in self._ibd]

        c_j = [0.0] * n
        for (start, end), col in ranges:
            c_j[col] += float(end - start)
        c_j = [c / m for c in c_j]

        x_rs = [0.0] * m
        xx_rs = [0.0] * m
        xc_rs = [0.0] * m
        for (start, end), col in ranges:
            c = c_j[col]
            for row in range(start, end):
                x_rs[row] += 1.0
                xc_rs[row] += c
                xx_rs[row] += 1.0

        cj_sum = sum(c_j)
        cj_sq_sum = sum(c * c for c in c_j)

        raw: list[float] = []
        for x, xx, xc, freq in zip(x_rs, xx_rs, xc_rs, self._afreq):
            r = (x - cj_sum) / n
            out = xx + cj_sq_sum + n * r * r - 2.0 * xc - 2.0 * r * x + 2.0 * r * cj_sum
            raw.append(out / (freq * (1.0 - freq)))
        return raw

    def finish(self) -> XirsResult:
        """Run every step and return the per-site results."""
        return _assemble(self._positions, self._chrom_starts, self._afreq, self._raw())