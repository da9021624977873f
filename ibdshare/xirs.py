"""Per-site X_iR,s statistics from pairwise IBD sharing.

The statistic follows Henden et al. (2018):

1. Subtract the column (pair) mean of the binary IBD matrix, accounting for
   the overall relatedness of each pair.
2. Subtract the row (site) mean and divide by ``sqrt(p(1 - p))`` where ``p``
   is the allele frequency of the site.
3. Sum each row and divide by the square root of the number of pairs.
4. Normalise genome-wide within 100 equally sized allele-frequency bins.
5. Square the z-score; the result follows a chi-squared distribution with
   one degree of freedom.
"""

from __future__ import annotations

import logging
import math
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field

from .ibdseg import IbdSeg
from .ibdset import IbdSet, PloidyStatus

logger = logging.getLogger(__name__)

_N_FREQ_BINS = 100


@dataclass
class XirsResult:
    """Per-site results: chromosome index and position, raw, X_iR,s and p-value."""

    chr_id: list[int] = field(default_factory=list)
    chr_pos: list[int] = field(default_factory=list)
    gw_pos: list[int] = field(default_factory=list)
    raw: list[float] = field(default_factory=list)
    xirs: list[float] = field(default_factory=list)
    pval: list[float] = field(default_factory=list)


def _fdiv(a: float, b: float) -> float:
    """Division with IEEE semantics instead of raising on a zero divisor."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a)


def _to_chr_pos(chrom_starts: Sequence[int], gw_pos: int) -> tuple[int, int]:
    idx = bisect_right(chrom_starts, gw_pos) - 1
    if idx < 0:
        raise ValueError(f"position {gw_pos} precedes the first chromosome")
    return idx, gw_pos - chrom_starts[idx]


def _n_haplotypes(ibd: IbdSet, n_individuals: int) -> int:
    if ibd.ploidy_status is PloidyStatus.HAPLOID:
        return n_individuals
    if ibd.ploidy_status is PloidyStatus.DIPLOID:
        return n_individuals * 2
    raise ValueError("Xirs can only be calculated for haploid or unmerged diploid IBD sets")


def _validate(afreq: Sequence[float], positions: Sequence[int], ibd: IbdSet) -> None:
    if not positions:
        raise ValueError("at least one site position is required")
    if any(a >= b for a, b in zip(positions, positions[1:])):
        raise ValueError("site positions must be sorted and unique")
    if not all(0.0 < p < 1.0 for p in afreq):
        raise ValueError("allele frequencies must lie strictly between 0 and 1")
    if len(afreq) != len(positions):
        raise ValueError("allele frequencies and positions differ in length")
    if not ibd.is_sorted_by_haplotypes():
        raise ValueError("IBD set must be sorted by haplotype pairs")
    if not all(seg.is_valid() and not seg.is_from_merge() for seg in ibd):
        raise ValueError("IBD set must hold valid, unmerged segments")


def _pair_column(seg: IbdSeg, ploidy: PloidyStatus) -> int:
    id1, hap1, id2, hap2 = seg.haplotype_pair()
    if ploidy is PloidyStatus.HAPLOID:
        hi, hj = id1, id2
    elif ploidy is PloidyStatus.DIPLOID:
        hi, hj = (id1 << 1) + hap1, (id2 << 1) + hap2
    else:
        raise ValueError("Xirs can only be calculated for haploid or unmerged diploid IBD sets")
    return (hi - 1) * hi // 2 + hj


def _site_range(positions: Sequence[int], seg: IbdSeg) -> tuple[int, int]:
    start = bisect_left(positions, seg.s)
    end = bisect_left(positions, seg.e, lo=start)
    return start, end


def _normalize_by_frequency_bins(afreq: Sequence[float], raw: Sequence[float]) -> list[float]:
    """Z-score ``raw`` within 100 equally sized bins of sites ordered by frequency."""
    m = len(afreq)
    classes = [0] * m
    order = sorted(range(m), key=lambda i: afreq[i])
    binsz, extra = divmod(m, _N_FREQ_BINS)
    start = 0
    cls = 0
    while start < m:
        end = start + binsz + (1 if cls < extra else 0)
        for idx in order[start:end]:
            classes[idx] = cls
        cls += 1
        start = end

    sums = [0.0] * _N_FREQ_BINS
    counts = [0] * _N_FREQ_BINS
    for which, value in zip(classes, raw):
        counts[which] += 1
        sums[which] += value
    means = [_fdiv(s, n) for s, n in zip(sums, counts)]

    sq_sums = [0.0] * _N_FREQ_BINS
    for which, value in zip(classes, raw):
        diff = value - means[which]
        sq_sums[which] += diff * diff
    stds = [math.sqrt(v) if not math.isnan(v) else math.nan
            for v in (_fdiv(s, n) for s, n in zip(sq_sums, counts))]

    logger.info("number of class with zero std: %d", sum(1 for s in stds if s < 1e-7))

    return [_fdiv(value - means[which], stds[which]) for which, value in zip(classes, raw)]


def _chi2_df1_sf(x: float) -> float:
    if math.isnan(x):
        return math.nan
    return math.erfc(math.sqrt(x / 2.0))


def _assemble(
    positions: Sequence[int],
    chrom_starts: Sequence[int],
    afreq: Sequence[float],
    raw: list[float],
) -> XirsResult:
    norm = _normalize_by_frequency_bins(afreq, raw)
    xirs = [z * z for z in norm]
    pval = [_chi2_df1_sf(x) for x in xirs]
    chr_id: list[int] = []
    chr_pos: list[int] = []
    for pos in positions:
        cid, cpos = _to_chr_pos(chrom_starts, pos)
        chr_id.append(cid)
        chr_pos.append(cpos)
    return XirsResult(chr_id, chr_pos, list(positions), raw, xirs, pval)


class XirsBuilder:
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

        xs = [0.0] * m
        col_sums = [0.0] * n
        for seg in self._ibd:
            start, end = _site_range(p, seg)
            for row in range(start, end):
                xs[row] += 1.0
            col_sums[_pair_column(seg, ploidy)] += float(end - start)
        cm_total = sum(s / m for s in col_sums)

        raw: list[float] = []
        sqrt_n = math.sqrt(n)
        for x_i, freq in zip(xs, self._afreq):
            rm_i = (x_i - cm_total) / n
            rs_i = (x_i - cm_total - rm_i * n) / math.sqrt(freq * (1.0 - freq))
            raw.append(rs_i / sqrt_n)
        return raw

    def finish(self) -> XirsResult:
        """Run every step and return the per-site results."""
        return _assemble(self._positions, self._chrom_starts, self._afreq, self._raw())