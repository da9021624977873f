"""Collections of IBD segments with sorting, ploidy checks and merging."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from itertools import groupby

from .ibdseg import IbdSeg


class PloidyStatus(Enum):
    """What kind of segments an :class:`IbdSet` holds."""

    DIPLOID = "diploid"
    DIPLOID_MERGED = "diploid_merged"
    HAPLOID = "haploid"
    UNKNOWN = "unknown"


class SortStatus(Enum):
    """How the segments of an :class:`IbdSet` are ordered."""

    BY_INDIVIDUAL_PAIR = "by_individual_pair"
    BY_HAPLOTYPE_PAIR = "by_haplotype_pair"
    UNSORTED = "unsorted"


def _sample_key(seg: IbdSeg) -> tuple[tuple[int, int], tuple[int, int]]:
    return seg.individual_pair(), seg.coords()


def _haplotype_key(seg: IbdSeg) -> tuple[tuple[int, int, int, int], tuple[int, int]]:
    return seg.haplotype_pair(), seg.coords()


class IbdSet:
    """A list of IBD segments with cached ploidy and sort status.

    ``ploidy_status`` and ``sort_status`` are only updated by the methods that
    infer or establish them; adding a segment resets both to unknown.
    """

    def __init__(self, segments: Iterable[IbdSeg] = ()) -> None:
        self._segments: list[IbdSeg] = list(segments)
        self.ploidy_status = PloidyStatus.UNKNOWN
        self.sort_status = SortStatus.UNSORTED

    def __iter__(self) -> Iterator[IbdSeg]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return (
            f"IbdSet({len(self)} segments, ploidy={self.ploidy_status.value}, "
            f"sort={self.sort_status.value})"
        )

    def add(self, seg: IbdSeg) -> None:
        """Append a segment; ploidy and sort status become unknown."""
        self.ploidy_status = PloidyStatus.UNKNOWN
        self.sort_status = SortStatus.UNSORTED
        self._segments.append(seg)

    def infer_ploidy(self) -> None:
        """Determine the ploidy status by inspecting every segment."""
        if self.is_valid_haploid_ibd():
            self.ploidy_status = PloidyStatus.HAPLOID
        elif self.is_valid_diploid_ibd():
            if self.has_merged_ibd():
                self.ploidy_status = PloidyStatus.DIPLOID_MERGED
            else:
                self.ploidy_status = PloidyStatus.DIPLOID
        else:
            self.ploidy_status = PloidyStatus.UNKNOWN

    def infer_sort_status(self) -> None:
        """Determine the sort status by inspecting the segment order."""
        if self.is_sorted_by_haplotypes():
            self.sort_status = SortStatus.BY_HAPLOTYPE_PAIR
        elif self.is_sorted_by_samples():
            self.sort_status = SortStatus.BY_INDIVIDUAL_PAIR
        else:
            self.sort_status = SortStatus.UNSORTED

    def sort_by_samples(self) -> None:
        """Sort by individual pair, then by coordinates."""
        self._segments.sort(key=_sample_key)
        self.sort_status = SortStatus.BY_INDIVIDUAL_PAIR

    def is_sorted_by_samples(self) -> bool:
        segs = self._segments
        return all(_sample_key(a) <= _sample_key(b) for a, b in zip(segs, segs[1:]))

    def sort_by_haplotypes(self) -> None:
        """Sort by haplotype pair, then by coordinates."""
        self._segments.sort(key=_haplotype_key)
        self.sort_status = SortStatus.BY_HAPLOTYPE_PAIR

    def is_sorted_by_haplotypes(self) -> bool:
        segs = self._segments
        return all(_haplotype_key(a) <= _haplotype_key(b) for a, b in zip(segs, segs[1:]))

    def merge(self) -> None:
        """Merge overlapping segments of each individual pair, ignoring haplotypes.

        Within each individual pair the first segment is kept as it is;
        merging starts from the second segment, which absorbs any following
        segments that overlap it.
        """
        if self.ploidy_status is not PloidyStatus.DIPLOID:
            raise ValueError("merging requires an unmerged diploid IBD set")
        self.sort_by_samples()
        kept: list[IbdSeg] = []
        for _, grp in groupby(self._segments, key=IbdSeg.individual_pair):
            block = list(grp)
            kept.append(block[0])
            if len(block) < 2:
                continue
            current = block[1]
            kept.append(current)
            for seg in block[2:]:
                if current.e >= seg.s:
                    if seg.e > current.e:
                        current.e = seg.e
                else:
                    current = seg
                    kept.append(current)
        self._segments = kept
        self.ploidy_status = PloidyStatus.DIPLOID_MERGED

    def is_valid_haploid_ibd(self) -> bool:
        return all(seg.is_haploid_ibd() for seg in self._segments)

    def is_valid_diploid_ibd(self) -> bool:
        return all(seg.is_diploid_ibd() for seg in self._segments)

    def has_merged_ibd(self) -> bool:
        return any(seg.is_from_merge() for seg in self._segments)