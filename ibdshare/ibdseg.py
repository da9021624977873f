"""Encoded IBD segments and their binary storage format."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable
from dataclasses import dataclass

_HEADER = struct.Struct("<Q")
_RECORD = struct.Struct("<4I")


@dataclass(order=True, slots=True)
class IbdSeg:
    """An encoded IBD segment.

    For ``i`` and ``j`` the lower 2 bits hold the haplotype index and the upper
    bits the individual index. ``s`` and ``e`` are base-pair coordinates,
    usually genome-wide.

    Haplotype indices 0 and 1 mark original diploid segments, (2, 2) marks a
    segment produced by merging and (3, 3) marks a haploid segment.
    """

    i: int
    j: int
    s: int
    e: int

    @classmethod
    def encode(cls, i: int, m: int, j: int, n: int, s: int, e: int, pos_shift: int = 0) -> IbdSeg:
        """Build a segment from individual ``i`` haplotype ``m`` and individual ``j`` haplotype ``n``."""
        return cls(i * 4 + m, j * 4 + n, s + pos_shift, e + pos_shift)

    def normalized(self) -> None:
        """Swap ``i`` and ``j`` in place so that ``i >= j``."""
        if self.i < self.j:
            self.i, self.j = self.j, self.i

    def haplotype_pair_int(self) -> tuple[int, int]:
        """Return the raw encoded ``(i, j)``."""
        return self.i, self.j

    def haplotype_pair(self) -> tuple[int, int, int, int]:
        """Return ``(ind1, hap1, ind2, hap2)``."""
        return self.i >> 2, self.i & 0x3, self.j >> 2, self.j & 0x3

    def individual_pair(self) -> tuple[int, int]:
        """Return ``(ind1, ind2)``."""
        return self.i >> 2, self.j >> 2

    def coords(self) -> tuple[int, int]:
        """Return ``(start, end)``."""
        return self.s, self.e

    def is_haploid_ibd(self) -> bool:
        """True when both haplotype indices mark a haploid genome."""
        return (self.i & 0x3) == 3 and (self.j & 0x3) == 3

    def is_diploid_ibd(self) -> bool:
        """True when the haplotype indices form a valid diploid combination."""
        m, n = self.i & 0x3, self.j & 0x3
        return m <= 2 and n <= 2 and ((m == 2) == (n == 2))

    def is_from_merge(self) -> bool:
        """True when the segment results from merging several segments."""
        return (self.i & 0x3) == 2 and (self.j & 0x3) == 2

    def is_valid(self) -> bool:
        """True when the haplotype combination is valid and start precedes end."""
        return self.s < self.e and (self.is_diploid_ibd() or self.is_haploid_ibd())


def write_segments(segments: Iterable[IbdSeg], path: str | os.PathLike[str]) -> None:
    """Write segments as a little-endian u64 count followed by four u32 per segment."""
    segments = list(segments)
    with open(path, "wb") as fh:
        fh.write(_HEADER.pack(len(segments)))
        for seg in segments:
            try:
                fh.write(_RECORD.pack(seg.i, seg.j, seg.s, seg.e))
            except struct.error as exc:
                raise ValueError(f"segment {seg!r} does not fit in 32-bit fields") from exc


def read_segments(path: str | os.PathLike[str]) -> list[IbdSeg]:
    """Read segments written by :func:`write_segments`."""
    with open(path, "rb") as fh:
        data = fh.read()
    if len(data) < _HEADER.size:
        raise ValueError(f"{os.fspath(path)}: missing segment count")
    (count,) = _HEADER.unpack_from(data)
    end = _HEADER.size + count * _RECORD.size
    if len(data) < end:
        raise ValueError(f"{os.fspath(path)}: expected {count} segments, file is truncated")
    return [IbdSeg(*fields) for fields in _RECORD.iter_unpack(data[_HEADER.size : end])]