"""Genome-wide variant sites and per-site allele buffers."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterator

#: Encoding value marking an allele that is dropped when a site is stored.
DROPPED_ALLELE = 0xFF


class AlleleBuffer:
    """Alleles of a single site, each with a re-assignable integer encoding."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._offsets: list[int] = []
        self._enc: list[int] = []

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[bytes]:
        return (self.get(i) for i in range(len(self)))

    def __repr__(self) -> str:
        return f"AlleleBuffer({list(self)!r}, enc={self._enc!r})"

    def push(self, allele: bytes) -> None:
        """Start a new allele whose bytes are ``allele``."""
        self._enc.append(len(self._offsets) & 0xFF)
        self._offsets.append(len(self._data))
        self._data.extend(allele)

    def push_to_data_only(self, allele: bytes) -> None:
        """Append bytes to the most recently started allele."""
        self._data.extend(allele)

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self._offsets):
            raise IndexError(f"allele index {i} out of range for {len(self)} alleles")

    def get(self, i: int) -> bytes:
        """Return the bytes of allele ``i``."""
        self._check_index(i)
        start = self._offsets[i]
        end = self._offsets[i + 1] if i + 1 < len(self._offsets) else len(self._data)
        return bytes(self._data[start:end])

    def get_enc(self, allele_ix: int) -> int:
        """Return the encoding assigned to allele ``allele_ix``."""
        self._check_index(allele_ix)
        return self._enc[allele_ix]

    def set_enc(self, allele_ix: int, new_ix: int) -> None:
        """Assign a new encoding to allele ``allele_ix``."""
        self._check_index(allele_ix)
        if not 0 <= new_ix <= 0xFF:
            raise ValueError(f"encoding {new_ix} does not fit in a byte")
        self._enc[allele_ix] = new_ix

    def clear(self) -> None:
        """Remove all alleles."""
        self._data.clear()
        self._offsets.clear()
        self._enc.clear()


class Sites:
    """Genome-wide positions, each with the concatenated bytes of its alleles."""

    def __init__(self) -> None:
        self._positions: list[int] = []
        self._buf = bytearray()
        self._offsets: list[int] = []

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        return (self.site_by_idx(i) for i in range(len(self)))

    def __repr__(self) -> str:
        return f"Sites({list(self)!r})"

    def merge(self, other: Sites) -> None:
        """Append all sites of ``other`` after the sites already held."""
        shift = len(self._buf)
        self._positions.extend(other._positions)
        self._buf.extend(other._buf)
        self._offsets.extend(off + shift for off in other._offsets)

    def sort_by_position_then_allele(self) -> list[int]:
        """Sort sites by position then allele bytes; return the original indices in new order."""
        order = sorted(range(len(self)), key=lambda i: (self._positions[i], self.alleles_by_idx(i)))
        sorted_sites = Sites()
        for idx in order:
            sorted_sites.add_site_with_bytes(*self.site_by_idx(idx))
        self._positions = sorted_sites._positions
        self._buf = sorted_sites._buf
        self._offsets = sorted_sites._offsets
        return order

    def append_bytes_to_last_allele(self, data: bytes) -> None:
        """Extend the allele bytes of the last site without adding a site."""
        self._buf.extend(data)

    def add_site_with_bytes(self, pos: int, data: bytes) -> None:
        """Add a site; positions must not decrease."""
        if self._positions and self._positions[-1] > pos:
            raise ValueError(f"position {pos} comes before {self._positions[-1]}")
        self._offsets.append(len(self._buf))
        self._buf.extend(data)
        self._positions.append(pos)

    def add_site(self, pos: int, buffer: AlleleBuffer) -> None:
        """Add a site from an allele buffer, skipping dropped alleles; positions must increase."""
        if self._positions and self._positions[-1] >= pos:
            raise ValueError("positions are not in order")
        self._offsets.append(len(self._buf))
        for i, allele in enumerate(buffer):
            if buffer.get_enc(i) == DROPPED_ALLELE:
                continue
            self._buf.extend(allele)
        self._positions.append(pos)

    def site_by_position(self, pos: int) -> bytes:
        """Return the allele bytes at ``pos``; positions must be sorted and unique."""
        idx = bisect_left(self._positions, pos)
        if idx == len(self._positions) or self._positions[idx] != pos:
            raise KeyError(pos)
        return self.alleles_by_idx(idx)

    def positions(self) -> list[int]:
        """Return a copy of the genome-wide positions."""
        return list(self._positions)

    def idx_by_position(self, pos: int) -> tuple[int, int]:
        """Return the half-open index range of sites at ``pos``."""
        return bisect_left(self._positions, pos), bisect_right(self._positions, pos)

    def alleles_by_idx(self, idx: int) -> bytes:
        """Return the allele bytes of site ``idx``."""
        if not 0 <= idx < len(self._offsets):
            raise IndexError(f"site index {idx} out of range for {len(self)} sites")
        start = self._offsets[idx]
        end = self._offsets[idx + 1] if idx + 1 < len(self._offsets) else len(self._buf)
        return bytes(self._buf[start:end])

    def site_by_idx(self, idx: int) -> tuple[int, bytes]:
        """Return ``(position, allele bytes)`` of site ``idx``."""
        alleles = self.alleles_by_idx(idx)
        return self._positions[idx], alleles