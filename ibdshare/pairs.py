"""Chunked enumeration of genome pairs between two lists."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PairChunk:
    """One chunk of pairs and the sorted genomes they involve."""

    pairs: list[tuple[Any, Any]]
    related: list[Any]
    is_within: bool


def _n_steps(n: int, size: int) -> int:
    return -(-n // size)


class PairChunkIter:
    """Iterate pairs between two lists in chunks touching at most ``size`` genomes per side.

    Genomes only in ``a`` are paired with genomes only in ``b``; genomes in
    both are paired with each other, including both (x, y) and (y, x).
    """

    def __init__(self, a: Iterable[Hashable], b: Iterable[Hashable], size: int) -> None:
        if size <= 0:
            raise ValueError("chunk size must be positive")
        set_a, set_b = set(a), set(b)
        self._only_a = sorted(set_a - set_b)
        self._only_b = sorted(set_b - set_a)
        self._both = sorted(set_a & set_b)
        self._size = size
        self._idx = 0
        self._steps = (
            _n_steps(len(self._only_a), size),
            _n_steps(len(self._only_b), size),
            _n_steps(len(self._both), size),
        )

    def n_chunks(self) -> int:
        """Total number of chunks this iterator produces."""
        na, nb, nab = self._steps
        return na * nb + nab * nab

    def __iter__(self) -> PairChunkIter:
        return self

    def _block(self, items: list[Any], k: int) -> list[Any]:
        return items[k * self._size : (k + 1) * self._size]

    def __next__(self) -> PairChunk:
        na, nb, nab = self._steps
        between = na * nb
        if self._idx < between:
            i, j = divmod(self._idx, nb)
            left = self._block(self._only_a, i)
            right = self._block(self._only_b, j)
            self._idx += 1
            pairs = [(x, y) for x in left for y in right]
            return PairChunk(pairs, sorted(left + right), False)
        if self._idx < between + nab * nab:
            i, j = divmod(self._idx - between, nab)
            left = self._block(self._both, i)
            right = self._block(self._both, j)
            self._idx += 1
            pairs = [(x, y) for x in left for y in right]
            related: list[Any] = []
            if pairs:
                related = sorted(left) if i == j else sorted(left + right)
            return PairChunk(pairs, related, True)
        raise StopIteration