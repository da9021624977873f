"""Grouping sorted IBD segments into blocks that share a sample or haplotype pair."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from itertools import groupby

from .ibdseg import IbdSeg

Block = list[IbdSeg]


def _block_key(ignore_hap: bool) -> Callable[[IbdSeg], tuple[int, int]]:
    if ignore_hap:
        return IbdSeg.individual_pair
    return IbdSeg.haplotype_pair_int


def iter_blocks(segments: Iterable[IbdSeg], ignore_hap: bool) -> Iterator[Block]:
    """Yield runs of consecutive segments sharing a pair.

    With ``ignore_hap`` the pair is the individual pair, otherwise the encoded
    haplotype pair. Each block holds the segment objects themselves, so
    changes made to them are seen by the caller's collection.
    """
    key = _block_key(ignore_hap)
    for _, grp in groupby(list(segments), key=key):
        yield list(grp)


def iter_block_pairs(
    segments1: Iterable[IbdSeg],
    segments2: Iterable[IbdSeg],
    ignore_hap: bool,
) -> Iterator[tuple[Block | None, Block | None]]:
    """Walk the blocks of two sorted segment collections side by side.

    Yields ``(block1, block2)`` when both collections have a block for the
    same pair, and ``(block1, None)`` or ``(None, block2)`` when the pair is
    present in only one of them. Pairs come out in ascending order.
    """
    key = _block_key(ignore_hap)
    blocks_a = iter_blocks(segments1, ignore_hap)
    blocks_b = iter_blocks(segments2, ignore_hap)
    blk_a = next(blocks_a, None)
    blk_b = next(blocks_b, None)
    while blk_a is not None or blk_b is not None:
        if blk_b is None or (blk_a is not None and key(blk_a[0]) < key(blk_b[0])):
            yield blk_a, None
            blk_a = next(blocks_a, None)
        elif blk_a is None or key(blk_a[0]) > key(blk_b[0]):
            yield None, blk_b
            blk_b = next(blocks_b, None)
        else:
            yield blk_a, blk_b
            blk_a = next(blocks_a, None)
            blk_b = next(blocks_b, None)