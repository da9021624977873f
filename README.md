# ibdshare

Building blocks for analysing identity-by-descent (IBD) segments shared
between genomes. The package provides encoded segments and segment sets,
coverage counting, peak filtering and the X_iR,s selection statistic.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `ibdshare.site`: `Sites` stores genome-wide positions, each with the
  concatenated bytes of its alleles. It can merge other `Sites`, sort by
  position then allele bytes, and look sites up by index or position.
  `AlleleBuffer` holds the alleles of one site, each with an integer
  encoding that can be reassigned. An allele whose encoding is set to
  `DROPPED_ALLELE` (255) is skipped by `Sites.add_site`.
- `ibdshare.paths`: `from_prefix(prefix, suffix)` strips every extension
  from `prefix` and adds `suffix` as the new extension, returning a
  `pathlib.Path`.
- `ibdshare.pairs`: `PairChunkIter(a, b, size)` yields `PairChunk` objects
  (`pairs`, `related`, `is_within`). Genomes found only in `a` are paired
  with genomes found only in `b`. Genomes found in both lists are then
  paired with each other, in both orders. Each chunk uses at most `size`
  genomes from each side. `n_chunks()` gives the total number of chunks.
- `ibdshare.ibdseg`: `IbdSeg` is an encoded IBD segment. The individual
  and haplotype indices are packed into `i` and `j`, and `s` and `e` hold
  the coordinates. `IbdSeg.encode` builds a segment from its parts.
  `write_segments` and `read_segments` store segments in a binary file:
  a little-endian u64 count followed by four u32 values per segment.
- `ibdshare.matrix`: `NamedMatrix` is a dense, row-major matrix whose rows
  and columns carry sorted, unique integer names. Values can be read and
  written by name or by position. It supports transposing in place and
  updating from a smaller matrix that shares its names.
- `ibdshare.coverage`: `CovCounter` counts how many query intervals
  overlap each interval of a fixed set of half-open intervals. It reports
  the median and mean of those counts.
- `ibdshare.blocks`: `iter_blocks` groups sorted segments into runs that
  share an individual pair or a haplotype pair. `iter_block_pairs` walks
  the blocks of two sorted collections side by side.
- `ibdshare.ibdset`: `IbdSet` is a list of segments together with a
  `PloidyStatus` and a `SortStatus`. It can sort segments by individual
  pair or by haplotype pair, and it can infer its ploidy and sort status.
  `merge()` combines overlapping segments within each individual pair of
  an unmerged diploid set.
- `ibdshare.xirs` and `ibdshare.xirs2`: `XirsBuilder` and `XirsBuilder2`
  compute per-site X_iR,s statistics and chi-squared (1 df) p-values.
  Their inputs are allele frequencies, sorted site positions, an
  `IbdSet` sorted by haplotypes with ploidy `HAPLOID` or `DIPLOID`, the
  number of individuals, and the genome-wide start of each chromosome.
  Both return an `XirsResult`.
- `ibdshare.peak`: `filter_peaks(peaks, xirs)` keeps the `(start, end)`
  peak regions that contain at least one site whose adjusted p-value is
  below 0.05. The adjustment is `p * n / rank`, with ranks counted from
  zero.

## Examples

```python
from ibdshare.ibdseg import IbdSeg
from ibdshare.ibdset import IbdSet

ibd = IbdSet([
    IbdSeg.encode(1, 0, 0, 0, 10, 100, 0),
    IbdSeg.encode(1, 0, 0, 0, 90, 150, 0),
    IbdSeg.encode(1, 0, 0, 0, 140, 200, 0),
])
ibd.infer_ploidy()
ibd.merge()
# The first segment of each pair is kept as it is; the following ones merge.
print([seg.coords() for seg in ibd])  # [(10, 100), (90, 200)]
```

```python
from ibdshare.coverage import CovCounter

counter = CovCounter([(10, 11), (20, 21), (30, 31), (40, 41)])
for start, end in [(10, 22), (10, 21), (1, 34)]:
    counter.count_over_interval(start, end)
print(counter.counts())  # [3, 3, 1, 0]
```

## What this package does not do

`ibdshare` is a library only and has no command-line program. It does not
read variant files or IBD segment files produced by IBD callers, and it
does not write Parquet or CSV output. Segments, sites and allele
frequencies must be built in Python by the caller. The only file format
the package reads or writes is the binary segment format handled by
`write_segments` and `read_segments`. Genome layout is passed in as a
plain list of chromosome start positions. The package has no genetic map,
so it does not compute segment lengths in centimorgans.