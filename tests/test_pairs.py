import pytest

from ibdshare.pairs import PairChunk, PairChunkIter


def test_pair_chunk_iter():
    a = [0, 1, 2, 3, 4, 5]
    b = [3, 4, 5, 6, 7, 8]
    it = PairChunkIter(a, b, 2)

    assert next(it) == PairChunk([(0, 6), (0, 7), (1, 6), (1, 7)], [0, 1, 6, 7], False)
    assert next(it) == PairChunk([(0, 8), (1, 8)], [0, 1, 8], False)
    assert next(it) == PairChunk([(2, 6), (2, 7)], [2, 6, 7], False)
    assert next(it) == PairChunk([(2, 8)], [2, 8], False)
    assert next(it) == PairChunk([(3, 3), (3, 4), (4, 3), (4, 4)], [3, 4], True)
    assert next(it) == PairChunk([(3, 5), (4, 5)], [3, 4, 5], True)
    assert next(it) == PairChunk([(5, 3), (5, 4)], [3, 4, 5], True)
    assert next(it) == PairChunk([(5, 5)], [5], True)
    with pytest.raises(StopIteration):
        next(it)


def test_chunk_count_matches_iteration():
    it = PairChunkIter(range(7), range(4, 12), 3)
    expected = it.n_chunks()
    assert len(list(it)) == expected


def test_all_pairs_covered_once():
    a = list(range(0, 9))
    b = list(range(5, 13))
    pairs = [p for chunk in PairChunkIter(a, b, 2) for p in chunk.pairs]
    only_a = set(a) - set(b)
    only_b = set(b) - set(a)
    both = set(a) & set(b)
    expected = {(x, y) for x in only_a for y in only_b}
    expected |= {(x, y) for x in both for y in both}
    assert len(pairs) == len(set(pairs))
    assert set(pairs) == expected


def test_related_bounded_by_size():
    size = 3
    for chunk in PairChunkIter(range(10), range(5, 15), size):
        members = {x for pair in chunk.pairs for x in pair}
        assert set(chunk.related) == members
        assert chunk.related == sorted(chunk.related)
        assert len(chunk.related) <= 2 * size


def test_empty_inputs_produce_nothing():
    it = PairChunkIter([], [], 4)
    assert it.n_chunks() == 0
    assert list(it) == []


def test_invalid_size():
    with pytest.raises(ValueError):
        PairChunkIter([1], [2], 0)