import math

import pytest

from ibdshare.coverage import CovCounter


def _source_counter():
    counter = CovCounter([(10, 11), (20, 21), (30, 31), (40, 41)])
    for start, end in [(10, 22), (10, 21), (1, 34)]:
        counter.count_over_interval(start, end)
    return counter


def test_cov_counter_counts():
    assert _source_counter().counts() == [3, 3, 1, 0]


def test_median_and_mean():
    counter = _source_counter()
    assert counter.median_count() == 2.0
    assert counter.mean_count() == 1.75


def test_odd_median():
    counter = CovCounter([(0, 1), (5, 6), (9, 10)])
    counter.count_over_interval(0, 6)
    assert counter.median_count() == 1.0


def test_counts_keep_input_order_while_iteration_is_sorted():
    counter = CovCounter([(40, 41), (10, 11), (20, 21)])
    counter.count_over_interval(0, 15)
    counter.count_over_interval(35, 50)
    counter.count_over_interval(38, 45)
    assert counter.counts() == [2, 1, 0]
    assert counter.intervals() == [(10, 11), (20, 21), (40, 41)]
    assert list(counter.iter_sorted_start_end_count()) == [
        (10, 11, 1),
        (20, 21, 0),
        (40, 41, 2),
    ]


def test_query_is_half_open():
    counter = CovCounter([(10, 20)])
    counter.count_over_interval(20, 30)
    counter.count_over_interval(0, 10)
    assert counter.counts() == [0]
    counter.count_over_interval(19, 20)
    assert counter.counts() == [1]


def test_empty_query_counts_nothing():
    counter = CovCounter([(10, 20)])
    counter.count_over_interval(15, 15)
    assert counter.counts() == [0]


def test_from_range():
    counter = CovCounter.from_range(0, 10, 3)
    assert counter.n_intervals() == 4
    assert counter.intervals() == [(0, 1), (3, 4), (6, 7), (9, 10)]
    counter.count_over_interval(2, 8)
    assert counter.counts() == [0, 1, 1, 0]


def test_from_range_rejects_bad_step():
    with pytest.raises(ValueError):
        CovCounter.from_range(0, 10, 0)


def test_empty_counter_statistics():
    counter = CovCounter([])
    assert counter.n_intervals() == 0
    assert math.isnan(counter.mean_count())
    with pytest.raises(ValueError):
        counter.median_count()