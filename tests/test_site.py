import pytest

from ibdshare.site import AlleleBuffer, Sites


def _sites(entries):
    sites = Sites()
    for pos, data in entries:
        sites.add_site_with_bytes(pos, data)
    return sites


def _vcf_like_buffer(alleles):
    buf = AlleleBuffer()
    buf.push(alleles[0])
    for allele in alleles[1:]:
        buf.push(b" ")
        buf.push_to_data_only(allele)
    return buf


def test_add_and_get_round_trip():
    entries = [(10, b"A C"), (20, b"G T"), (20, b"G A")]
    sites = _sites(entries)
    assert len(sites) == 3
    assert [sites.site_by_idx(i) for i in range(3)] == entries
    assert list(sites) == entries
    assert sites.positions() == [10, 20, 20]


def test_decreasing_position_rejected():
    sites = _sites([(10, b"A")])
    with pytest.raises(ValueError):
        sites.add_site_with_bytes(5, b"C")
    assert len(sites) == 1


def test_append_bytes_to_last_allele():
    sites = _sites([(1, b"A"), (2, b"C")])
    sites.append_bytes_to_last_allele(b" ")
    sites.append_bytes_to_last_allele(b"T")
    assert len(sites) == 2
    assert sites.alleles_by_idx(0) == b"A"
    assert sites.alleles_by_idx(1) == b"C T"


def test_site_by_position():
    sites = _sites([(1, b"A C"), (7, b"G T")])
    assert sites.site_by_position(7) == b"G T"
    with pytest.raises(KeyError):
        sites.site_by_position(3)


def test_idx_by_position_covers_duplicates():
    sites = _sites([(1, b"A"), (3, b"C"), (3, b"G"), (5, b"T")])
    start, end = sites.idx_by_position(3)
    assert [sites.site_by_idx(i)[0] for i in range(start, end)] == [3, 3]
    assert end - start == 2
    missing = sites.idx_by_position(4)
    assert missing[0] == missing[1]


def test_merge_keeps_alleles():
    a = [(1, b"A C"), (2, b"G")]
    b = [(3, b"T A"), (4, b"C G T")]
    sites = _sites(a)
    sites.merge(_sites(b))
    assert list(sites) == a + b


def test_sort_by_position_then_allele():
    first = [(10, b"T"), (20, b"A")]
    second = [(5, b"G"), (10, b"C")]
    sites = _sites(first)
    sites.merge(_sites(second))
    original = list(sites)
    order = sites.sort_by_position_then_allele()
    result = list(sites)
    assert sorted(order) == list(range(4))
    assert result == [original[i] for i in order]
    assert result == sorted(original)


def test_index_out_of_range():
    sites = _sites([(1, b"A")])
    with pytest.raises(IndexError):
        sites.alleles_by_idx(1)


def test_add_site_skips_dropped_alleles():
    buf = _vcf_like_buffer([b"A", b"C", b"G"])
    buf.set_enc(1, 0xFF)
    sites = Sites()
    sites.add_site(100, buf)
    assert sites.site_by_position(100) == b"A G"


def test_add_site_requires_increasing_positions():
    buf = _vcf_like_buffer([b"A", b"C"])
    sites = Sites()
    sites.add_site(100, buf)
    with pytest.raises(ValueError):
        sites.add_site(100, buf)
    assert sites.site_by_position(100) == b"A C"


def test_allele_buffer_get_and_encoding():
    buf = _vcf_like_buffer([b"A", b"C", b"G"])
    assert len(buf) == 3
    assert buf.get(0) == b"A"
    assert buf.get(2) == b" G"
    assert [buf.get_enc(i) for i in range(3)] == [0, 1, 2]
    buf.set_enc(2, 7)
    assert buf.get_enc(2) == 7


def test_allele_buffer_clear_and_bounds():
    buf = _vcf_like_buffer([b"A", b"T"])
    buf.clear()
    assert len(buf) == 0
    with pytest.raises(IndexError):
        buf.get(0)
    buf.push(b"G")
    assert buf.get(0) == b"G"


def test_allele_buffer_rejects_large_encoding():
    buf = _vcf_like_buffer([b"A"])
    with pytest.raises(ValueError):
        buf.set_enc(0, 256)
    assert buf.get_enc(0) == 0