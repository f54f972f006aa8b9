import torch

from utils.sampling import flatten_groups, index_map, sample_neighbors, unique_union


def test_sample_keeps_all_when_under_cap():
    assert sample_neighbors({5, 3, 9}, 3) == [3, 5, 9]
    assert sample_neighbors({5, 3, 9}, 10) == [3, 5, 9]
    assert sample_neighbors({5, 3, 9}, None) == [3, 5, 9]
    assert sample_neighbors(set(), 2) == []


def test_sample_is_without_replacement():
    pool = set(range(20))
    for seed in range(10):
        g = torch.Generator().manual_seed(seed)
        picked = sample_neighbors(pool, 7, g)
        assert len(picked) == 7
        assert len(set(picked)) == 7
        assert set(picked) <= pool


def test_sample_reproducible_with_same_seed():
    pool = set(range(50))
    a = sample_neighbors(pool, 5, torch.Generator().manual_seed(3))
    b = sample_neighbors(pool, 5, torch.Generator().manual_seed(3))
    assert a == b


def test_unique_union_dedupes_in_first_seen_order():
    union = unique_union([4, 1, 4], [[2, 1], [], [3, 2, 4]])
    assert union == [4, 1, 2, 3]
    assert index_map(union) == {4: 0, 1: 1, 2: 2, 3: 3}


def test_flatten_groups():
    u2i = {10: 0, 20: 1, 30: 2}
    rows, segs = flatten_groups([[20, 30], [], [10]], u2i)
    assert rows.tolist() == [1, 2, 0]
    assert segs.tolist() == [0, 0, 2]
