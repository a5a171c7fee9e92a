import numpy as np

from envsel.ranking import assign_front_ranks, fast_non_dominated_sort, partition_fronts


def _dominates(a, b):
    return np.all(a <= b) and np.any(a < b)


def test_fronts_are_disjoint_exhaustive_and_ordered():
    rng = np.random.default_rng(0)
    F = rng.uniform(size=(50, 3))
    fronts, ranks = fast_non_dominated_sort(F)

    members = np.concatenate(fronts)
    assert np.array_equal(np.sort(members), np.arange(50))
    for level, front in enumerate(fronts):
        assert np.all(ranks[front] == level)
        for p in front:
            for q in front:
                assert not _dominates(F[p], F[q])
        if level > 0:
            for q in front:
                assert any(_dominates(F[p], F[q]) for p in fronts[level - 1])


def test_duplicates_share_a_front():
    F = np.array([[1.0, 2.0], [1.0, 2.0], [0.0, 3.0], [2.0, 3.0]])
    fronts = partition_fronts(F)
    assert [f.tolist() for f in fronts] == [[0, 1, 2], [3]]


def test_empty_population():
    fronts, ranks = fast_non_dominated_sort(np.empty((0, 2)))
    assert fronts == []
    assert ranks.size == 0


def test_assign_front_ranks_marks_missing_rows():
    ranks = assign_front_ranks([np.array([2, 0]), np.array([3])], 5)
    np.testing.assert_array_equal(ranks, [0, -1, 0, 1, -1])
