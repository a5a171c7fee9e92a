import numpy as np
import pytest

from envsel.archive import ArchiveBuilder
from envsel.config import SelectionConfig
from envsel.exceptions import InputError
from envsel.multipop import select_subpopulations


def _subpops(n_sub=4, n=40, n_obj=3):
    rng = np.random.default_rng(17)
    return [rng.uniform(size=(n, n_obj)) for _ in range(n_sub)]


def test_threaded_and_serial_runs_agree():
    pools = _subpops()
    cfg = SelectionConfig().divisions(4).fixed()
    serial = select_subpopulations(pools, 20, cfg, seed=5)
    threaded = select_subpopulations(pools, 20, cfg, seed=5, n_workers=4)
    assert len(serial) == len(threaded) == 4
    for a, b in zip(serial, threaded):
        np.testing.assert_array_equal(a.indices, b.indices)


def test_each_subpopulation_gets_its_own_size():
    pools = _subpops(n_sub=3)
    results = select_subpopulations(pools, [10, 20, 30], SelectionConfig().fixed(), seed=1, n_workers=2)
    assert [r.indices.size for r in results] == [10, 20, 30]


def test_subpopulation_matches_standalone_build_with_spawned_seed():
    pools = _subpops(n_sub=2)
    cfg = SelectionConfig().fixed()
    results = select_subpopulations(pools, 15, cfg, seed=9)
    child = np.random.SeedSequence(9).spawn(2)[1]
    alone = ArchiveBuilder(cfg).build(pools[1], target_size=15, rng=np.random.default_rng(child))
    np.testing.assert_array_equal(results[1].indices, alone.indices)


def test_mismatched_target_sizes_raise():
    with pytest.raises(InputError):
        select_subpopulations(_subpops(n_sub=2), [10], SelectionConfig().fixed())
