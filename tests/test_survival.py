from dataclasses import dataclass

import numpy as np
import pytest

from envsel.config import SelectionConfig
from envsel.exceptions import ObjectiveShapeError
from envsel.survival import nsgaiii_survival, select_individuals


def test_nsgaiii_survival_merges_parents_and_offspring():
    rng = np.random.default_rng(0)
    X = rng.uniform(size=(20, 5))
    F = rng.uniform(size=(20, 3))
    X_off = rng.uniform(size=(20, 5))
    F_off = rng.uniform(size=(20, 3))

    X_new, F_new, survivors = nsgaiii_survival(X, F, X_off, F_off, 20, np.random.default_rng(1))

    assert X_new.shape == (20, 5)
    assert F_new.shape == (20, 3)
    assert np.unique(survivors).size == 20
    np.testing.assert_array_equal(F_new, np.vstack([F, F_off])[survivors])
    np.testing.assert_array_equal(X_new, np.vstack([X, X_off])[survivors])


def test_nsgaiii_survival_prefers_dominating_offspring():
    X = np.zeros((3, 1))
    F = np.array([[1.0, 1.0], [1.2, 1.1], [1.1, 1.3]])
    X_off = np.ones((3, 1))
    F_off = F - 0.5
    _, F_new, survivors = nsgaiii_survival(X, F, X_off, F_off, 3, np.random.default_rng(0))
    np.testing.assert_array_equal(np.sort(survivors), [3, 4, 5])
    np.testing.assert_allclose(np.sort(F_new, axis=0), np.sort(F_off, axis=0))


def test_nsgaiii_survival_honours_config_divisions():
    rng = np.random.default_rng(2)
    F = rng.uniform(size=(30, 4))
    cfg = SelectionConfig().divisions(2).fixed()
    _, F_new, _ = nsgaiii_survival(
        np.zeros((15, 2)), F[:15], np.zeros((15, 2)), F[15:], 10, np.random.default_rng(3), config=cfg
    )
    assert F_new.shape == (10, 4)


def test_nsgaiii_survival_rejects_misaligned_arrays():
    with pytest.raises(ObjectiveShapeError):
        nsgaiii_survival(np.zeros((3, 2)), np.zeros((2, 2)), np.zeros((1, 2)), np.zeros((1, 2)), 2, np.random.default_rng(0))


@dataclass
class _Candidate:
    name: str
    cost: float
    weight: float


def test_select_individuals_returns_caller_objects():
    pool = [
        _Candidate("a", 1.0, 4.0),
        _Candidate("b", 2.0, 2.0),
        _Candidate("c", 4.0, 1.0),
        _Candidate("d", 5.0, 5.0),
        _Candidate("e", 3.0, 3.0),
    ]
    chosen, result = select_individuals(pool, lambda c: (c.cost, c.weight), 3, np.random.default_rng(0))
    assert sorted(c.name for c in chosen) == ["a", "b", "c"]
    assert result.boundary_rank is None


def test_select_individuals_accepts_objective_matrix():
    pool = ["x", "y", "z"]
    chosen, _ = select_individuals(pool, [[0.0, 1.0], [1.0, 0.0], [2.0, 2.0]], 2, np.random.default_rng(0))
    assert sorted(chosen) == ["x", "y"]


def test_select_individuals_checks_alignment():
    with pytest.raises(ObjectiveShapeError):
        select_individuals(["x", "y"], [[0.0, 1.0]], 1)
