"""Pareto front partitioning.

The archive builder treats partitioning as a collaborator: anything that
satisfies :class:`FrontPartitioner` can be injected. The default is the
classical fast non-dominated sort for minimisation.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class FrontPartitioner(Protocol):
    """Splits an objective matrix into rank-ordered, disjoint fronts."""

    def __call__(self, F: np.ndarray) -> list[np.ndarray]: ...


def fast_non_dominated_sort(F: np.ndarray) -> tuple[list[np.ndarray], np.ndarray]:
    """
    Classic O(N^2) fast non-dominated sort.
    Returns:
      - fronts: list of index arrays per front (0, 1, ...)
      - rank: array with the front rank for each solution
    """
    N = F.shape[0]
    if N == 0:
        return [], np.empty(0, dtype=int)

    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    dom_matrix = np.logical_and(
        np.all(less_equal, axis=2),
        np.any(strictly_less, axis=2),
    )

    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.empty(N, dtype=int)
    fronts: list[np.ndarray] = []

    current = np.flatnonzero(dominated_count == 0)
    level = 0
    while current.size > 0:
        fronts.append(current.astype(int))
        rank[current] = level
        dom_contrib = dom_matrix[current].sum(axis=0)
        dominated_count -= dom_contrib
        dominated_count[current] = -1
        dom_matrix[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


def partition_fronts(F: np.ndarray) -> list[np.ndarray]:
    """Default :class:`FrontPartitioner`."""
    fronts, _ = fast_non_dominated_sort(F)
    return fronts


def assign_front_ranks(fronts: Sequence[np.ndarray], n: int) -> np.ndarray:
    """Rank vector for ``n`` individuals; ``-1`` marks anyone outside ``fronts``."""
    ranks = np.full(n, -1, dtype=int)
    for level, front in enumerate(fronts):
        ranks[np.asarray(front, dtype=int)] = level
    return ranks


__all__ = [
    "FrontPartitioner",
    "fast_non_dominated_sort",
    "partition_fronts",
    "assign_front_ranks",
]
