"""Survival helpers for generational loops.

These wrap :class:`~envsel.archive.ArchiveBuilder` for the two shapes a
breeding loop usually holds its population in: parallel ``X``/``F`` arrays,
or a sequence of arbitrary individual objects.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

import numpy as np

from .archive import ArchiveBuilder, ArchiveResult
from .config import SelectionConfigData
from .exceptions import ObjectiveShapeError
from .population import as_objective_matrix
from .ranking import FrontPartitioner

T = TypeVar("T")


def nsgaiii_survival(
    X: np.ndarray,
    F: np.ndarray,
    X_off: np.ndarray,
    F_off: np.ndarray,
    pop_size: int,
    rng: np.random.Generator,
    *,
    config: SelectionConfigData | None = None,
    partitioner: FrontPartitioner | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Perform (mu + lambda) survival selection with reference-point niching.

    Parameters
    ----------
    X : np.ndarray
        Parent decision vectors.
    F : np.ndarray
        Parent objective values.
    X_off : np.ndarray
        Offspring decision vectors.
    F_off : np.ndarray
        Offspring objective values.
    pop_size : int
        Target population size.
    rng : np.random.Generator
        Random number generator.
    config : SelectionConfigData, optional
        Selection settings; defaults to 6 divisions and minimisation.
    partitioner : FrontPartitioner, optional
        Front partitioning collaborator.

    Returns
    -------
    tuple
        (X_new, F_new, survivor_indices) where survivor_indices
        are indices into the combined [X, X_off] array.
    """
    if X.shape[0] != F.shape[0] or X_off.shape[0] != F_off.shape[0]:
        raise ObjectiveShapeError(
            "Decision and objective arrays must have the same number of rows.",
            shape=F.shape,
        )
    X_all = np.vstack([X, X_off])
    F_all = np.vstack([F, F_off])
    builder = ArchiveBuilder(config or SelectionConfigData(), partitioner)
    survivors = builder.build(F_all, target_size=pop_size, rng=rng).indices
    return X_all[survivors], F_all[survivors], survivors


def select_individuals(
    individuals: Sequence[T],
    objectives: Sequence[Sequence[float]] | Callable[[T], Sequence[float]],
    target_size: int,
    rng: np.random.Generator | None = None,
    *,
    config: SelectionConfigData | None = None,
    partitioner: FrontPartitioner | None = None,
) -> tuple[list[T], ArchiveResult]:
    """
    Select ``target_size`` objects from ``individuals``.

    ``objectives`` is either a matrix aligned with ``individuals`` or a
    callable returning one individual's objective vector.
    """
    if callable(objectives):
        F = as_objective_matrix([objectives(ind) for ind in individuals])
    else:
        F = as_objective_matrix(objectives)
    if F.shape[0] != len(individuals):
        raise ObjectiveShapeError(
            f"Got {F.shape[0]} objective vectors for {len(individuals)} individuals.",
            shape=F.shape,
        )
    result = ArchiveBuilder(config or SelectionConfigData(), partitioner).build(F, target_size, rng)
    return [individuals[i] for i in result.indices], result


__all__ = ["nsgaiii_survival", "select_individuals"]
