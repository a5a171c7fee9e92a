"""Candidate pool validation and per-generation annotations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .exceptions import ObjectiveShapeError, TargetSizeError


@dataclass
class SelectionAnnotations:
    """
    Bookkeeping written by one selection pass, keyed by row index.

    Attributes
    ----------
    ranks : np.ndarray
        Dominance rank per individual, ``-1`` for rows missing from every front.
    normalized : np.ndarray
        Normalized objectives, shape ``(n, n_obj)``. Rows stay NaN until
        normalization ran for the individual's front.
    """

    ranks: np.ndarray
    normalized: np.ndarray

    @classmethod
    def empty(cls, n: int, n_obj: int) -> "SelectionAnnotations":
        return cls(
            ranks=np.full(n, -1, dtype=int),
            normalized=np.full((n, n_obj), np.nan, dtype=float),
        )

    def freeze(self) -> "SelectionAnnotations":
        self.ranks.setflags(write=False)
        self.normalized.setflags(write=False)
        return self


def as_objective_matrix(F: np.ndarray | Sequence[Sequence[float]], n_obj: int | None = None) -> np.ndarray:
    """Validate ``F`` and return it as a float64 matrix."""
    try:
        arr = np.asarray(F, dtype=float)
    except ValueError as exc:
        raise ObjectiveShapeError("Objective vectors must all have the same length.") from exc
    if arr.ndim != 2:
        raise ObjectiveShapeError(
            f"Objective matrix must be 2-D (n_individuals, n_obj), got shape {arr.shape}.",
            shape=arr.shape,
        )
    if arr.shape[1] < 1:
        raise ObjectiveShapeError("At least one objective is required.", shape=arr.shape, n_obj=0)
    if n_obj is not None and arr.shape[1] != n_obj:
        raise ObjectiveShapeError(
            f"Expected {n_obj} objectives, got {arr.shape[1]}.",
            shape=arr.shape,
            n_obj=n_obj,
        )
    if not np.all(np.isfinite(arr)):
        raise ObjectiveShapeError("Objective values must be finite.", shape=arr.shape)
    return arr


def to_minimization(F: np.ndarray, maximize: bool | Sequence[bool]) -> np.ndarray:
    """Return a copy of ``F`` with maximised objectives negated."""
    flags = np.asarray(maximize, dtype=bool)
    if flags.ndim == 0:
        flags = np.full(F.shape[1], bool(flags))
    elif flags.shape != (F.shape[1],):
        raise ObjectiveShapeError(
            f"maximize has {flags.size} flags for {F.shape[1]} objectives.",
            shape=F.shape,
            n_obj=F.shape[1],
        )
    if not flags.any():
        return F
    signs = np.where(flags, -1.0, 1.0)
    return F * signs


def check_target_size(target_size: int, pool_size: int) -> int:
    size = int(target_size)
    if size != target_size or size < 1 or size > pool_size:
        raise TargetSizeError(target_size, pool_size)
    return size


__all__ = [
    "SelectionAnnotations",
    "as_objective_matrix",
    "to_minimization",
    "check_target_size",
]
