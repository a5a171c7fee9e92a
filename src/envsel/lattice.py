"""Simplex-lattice reference points.

The lattice for ``(n_obj, divisions)`` holds every composition of
``divisions`` into ``n_obj`` non-negative parts, each part divided by
``divisions``. Lattices are pure functions of those two integers, so they are
built once, frozen and cached.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from math import comb
from typing import Optional

import numpy as np

from .exceptions import ReferenceLatticeError

_logger = logging.getLogger(__name__)

_DIMENSION_HINT = "Use n_obj >= 1 and divisions >= 0"
_FILE_HINT = "Rows must be non-negative weights on the unit simplex, one row per reference point"


@dataclass(frozen=True, eq=False)
class ReferenceLattice:
    """Immutable set of reference point positions, shape ``(R, n_obj)``."""

    positions: np.ndarray
    n_obj: int
    divisions: int

    def __len__(self) -> int:
        return int(self.positions.shape[0])


def count_reference_points(n_obj: int, divisions: int) -> int:
    """Number of lattice points, ``C(divisions + n_obj - 1, n_obj - 1)``."""
    _check_dimensions(n_obj, divisions)
    return comb(divisions + n_obj - 1, n_obj - 1)


def generate_reference_points(
    n_obj: int,
    divisions: int,
    *,
    max_points: Optional[int] = None,
) -> ReferenceLattice:
    """
    Build the simplex lattice for ``n_obj`` objectives and ``divisions`` steps.

    Points are enumerated depth-first on the leading coordinate, so for
    ``n_obj=2, divisions=4`` the order is (0, 1), (0.25, 0.75), ..., (1, 0).
    The order is part of the contract: association breaks distance ties in
    favour of the earliest point.

    ``max_points`` guards against combinatorial blow-up; the count is checked
    before anything is enumerated.
    """
    n_points = count_reference_points(n_obj, divisions)
    if max_points is not None and n_points > max_points:
        raise ReferenceLatticeError(
            f"Lattice for n_obj={n_obj}, divisions={divisions} has {n_points} points "
            f"which exceeds max_points={max_points}.",
            n_obj=n_obj,
            divisions=divisions,
        )
    return _cached_lattice(int(n_obj), int(divisions))


@lru_cache(maxsize=32)
def _cached_lattice(n_obj: int, divisions: int) -> ReferenceLattice:
    _logger.debug("Generating reference lattice n_obj=%d divisions=%d", n_obj, divisions)
    positions = _simplex_lattice(n_obj, divisions)
    positions.setflags(write=False)
    return ReferenceLattice(positions=positions, n_obj=n_obj, divisions=divisions)


def _check_dimensions(n_obj: int, divisions: int) -> None:
    if n_obj < 1:
        raise ReferenceLatticeError(
            f"n_obj must be >= 1, got {n_obj}.", n_obj=n_obj, divisions=divisions, suggestion=_DIMENSION_HINT
        )
    if divisions < 0:
        raise ReferenceLatticeError(
            f"divisions must be >= 0, got {divisions}.", n_obj=n_obj, divisions=divisions, suggestion=_DIMENSION_HINT
        )


def _simplex_lattice(n_obj: int, divisions: int) -> np.ndarray:
    if divisions == 0:
        # 0/0 has no lattice meaning; the only direction left is the centroid.
        return np.full((1, n_obj), 1.0 / n_obj, dtype=float)

    coords: list[tuple[int, ...]] = []

    def rec(remaining: int, depth: int, current: list[int]) -> None:
        if depth == n_obj - 1:
            current.append(remaining)
            coords.append(tuple(current))
            current.pop()
            return
        for value in range(remaining + 1):
            current.append(value)
            rec(remaining - value, depth + 1, current)
            current.pop()

    rec(divisions, 0, [])
    arr = np.asarray(coords, dtype=float)
    arr /= divisions
    return arr


def load_reference_points(path: str, n_obj: Optional[int] = None) -> ReferenceLattice:
    """Load a lattice from a CSV file with one point per row."""
    if not os.path.exists(path):
        raise ReferenceLatticeError(
            f"Reference point file '{path}' does not exist.", suggestion="Check the reference_points path"
        )
    arr = np.loadtxt(path, delimiter=",", ndmin=2).astype(float, copy=False)
    _assert_valid_points(arr, n_obj)
    arr = np.ascontiguousarray(arr)
    arr.setflags(write=False)
    # Files carry no division count.
    return ReferenceLattice(positions=arr, n_obj=int(arr.shape[1]), divisions=-1)


def save_reference_points(path: str, lattice: ReferenceLattice) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    np.savetxt(path, lattice.positions, delimiter=",")


def _assert_valid_points(points: np.ndarray, n_obj: Optional[int]) -> None:
    if points.ndim != 2 or points.shape[0] == 0:
        raise ReferenceLatticeError("Reference point matrix must be 2D and non-empty.", suggestion=_FILE_HINT)
    if n_obj is not None and points.shape[1] != n_obj:
        raise ReferenceLatticeError(
            f"Expected reference points with {n_obj} columns, got {points.shape[1]}.",
            n_obj=n_obj,
            suggestion="Write one column per objective",
        )
    if not np.all(np.isfinite(points)) or np.any(points < 0.0):
        raise ReferenceLatticeError("Reference points must be finite and non-negative.", suggestion=_FILE_HINT)
    rows_sum = points.sum(axis=1)
    # Allow very small numerical drift
    if np.any(np.abs(rows_sum - 1.0) > 1e-6):
        raise ReferenceLatticeError("Each reference point must sum to 1.", suggestion=_FILE_HINT)


__all__ = [
    "ReferenceLattice",
    "count_reference_points",
    "generate_reference_points",
    "load_reference_points",
    "save_reference_points",
]
