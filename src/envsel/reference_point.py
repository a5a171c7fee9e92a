"""Per-generation niche bookkeeping around one lattice position."""

from __future__ import annotations

import numpy as np

from .lattice import ReferenceLattice


class ReferencePoint:
    """
    A lattice position plus the niche state of the current selection pass.

    ``associations`` counts individuals already accepted into the archive
    that sit closest to this point. The associate list holds boundary-front
    candidates as parallel ``(distance, handle)`` entries, where a handle is
    the individual's row index in the candidate pool. Taking a candidate
    removes it by list position and hands ownership to the caller.
    """

    __slots__ = ("position", "associations", "_distances", "_handles")

    def __init__(self, position: np.ndarray) -> None:
        self.position = position
        self.associations = 0
        self._distances: list[float] = []
        self._handles: list[int] = []

    def __repr__(self) -> str:
        pos = ", ".join(f"{v:.3g}" for v in self.position)
        return f"ReferencePoint(({pos}), associations={self.associations}, associates={len(self._handles)})"

    @property
    def has_associates(self) -> bool:
        return bool(self._handles)

    @property
    def n_associates(self) -> int:
        return len(self._handles)

    def associates(self) -> list[tuple[float, int]]:
        return list(zip(self._distances, self._handles))

    def clear(self) -> None:
        self.associations = 0
        self._distances.clear()
        self._handles.clear()

    def add_association(self) -> None:
        self.associations += 1

    def add_associate(self, handle: int, distance: float) -> None:
        self._handles.append(int(handle))
        self._distances.append(float(distance))

    def take_closest(self) -> int:
        """Remove and return the associate with the smallest distance (first on ties)."""
        if not self._handles:
            raise IndexError("take_closest() on a reference point without associates")
        best = 0
        best_dist = self._distances[0]
        for pos in range(1, len(self._distances)):
            if self._distances[pos] < best_dist:
                best = pos
                best_dist = self._distances[pos]
        return self._take(best)

    def take_random(self, rng: np.random.Generator) -> int:
        if not self._handles:
            raise IndexError("take_random() on a reference point without associates")
        return self._take(int(rng.integers(len(self._handles))))

    def _take(self, pos: int) -> int:
        self._distances.pop(pos)
        return self._handles.pop(pos)


def build_reference_points(lattice: ReferenceLattice) -> list[ReferencePoint]:
    """Fresh, empty niche state for every lattice position, in lattice order."""
    return [ReferencePoint(row) for row in lattice.positions]


__all__ = ["ReferencePoint", "build_reference_points"]
