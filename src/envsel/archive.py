"""Archive construction: whole fronts first, niching on the boundary front.

References:
    K. Deb and H. Jain, "An Evolutionary Many-Objective Optimization Algorithm
    Using Reference-Point-Based Nondominated Sorting Approach, Part I: Solving
    Problems With Box Constraints," IEEE Trans. Evolutionary Computation,
    vol. 18, no. 4, 2014.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .association import associate
from .config import DEFAULT_DIVISIONS, SelectionConfigData, coerce_maximize
from .exceptions import MissingConfigError, SelectionContractError
from .lattice import ReferenceLattice, generate_reference_points, load_reference_points
from .niching import select_remaining
from .normalization import Normalization, normalize_objectives
from .population import SelectionAnnotations, as_objective_matrix, check_target_size, to_minimization
from .ranking import FrontPartitioner, assign_front_ranks, partition_fronts
from .reference_point import build_reference_points

_logger = logging.getLogger(__name__)


class ArchiveState(enum.Enum):
    ACCUMULATING = "accumulating"
    RESOLVING_BOUNDARY = "resolving_boundary"
    DONE = "done"


@dataclass(frozen=True, eq=False)
class ArchiveResult:
    """
    Outcome of one archive build.

    Attributes
    ----------
    indices : np.ndarray
        Row indices of the selected individuals, in archive order.
    annotations : SelectionAnnotations
        Ranks and normalized objectives (read-only).
    fronts : list[np.ndarray]
        Every front produced by the partitioner.
    boundary_rank : int or None
        Rank of the front that was niched, None when whole fronts filled the archive.
    normalization : Normalization or None
        Ideal point, extremes and intercepts of the niching step.
    """

    indices: np.ndarray
    annotations: SelectionAnnotations
    fronts: list[np.ndarray]
    boundary_rank: Optional[int]
    normalization: Optional[Normalization]

    @property
    def ranks(self) -> np.ndarray:
        return self.annotations.ranks[self.indices]


class ArchiveBuilder:
    """
    Builds the next archive from a combined parent + offspring pool.

    Parameters
    ----------
    config : SelectionConfigData
        Selection settings (lattice resolution, target size, maximisation).
    partitioner : FrontPartitioner, optional
        Front partitioning collaborator; fast non-dominated sort by default.

    Examples
    --------
    >>> cfg = SelectionConfig().target_size(10).fixed()
    >>> result = ArchiveBuilder(cfg).build(F, rng=np.random.default_rng(0))
    >>> survivors = F[result.indices]
    """

    def __init__(
        self,
        config: SelectionConfigData,
        partitioner: FrontPartitioner | None = None,
    ) -> None:
        self.cfg = config
        self.partitioner: FrontPartitioner = partitioner or partition_fronts
        self.state = ArchiveState.ACCUMULATING
        self._file_lattice: ReferenceLattice | None = None

    def reference_lattice(self, n_obj: int) -> ReferenceLattice:
        if self.cfg.reference_points_path:
            if self._file_lattice is None or self._file_lattice.n_obj != n_obj:
                self._file_lattice = load_reference_points(self.cfg.reference_points_path, n_obj)
            return self._file_lattice
        return generate_reference_points(n_obj, self.cfg.divisions, max_points=self.cfg.max_reference_points)

    def build(
        self,
        F: np.ndarray,
        target_size: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> ArchiveResult:
        F = as_objective_matrix(F)
        n, n_obj = F.shape
        size = target_size if target_size is not None else self.cfg.target_size
        if size is None:
            raise MissingConfigError("target_size", "SelectionConfig")
        size = check_target_size(size, n)
        if rng is None:
            rng = np.random.default_rng(self.cfg.seed)

        F_min = to_minimization(F, self.cfg.maximize)
        fronts = [np.asarray(front, dtype=int) for front in self.partitioner(F_min)]
        annotations = SelectionAnnotations.empty(n, n_obj)
        annotations.ranks[:] = assign_front_ranks(fronts, n)

        self._transition(ArchiveState.ACCUMULATING)
        archive: list[np.ndarray] = []
        n_accepted = 0
        boundary_rank: int | None = None
        normalization: Normalization | None = None

        for rank, front in enumerate(fronts):
            if n_accepted + front.size <= size:
                archive.append(front)
                n_accepted += front.size
                if n_accepted == size:
                    break
                continue

            self._transition(ArchiveState.RESOLVING_BOUNDARY)
            boundary_rank = rank
            considered = fronts[: rank + 1]
            needed = size - n_accepted
            normalization = normalize_objectives(F_min, considered, annotations)
            reference_points = build_reference_points(self.reference_lattice(n_obj))
            associate(considered, annotations.normalized, reference_points)
            chosen = select_remaining(reference_points, needed, rng)
            archive.append(np.asarray(chosen, dtype=int))
            n_accepted += len(chosen)
            break

        self._transition(ArchiveState.DONE)
        indices = np.concatenate(archive) if archive else np.empty(0, dtype=int)
        if indices.size != size or np.unique(indices).size != indices.size:
            raise SelectionContractError(
                f"Archive holds {indices.size} individuals ({np.unique(indices).size} distinct), expected {size}.",
                needed=size,
                selected=int(indices.size),
            )
        return ArchiveResult(
            indices=indices,
            annotations=annotations.freeze(),
            fronts=fronts,
            boundary_rank=boundary_rank,
            normalization=normalization,
        )

    def _transition(self, state: ArchiveState) -> None:
        _logger.debug("Archive state %s -> %s", self.state.value, state.value)
        self.state = state


def environmental_selection(
    F: np.ndarray,
    target_size: int,
    *,
    divisions: int = DEFAULT_DIVISIONS,
    maximize: bool | Sequence[bool] = False,
    rng: np.random.Generator | None = None,
    partitioner: FrontPartitioner | None = None,
) -> np.ndarray:
    """Indices of the ``target_size`` survivors of ``F``; see :class:`ArchiveBuilder`."""
    cfg = SelectionConfigData(
        divisions=divisions,
        target_size=target_size,
        maximize=coerce_maximize(maximize),
    )
    return ArchiveBuilder(cfg, partitioner).build(F, rng=rng).indices


def rank_population(F: np.ndarray, maximize: bool | Sequence[bool] = False) -> np.ndarray:
    """Dominance rank of every row of ``F``."""
    F = to_minimization(as_objective_matrix(F), maximize)
    return assign_front_ranks(partition_fronts(F), F.shape[0])


__all__ = [
    "ArchiveState",
    "ArchiveResult",
    "ArchiveBuilder",
    "environmental_selection",
    "rank_population",
]
