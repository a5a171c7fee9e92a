"""Niche-preserving selection from the boundary front."""

from __future__ import annotations

import logging
from typing import MutableSequence

import numpy as np

from .exceptions import SelectionContractError
from .reference_point import ReferencePoint

_logger = logging.getLogger(__name__)


def find_niche_reference_point(
    reference_points: MutableSequence[ReferencePoint],
    rng: np.random.Generator,
) -> int:
    """Position (in ``reference_points``) of a uniformly drawn least-crowded point."""
    counts = np.fromiter((rp.associations for rp in reference_points), dtype=np.int64, count=len(reference_points))
    candidates = np.flatnonzero(counts == counts.min())
    return int(candidates[rng.integers(candidates.size)])


def select_cluster_member(reference_point: ReferencePoint, rng: np.random.Generator) -> int | None:
    """
    Take one associate from ``reference_point``.

    The closest associate is taken while the niche is still empty, otherwise a
    random one. Returns None when no associates are left.
    """
    if not reference_point.has_associates:
        return None
    if reference_point.associations == 0:
        return reference_point.take_closest()
    return reference_point.take_random(rng)


def select_remaining(
    reference_points: MutableSequence[ReferencePoint],
    needed: int,
    rng: np.random.Generator,
) -> list[int]:
    """
    Pick ``needed`` boundary-front individuals, one niche at a time.

    Reference points found without associates are dropped from
    ``reference_points`` for the rest of the pass. Running out of points
    before ``needed`` is met is a contract violation.
    """
    chosen: list[int] = []
    while len(chosen) < needed:
        if not reference_points:
            raise SelectionContractError(
                f"Boundary front exhausted after {len(chosen)} of {needed} selections.",
                needed=needed,
                selected=len(chosen),
            )
        pos = find_niche_reference_point(reference_points, rng)
        rp = reference_points[pos]
        handle = select_cluster_member(rp, rng)
        if handle is None:
            del reference_points[pos]
            continue
        rp.add_association()
        chosen.append(handle)
    _logger.debug("Niche selection picked %d individuals; %d reference points left", len(chosen), len(reference_points))
    return chosen


__all__ = ["find_niche_reference_point", "select_cluster_member", "select_remaining"]
