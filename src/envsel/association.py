"""Association of individuals to reference points by perpendicular distance."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .reference_point import ReferencePoint


def perpendicular_distance(direction: np.ndarray, point: np.ndarray) -> float:
    """Distance from ``point`` to the line through the origin along ``direction``."""
    direction = np.asarray(direction, dtype=float)
    point = np.asarray(point, dtype=float)
    k = float(direction @ point) / float(direction @ direction)
    return float(np.sqrt(np.sum(np.square(k * direction - point))))


def perpendicular_distances(points: np.ndarray, directions: np.ndarray) -> np.ndarray:
    """
    Pairwise perpendicular distances.

    Parameters
    ----------
    points : np.ndarray
        Normalized objective vectors, shape (n, n_obj).
    directions : np.ndarray
        Reference point positions, shape (n_ref, n_obj).

    Returns
    -------
    np.ndarray
        Distances of shape (n, n_ref).
    """
    points = np.atleast_2d(points)
    directions = np.atleast_2d(directions)
    k = (points @ directions.T) / np.sum(np.square(directions), axis=1)
    diff = k[:, :, None] * directions[None, :, :] - points[:, None, :]
    return np.sqrt(np.sum(np.square(diff), axis=2))


def associate(
    fronts: Sequence[np.ndarray],
    normalized: np.ndarray,
    reference_points: Sequence[ReferencePoint],
) -> tuple[np.ndarray, np.ndarray]:
    """
    Attach every individual in ``fronts`` to its nearest reference point.

    Members of every front but the last only bump the niche count of their
    nearest point. Members of the last (boundary) front are recorded as
    associates together with their distance. Niche state is cleared first.
    The earliest reference point wins distance ties.

    Returns
    -------
    tuple
        (niche, distance) arrays indexed by row; entries for individuals
        outside ``fronts`` are ``-1`` and NaN.
    """
    for rp in reference_points:
        rp.clear()

    n = normalized.shape[0]
    niche = np.full(n, -1, dtype=int)
    distance = np.full(n, np.nan, dtype=float)
    if not reference_points:
        return niche, distance
    directions = np.vstack([rp.position for rp in reference_points])

    last = len(fronts) - 1
    for t, front in enumerate(fronts):
        idx = np.asarray(front, dtype=int)
        if idx.size == 0:
            continue
        dist = perpendicular_distances(normalized[idx], directions)
        nearest = np.argmin(dist, axis=1)
        niche[idx] = nearest
        distance[idx] = dist[np.arange(idx.size), nearest]
        for handle, r in zip(idx, nearest):
            if t != last:
                reference_points[r].add_association()
            else:
                reference_points[r].add_associate(int(handle), float(distance[handle]))
    return niche, distance


__all__ = ["perpendicular_distance", "perpendicular_distances", "associate"]
