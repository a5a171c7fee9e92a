"""Objective normalization against the hyperplane of extreme points.

Steps, all driven by the first (non-dominated) front:

1. the ideal point is the per-objective minimum over the first front;
2. every individual in every front is translated by the ideal point;
3. for each objective the first-front individual minimising the achievement
   scalarization function (ASF) is taken as that axis' extreme point;
4. the extreme points define a hyperplane whose axis intercepts become the
   per-objective scale. When two axes share an extreme point no unique plane
   exists and the translated extreme values are used instead;
5. translated objectives are divided by the intercepts, with near-zero
   intercepts replaced by ``INTERCEPT_EPS``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .population import SelectionAnnotations

_logger = logging.getLogger(__name__)

ASF_EPS = 1e-6
INTERCEPT_EPS = 1e-10


@dataclass(frozen=True, eq=False)
class Normalization:
    """Transient quantities of one normalization run.

    Attributes
    ----------
    ideal : np.ndarray
        Per-objective minimum over the first front.
    extreme_points : np.ndarray
        Row index of the extreme individual for each objective.
    intercepts : np.ndarray
        Hyperplane intercepts relative to the ideal point.
    degenerate : bool
        True when duplicate extreme points forced the fallback intercepts.
    """

    ideal: np.ndarray
    extreme_points: np.ndarray
    intercepts: np.ndarray
    degenerate: bool


def compute_ideal_point(F: np.ndarray, first_front: np.ndarray) -> np.ndarray:
    # Minima over the pool always sit in the non-dominated front.
    return F[np.asarray(first_front, dtype=int)].min(axis=0)


def translate_objectives(
    F: np.ndarray,
    fronts: Sequence[np.ndarray],
    ideal: np.ndarray,
    out: np.ndarray,
) -> None:
    """Write ``F - ideal`` into ``out`` for every member of ``fronts``."""
    for front in fronts:
        idx = np.asarray(front, dtype=int)
        out[idx] = F[idx] - ideal


def achievement_scalarization(translated: np.ndarray, axis: int) -> np.ndarray:
    """ASF of each row for ``axis``: the max ratio over weights (1 on ``axis``, ``ASF_EPS`` elsewhere)."""
    translated = np.atleast_2d(translated)
    weights = np.full(translated.shape[1], ASF_EPS)
    weights[axis] = 1.0
    return (translated / weights).max(axis=1)


def find_extreme_points(translated: np.ndarray, first_front: np.ndarray) -> np.ndarray:
    """Row index of the ASF-minimising first-front individual for each objective."""
    first_front = np.asarray(first_front, dtype=int)
    n_obj = translated.shape[1]
    extremes = np.empty(n_obj, dtype=int)
    candidates = translated[first_front]
    for axis in range(n_obj):
        asf = achievement_scalarization(candidates, axis)
        # argmin keeps the first minimum, matching a strict-less scan.
        extremes[axis] = first_front[int(np.argmin(asf))]
    return extremes


def gaussian_elimination(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve ``A x = b`` by forward elimination and back substitution.

    No pivoting is performed. A singular system yields non-finite entries
    rather than an exception; the caller's intercept guard absorbs them.
    """
    N = A.shape[0]
    aug = np.hstack([np.asarray(A, dtype=float), np.asarray(b, dtype=float).reshape(N, 1)])
    x = np.zeros(N, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for base in range(N - 1):
            for target in range(base + 1, N):
                ratio = aug[target, base] / aug[base, base]
                aug[target] -= aug[base] * ratio
        for i in range(N - 1, -1, -1):
            rhs = aug[i, N] - aug[i, i + 1 : N] @ x[i + 1 : N]
            x[i] = rhs / aug[i, i]
    return x


def construct_hyperplane(translated: np.ndarray, extreme_points: np.ndarray) -> tuple[np.ndarray, bool]:
    """
    Intercepts of the hyperplane through the extreme points.

    Returns ``(intercepts, degenerate)``.
    """
    extreme_points = np.asarray(extreme_points, dtype=int)
    n_obj = translated.shape[1]
    degenerate = np.unique(extreme_points).size < extreme_points.size
    if degenerate:
        _logger.debug("Duplicate extreme points %s; using translated extremes as intercepts", extreme_points)
        return translated[extreme_points, np.arange(n_obj)].astype(float), True

    A = translated[extreme_points]
    weights = gaussian_elimination(A, np.ones(n_obj))
    with np.errstate(divide="ignore", invalid="ignore"):
        intercepts = 1.0 / weights
    return intercepts, False


def normalize_objectives(
    F: np.ndarray,
    fronts: Sequence[np.ndarray],
    annotations: SelectionAnnotations,
) -> Normalization:
    """Fill ``annotations.normalized`` for every individual in ``fronts``."""
    first_front = np.asarray(fronts[0], dtype=int)
    normalized = annotations.normalized

    ideal = compute_ideal_point(F, first_front)
    translate_objectives(F, fronts, ideal, normalized)
    extreme_points = find_extreme_points(normalized, first_front)
    intercepts, degenerate = construct_hyperplane(normalized, extreme_points)

    # Translation already moved the ideal point to the origin.
    span = np.abs(intercepts)
    tiny = ~(span > INTERCEPT_EPS)
    if tiny.any():
        _logger.debug("Substituting divisor %g for objectives %s", INTERCEPT_EPS, np.flatnonzero(tiny))
    divisor = np.where(tiny, INTERCEPT_EPS, intercepts)

    for front in fronts:
        idx = np.asarray(front, dtype=int)
        normalized[idx] = normalized[idx] / divisor

    return Normalization(
        ideal=ideal,
        extreme_points=extreme_points,
        intercepts=intercepts,
        degenerate=degenerate,
    )


__all__ = [
    "ASF_EPS",
    "INTERCEPT_EPS",
    "Normalization",
    "compute_ideal_point",
    "translate_objectives",
    "achievement_scalarization",
    "find_extreme_points",
    "gaussian_elimination",
    "construct_hyperplane",
    "normalize_objectives",
]
