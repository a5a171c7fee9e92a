"""Independent archive builds for multi-population runs.

Subpopulations share nothing mutable: each gets its own builder, its own
fronts and its own child generator spawned from one ``SeedSequence``. Results
are therefore identical whether the builds run serially or on a thread pool.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

import numpy as np

from .archive import ArchiveBuilder, ArchiveResult
from .config import SelectionConfigData
from .exceptions import InputError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _build_one(
    config: SelectionConfigData,
    F: np.ndarray,
    target_size: int,
    seed_seq: np.random.SeedSequence,
) -> ArchiveResult:
    """Worker helper; kept at module level so it holds no shared state."""
    rng = np.random.default_rng(seed_seq)
    return ArchiveBuilder(config).build(F, target_size=target_size, rng=rng)


def select_subpopulations(
    objective_sets: Sequence[np.ndarray],
    target_sizes: Sequence[int] | int,
    config: SelectionConfigData,
    *,
    seed: Optional[int] = None,
    n_workers: Optional[int] = None,
) -> list[ArchiveResult]:
    """
    Build one archive per subpopulation.

    Args:
        objective_sets: Objective matrix of each subpopulation's candidate pool.
        target_sizes: Archive size per subpopulation, or one size for all.
        config: Shared selection settings.
        seed: Root seed; child generators are spawned in subpopulation order.
        n_workers: Thread count; ``None`` or ``1`` runs serially.
    """
    n_sub = len(objective_sets)
    if isinstance(target_sizes, (int, np.integer)):
        sizes = [int(target_sizes)] * n_sub
    else:
        sizes = [int(s) for s in target_sizes]
    if len(sizes) != n_sub:
        raise InputError(
            f"Got {len(sizes)} target sizes for {n_sub} subpopulations.",
            details={"target_sizes": len(sizes), "subpopulations": n_sub},
        )

    children = np.random.SeedSequence(seed).spawn(n_sub)
    workers = max(1, n_workers or 1)
    if workers == 1 or n_sub <= 1:
        return [_build_one(config, F, size, ss) for F, size, ss in zip(objective_sets, sizes, children)]

    workers = min(workers, n_sub, os.cpu_count() or workers)
    _logger().debug("Building %d archives on %d threads", n_sub, workers)
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(_build_one, config, F, size, ss)
            for F, size, ss in zip(objective_sets, sizes, children)
        ]
        return [fut.result() for fut in futures]


__all__ = ["select_subpopulations"]
