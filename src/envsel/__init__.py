"""
envsel: reference-point environmental selection for many-objective
evolutionary algorithms (NSGA-III survival).

Typical use inside a generational loop::

    from envsel import SelectionConfig, ArchiveBuilder

    builder = ArchiveBuilder(SelectionConfig().target_size(92).divisions(12).fixed())
    result = builder.build(F_combined, rng=rng)
    X_next, F_next = X_combined[result.indices], F_combined[result.indices]
"""

from .archive import (
    ArchiveBuilder,
    ArchiveResult,
    ArchiveState,
    environmental_selection,
    rank_population,
)
from .association import associate, perpendicular_distance, perpendicular_distances
from .config import DEFAULT_DIVISIONS, SelectionConfig, SelectionConfigData
from .exceptions import (
    ConfigurationError,
    EnvSelError,
    InputError,
    MissingConfigError,
    ObjectiveShapeError,
    ReferenceLatticeError,
    SelectionContractError,
    TargetSizeError,
)
from .lattice import (
    ReferenceLattice,
    count_reference_points,
    generate_reference_points,
    load_reference_points,
    save_reference_points,
)
from .logging import configure_envsel_logging
from .multipop import select_subpopulations
from .niching import find_niche_reference_point, select_cluster_member, select_remaining
from .normalization import Normalization, normalize_objectives
from .population import SelectionAnnotations
from .ranking import FrontPartitioner, assign_front_ranks, fast_non_dominated_sort, partition_fronts
from .reference_point import ReferencePoint, build_reference_points
from .survival import nsgaiii_survival, select_individuals
from .version import get_version

__all__ = [
    # Orchestration
    "ArchiveBuilder",
    "ArchiveResult",
    "ArchiveState",
    "environmental_selection",
    "rank_population",
    "nsgaiii_survival",
    "select_individuals",
    "select_subpopulations",
    # Components
    "ReferenceLattice",
    "count_reference_points",
    "generate_reference_points",
    "load_reference_points",
    "save_reference_points",
    "ReferencePoint",
    "build_reference_points",
    "Normalization",
    "normalize_objectives",
    "associate",
    "perpendicular_distance",
    "perpendicular_distances",
    "find_niche_reference_point",
    "select_cluster_member",
    "select_remaining",
    "FrontPartitioner",
    "fast_non_dominated_sort",
    "partition_fronts",
    "assign_front_ranks",
    "SelectionAnnotations",
    # Configuration
    "DEFAULT_DIVISIONS",
    "SelectionConfig",
    "SelectionConfigData",
    # Errors
    "EnvSelError",
    "ConfigurationError",
    "MissingConfigError",
    "InputError",
    "ObjectiveShapeError",
    "TargetSizeError",
    "ReferenceLatticeError",
    "SelectionContractError",
    # Misc
    "configure_envsel_logging",
    "get_version",
]
