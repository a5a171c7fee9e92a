"""Selection configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .exceptions import ConfigurationError

DEFAULT_DIVISIONS = 6


def coerce_maximize(value: bool | Sequence[bool]) -> bool | Tuple[bool, ...]:
    """One flag for every objective, or a tuple of per-objective flags."""
    if np.ndim(value) == 0:
        return bool(value)
    return tuple(bool(v) for v in value)


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


@dataclass(frozen=True)
class SelectionConfigData(_SerializableConfig):
    divisions: int = DEFAULT_DIVISIONS
    target_size: Optional[int] = None
    maximize: bool | Tuple[bool, ...] = False
    max_reference_points: Optional[int] = None
    reference_points_path: Optional[str] = None
    seed: Optional[int] = None


class SelectionConfig:
    """
    Declarative configuration holder for reference-point selection.

    Examples:
        cfg = SelectionConfig.default(n_obj=3)
        cfg = SelectionConfig().target_size(92).divisions(12).fixed()
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, n_obj: int = 3, target_size: int | None = None) -> SelectionConfigData:
        """
        Create a default configuration.

        Args:
            n_obj: Number of objectives (picks the lattice resolution)
            target_size: Archive size, optional
        """
        divisions = 12 if n_obj == 3 else DEFAULT_DIVISIONS
        cfg = cls().divisions(divisions)
        if target_size is not None:
            cfg = cfg.target_size(target_size)
        return cfg.fixed()

    def target_size(self, value: int) -> "SelectionConfig":
        self._cfg["target_size"] = value
        return self

    def divisions(self, value: int) -> "SelectionConfig":
        self._cfg["divisions"] = value
        return self

    def maximize(self, value: bool | Sequence[bool]) -> "SelectionConfig":
        self._cfg["maximize"] = coerce_maximize(value)
        return self

    def max_reference_points(self, value: int) -> "SelectionConfig":
        self._cfg["max_reference_points"] = value
        return self

    def reference_points(self, path: str) -> "SelectionConfig":
        self._cfg["reference_points_path"] = path
        return self

    def seed(self, value: int) -> "SelectionConfig":
        self._cfg["seed"] = value
        return self

    def fixed(self) -> SelectionConfigData:
        divisions = int(self._cfg.get("divisions", DEFAULT_DIVISIONS))
        if divisions < 0:
            raise ConfigurationError(f"divisions must be >= 0, got {divisions}.")
        target_size = self._cfg.get("target_size")
        if target_size is not None and (int(target_size) != target_size or int(target_size) < 1):
            raise ConfigurationError(
                f"target_size must be a whole number >= 1, got {target_size}.",
                suggestion="Use the population size of the next generation",
            )
        max_points = self._cfg.get("max_reference_points")
        if max_points is not None and int(max_points) < 1:
            raise ConfigurationError(f"max_reference_points must be >= 1, got {max_points}.")
        return SelectionConfigData(
            divisions=divisions,
            target_size=int(target_size) if target_size is not None else None,
            maximize=self._cfg.get("maximize", False),
            max_reference_points=int(max_points) if max_points is not None else None,
            reference_points_path=self._cfg.get("reference_points_path"),
            seed=self._cfg.get("seed"),
        )


__all__ = ["DEFAULT_DIVISIONS", "SelectionConfig", "SelectionConfigData", "coerce_maximize"]
