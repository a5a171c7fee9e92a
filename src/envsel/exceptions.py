"""
envsel exception hierarchy.

Every error carries a human-readable message, an optional suggestion and a
details dict. All envsel-specific exceptions inherit from EnvSelError.

Only structural problems are raised. Numerical edge cases met during
selection (degenerate hyperplanes, near-zero intercepts, empty niches) are
absorbed where they occur and never surface as exceptions.

Example:
    try:
        result = environmental_selection(F, target_size=92)
    except EnvSelError as e:
        print(f"Selection failed: {e.message}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class EnvSelError(Exception):
    """
    Base exception for all envsel errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EnvSelError):
    """Raised when a selection configuration is invalid or incomplete."""

    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Input Errors
# =============================================================================


class InputError(EnvSelError):
    """Base class for malformed selection input."""

    pass


class ObjectiveShapeError(InputError):
    """Raised when the objective matrix is malformed."""

    def __init__(self, message: str, shape: tuple[int, ...] | None = None, n_obj: int | None = None) -> None:
        suggestion = "Pass a finite 2-D array of shape (n_individuals, n_obj) with n_obj >= 1"
        super().__init__(message, suggestion, {"shape": shape, "n_obj": n_obj})


class TargetSizeError(InputError):
    """Raised when the requested archive size cannot be honoured."""

    def __init__(self, target_size: int, pool_size: int) -> None:
        message = f"Cannot select {target_size} individuals from a pool of {pool_size}."
        suggestion = "Use a whole number 1 <= target_size <= number of candidates (parents + offspring)"
        super().__init__(message, suggestion, {"target_size": target_size, "pool_size": pool_size})


# =============================================================================
# Reference Lattice Errors
# =============================================================================


class ReferenceLatticeError(EnvSelError):
    """Raised when a reference lattice cannot be built or loaded."""

    def __init__(
        self,
        message: str,
        n_obj: int | None = None,
        divisions: int | None = None,
        suggestion: str | None = "Lower the division count or raise max_reference_points",
    ) -> None:
        super().__init__(message, suggestion, {"n_obj": n_obj, "divisions": divisions})


# =============================================================================
# Contract Errors
# =============================================================================


class SelectionContractError(EnvSelError):
    """Raised when niche selection would leave the archive under-filled."""

    def __init__(self, message: str, needed: int | None = None, selected: int | None = None) -> None:
        suggestion = "The boundary front must hold at least as many individuals as requested"
        super().__init__(message, suggestion, {"needed": needed, "selected": selected})


__all__ = [
    "EnvSelError",
    "ConfigurationError",
    "MissingConfigError",
    "InputError",
    "ObjectiveShapeError",
    "TargetSizeError",
    "ReferenceLatticeError",
    "SelectionContractError",
]
