"""Tunable settings for fitting and model selection."""
from __future__ import annotations

import numbers
from dataclasses import dataclass, field

from .core.errors import InvalidInputError

MIN_POLYNOMIAL_DEGREE = 2
MAX_POLYNOMIAL_DEGREE = 6


@dataclass(frozen=True)
class AICConfig:
    """Calibration of the R²-based AIC approximation.

    Fits at or above ``perfect_threshold`` score ``perfect_baseline`` and fits
    at or below ``poor_threshold`` score ``poor_baseline``; both grow by
    ``penalty_step`` per coefficient.
    """
    perfect_threshold: float = 0.9999
    poor_threshold: float = 0.0001
    perfect_baseline: float = -1000.0
    poor_baseline: float = 1000.0
    penalty_step: float = 2.0


@dataclass(frozen=True)
class FitOptions:
    # degree of the fourth polynomial family, capped at 4
    polynomial_degree: int = 3
    # R² differences up to this margin count as a tie
    r2_margin: float = 0.05
    aic: AICConfig = field(default_factory=AICConfig)

    def validate(self) -> "FitOptions":
        deg = self.polynomial_degree
        if isinstance(deg, bool) or not isinstance(deg, numbers.Integral):
            raise InvalidInputError(
                f"polynomial_degree must be an integer, got {deg!r}"
            )
        if not MIN_POLYNOMIAL_DEGREE <= deg <= MAX_POLYNOMIAL_DEGREE:
            raise InvalidInputError(
                "polynomial_degree must be between "
                f"{MIN_POLYNOMIAL_DEGREE} and {MAX_POLYNOMIAL_DEGREE}, got {deg}"
            )
        if self.r2_margin < 0:
            raise InvalidInputError("r2_margin must be non-negative")
        return self


__all__ = [
    "AICConfig",
    "FitOptions",
    "MIN_POLYNOMIAL_DEGREE",
    "MAX_POLYNOMIAL_DEGREE",
]
