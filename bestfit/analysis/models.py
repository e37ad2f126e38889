"""Model families, fit outcomes and their prediction functions.

Coefficient layout per family:
 - Linear / Quadratic / Cubic / Quartic: highest degree first, constant last
 - Exponential: [a, b] for y = a * e^(b*x)
 - Logarithmic: [a, b] for y = a + b * ln(x)
 - Power: [a, b] for y = a * x^b
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import numpy as np


class ModelKind(str, Enum):
    LINEAR = "Linear"
    QUADRATIC = "Quadratic"
    CUBIC = "Cubic"
    QUARTIC = "Quartic"
    EXPONENTIAL = "Exponential"
    LOGARITHMIC = "Logarithmic"
    POWER = "Power"

    @property
    def is_polynomial(self) -> bool:
        return self in _POLYNOMIAL_KINDS

    @property
    def positive_x(self) -> bool:
        """True when the family is only defined for x > 0."""
        return self in (ModelKind.LOGARITHMIC, ModelKind.POWER)

    def __str__(self) -> str:
        return self.value


_POLYNOMIAL_KINDS = frozenset({
    ModelKind.LINEAR,
    ModelKind.QUADRATIC,
    ModelKind.CUBIC,
    ModelKind.QUARTIC,
})

# Attempt order; doubles as tie-break precedence.
MODEL_ORDER: Tuple[ModelKind, ...] = tuple(ModelKind)


@dataclass(frozen=True)
class FitResult:
    model: ModelKind
    equation: str
    coefficients: Tuple[float, ...]
    # None marks an invalid R² (zero y-variance or non-finite)
    r_squared: Optional[float]
    # None marks an undefined AIC
    aic: Optional[float] = None
    n_points: int = 0

    @property
    def r_squared_valid(self) -> bool:
        r2 = self.r_squared
        return r2 is not None and bool(np.isfinite(r2)) and 0.0 <= r2 <= 1.0

    @property
    def is_candidate(self) -> bool:
        """Eligible for best-model selection."""
        return (
            self.r_squared_valid
            and self.aic is not None
            and bool(np.isfinite(self.aic))
        )

    @property
    def n_params(self) -> int:
        return len(self.coefficients)

    @property
    def degree(self) -> Optional[int]:
        if self.model.is_polynomial:
            return len(self.coefficients) - 1
        return None


@dataclass(frozen=True)
class FitFailure:
    """A family that could not be fitted to the data."""
    model: ModelKind
    reason: str


FitOutcome = Union[FitResult, FitFailure]


@dataclass(frozen=True)
class SelectionResult:
    best_model: FitResult
    all_models: Tuple[FitResult, ...]
    failures: Tuple[FitFailure, ...] = ()

    def get(self, model: Union[ModelKind, str]) -> Optional[FitResult]:
        kind = ModelKind(model)
        for fit in self.all_models:
            if fit.model is kind:
                return fit
        return None


def predict_values(
    model: ModelKind, coefficients: Sequence[float], x
) -> np.ndarray:
    """Evaluate a family's own (non-linearized) formula.

    Returns NaN wherever the family is undefined or the value overflows.
    """
    x = np.asarray(x, dtype=float)
    coeffs = np.asarray(coefficients, dtype=float)
    with np.errstate(all="ignore"):
        if model.is_polynomial:
            # np.polyval is Horner's scheme over highest-first coefficients
            y = np.polyval(coeffs, x)
        elif model is ModelKind.EXPONENTIAL:
            a, b = coeffs
            y = a * np.exp(b * x)
        elif model is ModelKind.LOGARITHMIC:
            a, b = coeffs
            y = np.where(x > 0, a + b * np.log(np.where(x > 0, x, 1.0)), np.nan)
        elif model is ModelKind.POWER:
            a, b = coeffs
            y = np.where(x > 0, a * np.power(np.where(x > 0, x, 1.0), b), np.nan)
        else:  # pragma: no cover - closed enumeration
            raise ValueError(f"Unknown model: {model}")
    y = np.asarray(y, dtype=float)
    return np.where(np.isfinite(y), y, np.nan)


def r_squared(y: np.ndarray, yhat: np.ndarray) -> Optional[float]:
    """1 - SS_res/SS_tot on the original y scale, or None when undefined."""
    if len(y) == 0 or np.ptp(y) == 0:
        return None
    with np.errstate(all="ignore"):
        ss_res = float(np.sum((y - yhat) ** 2))
        ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    if ss_tot == 0 or not np.isfinite(ss_tot) or not np.isfinite(ss_res):
        return None
    return 1.0 - ss_res / ss_tot


__all__ = [
    "ModelKind",
    "MODEL_ORDER",
    "FitResult",
    "FitFailure",
    "FitOutcome",
    "SelectionResult",
    "predict_values",
    "r_squared",
]
