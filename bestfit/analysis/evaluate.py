"""Predictions and residuals for fitted models."""
from __future__ import annotations

from typing import List, NamedTuple, Optional

import numpy as np
import pandas as pd

from ..core.points import as_arrays
from .models import FitResult, ModelKind, predict_values


class Residual(NamedTuple):
    x: float
    # None where the model is undefined at x
    residual: Optional[float]


def _horner(coefficients, x: float) -> float:
    acc = 0.0
    for c in coefficients:
        acc = acc * x + c
    return acc


def evaluate(fit: FitResult, x: float) -> Optional[float]:
    """Predict y at *x*; None when the model is undefined there."""
    x = float(x)
    if fit.model.positive_x and x <= 0:
        return None
    with np.errstate(all="ignore"):
        if fit.model.is_polynomial:
            y = _horner(fit.coefficients, x)
        elif fit.model is ModelKind.EXPONENTIAL:
            a, b = fit.coefficients
            y = a * np.exp(b * x)
        elif fit.model is ModelKind.LOGARITHMIC:
            a, b = fit.coefficients
            y = a + b * np.log(x)
        else:
            a, b = fit.coefficients
            y = a * np.power(x, b)
    y = float(y)
    return y if np.isfinite(y) else None


def predict(fit: FitResult, x) -> np.ndarray:
    """Vectorized prediction, NaN where undefined."""
    return predict_values(fit.model, fit.coefficients, x)


def residuals(points, fit: FitResult) -> List[Residual]:
    """Ordered (x, y - predicted) pairs in input order.

    Points where the prediction is undefined keep ``residual=None``.
    """
    x, y = as_arrays(points, min_points=0)
    out = []
    for xv, yv in zip(x, y):
        pred = evaluate(fit, xv)
        out.append(Residual(float(xv), None if pred is None else float(yv - pred)))
    return out


def curve(
    fit: FitResult, x_min: float, x_max: float, num: int = 200
) -> pd.DataFrame:
    """Sample the fitted curve on [x_min, x_max] for plotting.

    Samples where the model is undefined are dropped.
    """
    xs = np.linspace(float(x_min), float(x_max), int(num))
    ys = predict(fit, xs)
    mask = np.isfinite(ys)
    return pd.DataFrame({"x": xs[mask], "y": ys[mask]})


__all__ = ["Residual", "evaluate", "predict", "residuals", "curve"]
