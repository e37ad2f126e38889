"""Boundary serialization of selection results.

Output shape of ``result_to_dict``:
{
    "bestModel": {"model": "Linear", "equation": str, "coefficients": [...],
                  "r2": float | "N/A", "aic": float | "N/A"},
    "allModels": [... same shape, in attempt order ...],
    "skipped": [{"model": str, "reason": str}, ...]
}
Undefined statistics are written as the "N/A" marker, never as NaN.
"""
from __future__ import annotations

import json
import math
from typing import Any, Dict, Optional, Union

import pandas as pd

from ..analysis.evaluate import evaluate
from ..analysis.models import FitResult, SelectionResult
from ..constants import FIT_MODELS, NOT_APPLICABLE
from ..core.points import as_arrays


def _number(value: Optional[float]) -> Union[float, str]:
    if value is None or not math.isfinite(value):
        return NOT_APPLICABLE
    return float(value)


def fit_to_dict(fit: FitResult) -> Dict[str, Any]:
    r2 = fit.r_squared if fit.r_squared_valid else None
    return {
        "model": fit.model.value,
        "equation": fit.equation,
        "coefficients": [float(c) for c in fit.coefficients],
        "r2": _number(r2),
        "aic": _number(fit.aic),
    }


def result_to_dict(result: SelectionResult) -> Dict[str, Any]:
    return {
        "bestModel": fit_to_dict(result.best_model),
        "allModels": [fit_to_dict(f) for f in result.all_models],
        "skipped": [
            {"model": f.model.value, "reason": f.reason}
            for f in result.failures
        ],
    }


def result_to_json(result: SelectionResult, indent: Optional[int] = 2) -> str:
    return json.dumps(result_to_dict(result), indent=indent)


def comparison_frame(result: SelectionResult) -> pd.DataFrame:
    """Side-by-side table with one row per family in attempt order.

    Families that could not be fitted appear with "N/A" statistics.
    """
    fitted = {f.model.value: f for f in result.all_models}
    reasons = {f.model.value: f.reason for f in result.failures}
    rows = []
    for name in FIT_MODELS:
        fit = fitted.get(name)
        if fit is None:
            rows.append({
                "model": name,
                "equation": reasons.get(name, NOT_APPLICABLE),
                "r2": NOT_APPLICABLE,
                "aic": NOT_APPLICABLE,
                "best": False,
            })
            continue
        d = fit_to_dict(fit)
        rows.append({
            "model": name,
            "equation": d["equation"],
            "r2": d["r2"],
            "aic": d["aic"],
            "best": fit is result.best_model,
        })
    return pd.DataFrame(rows, columns=["model", "equation", "r2", "aic", "best"])


def residuals_frame(points, fit: FitResult) -> pd.DataFrame:
    """Per-point export table: x, y, predicted and residual (NaN if undefined)."""
    x, y = as_arrays(points, min_points=0)
    pred = [evaluate(fit, xv) for xv in x]
    predicted = [math.nan if p is None else p for p in pred]
    return pd.DataFrame({
        "x": x,
        "y": y,
        "predicted": predicted,
        "residual": y - pd.Series(predicted, dtype=float).to_numpy(),
    })


__all__ = [
    "fit_to_dict",
    "result_to_dict",
    "result_to_json",
    "comparison_frame",
    "residuals_frame",
]
