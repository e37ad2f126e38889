"""Plotly figures for fitted models and residuals."""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import plotly.graph_objs as go
from plotly.subplots import make_subplots

from ..analysis.evaluate import curve, residuals
from ..analysis.models import FitResult, SelectionResult
from ..constants import DATA_COLOR, MODEL_COLORS
from ..core.points import as_arrays


def _padded_range(x: np.ndarray, pad: float = 0.05):
    lo, hi = float(np.min(x)), float(np.max(x))
    span = hi - lo or max(abs(lo), 1.0)
    return lo - pad * span, hi + pad * span


def fit_figure(
    points,
    result: SelectionResult,
    models: Optional[Iterable[str]] = None,
    num: int = 200,
) -> go.Figure:
    """Scatter of the data with fitted curves overlaid.

    models: labels of the families to draw; defaults to the best model only.
    The best model is drawn solid, the others dashed.
    """
    x, y = as_arrays(points, min_points=0)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x, y=y, mode="markers", name="data",
        marker=dict(color=DATA_COLOR, size=8),
    ))
    wanted = set(models) if models is not None else {result.best_model.model.value}
    if len(x):
        lo, hi = _padded_range(x)
        for fit in result.all_models:
            if fit.model.value not in wanted:
                continue
            sampled = curve(fit, lo, hi, num=num)
            is_best = fit is result.best_model
            fig.add_trace(go.Scatter(
                x=sampled["x"], y=sampled["y"], mode="lines",
                name=f"{fit.model.value} fit<br>{fit.equation}",
                line=dict(
                    color=MODEL_COLORS.get(fit.model.value),
                    width=3 if is_best else 1.5,
                    dash="solid" if is_best else "dash",
                ),
            ))
    fig.update_layout(
        xaxis_title="x",
        yaxis_title="y",
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
    )
    return fig


def residual_figure(points, fit: FitResult) -> go.Figure:
    """Residual scatter with a zero line; undefined points are marked on it."""
    res = residuals(points, fit)
    defined = [r for r in res if r.residual is not None]
    undefined = [r for r in res if r.residual is None]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r.x for r in defined], y=[r.residual for r in defined],
        mode="markers", name="residual",
        marker=dict(color=MODEL_COLORS.get(fit.model.value), size=8),
    ))
    if undefined:
        fig.add_trace(go.Scatter(
            x=[r.x for r in undefined], y=[0.0] * len(undefined),
            mode="markers", name="undefined",
            marker=dict(symbol="x", color="#d62728", size=10),
        ))
    fig.add_hline(y=0, line_dash="dot", line_color=DATA_COLOR)
    fig.update_layout(
        xaxis_title="x",
        yaxis_title="y - predicted",
        title=f"Residuals: {fit.model.value}",
    )
    return fig


def fit_and_residuals(points, result: SelectionResult) -> go.Figure:
    """Two stacked panels: best fit over data, then its residuals."""
    top = fit_figure(points, result)
    bottom = residual_figure(points, result.best_model)
    sp = make_subplots(
        rows=2, cols=1, shared_xaxes=True, vertical_spacing=0.07,
        row_heights=[0.7, 0.3],
    )
    for tr in top.data:
        sp.add_trace(tr, row=1, col=1)
    for tr in bottom.data:
        sp.add_trace(tr, row=2, col=1)
    sp.add_hline(y=0, line_dash="dot", line_color=DATA_COLOR, row=2, col=1)
    sp.update_yaxes(title_text="y", row=1, col=1)
    sp.update_yaxes(title_text="residual", row=2, col=1)
    sp.update_xaxes(title_text="x", row=2, col=1)
    sp.update_layout(height=600)
    return sp


__all__ = ["fit_figure", "residual_figure", "fit_and_residuals"]
