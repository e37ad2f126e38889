"""Fit every model family and pick the preferred one."""
from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional

from ..config import FitOptions
from ..core.errors import NoValidModelError
from ..core.points import as_arrays
from .criteria import aic
from .fits import fitter_for
from .models import MODEL_ORDER, FitFailure, FitResult, SelectionResult

logger = logging.getLogger(__name__)

# Absorbs float noise so an R² gap of exactly the margin counts as a tie
MARGIN_TOLERANCE = 1e-12


def select_best(
    candidates: Iterable[FitResult], margin: float = 0.05
) -> FitResult:
    """Pick the best of *candidates*, scanned in family order.

    A candidate whose R² beats the current best by more than *margin*
    replaces it outright. Within the margin the lower AIC wins, so a
    materially worse R² never wins and near ties go to the simpler model.
    Exact AIC ties keep the earlier family.
    """
    best: Optional[FitResult] = None
    for cand in candidates:
        if best is None:
            best = cand
            continue
        diff = cand.r_squared - best.r_squared
        limit = margin + MARGIN_TOLERANCE
        if diff > limit:
            best = cand
        elif abs(diff) <= limit and cand.aic < best.aic:
            best = cand
    if best is None:
        raise NoValidModelError("No valid regression models found")
    return best


def fit_all(points, options: Optional[FitOptions] = None) -> SelectionResult:
    """Fit all families to *points* and select the best model.

    Raises ``InvalidInputError`` before any fitting for fewer than two points
    or bad options, and ``NoValidModelError`` when no family produced usable
    statistics.
    """
    options = (options or FitOptions()).validate()
    x, y = as_arrays(points)
    n = len(x)

    fitted: List[FitResult] = []
    failures: List[FitFailure] = []
    for kind in MODEL_ORDER:
        outcome = fitter_for(kind, options.polynomial_degree)(x, y)
        if isinstance(outcome, FitFailure):
            logger.info("%s model skipped: %s", kind, outcome.reason)
            failures.append(outcome)
            continue
        score = aic(n, outcome.n_params, outcome.r_squared, options.aic)
        outcome = dataclasses.replace(outcome, aic=score)
        logger.debug(
            "%s model: r2=%s aic=%s (%s)",
            kind, outcome.r_squared, score, outcome.equation,
        )
        fitted.append(outcome)

    pool = [f for f in fitted if f.is_candidate]
    if not pool:
        raise NoValidModelError(
            f"No valid regression models found for {n} points "
            f"({len(fitted)} fitted, {len(failures)} failed)"
        )
    best = select_best(pool, options.r2_margin)
    logger.debug("best model: %s", best.model)
    return SelectionResult(
        best_model=best,
        all_models=tuple(fitted),
        failures=tuple(failures),
    )


__all__ = ["fit_all", "select_best"]
