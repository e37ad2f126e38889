"""Fitting routines: linear, polynomial, exponential, logarithmic, power law.

Each routine returns a ``FitResult`` or a ``FitFailure``; expected domain
problems (too few points, non-positive values, singular systems) never raise.
R² is always computed on the original y scale from the family's own formula,
so scores compare across families however the fit was linearized.
"""
from __future__ import annotations

from functools import partial
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from numpy.polynomial import Polynomial
from numpy.polynomial.polyutils import mapdomain
from scipy.linalg import LinAlgError, solve

from .models import (
    FitFailure,
    FitOutcome,
    FitResult,
    ModelKind,
    predict_values,
    r_squared,
)

Fitter = Callable[[np.ndarray, np.ndarray], FitOutcome]

POLYNOMIAL_DEGREES = {
    ModelKind.QUADRATIC: 2,
    ModelKind.CUBIC: 3,
    ModelKind.QUARTIC: 4,
}

# Normal equations above this condition number are treated as singular
MAX_CONDITION = 1.0 / np.finfo(float).eps


def _fmt(v: float) -> str:
    return f"{v:.4g}"


def _join_terms(terms: Sequence[Tuple[float, str]]) -> str:
    """Render signed (coefficient, suffix) terms as 'a + b - c'."""
    out = ""
    for coef, suffix in terms:
        body = f"{_fmt(abs(coef))}{suffix}"
        if not out:
            out = f"-{body}" if coef < 0 else body
        else:
            out += f" - {body}" if coef < 0 else f" + {body}"
    return out or "0"


def polynomial_equation(coeffs: Sequence[float]) -> str:
    deg = len(coeffs) - 1
    terms = []
    for i, coef in enumerate(coeffs):
        power = deg - i
        if abs(coef) < 1e-12:
            continue
        if power == 0:
            suffix = ""
        elif power == 1:
            suffix = "x"
        else:
            suffix = f"x^{power}"
        terms.append((float(coef), suffix))
    return "y = " + _join_terms(terms)


def _line(x: np.ndarray, y: np.ndarray) -> Optional[Tuple[float, float]]:
    """Closed-form least-squares line; None when all x coincide."""
    xm = np.mean(x)
    ym = np.mean(y)
    dx = x - xm
    sxx = float(np.sum(dx * dx))
    if sxx == 0 or not np.isfinite(sxx):
        return None
    slope = float(np.sum(dx * (y - ym)) / sxx)
    intercept = float(ym - slope * xm)
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        return None
    return slope, intercept


def _result(
    model: ModelKind,
    coeffs: Sequence[float],
    equation: str,
    x: np.ndarray,
    y: np.ndarray,
) -> FitResult:
    yhat = predict_values(model, coeffs, x)
    return FitResult(
        model=model,
        equation=equation,
        coefficients=tuple(float(c) for c in coeffs),
        r_squared=r_squared(y, yhat),
        n_points=int(len(x)),
    )


def _scale(ln_a: float) -> Optional[float]:
    """exp(ln_a), or None when it overflows or underflows to zero."""
    with np.errstate(over="ignore", under="ignore"):
        a = float(np.exp(ln_a))
    if not np.isfinite(a) or a == 0:
        return None
    return a


def _too_few(model: ModelKind, n: int, needed: int) -> Optional[FitFailure]:
    if n < needed:
        return FitFailure(
            model, f"needs at least {needed} points, got {n}"
        )
    return None


def fit_linear(x: np.ndarray, y: np.ndarray) -> FitOutcome:
    model = ModelKind.LINEAR
    failed = _too_few(model, len(x), 2)
    if failed:
        return failed
    line = _line(x, y)
    if line is None:
        return FitFailure(model, "all x values are identical")
    return _result(model, line, polynomial_equation(line), x, y)


def fit_polynomial(
    x: np.ndarray,
    y: np.ndarray,
    degree: int = 2,
    model: Optional[ModelKind] = None,
) -> FitOutcome:
    """Least-squares polynomial through the normal equations.

    The system is solved in x mapped onto [-1, 1] to keep it well
    conditioned, then converted back to coefficients in x (highest first).
    """
    if model is None:
        model = {v: k for k, v in POLYNOMIAL_DEGREES.items()}.get(
            degree, ModelKind.QUARTIC
        )
    k = degree + 1
    failed = _too_few(model, len(x), k + 1)
    if failed:
        return failed
    if np.unique(x).size < k:
        return FitFailure(
            model, f"needs at least {k} distinct x values for degree {degree}"
        )
    domain = [float(np.min(x)), float(np.max(x))]
    t = mapdomain(x, domain, [-1.0, 1.0])
    vander = np.vander(t, k, increasing=True)
    gram = vander.T @ vander
    with np.errstate(all="ignore"):
        cond = np.linalg.cond(gram)
    if not np.isfinite(cond) or cond > MAX_CONDITION:
        return FitFailure(
            model, f"ill-conditioned normal equations (cond={cond:.3g})"
        )
    try:
        coef_t = solve(gram, vander.T @ y, assume_a="sym")
    except (LinAlgError, ValueError) as exc:
        return FitFailure(model, f"singular normal equations: {exc}")
    poly = Polynomial(coef_t, domain=domain, window=[-1.0, 1.0]).convert()
    coeffs = np.zeros(k)
    coeffs[: len(poly.coef)] = poly.coef
    coeffs = coeffs[::-1]
    if not np.all(np.isfinite(coeffs)):
        return FitFailure(model, "non-finite coefficients")
    return _result(model, coeffs, polynomial_equation(coeffs), x, y)


def fit_exponential(x: np.ndarray, y: np.ndarray) -> FitOutcome:
    model = ModelKind.EXPONENTIAL
    failed = _too_few(model, len(x), 2)
    if failed:
        return failed
    if not np.all(y > 0):
        return FitFailure(model, "requires all y > 0")
    line = _line(x, np.log(y))
    if line is None:
        return FitFailure(model, "all x values are identical")
    b, ln_a = line
    a = _scale(ln_a)
    if a is None:
        return FitFailure(model, "scale factor overflows or underflows")
    eq = f"y = {_fmt(a)}e^({_fmt(b)}x)"
    return _result(model, (a, b), eq, x, y)


def fit_logarithmic(x: np.ndarray, y: np.ndarray) -> FitOutcome:
    model = ModelKind.LOGARITHMIC
    failed = _too_few(model, len(x), 2)
    if failed:
        return failed
    if not np.all(x > 0):
        return FitFailure(model, "requires all x > 0")
    line = _line(np.log(x), y)
    if line is None:
        return FitFailure(model, "all x values are identical")
    b, a = line
    eq = "y = " + _join_terms([(a, ""), (b, "ln(x)")])
    return _result(model, (a, b), eq, x, y)


def fit_power(x: np.ndarray, y: np.ndarray) -> FitOutcome:
    model = ModelKind.POWER
    failed = _too_few(model, len(x), 2)
    if failed:
        return failed
    if not (np.all(x > 0) and np.all(y > 0)):
        return FitFailure(model, "requires all x > 0 and y > 0")
    line = _line(np.log(x), np.log(y))
    if line is None:
        return FitFailure(model, "all x values are identical")
    b, ln_a = line
    a = _scale(ln_a)
    if a is None:
        return FitFailure(model, "scale factor overflows or underflows")
    eq = f"y = {_fmt(a)}x^{_fmt(b)}"
    return _result(model, (a, b), eq, x, y)


def fitter_for(kind: ModelKind, polynomial_degree: int = 3) -> Fitter:
    """Return the fitting routine for *kind*.

    The Quartic family fits degree ``min(4, polynomial_degree)``.
    """
    if kind is ModelKind.LINEAR:
        return fit_linear
    if kind.is_polynomial:
        degree = POLYNOMIAL_DEGREES[kind]
        if kind is ModelKind.QUARTIC:
            degree = min(degree, polynomial_degree)
        return partial(fit_polynomial, degree=degree, model=kind)
    return {
        ModelKind.EXPONENTIAL: fit_exponential,
        ModelKind.LOGARITHMIC: fit_logarithmic,
        ModelKind.POWER: fit_power,
    }[kind]


__all__ = [
    "fit_linear",
    "fit_polynomial",
    "fit_exponential",
    "fit_logarithmic",
    "fit_power",
    "fitter_for",
    "polynomial_equation",
    "POLYNOMIAL_DEGREES",
]
