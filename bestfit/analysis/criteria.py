"""R²-based approximation of the Akaike information criterion.

``aic = n * ln(1 - r2) + 2k`` is only a ranking score for models fitted to the
same data; it is not a likelihood-based AIC and must not be reported as one.
The formula diverges as r2 approaches 1 and flattens near 0, so both ends are
replaced by fixed scores that still grow with the coefficient count k.
"""
from __future__ import annotations

import math
from typing import Optional

from ..config import AICConfig

DEFAULT_AIC_CONFIG = AICConfig()


def _boundary(baseline: float, k: int, config: AICConfig) -> float:
    return baseline + k * config.penalty_step


def aic(
    n: int,
    k: int,
    r2: Optional[float],
    config: AICConfig = DEFAULT_AIC_CONFIG,
) -> Optional[float]:
    """Return the approximate AIC, or None when it is undefined.

    None is returned for a missing, NaN or negative r2; such a model must be
    left out of selection. Lower is better.
    """
    if r2 is None or math.isnan(r2) or r2 < 0:
        return None
    if r2 >= config.perfect_threshold:
        return _boundary(config.perfect_baseline, k, config)
    if r2 <= config.poor_threshold:
        return _boundary(config.poor_baseline, k, config)
    try:
        value = n * math.log(1.0 - r2) + 2 * k
    except (ValueError, OverflowError):
        value = math.nan
    if not math.isfinite(value):
        return _boundary(config.perfect_baseline, k, config)
    return value


__all__ = ["aic", "DEFAULT_AIC_CONFIG"]
