"""Exceptions raised by the fitting engine."""
from __future__ import annotations


class BestFitError(Exception):
    """Base class for bestfit errors."""
    pass


class InvalidInputError(BestFitError, ValueError):
    """Raised when the supplied points or options cannot be analysed."""
    pass


class NoValidModelError(BestFitError, RuntimeError):
    """Raised when every model family failed or gave unusable statistics."""
    pass


__all__ = [
    "BestFitError",
    "InvalidInputError",
    "NoValidModelError",
]
