"""bestfit package root.

Exposes high-level API surface for convenience.
"""
from .analysis.evaluate import curve, evaluate, predict, residuals  # noqa: F401
from .analysis.models import (  # noqa: F401
    FitFailure,
    FitResult,
    ModelKind,
    SelectionResult,
)
from .analysis.selection import fit_all, select_best  # noqa: F401
from .config import AICConfig, FitOptions  # noqa: F401
from .core.errors import (  # noqa: F401
    BestFitError,
    InvalidInputError,
    NoValidModelError,
)
from .core.points import pairs_from_frame, parse_text  # noqa: F401
from .project.serializer import comparison_frame, result_to_dict  # noqa: F401
