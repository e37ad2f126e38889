"""Central constants & enumerations."""
from .analysis.models import MODEL_ORDER

NOT_APPLICABLE = "N/A"

FIT_MODELS = [kind.value for kind in MODEL_ORDER]

# One colour per model family, in attempt order (Plotly default palette)
MODEL_COLORS = dict(zip(FIT_MODELS, [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728",
    "#9467bd", "#8c564b", "#e377c2",
]))

DATA_COLOR = "#7f7f7f"

# Sample data sets offered by the UI; each one selects its own family
SAMPLE_DATA = {
    "Linear": "0,0\n1,2\n2,4\n3,6\n4,8",
    "Quadratic": "0,0\n1,4.9\n2,19.6\n3,44.1",
    "Exponential": "0,2\n1,3\n2,4.5\n3,6.75\n4,10.125",
}

__all__ = [
    "NOT_APPLICABLE", "FIT_MODELS", "MODEL_COLORS", "DATA_COLOR", "SAMPLE_DATA",
]
