import json
import math

import pytest
from bestfit import fit_all
from bestfit.analysis.models import FitFailure, FitResult, ModelKind, SelectionResult
from bestfit.constants import FIT_MODELS, NOT_APPLICABLE
from bestfit.project.serializer import (
    comparison_frame,
    fit_to_dict,
    residuals_frame,
    result_to_dict,
    result_to_json,
)


def test_result_to_dict_shape(line_points):
    d = result_to_dict(fit_all(line_points))
    assert d["bestModel"]["model"] == "Linear"
    assert d["bestModel"]["coefficients"] == pytest.approx([2.0, 0.0], abs=1e-9)
    assert [m["model"] for m in d["allModels"]] == [
        "Linear", "Quadratic", "Cubic", "Quartic",
    ]
    assert {s["model"] for s in d["skipped"]} == {"Exponential", "Logarithmic", "Power"}


def test_json_roundtrip_has_no_nan(line_points):
    result = fit_all(line_points)
    text = result_to_json(result)
    assert "NaN" not in text
    assert json.loads(text) == result_to_dict(result)


def test_undefined_statistics_marked():
    fit = FitResult(ModelKind.LINEAR, "y = 5", (0.0, 5.0), r_squared=None, aic=None)
    d = fit_to_dict(fit)
    assert d["r2"] == NOT_APPLICABLE
    assert d["aic"] == NOT_APPLICABLE
    negative = FitResult(ModelKind.POWER, "", (1.0, 1.0), r_squared=-0.3, aic=None)
    assert fit_to_dict(negative)["r2"] == NOT_APPLICABLE


def test_comparison_frame_lists_every_family():
    best = FitResult(ModelKind.LINEAR, "y = 2x", (2.0, 0.0), r_squared=0.98, aic=-30.0)
    quad = FitResult(ModelKind.QUADRATIC, "q", (0.1, 2.0, 0.0), r_squared=0.985, aic=-28.0)
    result = SelectionResult(
        best_model=best,
        all_models=(best, quad),
        failures=(FitFailure(ModelKind.POWER, "requires all x > 0 and y > 0"),),
    )
    df = comparison_frame(result)
    assert list(df["model"]) == FIT_MODELS
    assert df["best"].sum() == 1
    assert df.loc[df["model"] == "Linear", "best"].item()
    power = df[df["model"] == "Power"].iloc[0]
    assert power["r2"] == NOT_APPLICABLE
    assert "x > 0" in power["equation"]
    assert df[df["model"] == "Cubic"].iloc[0]["aic"] == NOT_APPLICABLE


def test_residuals_frame_undefined_points():
    fit = FitResult(ModelKind.LOGARITHMIC, "", (1.0, 2.0), r_squared=1.0)
    df = residuals_frame([(0.0, 1.0), (1.0, 2.0)], fit)
    assert list(df.columns) == ["x", "y", "predicted", "residual"]
    assert math.isnan(df["predicted"][0]) and math.isnan(df["residual"][0])
    assert df["residual"][1] == pytest.approx(1.0)
