import numpy as np
import pytest
from bestfit import FitOptions, fit_all
from bestfit.analysis import selection
from bestfit.analysis.models import FitResult, ModelKind
from bestfit.analysis.selection import select_best
from bestfit.constants import SAMPLE_DATA
from bestfit.core.errors import InvalidInputError, NoValidModelError
from bestfit.core.points import parse_text


def _cand(model, r2, score):
    return FitResult(model, "", (1.0, 0.0), r_squared=r2, aic=score, n_points=10)


def test_end_to_end_linear(line_points):
    result = fit_all(line_points)
    best = result.best_model
    assert best.model == "Linear"
    assert best.coefficients == pytest.approx((2.0, 0.0), abs=1e-9)
    assert best.r_squared == pytest.approx(1.0, abs=1e-9)
    assert [f.model for f in result.all_models] == [
        ModelKind.LINEAR, ModelKind.QUADRATIC, ModelKind.CUBIC, ModelKind.QUARTIC,
    ]


def test_single_point_rejected_before_fitting(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("fitting must not start")
    monkeypatch.setattr(selection, "fitter_for", boom)
    with pytest.raises(InvalidInputError):
        fit_all([(1.0, 2.0)])


def test_zero_variance_has_no_valid_model(flat_points):
    with pytest.raises(NoValidModelError):
        fit_all(flat_points)


def test_two_points_pick_linear():
    result = fit_all([(1.0, 3.0), (2.0, 5.0)])
    assert result.best_model.model is ModelKind.LINEAR
    assert {f.model for f in result.failures} == {
        ModelKind.QUADRATIC, ModelKind.CUBIC, ModelKind.QUARTIC,
    }


def test_non_positive_x_excludes_log_and_power():
    x = np.arange(-3.0, 4.0)
    pts = list(zip(x, 2 * x ** 2 + 1))
    result = fit_all(pts)
    fitted = {f.model for f in result.all_models}
    assert ModelKind.LOGARITHMIC not in fitted
    assert ModelKind.POWER not in fitted
    skipped = {f.model for f in result.failures}
    assert {ModelKind.LOGARITHMIC, ModelKind.POWER} <= skipped


def test_quadratic_data_selects_quadratic():
    x = np.arange(-5.0, 6.0)
    result = fit_all(list(zip(x, 2 * x ** 2 - x + 1)))
    assert result.best_model.model is ModelKind.QUADRATIC


def test_exponential_data_selects_exponential():
    x = np.arange(0.0, 10.0)
    result = fit_all(list(zip(x, 3 * np.exp(0.4 * x))))
    assert result.best_model.model is ModelKind.EXPONENTIAL
    assert result.best_model.coefficients == pytest.approx((3.0, 0.4))


def test_deterministic():
    rng = np.random.default_rng(42)
    x = np.linspace(1, 20, 40)
    pts = list(zip(x, 5 * np.log(x) + rng.normal(0, 0.3, x.size)))
    first = fit_all(pts)
    second = fit_all(pts)
    assert first.best_model == second.best_model
    assert first.all_models == second.all_models


def test_best_always_has_valid_r2():
    rng = np.random.default_rng(7)
    for _ in range(20):
        x = rng.uniform(0.5, 10, 15)
        y = rng.normal(0, 1, 15) + rng.uniform(-2, 2) * x
        best = fit_all(list(zip(x, y))).best_model
        assert best.r_squared_valid
        assert np.isfinite(best.aic)


def test_tie_break_prefers_lower_aic():
    higher = _cand(ModelKind.LINEAR, 0.93, 10.0)
    lower = _cand(ModelKind.QUADRATIC, 0.90, 5.0)
    assert select_best([higher, lower]) is lower
    assert select_best([lower, higher]) is lower


def test_decisive_r2_wins_regardless_of_aic():
    worse = _cand(ModelKind.LINEAR, 0.80, -50.0)
    better = _cand(ModelKind.QUADRATIC, 0.90, 100.0)
    assert select_best([worse, better]) is better
    assert select_best([better, worse]) is better


def test_equal_aic_keeps_earlier_family():
    first = _cand(ModelKind.CUBIC, 1.0, -992.0)
    second = _cand(ModelKind.QUARTIC, 1.0, -992.0)
    assert select_best([first, second]) is first


def test_select_best_empty():
    with pytest.raises(NoValidModelError):
        select_best([])


@pytest.mark.parametrize("degree", [1, 7, 2.5])
def test_bad_polynomial_degree(line_points, degree):
    with pytest.raises(InvalidInputError):
        fit_all(line_points, FitOptions(polynomial_degree=degree))


def test_results_are_immutable(line_points):
    best = fit_all(line_points).best_model
    with pytest.raises(AttributeError):
        best.aic = 0.0


def test_gain_of_exactly_the_margin_is_a_tie():
    # 0.80 - 0.75 is slightly above 0.05 in floating point
    linear = _cand(ModelKind.LINEAR, 0.75, -5.0)
    quadratic = _cand(ModelKind.QUADRATIC, 0.80, 10.0)
    assert select_best([linear, quadratic]) is linear


@pytest.mark.parametrize("name", ["Linear", "Quadratic", "Exponential"])
def test_sample_data_selects_its_family(name):
    parsed = parse_text(SAMPLE_DATA[name])
    assert not parsed.rejected
    assert fit_all(parsed.points).best_model.model == name
