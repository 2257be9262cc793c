import numpy as np
import pytest
import scipy.stats

from hdi_tools import ConvergenceError, Distribution, InvalidArgument, distributions, find_hdi
from hdi_tools.backends import AVAILABLE_BACKENDS, get_backend


def test_registry_lists_backends() -> None:
    assert AVAILABLE_BACKENDS == ("scipy.bounded", "scipy.brentq")
    assert get_backend("scipy.brentq").name == "scipy.brentq"


def test_unknown_backend_raises() -> None:
    with pytest.raises(InvalidArgument, match="Unknown backend"):
        find_hdi(distributions.normal(), backend="nelder-mead")


@pytest.mark.parametrize(
    "dist",
    [distributions.beta(30, 12), distributions.gamma(2.0, rate=0.5), distributions.normal(1.0, 3.0)],
    ids=lambda d: d.name,
)
def test_brentq_agrees_with_bounded(dist) -> None:
    bounded = find_hdi(dist, 0.9, backend="scipy.bounded")
    brentq = find_hdi(dist, 0.9, backend="scipy.brentq")
    np.testing.assert_allclose(brentq[:2], bounded[:2], atol=1e-4)


def test_brentq_endpoints_have_equal_density() -> None:
    dist = distributions.gamma(3.0, rate=1.0)
    hdi = find_hdi(dist, 0.95, backend="scipy.brentq")
    np.testing.assert_allclose(dist.pdf(hdi.lower), dist.pdf(hdi.upper), rtol=1e-5)


def test_brentq_needs_density() -> None:
    with pytest.raises(InvalidArgument, match="needs a density"):
        find_hdi(scipy.stats.norm.ppf, backend="scipy.brentq")


def test_brentq_pins_monotone_density_to_tail() -> None:
    with pytest.warns(UserWarning, match="monotone"):
        hdi = find_hdi(distributions.exponential(2.0), 0.9, backend="scipy.brentq")
    assert hdi.lower < 1e-6
    assert abs(hdi.upper - (-np.log(0.1) / 2.0)) < 1e-6


def test_bounded_backend_options_forwarded() -> None:
    backend = get_backend("scipy.bounded")
    dist = distributions.normal()
    res = backend.search(
        quantile=dist.quantile,
        density=dist.density,
        width=0.95,
        tolerance=1e-8,
        maxiter=500,
        options={"options": {"xatol": 1e-3}},
    )
    assert res.success
    assert res.stats["backend"] == "scipy.bounded"
    assert not res.stats["at_boundary"]
    assert abs(res.t - 0.025) < 1e-2


def test_brentq_iteration_cap_raises_convergence_error() -> None:
    with pytest.raises(ConvergenceError, match="did not converge within 1 iterations"):
        find_hdi(distributions.beta(30, 12), backend="scipy.brentq", maxiter=1)


def test_brentq_non_finite_density_reports_bracket() -> None:
    dist = Distribution.from_quantile(
        scipy.stats.norm.ppf, name="nan-density", density=lambda x: float("nan")
    )
    with pytest.raises(ConvergenceError, match="could not start") as excinfo:
        find_hdi(dist, backend="scipy.brentq")
    assert "density is not finite at the bracket ends" in str(excinfo.value)
    assert "iterations" not in str(excinfo.value)


def test_brentq_infinite_density_at_bracket_raises() -> None:
    def density(x):
        return np.inf if x < 0 else 1.0

    dist = Distribution.from_quantile(scipy.stats.norm.ppf, name="spike", density=density)
    with pytest.raises(ConvergenceError, match="not finite"):
        find_hdi(dist, backend="scipy.brentq")


def test_search_reports_iteration_count() -> None:
    dist = distributions.beta(30, 12)
    for name in AVAILABLE_BACKENDS:
        res = get_backend(name).search(
            quantile=dist.quantile,
            density=dist.density,
            width=0.9,
            tolerance=1e-8,
            maxiter=500,
            options={},
        )
        assert res.success
        assert res.stats["iterations"] > 0
