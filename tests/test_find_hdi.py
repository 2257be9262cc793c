import warnings

import numpy as np
import pytest
import scipy.stats

from hdi_tools import ConvergenceError, Interval, InvalidArgument, distributions, find_hdi


def test_standard_normal_95() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        lower, upper, mass = find_hdi(distributions.normal())

    assert mass == 0.95
    assert abs(lower - (-1.959964)) < 1e-4
    assert abs(upper - 1.959964) < 1e-4
    assert abs(lower + upper) < 1e-4


@pytest.mark.parametrize(
    "dist",
    [
        distributions.beta(30, 12),
        distributions.gamma(3.0, rate=2.0),
        distributions.lognormal(0.0, 0.5),
        distributions.student_t(4.0, loc=1.0, scale=2.0),
    ],
    ids=lambda d: d.name,
)
def test_endpoints_have_equal_density(dist) -> None:
    hdi = find_hdi(dist, 0.9)
    np.testing.assert_allclose(dist.pdf(hdi.lower), dist.pdf(hdi.upper), rtol=1e-3)


def test_interval_holds_requested_mass() -> None:
    rv = scipy.stats.beta(30, 12)
    hdi = find_hdi(rv, 0.95)
    assert abs((rv.cdf(hdi.upper) - rv.cdf(hdi.lower)) - 0.95) < 1e-6


def test_wider_mass_contains_narrower() -> None:
    dist = distributions.gamma(3.0, rate=2.0)
    narrow = find_hdi(dist, 0.5)
    wide = find_hdi(dist, 0.95)

    assert wide.lower < narrow.lower
    assert narrow.upper < wide.upper
    assert wide.contains(narrow)
    assert not narrow.contains(wide)


def test_repeated_calls_are_identical() -> None:
    dist = distributions.beta(7, 3)
    assert find_hdi(dist, 0.8) == find_hdi(dist, 0.8)


def test_extra_params_forwarded_to_plain_quantile_function() -> None:
    positional = find_hdi(scipy.stats.beta.ppf, 0.95, 1e-8, 30, 12)
    family = find_hdi(distributions.beta(30, 12))
    np.testing.assert_allclose(positional[:2], family[:2], atol=1e-6)

    keyword = find_hdi(scipy.stats.norm.ppf, loc=10.0, scale=2.0)
    np.testing.assert_allclose(keyword[:2], (10.0 - 3.919928, 10.0 + 3.919928), atol=1e-3)


def test_unfrozen_scipy_family_accepts_params() -> None:
    hdi = find_hdi(scipy.stats.beta, 0.95, 1e-8, 30, 12)
    expected = find_hdi(distributions.beta(30, 12))
    np.testing.assert_allclose(hdi[:2], expected[:2], atol=1e-6)


def test_params_rejected_with_distribution_object() -> None:
    with pytest.raises(InvalidArgument, match="Extra parameters"):
        find_hdi(distributions.normal(), 0.95, 1e-8, 3.0)


@pytest.mark.parametrize("width", [0, 1, -0.1, 1.5, float("nan"), "wide"])
def test_invalid_width_raises(width) -> None:
    with pytest.raises(InvalidArgument):
        find_hdi(distributions.normal(), width)


@pytest.mark.parametrize("tolerance", [0.0, -1e-3, float("inf")])
def test_invalid_tolerance_raises(tolerance) -> None:
    with pytest.raises(InvalidArgument, match="tolerance"):
        find_hdi(distributions.normal(), 0.95, tolerance)


def test_iteration_cap_raises_convergence_error() -> None:
    with pytest.raises(ConvergenceError, match="did not converge"):
        find_hdi(distributions.normal(), maxiter=1)


def test_non_finite_quantile_raises_convergence_error() -> None:
    with pytest.raises(ConvergenceError, match="non-finite"):
        find_hdi(lambda p: float("nan"))


def test_monotone_density_warns_and_pins_to_edge() -> None:
    with pytest.warns(UserWarning, match="edge of the search range"):
        hdi = find_hdi(distributions.exponential(1.0), 0.95)

    assert hdi.lower >= 0.0
    assert hdi.lower < 1e-5
    assert abs(hdi.upper - (-np.log(0.05))) < 1e-4


def test_interval_fields() -> None:
    hdi = find_hdi(distributions.normal(5.0, 2.0), 0.5)
    assert isinstance(hdi, Interval)
    assert hdi.width == pytest.approx(hdi.upper - hdi.lower)
    assert hdi.mass == 0.5
    assert "Interval(" in repr(hdi)
