from __future__ import annotations

import math
from typing import Any, Mapping, NamedTuple, Optional
from warnings import warn

from .backends import get_backend
from .distributions import as_distribution
from .errors import ConvergenceError
from .util import (
    DEFAULT_MAXITER,
    DEFAULT_TOLERANCE,
    DEFAULT_WIDTH,
    validate_maxiter,
    validate_tolerance,
    validate_width,
)


class Interval(NamedTuple):
    """A credible interval (lower, upper) holding ``mass`` probability."""

    lower: float
    upper: float
    mass: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, other: "Interval") -> bool:
        """Return True if ``other`` lies inside this interval."""
        return self.lower <= other.lower and other.upper <= self.upper

    def __repr__(self) -> str:
        return f"Interval(lower={self.lower:.6g}, upper={self.upper:.6g}, mass={self.mass:g})"


def find_hdi(
    quantile_fn: Any,
    width: float = DEFAULT_WIDTH,
    tolerance: float = DEFAULT_TOLERANCE,
    *params: Any,
    backend: str = "scipy.bounded",
    maxiter: int = DEFAULT_MAXITER,
    backend_options: Optional[Mapping[str, Any]] = None,
    **kwparams: Any,
) -> Interval:
    """Highest density interval of a unimodal distribution from its quantile function.

    Searches the lower-tail probability t in [0, 1 - width] for the
    narrowest interval [Q(t), Q(t + width)].

    Parameters
    ----------
    quantile_fn:
        A :class:`~hdi_tools.distributions.Distribution`, a frozen
        ``scipy.stats`` distribution, an unfrozen ``scipy.stats`` family, or a
        plain callable ``Q(p, *params, **kwparams)``.
    width:
        Probability mass of the interval, strictly between 0 and 1.
    tolerance:
        Absolute tolerance on t for the search.
    *params, **kwparams:
        Forwarded unchanged to a plain quantile function, e.g.
        ``find_hdi(scipy.stats.beta.ppf, 0.95, 1e-8, 30, 12)``.
    backend:
        Search strategy, one of ``hdi_tools.backends.AVAILABLE_BACKENDS``.
    maxiter:
        Iteration cap for the search.
    backend_options:
        Extra options for the backend.

    Returns
    -------
    Interval
        Unpacks as ``(lower, upper, mass)``.

    Raises
    ------
    InvalidArgument
        If width, tolerance or maxiter are out of range.
    ConvergenceError
        If the search does not converge or yields non-finite bounds.

    Notes
    -----
    The quantile function must be monotone non-decreasing and the
    distribution unimodal. Neither is checked; for other inputs the result
    is a local optimum at best.
    """
    w = validate_width(width)
    tol = validate_tolerance(tolerance)
    nmax = validate_maxiter(maxiter)
    dist = as_distribution(quantile_fn, *params, **kwparams)
    impl = get_backend(backend)

    res = impl.search(
        quantile=dist.quantile,
        density=dist.density,
        width=w,
        tolerance=tol,
        maxiter=nmax,
        options=dict(backend_options or {}),
    )

    if not res.success and res.stats.get("iterations") == 0:
        raise ConvergenceError(f"{impl.name} could not start: {res.message}")
    if not res.success:
        raise ConvergenceError(
            f"{impl.name} did not converge within {nmax} iterations "
            f"(tolerance={tol:g}): {res.message}"
        )
    if not (math.isfinite(res.lower) and math.isfinite(res.upper)):
        raise ConvergenceError(
            f"{impl.name} returned a non-finite interval ({res.lower}, {res.upper}) "
            f"for {dist.name!r}."
        )

    if res.stats.get("at_boundary", False):
        warn(
            f"HDI of {dist.name!r} touches the edge of the search range "
            f"(lower-tail mass {res.t:.3g}); the density may be monotone.",
            UserWarning,
            stacklevel=2,
        )

    return Interval(lower=res.lower, upper=res.upper, mass=w)
