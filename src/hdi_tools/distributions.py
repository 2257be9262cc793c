from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

import numpy as np
import scipy.stats

from .errors import InvalidArgument


class QuantileFunction(Protocol):
    """Inverse CDF: maps a cumulative probability p in (0, 1) to a value."""

    def __call__(self, p: Any, *params: Any) -> Any: ...


@dataclass(frozen=True)
class Distribution:
    """A univariate distribution seen through its quantile function.

    Parameters
    ----------
    name:
        Human-readable family name.
    quantile:
        Callable p -> x, monotone non-decreasing on (0, 1).
    density:
        Optional callable x -> pdf(x). Needed only by density-based
        backends and diagnostics.
    params:
        The parameter bundle the callables were built from (informational).
    """

    name: str
    quantile: Callable[[Any], Any]
    density: Optional[Callable[[Any], Any]] = None
    params: Mapping[str, float] = field(default_factory=dict)

    # ---- constructors ----
    @staticmethod
    def from_scipy(frozen: Any, *, name: Optional[str] = None) -> "Distribution":
        """Wrap a frozen scipy.stats continuous distribution."""
        if not hasattr(frozen, "ppf"):
            raise InvalidArgument("Expected a frozen scipy.stats distribution with .ppf().")
        dist = getattr(frozen, "dist", None)
        if name is None:
            name = getattr(dist, "name", type(frozen).__name__)
        params: Dict[str, float] = {}
        for i, a in enumerate(getattr(frozen, "args", ())):
            params[f"arg{i}"] = float(a)
        for k, v in dict(getattr(frozen, "kwds", {})).items():
            params[k] = float(v)
        density = getattr(frozen, "pdf", None)
        return Distribution(name=name, quantile=frozen.ppf, density=density, params=params)

    @staticmethod
    def from_quantile(
        func: QuantileFunction,
        *params: Any,
        name: Optional[str] = None,
        density: Optional[Callable[..., Any]] = None,
        **kwparams: Any,
    ) -> "Distribution":
        """Bind extra parameters to a plain quantile function.

        The same parameters are bound to ``density`` when one is given.
        """
        if not callable(func):
            raise InvalidArgument("quantile function must be callable.")

        def quantile(p):
            return func(p, *params, **kwparams)

        bound_density = None
        if density is not None:

            def bound_density(x):
                return density(x, *params, **kwparams)

        info: Dict[str, float] = {f"arg{i}": v for i, v in enumerate(params)}
        info.update(kwparams)
        return Distribution(
            name=name or getattr(func, "__name__", "custom"),
            quantile=quantile,
            density=bound_density,
            params=info,
        )

    # ---- evaluation ----
    def ppf(self, p: Any) -> Any:
        return self.quantile(p)

    def pdf(self, x: Any) -> Any:
        if self.density is None:
            raise InvalidArgument(f"Distribution {self.name!r} has no density function.")
        return self.density(x)

    @property
    def has_density(self) -> bool:
        return self.density is not None


# --- Families ----------------------------------------------------------------


def _require_positive(**values: float) -> None:
    for k, v in values.items():
        if not (np.isfinite(v) and v > 0):
            raise InvalidArgument(f"{k} must be positive and finite; got {v!r}.")


def _require_finite(**values: float) -> None:
    for k, v in values.items():
        if not np.isfinite(v):
            raise InvalidArgument(f"{k} must be finite; got {v!r}.")


def normal(mean: float = 0.0, sd: float = 1.0) -> Distribution:
    """Normal(mean, sd)."""
    mean, sd = float(mean), float(sd)
    _require_finite(mean=mean)
    _require_positive(sd=sd)
    rv = scipy.stats.norm(loc=mean, scale=sd)
    return Distribution("normal", rv.ppf, rv.pdf, {"mean": mean, "sd": sd})


def student_t(df: float, loc: float = 0.0, scale: float = 1.0) -> Distribution:
    """Location-scale Student t."""
    df, loc, scale = float(df), float(loc), float(scale)
    _require_finite(loc=loc)
    _require_positive(df=df, scale=scale)
    rv = scipy.stats.t(df, loc=loc, scale=scale)
    return Distribution("student_t", rv.ppf, rv.pdf, {"df": df, "loc": loc, "scale": scale})


def beta(a: float, b: float) -> Distribution:
    """Beta(a, b) on [0, 1]. Unimodal with an interior mode when a, b > 1."""
    a, b = float(a), float(b)
    _require_positive(a=a, b=b)
    rv = scipy.stats.beta(a, b)
    return Distribution("beta", rv.ppf, rv.pdf, {"a": a, "b": b})


def gamma(shape: float, rate: float = 1.0) -> Distribution:
    """Gamma with shape/rate parameterisation (scale = 1/rate)."""
    shape, rate = float(shape), float(rate)
    _require_positive(shape=shape, rate=rate)
    rv = scipy.stats.gamma(shape, scale=1.0 / rate)
    return Distribution("gamma", rv.ppf, rv.pdf, {"shape": shape, "rate": rate})


def lognormal(meanlog: float = 0.0, sdlog: float = 1.0) -> Distribution:
    """Log-normal with the mean/sd of log(x)."""
    meanlog, sdlog = float(meanlog), float(sdlog)
    _require_finite(meanlog=meanlog)
    _require_positive(sdlog=sdlog)
    rv = scipy.stats.lognorm(sdlog, scale=float(np.exp(meanlog)))
    return Distribution("lognormal", rv.ppf, rv.pdf, {"meanlog": meanlog, "sdlog": sdlog})


def exponential(rate: float = 1.0) -> Distribution:
    """Exponential(rate). Its HDI always starts at 0."""
    rate = float(rate)
    _require_positive(rate=rate)
    rv = scipy.stats.expon(scale=1.0 / rate)
    return Distribution("exponential", rv.ppf, rv.pdf, {"rate": rate})


_FAMILIES: Dict[str, Callable[..., Distribution]] = {
    "normal": normal,
    "student_t": student_t,
    "beta": beta,
    "gamma": gamma,
    "lognormal": lognormal,
    "exponential": exponential,
}

AVAILABLE_FAMILIES = tuple(_FAMILIES.keys())


def get_family(name: str) -> Callable[..., Distribution]:
    """Return a family constructor by name."""
    try:
        return _FAMILIES[name]
    except KeyError as e:
        raise InvalidArgument(
            f"Unknown distribution family {name!r}. Available: {AVAILABLE_FAMILIES}"
        ) from e


def distribution(name: str, **params: float) -> Distribution:
    """Build a named family, e.g. ``distribution("beta", a=30, b=12)``."""
    ctor = get_family(name)
    try:
        return ctor(**params)
    except TypeError as e:
        raise InvalidArgument(f"Bad parameters for {name!r}: {e}") from e


def as_distribution(obj: Any, *params: Any, **kwparams: Any) -> Distribution:
    """Coerce a Distribution, frozen scipy distribution or callable."""
    if isinstance(obj, Distribution):
        if params or kwparams:
            raise InvalidArgument("Extra parameters cannot be passed with a Distribution.")
        return obj
    if isinstance(obj, scipy.stats.rv_continuous):
        # Unfrozen family, e.g. as_distribution(scipy.stats.beta, 30, 12).
        return Distribution.from_quantile(
            obj.ppf, *params, name=obj.name, density=obj.pdf, **kwparams
        )
    if hasattr(obj, "ppf"):
        if params or kwparams:
            raise InvalidArgument(
                "Extra parameters cannot be passed with a frozen distribution."
            )
        return Distribution.from_scipy(obj)
    if callable(obj):
        return Distribution.from_quantile(obj, *params, **kwparams)
    raise InvalidArgument(
        "quantile_fn must be a Distribution, a frozen scipy.stats distribution "
        "or a callable quantile function."
    )
