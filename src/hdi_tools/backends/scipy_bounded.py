from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from scipy.optimize import minimize_scalar

from .common import SearchResult, interval_width_fn, near_boundary


class ScipyBoundedBackend:
    name = "scipy.bounded"

    def search(
        self,
        *,
        quantile: Callable[[Any], Any],
        density: Optional[Callable[[Any], Any]],
        width: float,
        tolerance: float,
        maxiter: int,
        options: dict[str, Any],
    ) -> SearchResult:
        """Minimize the interval width over the lower-tail probability.

        Uses Brent's bounded method (scipy.optimize.minimize_scalar with
        method="bounded") on t in [0, 1 - width].

        Backend options:
        - options: dict forwarded to minimize_scalar's ``options``
          (xatol/maxiter set from tolerance/maxiter unless given here)
        """
        incredible_mass = 1.0 - width
        objective = interval_width_fn(quantile, width)

        scipy_opts: Dict[str, Any] = {"xatol": tolerance, "maxiter": maxiter}
        scipy_opts.update(options.get("options", None) or {})

        res = minimize_scalar(
            objective,
            bounds=(0.0, incredible_mass),
            method="bounded",
            options=scipy_opts,
        )

        t = float(res.x)
        lower = float(quantile(t))
        upper = float(quantile(min(t + width, 1.0)))
        return SearchResult(
            t=t,
            lower=lower,
            upper=upper,
            success=bool(res.success),
            message=str(getattr(res, "message", "")),
            nfev=int(getattr(res, "nfev", 0)),
            stats={
                "backend": self.name,
                "iterations": int(getattr(res, "nit", getattr(res, "nfev", 0))),
                "interval_width": float(res.fun),
                "at_boundary": near_boundary(t, incredible_mass, tolerance),
            },
        )
