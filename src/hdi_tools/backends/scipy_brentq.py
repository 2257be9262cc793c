from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
from scipy.optimize import brentq

from ..errors import InvalidArgument
from .common import SearchResult, interval_width_fn, near_boundary


class ScipyBrentqBackend:
    name = "scipy.brentq"

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
        """Solve pdf(Q(t + width)) == pdf(Q(t)) for t with Brent's root finder.

        The HDI of a unimodal density has equal density at both ends. When
        there is no sign change over the search range (monotone density) the
        narrower of the two edge intervals is returned.

        Backend options:
        - edge: distance of the bracket from 0 and 1 - width
          (default: min(tolerance, (1 - width) / 4))
        """
        if density is None:
            raise InvalidArgument(
                "scipy.brentq backend needs a density; use a Distribution with pdf "
                "or backend='scipy.bounded'."
            )

        incredible_mass = 1.0 - width
        edge = float(options.get("edge", min(tolerance, 0.25 * incredible_mass)))
        a, b = edge, incredible_mass - edge

        def excess(t: float) -> float:
            hi = min(t + width, 1.0)
            return float(density(quantile(hi))) - float(density(quantile(t)))

        ga, gb = excess(a), excess(b)
        if not (np.isfinite(ga) and np.isfinite(gb)):
            return SearchResult(
                t=a,
                lower=float("nan"),
                upper=float("nan"),
                success=False,
                message="density is not finite at the bracket ends",
                nfev=2,
                stats={"backend": self.name, "iterations": 0},
            )

        if ga * gb > 0.0:
            # Monotone density over the range: HDI is pinned to one tail.
            widths = interval_width_fn(quantile, width)
            t = a if widths(a) <= widths(b) else b
            return SearchResult(
                t=t,
                lower=float(quantile(t)),
                upper=float(quantile(min(t + width, 1.0))),
                success=True,
                message="no sign change; interval pinned to a tail",
                nfev=4,
                stats={"backend": self.name, "at_boundary": True},
            )

        t, info = brentq(
            excess,
            a,
            b,
            xtol=tolerance,
            maxiter=maxiter,
            full_output=True,
            disp=False,
        )
        t = float(t)
        return SearchResult(
            t=t,
            lower=float(quantile(t)),
            upper=float(quantile(min(t + width, 1.0))),
            success=bool(info.converged),
            message=str(info.flag),
            nfev=int(info.function_calls) + 2,
            stats={
                "backend": self.name,
                "iterations": int(info.iterations),
                "at_boundary": near_boundary(t, incredible_mass, tolerance),
            },
        )
