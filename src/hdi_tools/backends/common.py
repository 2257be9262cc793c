from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol

import numpy as np


@dataclass(frozen=True)
class SearchResult:
    """Normalized result returned by any search backend."""

    t: float  # lower-tail probability of the interval
    lower: float
    upper: float
    success: bool = True
    message: str = ""
    nfev: int = 0
    stats: Dict[str, Any] = field(default_factory=dict)


class Backend(Protocol):
    """Backend protocol: locate the narrowest interval of a given mass."""

    name: str

    def search(
        self,
        *,
        quantile: Callable[[Any], Any],
        density: Optional[Callable[[Any], Any]],
        width: float,
        tolerance: float,
        maxiter: int,
        options: dict[str, Any],
    ) -> SearchResult: ...


def interval_width_fn(quantile: Callable[[Any], Any], width: float) -> Callable[[float], float]:
    """Return t -> Q(t + width) - Q(t); NaN is mapped to +inf."""

    def interval_width(t: float) -> float:
        t = float(t)
        hi = min(t + width, 1.0)
        w = float(quantile(hi)) - float(quantile(t))
        if np.isnan(w):
            return float("inf")
        return w

    return interval_width


def near_boundary(t: float, incredible_mass: float, tolerance: float) -> bool:
    """True if t sits at either edge of [0, incredible_mass]."""
    slack = max(10.0 * tolerance, 1e-6 * incredible_mass)
    return t <= slack or t >= incredible_mass - slack
