from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Union

import numpy as np

from .errors import InvalidArgument
from .samples import hdi_from_samples, sample_mode
from .util import DEFAULT_WIDTH, as_samples, validate_width

POINT_TYPES = ("mode", "median", "mean")
INTERVAL_TYPES = ("hdi", "qi")

Widths = Union[float, Sequence[float]]


@dataclass(frozen=True)
class PointInterval:
    """One summary row: a point estimate with its interval."""

    value: float
    lower: float
    upper: float
    width: float
    point: str
    interval: str

    def as_dict(self) -> dict:
        return {
            "value": self.value,
            "lower": self.lower,
            "upper": self.upper,
            "width": self.width,
            "point": self.point,
            "interval": self.interval,
        }


def _widths(width: Widths) -> List[float]:
    if np.ndim(width) == 0:
        return [validate_width(width)]
    ws = [validate_width(w) for w in width]  # type: ignore[union-attr]
    if not ws:
        raise InvalidArgument("At least one width is required.")
    return ws


def _point_value(arr: np.ndarray, point: str, kde_options: dict) -> float:
    if point == "mean":
        return float(np.mean(arr))
    if point == "median":
        return float(np.median(arr))
    density_options = {k: v for k, v in kde_options.items() if k not in ("min_mass", "refine")}
    return sample_mode(arr, **density_options)


def point_interval(
    samples: Any,
    width: Widths = DEFAULT_WIDTH,
    *,
    point: str = "mode",
    interval: str = "hdi",
    strict: bool = True,
    **kde_options: Any,
) -> List[PointInterval]:
    """Summarise draws as point estimate + interval rows.

    Parameters
    ----------
    samples:
        Array-like of draws; flattened.
    width:
        Interval mass, or a sequence of masses (rows for each, in order).
    point : {"mode", "median", "mean"}
        Point estimate. With ``interval="hdi"`` and ``point="mode"`` each
        region reports its own local mode.
    interval : {"hdi", "qi"}
        Highest density region(s) or the equal-tailed quantile interval.
    **kde_options:
        bw_method/grid_size/cut forwarded to the density estimate, and
        min_mass/refine to the HDI search.

    Returns
    -------
    list of PointInterval
        A multimodal HDI yields several rows per width.
    """
    if point not in POINT_TYPES:
        raise InvalidArgument(f"Unknown point type {point!r}. Available: {POINT_TYPES}")
    if interval not in INTERVAL_TYPES:
        raise InvalidArgument(
            f"Unknown interval type {interval!r}. Available: {INTERVAL_TYPES}"
        )

    widths = _widths(width)
    arr = as_samples(samples, strict=strict)

    rows: List[PointInterval] = []
    if interval == "qi":
        value = _point_value(arr, point, kde_options)
        for w in widths:
            lo, hi = np.quantile(arr, [0.5 * (1.0 - w), 0.5 * (1.0 + w)])
            rows.append(PointInterval(value, float(lo), float(hi), w, point, interval))
        return rows

    value = None if point == "mode" else _point_value(arr, point, kde_options)
    for w in widths:
        for region in hdi_from_samples(arr, w, **kde_options):
            v = region.mode if value is None else value
            rows.append(PointInterval(v, region.lower, region.upper, w, point, interval))
    return rows


def mode_hdi(samples: Any, width: Widths = DEFAULT_WIDTH, **kwargs: Any) -> List[PointInterval]:
    return point_interval(samples, width, point="mode", interval="hdi", **kwargs)


def median_qi(samples: Any, width: Widths = DEFAULT_WIDTH, **kwargs: Any) -> List[PointInterval]:
    return point_interval(samples, width, point="median", interval="qi", **kwargs)


def mean_qi(samples: Any, width: Widths = DEFAULT_WIDTH, **kwargs: Any) -> List[PointInterval]:
    return point_interval(samples, width, point="mean", interval="qi", **kwargs)


def format_point_intervals(rows: Iterable[PointInterval], digits: int = 4) -> str:
    """Return a human-readable table for summary rows."""
    rows = list(rows)
    header = f"{'value':>12s} {'lower':>12s} {'upper':>12s} {'width':>6s} {'point':>7s} {'interval':>8s}"
    lines = [header]
    for r in rows:
        lines.append(
            f"{r.value:>12.{digits}g} {r.lower:>12.{digits}g} {r.upper:>12.{digits}g} "
            f"{r.width:>6.3g} {r.point:>7s} {r.interval:>8s}"
        )
    return "\n".join(lines)
