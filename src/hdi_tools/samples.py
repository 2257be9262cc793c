from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union
from warnings import warn

import numpy as np
from scipy.stats import gaussian_kde

from .analytic import Interval
from .errors import DegenerateDistribution, InsufficientData, InvalidArgument
from .util import (
    DEFAULT_CUT,
    DEFAULT_GRID_SIZE,
    DEFAULT_MIN_MASS,
    DEFAULT_WIDTH,
    as_samples,
    contiguous_runs,
    trapezoid_weights,
    validate_width,
)

BwMethod = Optional[Union[str, float]]

# Achieved coverage above width + this triggers a "grid too coarse" warning.
COVERAGE_SLACK = 0.01


@dataclass(frozen=True)
class DensityEstimate:
    """Kernel density estimate evaluated on an ascending grid.

    ``density`` is normalised so that its trapezoidal integral over ``x``
    is one.
    """

    x: np.ndarray
    density: np.ndarray
    bandwidth: float

    def mass_weights(self) -> np.ndarray:
        """Probability mass attributed to each grid point."""
        return trapezoid_weights(self.x) * self.density

    @property
    def mode(self) -> float:
        return float(self.x[int(np.argmax(self.density))])


@dataclass(frozen=True)
class HDIRegion:
    """One disjoint piece of a highest density region.

    Iterates as ``(mode, lower, upper)``.
    """

    mode: float
    lower: float
    upper: float
    mass: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.mode, self.lower, self.upper))

    @property
    def width(self) -> float:
        return self.upper - self.lower


def robust_bandwidth(samples: Any) -> float:
    """Silverman's rule of thumb with an IQR-robust scale.

    ``0.9 * min(sd, IQR / 1.34) * n ** (-1/5)``, using the standard deviation
    alone when the IQR is zero.
    """
    arr = np.asarray(samples, dtype=float).reshape(-1)
    sd = float(np.std(arr, ddof=1))
    q25, q75 = np.quantile(arr, [0.25, 0.75])
    iqr = float(q75 - q25)
    scale = min(sd, iqr / 1.34) if iqr > 0.0 else sd
    return 0.9 * scale * arr.size ** (-0.2)


def _grid(arr: np.ndarray, lo: float, hi: float, grid_size: int) -> np.ndarray:
    """Uniform points over [lo, hi] merged with sample quantiles.

    The quantile half keeps the grid fine where the mass is, which matters
    for heavy-tailed samples whose range dwarfs the bulk.
    """
    n_quantile = grid_size // 2
    uniform = np.linspace(lo, hi, grid_size - n_quantile)
    quantiles = np.quantile(arr, np.linspace(0.0, 1.0, n_quantile))
    return np.unique(np.concatenate([uniform, quantiles]))


def _narrowest_window(sorted_arr: np.ndarray, width: float) -> Optional[Tuple[float, float]]:
    """Bounds of the narrowest sorted-sample window, or None if too few draws."""
    n = sorted_arr.size
    n_included = int(math.ceil(width * n))
    n_windows = n - n_included
    if n_windows <= 0:
        return None
    widths = sorted_arr[n_included:] - sorted_arr[:n_windows]
    i = int(np.argmin(widths))
    return float(sorted_arr[i]), float(sorted_arr[i + n_included])


def density_estimate(
    samples: Any,
    *,
    bw_method: BwMethod = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    cut: float = DEFAULT_CUT,
    strict: bool = True,
) -> DensityEstimate:
    """Gaussian KDE of ``samples`` on a grid over the sample range.

    Parameters
    ----------
    samples:
        Array-like of draws; flattened.
    bw_method:
        Forwarded to :class:`scipy.stats.gaussian_kde`. When None the
        bandwidth is :func:`robust_bandwidth`.
    grid_size:
        Number of grid points before merging duplicates; half are uniform
        over the range, half are sample quantiles.
    cut:
        Grid extension beyond the data, in bandwidths. 0 keeps the grid
        inside the sample range.
    strict:
        Raise on non-finite draws (True) or drop them with a warning.
    """
    arr = as_samples(samples, strict=strict)

    grid_size = int(grid_size)
    if grid_size < 3:
        raise InvalidArgument(f"grid_size must be >= 3; got {grid_size}.")
    cut = float(cut)
    if not (math.isfinite(cut) and cut >= 0.0):
        raise InvalidArgument(f"cut must be a non-negative number; got {cut!r}.")

    lo = float(np.min(arr))
    hi = float(np.max(arr))
    if hi - lo <= 0.0:
        raise DegenerateDistribution(
            f"All {arr.size} samples are equal ({lo!r}); density is degenerate."
        )

    with np.errstate(over="ignore", invalid="ignore"):
        sd = float(np.std(arr, ddof=1))
    if not (math.isfinite(sd) and sd > 0.0):
        raise DegenerateDistribution(
            f"Sample standard deviation is {sd!r}; cannot estimate density."
        )

    # gaussian_kde takes a scalar bw_method as a multiple of the sample sd.
    factor = robust_bandwidth(arr) / sd if bw_method is None else bw_method
    try:
        kde = gaussian_kde(arr, bw_method=factor)
    except np.linalg.LinAlgError as e:
        raise DegenerateDistribution("Sample covariance is singular; cannot estimate density.") from e
    except (TypeError, ValueError) as e:
        if bw_method is None:
            raise DegenerateDistribution(f"Cannot estimate density: {e}") from e
        raise InvalidArgument(f"Invalid bw_method {bw_method!r}: {e}") from e

    bandwidth = float(np.sqrt(kde.covariance[0, 0]))
    if not (math.isfinite(bandwidth) and bandwidth > 0.0):
        raise DegenerateDistribution(f"KDE bandwidth is not positive ({bandwidth!r}).")

    x = _grid(arr, lo - cut * bandwidth, hi + cut * bandwidth, grid_size)
    dens = np.asarray(kde(x), dtype=float)
    total = float(np.sum(trapezoid_weights(x) * dens))
    if not (math.isfinite(total) and total > 0.0):
        raise DegenerateDistribution("Density estimate carries no probability mass.")

    return DensityEstimate(x=x, density=dens / total, bandwidth=bandwidth)


def hdi_from_samples(
    samples: Any,
    width: float = DEFAULT_WIDTH,
    *,
    bw_method: BwMethod = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    cut: float = DEFAULT_CUT,
    min_mass: float = DEFAULT_MIN_MASS,
    refine: bool = True,
    strict: bool = True,
) -> List[HDIRegion]:
    """Highest density region(s) of a sample, one entry per disjoint piece.

    Grid points of the density estimate are taken in order of decreasing
    density until their mass reaches ``width``; the selected points are then
    split into maximal runs along x. Each run is reported with its bounds,
    its mass and the x of its highest density. Bounds never leave the range
    of the samples.

    Parameters
    ----------
    min_mass:
        Runs holding less mass than this are treated as density-estimate
        noise and dropped (the heaviest run is always kept).
    refine:
        When a single region remains, replace its bounds by the narrowest
        window of sorted draws (:func:`hdi_of_samples`), which does not
        depend on the bandwidth; its mass is then the share of draws inside.

    Returns
    -------
    list of HDIRegion
        Ordered by ``lower``. The length is 1 for unimodal samples and may
        be larger for multimodal ones.

    Raises
    ------
    InvalidArgument
        If width or min_mass is out of range or samples are malformed.
    InsufficientData
        If fewer than two usable samples are given.
    DegenerateDistribution
        If the samples have no spread.
    """
    w = validate_width(width)
    min_mass = float(min_mass)
    if not (0.0 <= min_mass < 1.0):
        raise InvalidArgument(f"min_mass must lie in [0, 1); got {min_mass!r}.")

    arr = as_samples(samples, strict=strict)
    est = density_estimate(arr, bw_method=bw_method, grid_size=grid_size, cut=cut)
    lo = float(np.min(arr))
    hi = float(np.max(arr))

    mass = est.mass_weights()
    order = np.argsort(-est.density, kind="stable")
    cum = np.cumsum(mass[order])
    n_keep = min(int(np.searchsorted(cum, w, side="left")) + 1, order.size)

    keep = np.zeros(order.size, dtype=bool)
    keep[order[:n_keep]] = True

    regions: List[HDIRegion] = []
    for start, stop in contiguous_runs(keep):
        peak = start + int(np.argmax(est.density[start:stop]))
        lower = max(float(est.x[start]), lo)
        upper = min(float(est.x[stop - 1]), hi)
        regions.append(
            HDIRegion(
                mode=min(max(float(est.x[peak]), lower), upper),
                lower=lower,
                upper=upper,
                mass=float(np.sum(mass[start:stop])),
            )
        )

    achieved = sum(r.mass for r in regions)
    if achieved - w > COVERAGE_SLACK:
        warn(
            f"HDI covers {achieved:.4f} instead of {w:.4f}; "
            "increase grid_size for a finer density grid.",
            UserWarning,
            stacklevel=2,
        )

    kept = [r for r in regions if r.mass >= min_mass]
    if not kept:
        kept = [max(regions, key=lambda r: r.mass)]

    if refine and len(kept) == 1:
        bounds = _narrowest_window(np.sort(arr), w)
        if bounds is not None:
            lower, upper = bounds
            inside = np.count_nonzero((arr >= lower) & (arr <= upper)) / arr.size
            mode = min(max(kept[0].mode, lower), upper)
            kept = [HDIRegion(mode=mode, lower=lower, upper=upper, mass=float(inside))]
    return kept


def hdi_of_samples(
    samples: Any, width: float = DEFAULT_WIDTH, *, strict: bool = True
) -> Interval:
    """Single highest density interval straight from sorted draws.

    Picks the narrowest window spanning ``ceil(width * n)`` consecutive
    gaps between sorted samples. Appropriate for unimodal posteriors; for multimodal ones
    use :func:`hdi_from_samples`.
    """
    w = validate_width(width)
    arr = np.sort(as_samples(samples, strict=strict))

    bounds = _narrowest_window(arr, w)
    if bounds is None:
        raise InsufficientData(
            f"{arr.size} samples are too few for a {w:g} interval; need more than "
            f"{int(math.ceil(w * arr.size))}."
        )
    return Interval(lower=bounds[0], upper=bounds[1], mass=w)


def sample_mode(
    samples: Any,
    *,
    bw_method: BwMethod = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    cut: float = DEFAULT_CUT,
    strict: bool = True,
) -> float:
    """x at the peak of the sample's density estimate."""
    return density_estimate(
        samples, bw_method=bw_method, grid_size=grid_size, cut=cut, strict=strict
    ).mode
