"""hdi_tools public API."""
from .analytic import Interval, find_hdi
from .distributions import Distribution, distribution
from .errors import (
    ConvergenceError,
    DegenerateDistribution,
    HDIError,
    InsufficientData,
    InvalidArgument,
)
from .samples import (
    DensityEstimate,
    HDIRegion,
    density_estimate,
    hdi_from_samples,
    hdi_of_samples,
    sample_mode,
)
from .summary import (
    PointInterval,
    format_point_intervals,
    mean_qi,
    median_qi,
    mode_hdi,
    point_interval,
)
from . import distributions

__all__ = [
    "find_hdi",
    "Interval",
    "Distribution",
    "distribution",
    "distributions",
    "hdi_from_samples",
    "hdi_of_samples",
    "density_estimate",
    "sample_mode",
    "DensityEstimate",
    "HDIRegion",
    "point_interval",
    "mode_hdi",
    "median_qi",
    "mean_qi",
    "PointInterval",
    "format_point_intervals",
    "HDIError",
    "InvalidArgument",
    "InsufficientData",
    "DegenerateDistribution",
    "ConvergenceError",
]
