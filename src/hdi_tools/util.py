from __future__ import annotations

import math
from typing import Any, List, Tuple
from warnings import warn

import numpy as np

from .errors import InsufficientData, InvalidArgument

DEFAULT_WIDTH = 0.95
DEFAULT_TOLERANCE = 1e-8
DEFAULT_MAXITER = 500
DEFAULT_GRID_SIZE = 2048
DEFAULT_CUT = 0.0
DEFAULT_MIN_MASS = 0.01

MIN_SAMPLES = 2


def validate_width(width: Any) -> float:
    """Return width as a float, requiring 0 < width < 1."""
    try:
        w = float(width)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"width must be a number in (0, 1); got {width!r}.") from e
    if not (0.0 < w < 1.0):
        raise InvalidArgument(f"width must lie strictly between 0 and 1; got {w!r}.")
    return w


def validate_tolerance(tolerance: Any) -> float:
    try:
        tol = float(tolerance)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"tolerance must be a number; got {tolerance!r}.") from e
    if not (math.isfinite(tol) and tol > 0.0):
        raise InvalidArgument(f"tolerance must be a positive finite number; got {tolerance!r}.")
    return tol


def validate_maxiter(maxiter: Any) -> int:
    try:
        n = int(maxiter)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"maxiter must be an integer; got {maxiter!r}.") from e
    if n < 1:
        raise InvalidArgument(f"maxiter must be >= 1; got {maxiter!r}.")
    return n


def warn_or_raise(strict: bool, message: str) -> None:
    """Warn or raise based on strict mode."""
    if strict:
        raise InvalidArgument(message)
    warn(message, UserWarning, stacklevel=3)


def as_samples(samples: Any, *, strict: bool = True) -> np.ndarray:
    """Normalize user samples into a flat, finite float array.

    Non-finite draws raise in strict mode and are dropped with a warning
    otherwise. At least two usable draws are required.
    """
    if samples is None:
        raise InsufficientData("No samples given.")
    try:
        arr = np.asarray(samples, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgument("Samples must be an array of real numbers.") from e

    arr = arr.reshape(-1)
    finite = np.isfinite(arr)
    if not np.all(finite):
        bad = int(arr.size - np.count_nonzero(finite))
        warn_or_raise(
            strict,
            f"Samples contain {bad} non-finite value(s); "
            "pass strict=False to drop them.",
        )
        arr = arr[finite]

    if arr.size < MIN_SAMPLES:
        raise InsufficientData(
            f"Need at least {MIN_SAMPLES} finite samples; got {arr.size}."
        )
    return arr


def trapezoid_weights(x: np.ndarray) -> np.ndarray:
    """Per-point trapezoidal quadrature weights for an ascending grid.

    sum(weights * f) equals the trapezoidal integral of f over x.
    """
    x = np.asarray(x, dtype=float)
    if x.size < 2:
        return np.zeros_like(x)
    dx = np.diff(x)
    w = np.zeros_like(x)
    w[:-1] += 0.5 * dx
    w[1:] += 0.5 * dx
    return w


def contiguous_runs(mask: np.ndarray) -> List[Tuple[int, int]]:
    """Return (start, stop) index pairs of the maximal True runs in mask.

    stop is exclusive, so mask[start:stop] is all True.
    """
    m = np.asarray(mask, dtype=bool).astype(np.int8)
    if m.size == 0:
        return []
    edges = np.diff(np.concatenate(([0], m, [0])))
    starts = np.flatnonzero(edges == 1)
    stops = np.flatnonzero(edges == -1)
    return [(int(a), int(b)) for a, b in zip(starts, stops)]
