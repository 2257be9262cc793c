"""Exception types raised by hdi_tools."""

from __future__ import annotations

__all__ = [
    "HDIError",
    "InvalidArgument",
    "InsufficientData",
    "DegenerateDistribution",
    "ConvergenceError",
]


class HDIError(Exception):
    """Base class for all hdi_tools errors."""


class InvalidArgument(HDIError, ValueError):
    """A width, tolerance, option or sample array is not acceptable."""


class InsufficientData(InvalidArgument):
    """Too few usable samples to estimate a density."""


class DegenerateDistribution(HDIError, ValueError):
    """The samples (or their density estimate) carry no spread."""


class ConvergenceError(HDIError, RuntimeError):
    """The 1-D interval search did not converge within its budget."""
