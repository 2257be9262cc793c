"""Search backend implementations + registry."""

from __future__ import annotations

from typing import Dict

from ..errors import InvalidArgument
from .common import Backend, SearchResult
from .scipy_bounded import ScipyBoundedBackend
from .scipy_brentq import ScipyBrentqBackend

_BACKENDS: Dict[str, Backend] = {
    "scipy.bounded": ScipyBoundedBackend(),
    "scipy.brentq": ScipyBrentqBackend(),
}


def get_backend(name: str) -> Backend:
    """Return a backend implementation by name."""
    try:
        return _BACKENDS[name]
    except KeyError as e:
        raise InvalidArgument(
            f"Unknown backend {name!r}. Available: {tuple(_BACKENDS.keys())}"
        ) from e


AVAILABLE_BACKENDS = tuple(_BACKENDS.keys())

__all__ = ["Backend", "SearchResult", "get_backend", "AVAILABLE_BACKENDS"]
