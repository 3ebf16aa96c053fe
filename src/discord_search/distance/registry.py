"""Name-based construction of distance strategies."""

from __future__ import annotations

from typing import Callable, Dict, List, MutableMapping, Sequence

import numpy as np

from ..exceptions import ConfigurationError
from ..series import Series
from .base import BaseDistance
from .compact import CompactDistance
from .direct import DirectDistance
from .triangular import TriangularDistance

DistanceFactory = Callable[[Series, int], BaseDistance]

DEFAULT_STRATEGY = "compact"

_registry: MutableMapping[str, DistanceFactory] = {}


def register_distance(name: str, factory: DistanceFactory) -> None:
    """Make ``factory`` available under ``name`` (case-insensitive)."""

    _registry[name.lower()] = factory


def available_distances() -> List[str]:
    return sorted(_registry)


def build_distance(
    name: str,
    series: Series | Sequence[float] | np.ndarray,
    window: int,
) -> BaseDistance:
    """Instantiate the strategy registered as ``name`` for ``series``."""

    key = str(name or "").lower()
    factory = _registry.get(key)
    if factory is None:
        raise ConfigurationError(f"Unknown distance strategy '{name}'. Registered strategies: {available_distances()}")
    return factory(Series(series), window)


def _register_defaults() -> None:
    defaults: Dict[str, DistanceFactory] = {
        DirectDistance.name: DirectDistance,
        TriangularDistance.name: TriangularDistance,
        CompactDistance.name: CompactDistance,
    }
    for name, factory in defaults.items():
        register_distance(name, factory)


_register_defaults()
