"""Window distance strategies used by the discord search."""

from .base import BaseDistance, CachedDistance
from .compact import CompactDistance
from .direct import DirectDistance
from .registry import DEFAULT_STRATEGY, available_distances, build_distance, register_distance
from .triangular import TriangularDistance

__all__ = [
    "BaseDistance",
    "CachedDistance",
    "CompactDistance",
    "DirectDistance",
    "TriangularDistance",
    "DEFAULT_STRATEGY",
    "available_distances",
    "build_distance",
    "register_distance",
]
