"""Brute-force time series discord search with cached window distances."""

from importlib import metadata

from .config import SearchConfig, load_search_config, validate_search_config
from .detector import DiscordDetector
from .distance import (
    BaseDistance,
    CompactDistance,
    DirectDistance,
    TriangularDistance,
    available_distances,
    build_distance,
    register_distance,
)
from .exceptions import (
    ConfigurationError,
    DiscordSearchError,
    InvalidWindowError,
    SeriesError,
    WindowIndexError,
)
from .finder import BaseDiscordFinder, DiscordFinder, DiscordResult, find_discord
from .series import Series, load_series

try:
    __version__ = metadata.version("discord-search")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.1.0"

__all__ = [
    "Series",
    "load_series",
    "BaseDistance",
    "DirectDistance",
    "TriangularDistance",
    "CompactDistance",
    "available_distances",
    "build_distance",
    "register_distance",
    "BaseDiscordFinder",
    "DiscordFinder",
    "DiscordResult",
    "find_discord",
    "DiscordDetector",
    "SearchConfig",
    "load_search_config",
    "validate_search_config",
    "DiscordSearchError",
    "InvalidWindowError",
    "WindowIndexError",
    "SeriesError",
    "ConfigurationError",
    "__version__",
]
