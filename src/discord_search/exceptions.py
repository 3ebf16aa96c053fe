"""Exception types raised by the discord search package."""

from __future__ import annotations


class DiscordSearchError(Exception):
    """Base exception for discord search failures."""


class InvalidWindowError(DiscordSearchError, ValueError):
    """Raised when a window length cannot be used with the given series."""


class WindowIndexError(DiscordSearchError, IndexError):
    """Raised when a window start index lies outside the series."""


class SeriesError(DiscordSearchError, ValueError):
    """Raised when input samples do not form a usable series."""


class ConfigurationError(DiscordSearchError, ValueError):
    """Raised when a search configuration is invalid."""
