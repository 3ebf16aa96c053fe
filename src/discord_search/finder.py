"""Brute-force discord search over all window start positions."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import chain
from typing import Any, Dict, Iterable, Sequence

import numpy as np

from .distance import DEFAULT_STRATEGY, BaseDistance, build_distance
from .exceptions import ConfigurationError, InvalidWindowError
from .logging_utils import log_event
from .series import Series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscordResult:
    """Location of the discord and the distance to its nearest neighbour.

    ``location`` is -1 when no window had a non-overlapping neighbour farther
    than zero.
    """

    location: int = -1
    distance: float = 0.0

    @property
    def found(self) -> bool:
        return self.location >= 0

    def as_dict(self) -> Dict[str, Any]:
        return {"location": self.location, "distance": self.distance}


class BaseDiscordFinder(ABC):
    """Common state for discord finders: a series, a window and a distance."""

    def __init__(
        self,
        series: Series | Sequence[float] | np.ndarray,
        window: int,
        distance: BaseDistance | str = DEFAULT_STRATEGY,
    ) -> None:
        self.series = Series(series)
        self.window = self.series.validate_window(window)
        if 2 * self.window >= len(self.series):
            raise InvalidWindowError(
                f"Window length must be less than half the series length "
                f"({self.window} >= {len(self.series)} / 2); no window would have a non-overlapping neighbour"
            )
        if isinstance(distance, BaseDistance):
            self._check_strategy(distance)
            self.strategy = distance
        else:
            self.strategy = build_distance(distance, self.series, self.window)
        self.last_start = len(self.series) - self.window

    def _check_strategy(self, strategy: BaseDistance) -> None:
        if strategy.window != self.window:
            raise ConfigurationError(
                f"Distance strategy uses window {strategy.window}, finder uses {self.window}"
            )
        if strategy.series is not self.series and not np.array_equal(strategy.series.values, self.series.values):
            raise ConfigurationError("Distance strategy was built for a different series")

    @abstractmethod
    def find(self) -> DiscordResult:
        """Return the discord of the series."""


class DiscordFinder(BaseDiscordFinder):
    """Finds the window whose nearest non-overlapping neighbour is farthest away.

    Every window start in ``[0, n - L]`` is a candidate and a possible
    neighbour. Neighbours closer than one window length to the candidate are
    skipped because they overlap it.
    """

    evaluations: int = 0

    def _neighbors(self, start: int) -> Iterable[int]:
        return chain(range(0, start - self.window + 1), range(start + self.window, self.last_start + 1))

    def nearest_neighbors(self) -> np.ndarray:
        """Nearest-neighbour distance per window; NaN where none exists."""

        profile = np.full(self.last_start + 1, np.nan)
        evaluations = 0
        for i in range(self.last_start + 1):
            best = math.inf
            for j in self._neighbors(i):
                dist = self.strategy.distance(i, j)
                evaluations += 1
                if dist < best:
                    best = dist
            if best < math.inf:
                profile[i] = best
        self.evaluations = evaluations
        return profile

    def find(self) -> DiscordResult:
        location = -1
        largest = 0.0
        for i, nearest in enumerate(self.nearest_neighbors().tolist()):
            # Strict comparison keeps the first of several equal maxima.
            if not math.isnan(nearest) and nearest > largest:
                largest = nearest
                location = i

        result = DiscordResult(location=location, distance=largest)
        log_event(
            logger,
            "discord_search_complete",
            strategy=self.strategy.name,
            window=self.window,
            series_length=len(self.series),
            evaluations=self.evaluations,
            **result.as_dict(),
        )
        return result


def find_discord(
    series: Series | Sequence[float] | np.ndarray,
    window: int,
    strategy: BaseDistance | str = DEFAULT_STRATEGY,
) -> DiscordResult:
    """Run a brute-force discord search with the named distance strategy."""

    return DiscordFinder(series, window, strategy).find()
