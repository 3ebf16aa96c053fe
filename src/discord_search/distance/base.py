"""Distance contract shared by every window distance strategy."""

from __future__ import annotations

import logging
import math
import operator
from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

import numpy as np

from ..exceptions import WindowIndexError
from ..logging_utils import log_event
from ..series import Series

logger = logging.getLogger(__name__)


class BaseDistance(ABC):
    """Euclidean distance between two equal-length windows of one series.

    Windows are identified by their start index. Implementations work in
    squared-distance space and only take the square root of the final value.
    """

    name: str = "distance"

    def __init__(self, series: Series | Sequence[float] | np.ndarray, window: int) -> None:
        self.series = Series(series)
        self.window = self.series.validate_window(window)
        self.last_start = len(self.series) - self.window
        self._samples: list[float] = self.series.values.tolist()

    def validate_index(self, start: int) -> int:
        """Return ``start`` as an int if it is a valid window start."""

        try:
            start = operator.index(start)
        except TypeError as exc:
            raise WindowIndexError(f"Window start must be an integer (got {start!r})") from exc
        if not 0 <= start <= self.last_start:
            raise WindowIndexError(f"Window start {start} outside [0, {self.last_start}]")
        return start

    def direct_squared(self, t1: int, t2: int) -> float:
        """Sum of squared differences computed from scratch in O(window)."""

        values = self.series.values
        diff = values[t1 : t1 + self.window] - values[t2 : t2 + self.window]
        return float(np.dot(diff, diff))

    @abstractmethod
    def _squared(self, t1: int, t2: int) -> float:
        """Squared distance for two already validated window starts."""

    def squared_distance(self, t1: int, t2: int) -> float:
        return self._squared(self.validate_index(t1), self.validate_index(t2))

    def distance(self, t1: int, t2: int) -> float:
        """Return the Euclidean distance between windows ``t1`` and ``t2``."""

        return math.sqrt(max(self.squared_distance(t1, t2), 0.0))

    __call__ = distance

    def describe(self) -> Mapping[str, Any]:
        """Return serializable strategy metadata."""

        return {"name": self.name, "window": self.window, "series_length": len(self.series)}


class CachedDistance(BaseDistance):
    """Memoizes squared distances and derives new ones incrementally.

    Shifting both windows forward by one sample drops one difference term and
    adds another::

        d(t1, t2) = d(t1 - 1, t2 - 1) - (x[t1-1] - x[t2-1])**2 + (x[t1+L-1] - x[t2+L-1])**2

    Subclasses seed every pair with ``t1 == 0`` and store the rest on demand.
    Missing cells read as NaN; a request for one walks back along its diagonal
    to the nearest stored cell and fills every cell in between, so results do
    not depend on the order in which pairs are requested.
    """

    @abstractmethod
    def _get(self, t1: int, t2: int) -> float:
        """Stored squared distance for ``t1 < t2``, or NaN if not computed yet."""

    @abstractmethod
    def _put(self, t1: int, t2: int, value: float) -> None:
        """Store the squared distance for ``t1 < t2``."""

    @abstractmethod
    def cached_cells(self) -> int:
        """Number of populated cells in the store."""

    def _first_row(self, first: int) -> np.ndarray:
        """Squared distances between window 0 and every window from ``first`` on."""

        windows = np.lib.stride_tricks.sliding_window_view(self.series.values, self.window)
        return np.square(windows[first:] - windows[0]).sum(axis=1)

    def _log_initialized(self, capacity: int) -> None:
        log_event(
            logger,
            "distance_cache_initialized",
            level=logging.DEBUG,
            strategy=self.name,
            window=self.window,
            series_length=len(self.series),
            capacity=capacity,
            seeded=self.cached_cells(),
        )

    def _resolve(self, t1: int, t2: int) -> float:
        value = self._get(t1, t2)
        if not math.isnan(value):
            return value

        # Row t1 == 0 is always seeded, so the walk stops at depth t1 at the latest.
        depth = 1
        while math.isnan(self._get(t1 - depth, t2 - depth)):
            depth += 1
        value = self._get(t1 - depth, t2 - depth)

        x = self._samples
        tail = self.window - 1
        for step in range(depth - 1, -1, -1):
            a, b = t1 - step, t2 - step
            dropped = x[a - 1] - x[b - 1]
            added = x[a + tail] - x[b + tail]
            value = value - dropped * dropped + added * added
            self._put(a, b, value)
        return value
