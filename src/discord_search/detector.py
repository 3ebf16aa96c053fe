"""Threshold detector built on the discord distance of a window of samples."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from .distance import DEFAULT_STRATEGY
from .finder import DiscordFinder, DiscordResult


class DiscordDetector:
    """Scores a block of samples by the distance of its most anomalous subsequence."""

    def __init__(
        self,
        window: int = 32,
        threshold: float | None = None,
        strategy: str = DEFAULT_STRATEGY,
        normalize: bool = False,
        name: str = "discord",
    ) -> None:
        self.name = name
        self.window = int(window)
        self.threshold = threshold
        self.strategy = strategy
        self.normalize = normalize
        self.metadata: dict[str, Any] = {"window": self.window, "strategy": strategy, "normalize": normalize}

    def prepare(self, X: Sequence[float] | np.ndarray) -> np.ndarray:
        """Return ``X`` as a float array, z-normalized when ``normalize`` is set."""

        arr = np.asarray(X, dtype=float)
        if self.normalize and arr.size:
            std = arr.std() or 1.0
            arr = (arr - arr.mean()) / std
        return arr

    def locate(self, X: Sequence[float] | np.ndarray) -> DiscordResult:
        """Return the discord of ``X``; an empty result when ``X`` is too short."""

        arr = self.prepare(X)
        if arr.size <= 2 * self.window:
            return DiscordResult()
        return DiscordFinder(arr, self.window, self.strategy).find()

    def score(self, X: Sequence[float] | np.ndarray) -> float:
        return float(self.locate(X).distance)

    def predict(self, X: Sequence[float] | np.ndarray, *, score: float | None = None) -> bool:
        """Return True when the score exceeds the threshold."""

        value = self.score(X) if score is None else score
        if self.threshold is None:
            return bool(value > 0)
        return bool(value > self.threshold)

    def describe(self) -> Mapping[str, Any]:
        return {"name": self.name, "threshold": self.threshold, **self.metadata}
