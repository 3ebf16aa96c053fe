"""Stateless Euclidean distance computed from scratch on every call."""

from __future__ import annotations

from .base import BaseDistance


class DirectDistance(BaseDistance):
    """O(window) per query, no extra memory. Reference for the cached variants."""

    name = "direct"

    def _squared(self, t1: int, t2: int) -> float:
        if t1 == t2:
            return 0.0
        return self.direct_squared(t1, t2)
