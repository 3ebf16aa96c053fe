"""Distance strategy backed by a jagged lower-triangular matrix."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from ..series import Series
from .base import CachedDistance


class TriangularDistance(CachedDistance):
    """Stores every window pair in row ``t2``, column ``t1`` with ``t1 <= t2``.

    The diagonal is zero and column 0 is computed directly at construction;
    every other cell is derived from its upper-left neighbour on first use.
    """

    name = "triangular"

    def __init__(self, series: Series | Sequence[float] | np.ndarray, window: int) -> None:
        super().__init__(series, window)
        size = self.last_start + 1
        self._rows: list[np.ndarray] = [np.full(row + 1, np.nan) for row in range(size)]
        for row in self._rows:
            row[-1] = 0.0
        for t2, value in enumerate(self._first_row(1).tolist(), start=1):
            self._rows[t2][0] = value
        self._log_initialized(capacity=size * (size + 1) // 2)

    def _get(self, t1: int, t2: int) -> float:
        return float(self._rows[t2][t1])

    def _put(self, t1: int, t2: int, value: float) -> None:
        self._rows[t2][t1] = value

    def cached_cells(self) -> int:
        return int(sum(np.count_nonzero(~np.isnan(row)) for row in self._rows))

    def _squared(self, t1: int, t2: int) -> float:
        if t1 == t2:
            return 0.0
        if t1 > t2:
            t1, t2 = t2, t1
        return self._resolve(t1, t2)

    def describe(self) -> Mapping[str, Any]:
        return {**super().describe(), "rows": len(self._rows)}
