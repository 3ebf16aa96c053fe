"""Distance strategy backed by a flat array of non-overlapping window pairs."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from ..series import Series
from .base import CachedDistance


class CompactDistance(CachedDistance):
    """Caches only pairs whose start offset is at least one window length.

    Row ``t1`` (``0 <= t1 <= n - 2L``) holds ``t2`` in ``[t1 + L, n - L]``, so
    with ``K = n - 2L + 1`` rows the store has exactly ``K * (K + 1) / 2``
    cells. Overlapping pairs are never requested by a discord search and are
    computed directly when asked for.
    """

    name = "compact"

    def __init__(self, series: Series | Sequence[float] | np.ndarray, window: int) -> None:
        super().__init__(series, window)
        self._row_count = max(len(self.series) - 2 * self.window + 1, 0)
        self._cells = np.full(self._row_count * (self._row_count + 1) // 2, np.nan)
        if self._row_count:
            self._cells[: self._row_count] = self._first_row(self.window)
        self._log_initialized(capacity=self._cells.size)

    def _offset(self, t1: int, t2: int) -> int:
        return t1 * self._row_count - t1 * (t1 - 1) // 2 + (t2 - t1 - self.window)

    def _get(self, t1: int, t2: int) -> float:
        return float(self._cells[self._offset(t1, t2)])

    def _put(self, t1: int, t2: int, value: float) -> None:
        self._cells[self._offset(t1, t2)] = value

    def cached_cells(self) -> int:
        return int(np.count_nonzero(~np.isnan(self._cells)))

    def _squared(self, t1: int, t2: int) -> float:
        if t1 == t2:
            return 0.0
        if t1 > t2:
            t1, t2 = t2, t1
        if t2 - t1 < self.window:
            return self.direct_squared(t1, t2)
        return self._resolve(t1, t2)

    def describe(self) -> Mapping[str, Any]:
        return {**super().describe(), "capacity": int(self._cells.size)}
