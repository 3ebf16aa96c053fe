"""Immutable numeric series and sample loading helpers."""

from __future__ import annotations

import json
import operator
from pathlib import Path
from typing import Any, Iterator, Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidWindowError, SeriesError


class Series:
    """Read-only, one-dimensional float64 view over a sequence of samples.

    Windows are addressed by their start index only; every window of a given
    length ``L`` starts somewhere in ``[0, len(series) - L]``.
    """

    __slots__ = ("_values",)

    def __init__(self, samples: Sequence[float] | np.ndarray | "Series") -> None:
        if isinstance(samples, Series):
            self._values = samples._values
            return

        try:
            arr = np.array(samples, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise SeriesError(f"Samples must be numeric: {exc}") from exc
        if arr.ndim != 1:
            raise SeriesError(f"Series must be one-dimensional (got shape {arr.shape})")
        if arr.size == 0:
            raise SeriesError("Series must contain at least one sample")
        if not np.all(np.isfinite(arr)):
            raise SeriesError("Series contains NaN or infinite values")
        arr.setflags(write=False)
        self._values = arr

    @property
    def values(self) -> np.ndarray:
        return self._values

    def __len__(self) -> int:
        return int(self._values.size)

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __repr__(self) -> str:
        return f"Series(n={len(self)})"

    def validate_window(self, length: int) -> int:
        """Return ``length`` as an int, rejecting windows the series cannot hold."""

        try:
            length = operator.index(length)
        except TypeError as exc:
            raise InvalidWindowError(f"Window length must be an integer (got {length!r})") from exc
        if length <= 0:
            raise InvalidWindowError(f"Window length must be positive (got {length})")
        if length >= len(self):
            raise InvalidWindowError(
                f"Window length must be smaller than the series length ({length} >= {len(self)})"
            )
        return length

    def window_count(self, length: int) -> int:
        """Number of distinct windows of ``length`` samples."""

        return len(self) - self.validate_window(length) + 1

    def window(self, start: int, length: int) -> np.ndarray:
        length = self.validate_window(length)
        if not 0 <= start <= len(self) - length:
            raise InvalidWindowError(f"Window [{start}, {start + length}) does not fit in series of {len(self)}")
        return self._values[start : start + length]


def _sample(entry: Any, position: int, value_column: str | None) -> float:
    """Convert one JSON entry to a float, naming its position when it cannot be."""

    if isinstance(entry, dict):
        if not value_column:
            raise SeriesError(f"Entry {position} is a record; a value column is required")
        if value_column not in entry:
            raise SeriesError(f"Entry {position} has no '{value_column}' field")
        entry = entry[value_column]
    if isinstance(entry, bool) or not isinstance(entry, (int, float, str)):
        raise SeriesError(f"Entry {position} is not a number (got {entry!r})")
    try:
        return float(entry)
    except ValueError as exc:
        raise SeriesError(f"Entry {position} is not a number (got {entry!r})") from exc


def load_series(path: str | Path, value_column: str | None = None) -> Series:
    """Load samples from a JSON list, JSONL, CSV or Parquet file.

    Every entry must yield a number; an unreadable entry raises ``SeriesError``
    rather than being skipped, so window indices match positions in the file.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        values: list[float] = []
        for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                raise SeriesError(f"Line {lineno} of {path} is not valid JSON: {exc}") from exc
            values.append(_sample(obj, len(values), value_column))
        return Series(values)

    if suffix == ".json":
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SeriesError(f"Sample file {path} is not valid JSON: {exc}") from exc
        if not isinstance(loaded, list):
            raise SeriesError("JSON sample file must contain a list of numbers or records")
        return Series([_sample(entry, position, value_column) for position, entry in enumerate(loaded)])

    try:
        df = pd.read_parquet(path) if suffix == ".parquet" else pd.read_csv(path)
    except pd.errors.EmptyDataError as exc:
        raise SeriesError(f"Sample file {path} is empty") from exc
    except pd.errors.ParserError as exc:
        raise SeriesError(f"Could not parse {path}: {exc}") from exc
    except ImportError as exc:
        raise SeriesError(f"Reading {path} requires the 'parquet' extra (pyarrow): {exc}") from exc

    if value_column is None:
        value_column = df.columns[0]
    if value_column not in df.columns:
        raise SeriesError(f"Column '{value_column}' not found in {path} (available: {list(df.columns)})")
    try:
        column = df[value_column].astype(float)
    except (TypeError, ValueError) as exc:
        raise SeriesError(f"Column '{value_column}' of {path} is not numeric: {exc}") from exc
    missing = column.isna().to_numpy().nonzero()[0]
    if missing.size:
        raise SeriesError(f"Row {int(missing[0])} of column '{value_column}' is empty")
    return Series(column.to_numpy())
