from __future__ import annotations

import itertools

import numpy as np
import pytest

from discord_search import (
    CompactDistance,
    ConfigurationError,
    DirectDistance,
    InvalidWindowError,
    TriangularDistance,
    WindowIndexError,
    available_distances,
    build_distance,
)

CACHED = [TriangularDistance, CompactDistance]
ALL = [DirectDistance, TriangularDistance, CompactDistance]


def _brute_force(series: np.ndarray, window: int, t1: int, t2: int) -> float:
    return float(np.sqrt(np.sum((series[t1 : t1 + window] - series[t2 : t2 + window]) ** 2)))


@pytest.mark.parametrize("window", [1, 4, 9])
def test_all_strategies_agree_on_every_pair(random_walk: np.ndarray, window: int) -> None:
    strategies = [cls(random_walk, window) for cls in ALL]
    last = len(random_walk) - window
    for i, j in itertools.product(range(last + 1), repeat=2):
        expected = strategies[0].distance(i, j)
        for strategy in strategies[1:]:
            assert strategy.distance(i, j) == pytest.approx(expected, rel=1e-9, abs=1e-6)


@pytest.mark.parametrize("cls", CACHED)
def test_recurrence_matches_brute_force_in_reverse_order(random_walk: np.ndarray, cls) -> None:
    window = 5
    strategy = cls(random_walk, window)
    last = len(random_walk) - window
    # Deepest cells first, so every dependency is still missing when asked for.
    for i in range(last, 0, -1):
        for j in range(last, i - 1, -1):
            assert strategy.distance(i, j) == pytest.approx(_brute_force(random_walk, window, i, j), abs=1e-6)


@pytest.mark.parametrize("cls", ALL)
def test_symmetry_and_self_distance(random_walk: np.ndarray, cls) -> None:
    strategy = cls(random_walk, 6)
    for i in range(0, strategy.last_start + 1, 3):
        assert strategy.distance(i, i) == 0.0
        for j in range(0, strategy.last_start + 1, 5):
            assert strategy.distance(i, j) == pytest.approx(strategy.distance(j, i), abs=1e-12)


def test_last_window_is_addressable() -> None:
    series = [1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 1.0, 2.0, 3.0]
    for cls in ALL:
        strategy = cls(series, 3)
        assert strategy.distance(0, 6) == 0.0
        assert strategy.squared_distance(3, 6) == pytest.approx(243.0)


@pytest.mark.parametrize("cls", ALL)
@pytest.mark.parametrize("start", [-1, 7, 100])
def test_out_of_range_index_is_rejected(cls, start: int) -> None:
    strategy = cls([1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 1.0, 2.0, 3.0], 3)
    with pytest.raises(WindowIndexError):
        strategy.distance(start, 0)
    with pytest.raises(WindowIndexError):
        strategy.distance(0, start)


@pytest.mark.parametrize("cls", ALL)
@pytest.mark.parametrize("window", [0, -2, 9, 12])
def test_invalid_window_is_rejected(cls, window: int) -> None:
    with pytest.raises(InvalidWindowError):
        cls([1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 1.0, 2.0, 3.0], window)


def test_compact_store_holds_only_non_overlapping_pairs() -> None:
    n, window = 20, 4
    strategy = CompactDistance(np.arange(n, dtype=float), window)
    rows = n - 2 * window + 1
    assert strategy.describe()["capacity"] == rows * (rows + 1) // 2
    # Only the first row is computed up front.
    assert strategy.cached_cells() == rows


def test_compact_offsets_cover_store_without_collisions() -> None:
    n, window = 17, 3
    strategy = CompactDistance(np.zeros(n), window)
    offsets = [
        strategy._offset(t1, t2)
        for t1 in range(n - 2 * window + 1)
        for t2 in range(t1 + window, n - window + 1)
    ]
    assert sorted(offsets) == list(range(strategy.describe()["capacity"]))


def test_compact_overlapping_pairs_are_not_cached(random_walk: np.ndarray) -> None:
    strategy = CompactDistance(random_walk, 8)
    before = strategy.cached_cells()
    value = strategy.distance(10, 13)
    assert value == pytest.approx(_brute_force(random_walk, 8, 10, 13))
    assert strategy.cached_cells() == before


def test_triangular_memoizes_derived_cells(random_walk: np.ndarray) -> None:
    strategy = TriangularDistance(random_walk, 5)
    size = strategy.last_start + 1
    # Diagonal plus column 0.
    assert strategy.cached_cells() == size + size - 1
    strategy.distance(4, 20)
    assert strategy.cached_cells() == 2 * size - 1 + 4


def test_constant_series_has_zero_distances() -> None:
    series = [2.5] * 12
    for cls in ALL:
        strategy = cls(series, 3)
        assert all(strategy.distance(0, j) == 0.0 for j in range(strategy.last_start + 1))
        assert strategy.distance(5, 9) == 0.0


def test_registry_builds_named_strategies(random_walk: np.ndarray) -> None:
    assert available_distances() == ["compact", "direct", "triangular"]
    strategy = build_distance("Triangular", random_walk, 4)
    assert isinstance(strategy, TriangularDistance)
    assert strategy.describe()["window"] == 4

    with pytest.raises(ConfigurationError):
        build_distance("manhattan", random_walk, 4)
