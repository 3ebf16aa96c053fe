from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def random_walk() -> np.ndarray:
    rng = np.random.default_rng(7)
    return np.cumsum(rng.normal(size=60))


@pytest.fixture
def spiked_sine() -> np.ndarray:
    t = np.linspace(0, 8 * np.pi, 200)
    series = np.sin(t)
    series[120:128] += 3.0
    return series
