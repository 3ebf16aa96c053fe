from __future__ import annotations

import numpy as np
import pytest

from discord_search import DiscordDetector


def test_detector_flags_spike(spiked_sine: np.ndarray) -> None:
    detector = DiscordDetector(window=16, threshold=1.0)

    assert detector.predict(spiked_sine)
    assert 105 <= detector.locate(spiked_sine).location <= 128


def test_detector_ignores_clean_signal() -> None:
    t = np.linspace(0, 8 * np.pi, 200)
    detector = DiscordDetector(window=16, threshold=1.0)

    assert not detector.predict(np.sin(t))


def test_detector_scores_short_input_as_zero() -> None:
    detector = DiscordDetector(window=8)

    assert detector.score([1.0, 2.0, 3.0]) == 0.0
    assert not detector.predict([1.0, 2.0, 3.0])


def test_normalized_score_is_scale_invariant(spiked_sine: np.ndarray) -> None:
    detector = DiscordDetector(window=16, normalize=True, strategy="triangular")

    assert detector.score(spiked_sine * 50.0 + 7.0) == pytest.approx(detector.score(spiked_sine), rel=1e-6)


def test_describe_reports_parameters() -> None:
    described = DiscordDetector(window=12, threshold=3.0, strategy="direct").describe()

    assert described == {
        "name": "discord",
        "threshold": 3.0,
        "window": 12,
        "strategy": "direct",
        "normalize": False,
    }
