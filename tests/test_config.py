from __future__ import annotations

from pathlib import Path

import pytest

from discord_search import ConfigurationError, SearchConfig, load_search_config, validate_search_config


def test_load_search_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "search.yml"
    path.write_text("window: 16\nstrategy: triangular\n", encoding="utf-8")

    assert load_search_config(path) == {"window": 16, "strategy": "triangular"}


def test_load_search_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "search.json"
    path.write_text('{"window": 8, "normalize": true}', encoding="utf-8")

    config = SearchConfig.from_file(path)
    assert config.window == 8
    assert config.normalize is True
    assert config.strategy == "compact"


def test_load_search_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "search.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_search_config(path)


def test_validate_applies_defaults_and_warns_on_unknown_keys() -> None:
    result = validate_search_config({"window": 4, "colour": "blue"})

    assert result.ok
    assert result.normalized["strategy"] == "compact"
    assert result.normalized["normalize"] is False
    assert any("colour" in w for w in result.warnings)


@pytest.mark.parametrize(
    "config, fragment",
    [
        ({}, "Missing required field 'window'"),
        ({"window": "8"}, "should be of type int"),
        ({"window": True}, "should be of type int"),
        ({"window": 0}, "must be >= 1"),
        ({"window": 4, "strategy": "cosine"}, "Unknown strategy"),
        ({"window": 4, "threshold": "high"}, "threshold"),
    ],
)
def test_validate_reports_errors(config, fragment: str) -> None:
    result = validate_search_config(config)

    assert any(fragment in e for e in result.errors)
    with pytest.raises(ConfigurationError):
        SearchConfig.from_mapping(config)


def test_from_mapping_normalizes_values() -> None:
    config = SearchConfig.from_mapping({"window": 5, "strategy": "DIRECT", "threshold": 2})

    assert config.strategy == "direct"
    assert config.threshold == 2.0
