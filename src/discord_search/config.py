"""Loading and validation of discord search configuration files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .distance import DEFAULT_STRATEGY, available_distances
from .exceptions import ConfigurationError

SEARCH_SCHEMA: Dict[str, Dict[str, Any]] = {
    "required": {"window": int},
    "optional": {"strategy": str, "value_column": str, "normalize": bool, "threshold": (int, float)},
    "defaults": {"strategy": DEFAULT_STRATEGY, "normalize": False},
    "constraints": {"window": {"min": 1}},
}


@dataclass
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    normalized: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return not self.errors

    def as_dict(self) -> Dict[str, Any]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "normalized": self.normalized,
        }


@dataclass
class SearchConfig:
    """Validated parameters for a single discord search."""

    window: int
    strategy: str = DEFAULT_STRATEGY
    value_column: str | None = None
    normalize: bool = False
    threshold: float | None = None

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "SearchConfig":
        result = validate_search_config(config)
        if result.errors:
            raise ConfigurationError("; ".join(result.errors))
        values = result.normalized
        threshold = values.get("threshold")
        return cls(
            window=values["window"],
            strategy=(values.get("strategy") or DEFAULT_STRATEGY).lower(),
            value_column=values.get("value_column"),
            normalize=bool(values.get("normalize")),
            threshold=float(threshold) if threshold is not None else None,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "SearchConfig":
        return cls.from_mapping(load_search_config(path))


def _type_name(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " or ".join(_type_name(e) for e in expected)
    if isinstance(expected, type):
        return expected.__name__
    return str(expected)


def _matches(value: Any, expected: Any) -> bool:
    # bool is an int subclass; only accept it where bool is asked for.
    if isinstance(value, bool):
        return expected is bool or (isinstance(expected, tuple) and bool in expected)
    return isinstance(value, expected)


def validate_search_config(config: Mapping[str, Any]) -> ValidationResult:
    """Validate a search configuration mapping.

    The input is not mutated. Defaults are applied to the normalized copy,
    missing or mistyped required fields are errors, and unknown keys produce
    warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []
    normalized = dict(config)
    for key, value in SEARCH_SCHEMA["defaults"].items():
        normalized.setdefault(key, value)

    for field, expected_type in SEARCH_SCHEMA["required"].items():
        if field not in normalized:
            errors.append(f"Missing required field '{field}'")
        elif not _matches(normalized[field], expected_type):
            errors.append(
                f"Field '{field}' should be of type {_type_name(expected_type)} "
                f"(got {type(normalized[field]).__name__})"
            )

    for field, expected_type in SEARCH_SCHEMA["optional"].items():
        if field in normalized and normalized[field] is not None and not _matches(normalized[field], expected_type):
            errors.append(
                f"Field '{field}' should be of type {_type_name(expected_type)} "
                f"(got {type(normalized[field]).__name__})"
            )

    for field, constraint in SEARCH_SCHEMA["constraints"].items():
        value = normalized.get(field)
        if not _matches(value, (int, float)):
            continue
        min_value = constraint.get("min")
        if min_value is not None and value < min_value:
            errors.append(f"Field '{field}' must be >= {min_value} (got {value})")

    strategy = normalized.get("strategy")
    if isinstance(strategy, str) and strategy.lower() not in available_distances():
        errors.append(f"Unknown strategy '{strategy}' (available: {', '.join(available_distances())})")

    known = set(SEARCH_SCHEMA["required"]) | set(SEARCH_SCHEMA["optional"])
    for key in sorted(set(normalized) - known):
        warnings.append(f"Ignoring unknown field '{key}'")

    return ValidationResult(errors=errors, warnings=warnings, normalized=normalized)


def load_search_config(path: str | Path) -> Dict[str, Any]:
    """Load a search configuration from YAML or JSON."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse configuration {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration {path} must be a mapping (got {type(loaded).__name__})")
    return loaded


def validate_config_file(path: str | Path) -> ValidationResult:
    """Load and validate a configuration file."""

    return validate_search_config(load_search_config(path))
