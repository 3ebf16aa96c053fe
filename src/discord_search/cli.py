"""Command line interface for discord search."""

from __future__ import annotations

import argparse
import json
import math
from pathlib import Path
from typing import Any, Dict, Sequence

from . import __version__
from .config import SearchConfig, load_search_config, validate_config_file
from .detector import DiscordDetector
from .distance import available_distances
from .exceptions import DiscordSearchError
from .finder import DiscordFinder
from .logging_utils import configure_logging
from .series import load_series


def _print_result(result: Any, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2))
    else:
        print(result)


def _write_or_print(payload: Dict[str, Any], output: Path | None, as_json: bool, label: str) -> None:
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote {label} to {output}")
    else:
        _print_result(payload, as_json=as_json)


def _search_config(args: argparse.Namespace) -> SearchConfig:
    """Merge the optional config file with explicit command line flags."""

    values: Dict[str, Any] = dict(load_search_config(args.config)) if args.config else {}
    for key in ("window", "strategy", "value_column", "threshold"):
        flag = getattr(args, key, None)
        if flag is not None:
            values[key] = flag
    if getattr(args, "normalize", False):
        values["normalize"] = True
    return SearchConfig.from_mapping(values)


def _add_search_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("samples", type=Path, help="Path to CSV/JSON/JSONL/Parquet samples")
    parser.add_argument("--window", type=int, help="Subsequence length")
    parser.add_argument("--strategy", choices=available_distances(), help="Distance strategy")
    parser.add_argument("--value-column", type=str, help="Column name for tabular inputs")
    parser.add_argument("--config", type=Path, help="Search configuration (YAML or JSON)")
    parser.add_argument("--output", type=Path, help="Optional path to write results as JSON")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discord-search",
        description="Find the most anomalous fixed-length subsequence of a time series.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON logs")

    subparsers = parser.add_subparsers(dest="command", required=True)

    find = subparsers.add_parser("find", help="Locate the discord of a series")
    _add_search_arguments(find)
    find.add_argument("--normalize", action="store_true", help="Z-normalize samples before searching")
    find.add_argument("--threshold", type=float, help="Flag the discord when its distance exceeds this value")

    profile = subparsers.add_parser("profile", help="Nearest-neighbour distance of every window")
    _add_search_arguments(profile)
    profile.add_argument("--normalize", action="store_true", help="Z-normalize samples before searching")

    compare = subparsers.add_parser("compare", help="Run every distance strategy and compare results")
    compare.add_argument("samples", type=Path, help="Path to CSV/JSON/JSONL/Parquet samples")
    compare.add_argument("--window", type=int, required=True, help="Subsequence length")
    compare.add_argument("--value-column", type=str, help="Column name for tabular inputs")
    compare.add_argument("--tolerance", type=float, default=1e-6, help="Allowed distance disagreement")
    compare.add_argument("--json", action="store_true", help="Emit comparison as JSON")

    validate = subparsers.add_parser("validate", help="Validate a search configuration file")
    validate.add_argument("config", type=Path, help="Path to configuration file")
    validate.add_argument("--json", action="store_true", help="Emit validation result as JSON")

    strategies = subparsers.add_parser("strategies", help="List registered distance strategies")
    strategies.add_argument("--json", action="store_true", help="Emit strategies as JSON")

    subparsers.add_parser("version", help="Display the installed version")

    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "find":
        config = _search_config(args)
        detector = DiscordDetector(
            window=config.window,
            threshold=config.threshold,
            strategy=config.strategy,
            normalize=config.normalize,
        )
        series = load_series(args.samples, value_column=config.value_column)
        result = DiscordFinder(detector.prepare(series.values), config.window, config.strategy).find()
        payload = {
            **result.as_dict(),
            "window": config.window,
            "strategy": config.strategy,
            "normalize": config.normalize,
            "series_length": len(series),
        }
        if config.threshold is not None:
            payload["threshold"] = config.threshold
            payload["is_anomaly"] = detector.predict(series.values, score=result.distance)
        if args.output or args.json:
            _write_or_print(payload, args.output, args.json, "discord")
        elif result.found:
            print(f"Discord at index {result.location} (distance={result.distance:.6g}, window={config.window})")
        else:
            print(f"No discord found (window={config.window})")
    elif args.command == "profile":
        config = _search_config(args)
        series = load_series(args.samples, value_column=config.value_column)
        samples = DiscordDetector(window=config.window, normalize=config.normalize).prepare(series.values)
        finder = DiscordFinder(samples, config.window, config.strategy)
        nearest = [None if math.isnan(v) else v for v in finder.nearest_neighbors().tolist()]
        payload = {
            "window": config.window,
            "strategy": config.strategy,
            "normalize": config.normalize,
            "evaluations": finder.evaluations,
            "nearest_neighbors": nearest,
        }
        _write_or_print(payload, args.output, args.json, "profile")
    elif args.command == "compare":
        series = load_series(args.samples, value_column=args.value_column)
        results = {name: DiscordFinder(series, args.window, name).find() for name in available_distances()}
        distances = [r.distance for r in results.values()]
        locations = {r.location for r in results.values()}
        spread = max(distances) - min(distances)
        agree = spread <= args.tolerance and len(locations) == 1
        payload = {
            "window": args.window,
            "results": {name: r.as_dict() for name, r in results.items()},
            "max_difference": spread,
            "agree": agree,
        }
        _print_result(payload, as_json=args.json)
        if not agree:
            return 1
    elif args.command == "validate":
        result = validate_config_file(args.config)
        _print_result(result.as_dict(), as_json=args.json)
        if result.errors:
            return 1
    elif args.command == "strategies":
        _print_result(available_distances(), as_json=args.json)
    elif args.command == "version":
        print(__version__)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs)

    try:
        return _run(args)
    except (DiscordSearchError, FileNotFoundError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
