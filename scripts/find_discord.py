"""CLI wrapper to locate the discord of a sample file."""

from __future__ import annotations

import argparse
from pathlib import Path

from discord_search import find_discord, load_series


def main() -> None:
    parser = argparse.ArgumentParser(description="Find the most anomalous subsequence of a series")
    parser.add_argument("samples", type=Path, help="Path to CSV/JSON/JSONL samples")
    parser.add_argument("window", type=int, help="Subsequence length")
    parser.add_argument("--strategy", default="compact", help="Distance strategy")
    args = parser.parse_args()

    result = find_discord(load_series(args.samples), args.window, args.strategy)
    print(f"Discord at index {result.location} (distance={result.distance:.6g})")


if __name__ == "__main__":
    main()
