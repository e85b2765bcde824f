"""CLI wrapper for observation cleaning.

Usage:
    python scripts/clean_observations.py --input data/raw/dep_nutrients.csv \
        --output data/clean/observations/dep_nutrients.csv --channels nox nh4 tp

Each channel's text column becomes <channel>, <channel>_cens and
<channel>_flag. Without --channels every known channel in the file is cleaned.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cascowq.clean import clean_observations_file


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Split qualifier codes out of a water-quality extract."
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Raw extract (CSV or parquet)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Cleaned table (CSV or parquet, by suffix)",
    )
    parser.add_argument(
        "--channels",
        nargs="+",
        default=None,
        help="Channels to clean (default: every known channel present)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if not args.input.exists():
        print(f"[clean] ERROR: input not found: {args.input}")
        sys.exit(1)

    clean_observations_file(args.input, args.output, channels=args.channels)


if __name__ == "__main__":
    main()
