"""CLI wrapper for light extinction coefficient estimation.

Usage:
    python scripts/estimate_extinction.py --input data/clean/irradiance.csv \
        --output data/clean/extinction/focb.csv --site-lookup sites/site_names.csv

The input needs site, sample_date, depth and either irr_pct or the paired
irr_air / irr_water sensor columns.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from cascowq.estimate import (
    compute_irradiance_pct,
    estimate_extinction,
    load_site_names,
    order_sites_by_k,
    summarize_extinction,
    write_extinction,
)
from cascowq.schemas.extinction import MIN_PROFILE_POINTS
from cascowq.utils.tables import read_table


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate light extinction coefficients from irradiance profiles."
    )
    parser.add_argument("--input", type=Path, required=True, help="Irradiance table")
    parser.add_argument("--output", type=Path, required=True, help="Extinction table")
    parser.add_argument(
        "--site-lookup",
        type=Path,
        default=None,
        help="CSV with site and site_name columns",
    )
    parser.add_argument(
        "--min-points",
        type=int,
        default=MIN_PROFILE_POINTS,
        help=f"Minimum readings per profile (default: {MIN_PROFILE_POINTS})",
    )
    parser.add_argument(
        "--irr-col",
        default="irr_pct",
        help="Percent surface irradiance column (default: irr_pct)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if not args.input.exists():
        print(f"[extinction] ERROR: input not found: {args.input}")
        sys.exit(1)

    df = read_table(args.input)
    print(f"[extinction] Loaded {len(df)} irradiance readings")

    if args.irr_col not in df.columns:
        print(f"[extinction] {args.irr_col} not found, deriving from irr_air / irr_water")
        df = compute_irradiance_pct(df, out_col=args.irr_col)

    site_names = load_site_names(args.site_lookup) if args.site_lookup else None
    kd = estimate_extinction(
        df,
        site_names=site_names,
        min_points=args.min_points,
        irr_col=args.irr_col,
    )

    if not kd.empty:
        summary = summarize_extinction(order_sites_by_k(kd))
        with pd.option_context("display.width", 120, "display.precision", 3):
            print(summary.to_string(index=False))

    write_extinction(kd, args.output, min_points=args.min_points)


if __name__ == "__main__":
    main()
