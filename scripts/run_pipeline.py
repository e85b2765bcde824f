"""Main script to run the data pipeline.

Pipeline flow:
    clean_observations_file -> estimate_extinction_file

Usage:
    python scripts/run_pipeline.py --config runs/focb_2023.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cascowq.clean import clean_observations_file
from cascowq.config import clean_observations_path, extinction_path, site_lookup_path
from cascowq.estimate import estimate_extinction_file
from cascowq.settings import PipelineConfig


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Casco Bay water-quality pipeline.")
    parser.add_argument("--config", type=Path, required=True, help="Pipeline config JSON")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = PipelineConfig.load(args.config)

    observations = Path(config.observations_path)
    if not observations.exists():
        print(f"[pipeline] ERROR: observations not found: {observations}")
        sys.exit(1)

    # Stage 1: Split qualifier codes into value / censored / flagged columns
    print(f"[pipeline] Cleaning {observations.name}")
    clean_observations_file(
        observations,
        clean_observations_path(config.run_name),
        channels=config.channels,
    )

    # Stage 2: Extinction coefficients from light profiles
    if config.irradiance_path is None:
        print("[pipeline] No irradiance_path configured, skipping extinction stage")
        return

    irradiance = Path(config.irradiance_path)
    if not irradiance.exists():
        print(f"[pipeline] ERROR: irradiance table not found: {irradiance}")
        sys.exit(1)

    print(f"\n[pipeline] Estimating extinction coefficients from {irradiance.name}")
    ext = config.extinction
    site_lookup = config.site_lookup
    if site_lookup is None and site_lookup_path().exists():
        site_lookup = site_lookup_path()

    estimate_extinction_file(
        irradiance,
        extinction_path(config.run_name),
        site_lookup=site_lookup,
        min_points=ext.min_points,
        irr_col=ext.irr_pct_col,
        surface_col=ext.surface_col,
        underwater_col=ext.underwater_col,
    )


if __name__ == "__main__":
    main()
