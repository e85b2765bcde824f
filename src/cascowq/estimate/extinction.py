"""Estimate light extinction coefficients from vertical irradiance profiles.

This stage:
- Groups irradiance readings by site and calendar sample date
- Regresses log(percent surface irradiance) on depth for each profile
- Reports k_est = -slope, its standard error and the reading count
- Drops profiles with fewer than five readings, and profiles whose fit is
  degenerate (no depth spread, not enough positive readings)

Under Beer-Lambert attenuation I_z / I_0 = exp(-k z), so log(I_z / I_0) is
linear in depth with slope -k. This holds only where the water column is
optically uniform over the sampled depths; k_se and k_n are kept so that
poor profiles can be judged downstream.

The output is validated against the extinction schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import numpy as np
import pandas as pd
import statsmodels.api as sm

from cascowq.schemas.extinction import (
    EXTINCTION_FIELDS,
    MIN_PROFILE_POINTS,
    validate_extinction,
)
from cascowq.schemas.validate import require_columns
from cascowq.utils.tables import read_table, write_table

# Profiles need at least this many usable points for a slope with an error
_MIN_FIT_POINTS = 3


@dataclass(frozen=True)
class ProfileFit:
    """OLS fit of log(irradiance percent) on depth for one profile."""

    slope: float
    intercept: float
    slope_se: float
    n_fit: int
    r_squared: float


def compute_irradiance_pct(
    df: pd.DataFrame,
    surface_col: str = "irr_air",
    underwater_col: str = "irr_water",
    out_col: str = "irr_pct",
) -> pd.DataFrame:
    """Add percent of surface irradiance reaching each depth.

    Readings with a non-positive surface value get NaN.

    Args:
        df: Observations with paired deck and underwater sensor readings
        surface_col: Deck (in-air) irradiance column
        underwater_col: Underwater irradiance column
        out_col: Name of the column to add

    Returns:
        Copy of df with out_col added
    """
    require_columns(df.columns, [surface_col, underwater_col], dataset="irradiance")

    df = df.copy()
    surface = pd.to_numeric(df[surface_col], errors="coerce")
    underwater = pd.to_numeric(df[underwater_col], errors="coerce")
    df[out_col] = (100 * underwater / surface).where(surface > 0)
    return df


def fit_profile(depth, irr_pct) -> ProfileFit | None:
    """Fit log(irr_pct) = intercept + slope * depth by ordinary least squares.

    Rows with missing depth, or missing or non-positive irr_pct, are left
    out of the fit.

    Args:
        depth: Sample depths (m)
        irr_pct: Percent of surface irradiance at each depth

    Returns:
        ProfileFit, or None if the profile cannot support a fit
    """
    depth = np.asarray(depth, dtype=float)
    irr_pct = np.asarray(irr_pct, dtype=float)

    usable = np.isfinite(depth) & np.isfinite(irr_pct) & (irr_pct > 0)
    depth = depth[usable]
    irr_pct = irr_pct[usable]

    if len(depth) < _MIN_FIT_POINTS or np.ptp(depth) == 0:
        return None

    X = sm.add_constant(depth, has_constant="add")
    result = sm.OLS(np.log(irr_pct), X).fit()

    intercept, slope = (float(v) for v in result.params)
    slope_se = float(result.bse[1])
    if not (np.isfinite(slope) and np.isfinite(slope_se)):
        return None

    return ProfileFit(
        slope=slope,
        intercept=intercept,
        slope_se=slope_se,
        n_fit=len(depth),
        r_squared=float(result.rsquared),
    )


def estimate_extinction(
    df: pd.DataFrame,
    site_names: Mapping[str, str] | None = None,
    min_points: int = MIN_PROFILE_POINTS,
    irr_col: str = "irr_pct",
    verbose: bool = True,
) -> pd.DataFrame:
    """Estimate one extinction coefficient per (site, sample date) profile.

    k_n counts the non-missing irr_col readings in the profile. Profiles
    with k_n < min_points are dropped, as are profiles fit_profile rejects.

    year, month and doy come from the earliest timestamp of the profile.
    start_hour is the earliest hour in the profile, or NaN when the input
    carries dates only (every timestamp at midnight).

    Args:
        df: Observations with site, sample_date, depth and irr_col
        site_names: Optional site code -> display name lookup
        min_points: Smallest k_n kept (default 5)
        irr_col: Column with percent surface irradiance
        verbose: If True, print a summary

    Returns:
        DataFrame with extinction schema, sorted by site then sample_date

    Raises:
        ValueError: If required columns are missing or output fails validation
    """
    require_columns(
        df.columns,
        ["site", "sample_date", "depth", irr_col],
        dataset="extinction_input",
    )

    if df.empty:
        return pd.DataFrame(columns=EXTINCTION_FIELDS)

    work = pd.DataFrame(
        {
            "site": df["site"].astype(str),
            "ts": pd.to_datetime(df["sample_date"]),
            "depth": pd.to_numeric(df["depth"], errors="coerce"),
            "irr": pd.to_numeric(df[irr_col], errors="coerce"),
        }
    )
    work = work.dropna(subset=["ts"]).copy()
    if work.empty:
        return pd.DataFrame(columns=EXTINCTION_FIELDS)
    work["date"] = work["ts"].dt.normalize()

    has_time = (work["ts"] != work["date"]).any()
    work["hour"] = work["ts"].dt.hour if has_time else np.nan

    rows = []
    n_groups = 0
    too_small = 0
    degenerate = 0

    for (site, date), group in work.groupby(["site", "date"], sort=True):
        n_groups += 1
        k_n = int(group["irr"].notna().sum())
        if k_n < min_points:
            too_small += 1
            continue

        fit = fit_profile(group["depth"], group["irr"])
        if fit is None:
            degenerate += 1
            continue

        first = group["ts"].min()
        rows.append(
            {
                "site": site,
                "sample_date": date,
                "year": first.year,
                "month": first.month,
                "doy": first.dayofyear,
                "start_hour": group["hour"].min(),
                "k_est": -fit.slope,
                "k_se": fit.slope_se,
                "k_n": k_n,
            }
        )

    if not rows:
        kd = pd.DataFrame(columns=EXTINCTION_FIELDS)
    else:
        kd = pd.DataFrame(rows)
        names = kd["site"].map(site_names) if site_names else pd.Series(np.nan, index=kd.index)
        kd["site_name"] = names.fillna(kd["site"]).astype(str)
        kd["start_hour"] = kd["start_hour"].astype(float)
        kd = kd.sort_values(["site", "sample_date"]).reset_index(drop=True)
        kd = kd[EXTINCTION_FIELDS]

    validate_extinction(kd, min_points=min_points)

    if verbose:
        print(f"[extinction] {n_groups} profiles, {len(kd)} estimates")
        if too_small:
            print(f"[extinction] dropped {too_small} profiles with fewer than {min_points} readings")
        if degenerate:
            print(f"[extinction] dropped {degenerate} profiles with a degenerate fit")

    return kd


def order_sites_by_k(kd: pd.DataFrame) -> pd.DataFrame:
    """Make site_name an ordered categorical, by mean k_est ascending.

    Display ordering only; rows are left in place.
    """
    out = kd.copy()
    names = out["site_name"].astype(str)
    order = out["k_est"].groupby(names).mean().sort_values(kind="stable").index
    out["site_name"] = pd.Categorical(names, categories=list(order), ordered=True)
    return out


def summarize_extinction(kd: pd.DataFrame) -> pd.DataFrame:
    """Per-site descriptive statistics of k_est, lowest mean first."""
    if kd.empty:
        return pd.DataFrame(
            columns=["site_name", "site", "n", "mean", "std", "median", "min", "max"]
        )

    summary = (
        kd.assign(site_name=kd["site_name"].astype(str))
        .groupby(["site_name", "site"])["k_est"]
        .agg(n="count", mean="mean", std="std", median="median", min="min", max="max")
        .reset_index()
    )
    return summary.sort_values(["mean", "site"], kind="stable").reset_index(drop=True)


def load_site_names(
    path: Path | str,
    site_col: str = "site",
    name_col: str = "site_name",
) -> dict[str, str]:
    """Read a site code -> display name lookup table.

    Raises:
        ValueError: If either column is missing
    """
    lookup = read_table(path, as_text=True)
    require_columns(lookup.columns, [site_col, name_col], dataset="site_lookup")
    return dict(zip(lookup[site_col].str.strip(), lookup[name_col].str.strip()))


def write_extinction(
    kd: pd.DataFrame,
    output_path: Path | str,
    min_points: int = MIN_PROFILE_POINTS,
) -> Path:
    """Validate and write an extinction table.

    Raises:
        ValueError: If kd fails schema validation
    """
    validate_extinction(kd, min_points=min_points)
    output_path = write_table(kd, output_path)
    print(f"[extinction] wrote {len(kd)} rows to {output_path}")
    return output_path


def estimate_extinction_file(
    input_path: Path | str,
    output_path: Path | str,
    site_lookup: Path | str | None = None,
    min_points: int = MIN_PROFILE_POINTS,
    irr_col: str = "irr_pct",
    surface_col: str = "irr_air",
    underwater_col: str = "irr_water",
) -> Path:
    """Read observations, estimate extinction coefficients, write output.

    When irr_col is absent it is derived from surface_col and
    underwater_col.

    Args:
        input_path: Observations table (CSV or parquet)
        output_path: Where to write the extinction table
        site_lookup: Optional site lookup table
        min_points: Smallest k_n kept
        irr_col: Percent surface irradiance column
        surface_col: Deck irradiance column, used if irr_col is absent
        underwater_col: Underwater irradiance column, used if irr_col is absent

    Returns:
        Path to written output file
    """
    df = read_table(input_path)
    if irr_col not in df.columns:
        df = compute_irradiance_pct(df, surface_col, underwater_col, out_col=irr_col)

    site_names = load_site_names(site_lookup) if site_lookup else None
    kd = estimate_extinction(df, site_names=site_names, min_points=min_points, irr_col=irr_col)
    return write_extinction(kd, output_path, min_points=min_points)
