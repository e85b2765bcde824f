"""Light extinction coefficient schema.

One row per depth profile (site and sample date) that supported a fit.

Key rules:
- k_est is the negated slope of log(irradiance percent) on depth, in 1/m
- k_se is the standard error of that slope
- k_n counts the irradiance readings in the profile; profiles with fewer
  than five readings never appear here
- rows are sorted by site, then sample_date
"""

from __future__ import annotations

from typing import TypedDict

import pandas as pd

from cascowq.schemas.validate import (
    require_columns,
    require_int_range,
    require_no_nulls,
    require_range,
    require_unique,
)


class ExtinctionEstimate(TypedDict):
    """Attenuation coefficient estimated from one vertical light profile."""

    site_name: str  # Display name of the site (falls back to the site code)
    site: str  # Site code
    sample_date: pd.Timestamp  # Calendar date of the profile (midnight)
    year: int
    month: int
    doy: int  # Day of year of the earliest reading
    start_hour: float  # Earliest hour recorded in the profile (NaN if unknown)
    k_est: float  # Attenuation coefficient estimate (1/m)
    k_se: float  # Standard error of k_est
    k_n: int  # Number of irradiance readings in the profile


# Column order for DataFrame operations
EXTINCTION_FIELDS = [
    "site_name",
    "site",
    "sample_date",
    "year",
    "month",
    "doy",
    "start_hour",
    "k_est",
    "k_se",
    "k_n",
]

# A profile needs at least this many readings to be kept
MIN_PROFILE_POINTS = 5

_DATASET_NAME = "extinction"


def validate_extinction(df: pd.DataFrame, min_points: int = MIN_PROFILE_POINTS) -> None:
    """Validate that a DataFrame conforms to the extinction schema.

    Checks performed:
    - All required columns present
    - No nulls in: site_name, site, sample_date, year, month, doy, k_est, k_n
    - month in [1, 12], doy in [1, 366], start_hour in [0, 23]
    - k_n >= min_points
    - k_se non-negative (nulls allowed)
    - Uniqueness on (site, sample_date)

    Args:
        df: DataFrame to validate
        min_points: Smallest k_n allowed in the table

    Raises:
        ValueError: If any validation check fails
    """
    require_columns(df.columns, EXTINCTION_FIELDS, dataset=_DATASET_NAME)

    if df.empty:
        return

    require_no_nulls(
        df,
        ["site_name", "site", "sample_date", "year", "month", "doy", "k_est", "k_n"],
        dataset=_DATASET_NAME,
    )

    require_int_range(df, "month", lo=1, hi=12, dataset=_DATASET_NAME)
    require_int_range(df, "doy", lo=1, hi=366, dataset=_DATASET_NAME)
    require_int_range(df, "start_hour", lo=0, hi=23, dataset=_DATASET_NAME)
    require_int_range(df, "k_n", lo=min_points, hi=10**6, dataset=_DATASET_NAME)
    require_range(df, "k_se", lo=0, hi=float("inf"), allow_null=True, dataset=_DATASET_NAME)

    require_unique(df, ["site", "sample_date"], dataset=_DATASET_NAME)
