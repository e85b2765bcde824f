"""Cleaned water-quality observation schema.

One row is one sample at one site, date and depth. Every measured channel
appears as three columns after cleaning:

- <channel>       float, NaN when missing or unparseable
- <channel>_cens  bool, value is a detection/quantitation limit
- <channel>_flag  bool, the source marked the value as uncertain

Non-negotiables:
- sample_date is a timestamp (time of day may be midnight if unknown)
- raw qualifier codes never appear here
- flags are False wherever the channel value is missing
"""

from __future__ import annotations

from typing import Iterable, TypedDict

import pandas as pd

from cascowq.schemas.validate import (
    require_bool,
    require_columns,
    require_false_where_null,
    require_no_nulls,
)


class Observation(TypedDict, total=False):
    """Key fields of an observation row; channel columns vary by source."""

    site: str  # Site code (e.g., "P5BSD")
    sample_date: pd.Timestamp  # Sample date and, where known, time
    depth: float  # Sample depth in meters (may be NaN for surface grabs)


# Columns every raw extract must carry
OBSERVATION_KEY_FIELDS = ["site", "sample_date"]

# Optional key column, passed through when present
DEPTH_FIELD = "depth"

CENSORED_SUFFIX = "_cens"
FLAGGED_SUFFIX = "_flag"

_DATASET_NAME = "observations"


def channel_columns(channel: str) -> list[str]:
    """Return the value, censored and flagged column names for a channel."""
    return [channel, f"{channel}{CENSORED_SUFFIX}", f"{channel}{FLAGGED_SUFFIX}"]


def output_columns(columns: Iterable[str], channels: Iterable[str]) -> list[str]:
    """Order cleaned columns: keys first, then each channel triple.

    Columns that are neither keys nor channels keep their input order
    between the keys and the channel blocks.
    """
    channels = list(channels)
    columns = list(columns)
    keys = [c for c in OBSERVATION_KEY_FIELDS + [DEPTH_FIELD] if c in columns]
    channel_cols = [col for ch in channels for col in channel_columns(ch)]
    others = [c for c in columns if c not in keys and c not in channel_cols]
    return keys + others + channel_cols


def validate_raw_observations(df: pd.DataFrame, channels: Iterable[str]) -> None:
    """Structural check on a raw extract before any parsing.

    Raises:
        ValueError: If key or channel columns are missing
    """
    require_columns(
        df.columns,
        OBSERVATION_KEY_FIELDS + list(channels),
        dataset="observations_input",
    )


def validate_clean_observations(
    df: pd.DataFrame,
    channels: Iterable[str],
) -> None:
    """Validate that a DataFrame conforms to the cleaned observation schema.

    Checks performed:
    - Key columns and every channel triple present
    - No nulls in site or sample_date
    - sample_date is a datetime dtype
    - _cens and _flag columns are boolean
    - _cens and _flag are False wherever the value is missing

    Args:
        df: DataFrame to validate
        channels: Channel names expected in the table

    Raises:
        ValueError: If any validation check fails
    """
    channels = list(channels)
    required = OBSERVATION_KEY_FIELDS + [
        col for ch in channels for col in channel_columns(ch)
    ]
    require_columns(df.columns, required, dataset=_DATASET_NAME)

    if df.empty:
        return

    require_no_nulls(df, OBSERVATION_KEY_FIELDS, dataset=_DATASET_NAME)

    if not pd.api.types.is_datetime64_any_dtype(df["sample_date"]):
        raise ValueError(
            f"[{_DATASET_NAME}] Dtype mismatch: column 'sample_date' must be "
            f"datetime, got {df['sample_date'].dtype}"
        )

    for ch in channels:
        value_col, cens_col, flag_col = channel_columns(ch)
        require_bool(df, cens_col, dataset=_DATASET_NAME)
        require_bool(df, flag_col, dataset=_DATASET_NAME)
        require_false_where_null(df, value_col, [cens_col, flag_col], dataset=_DATASET_NAME)
