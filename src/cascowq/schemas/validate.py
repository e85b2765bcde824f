"""Validation helpers for table schemas.

Every helper raises ValueError with a message built from:
- Dataset name (if provided)
- The rule that failed and the offending column(s)
- Count of failing rows
- Sample of failing row indices (first 5)

Helpers skip silently when a column is absent; require_columns is the
single place that reports missing columns.
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd


def _format_error(
    dataset: str | None,
    rule: str,
    detail: str,
    failing_indices: list[Any] | None = None,
    count: int | None = None,
) -> str:
    """Format a validation error message consistently."""
    parts = []
    if dataset:
        parts.append(f"[{dataset}]")
    parts.append(rule)
    parts.append(f": {detail}")
    if count is not None:
        parts.append(f" ({count} rows)")
    if failing_indices:
        parts.append(f" | sample indices: {failing_indices[:5]}")
    return "".join(parts)


def require_columns(
    df_columns: Iterable[str],
    required: Iterable[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if required columns are missing.

    Args:
        df_columns: Column names from a DataFrame (e.g., df.columns)
        required: Required column names
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any required columns are missing
    """
    missing = set(required) - set(df_columns)
    if missing:
        raise ValueError(
            _format_error(dataset, "Missing columns", f"{sorted(missing)}")
        )


def require_no_nulls(
    df: pd.DataFrame,
    cols: Iterable[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if any of the given columns contain nulls."""
    for col in cols:
        if col not in df.columns:
            continue

        null_mask = df[col].isna()
        null_count = int(null_mask.sum())
        if null_count > 0:
            raise ValueError(
                _format_error(
                    dataset,
                    "Null values",
                    f"column '{col}' has nulls",
                    df.index[null_mask].tolist(),
                    null_count,
                )
            )


def require_unique(
    df: pd.DataFrame,
    key_cols: list[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if key columns have duplicate combinations.

    Args:
        df: DataFrame to check
        key_cols: Column names that form a unique key
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If duplicate key combinations exist
    """
    if df.empty:
        return

    if any(col not in df.columns for col in key_cols):
        return

    dup_mask = df.duplicated(subset=key_cols, keep=False)
    dup_count = int(dup_mask.sum())
    if dup_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Duplicate keys",
                f"columns {key_cols} have duplicates",
                df.index[dup_mask].tolist(),
                dup_count,
            )
        )


def require_range(
    df: pd.DataFrame,
    col: str,
    lo: float,
    hi: float,
    allow_null: bool = False,
    dataset: str | None = None,
) -> None:
    """Raise ValueError if values fall outside [lo, hi].

    Args:
        df: DataFrame to check
        col: Column name to check
        lo: Minimum allowed value (inclusive)
        hi: Maximum allowed value (inclusive)
        allow_null: If True, null values are skipped
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If values are outside range
    """
    if col not in df.columns or df.empty:
        return

    series = df[col]
    if allow_null:
        series = series.dropna()

    out_of_range = (series < lo) | (series > hi)
    bad_count = int(out_of_range.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Out of range",
                f"column '{col}' must be in [{lo}, {hi}]",
                series.index[out_of_range].tolist(),
                bad_count,
            )
        )


def require_int_range(
    df: pd.DataFrame,
    col: str,
    lo: int,
    hi: int,
    dataset: str | None = None,
) -> None:
    """Raise ValueError if integer values fall outside [lo, hi].

    Non-integer values are reported as a separate rule so the message says
    what is actually wrong with the column.
    """
    if col not in df.columns or df.empty:
        return

    series = df[col].dropna()
    if series.empty:
        return

    non_integer = series != series.round()
    bad_count = int(non_integer.sum())
    if bad_count > 0:
        raise ValueError(
            _format_error(
                dataset,
                "Non-integer values",
                f"column '{col}' must hold whole numbers",
                series.index[non_integer].tolist(),
                bad_count,
            )
        )

    require_range(df, col, lo=lo, hi=hi, allow_null=True, dataset=dataset)


def require_bool(
    df: pd.DataFrame,
    col: str,
    dataset: str | None = None,
) -> None:
    """Raise ValueError if a column is not a boolean dtype."""
    if col not in df.columns:
        return

    if not pd.api.types.is_bool_dtype(df[col]):
        raise ValueError(
            _format_error(
                dataset,
                "Dtype mismatch",
                f"column '{col}' must be bool, got {df[col].dtype}",
            )
        )


def require_false_where_null(
    df: pd.DataFrame,
    value_col: str,
    flag_cols: Iterable[str],
    dataset: str | None = None,
) -> None:
    """Raise ValueError if a flag is set on a row whose value is missing.

    Flags only describe a measurement; a missing measurement carries none.

    Args:
        df: DataFrame to check
        value_col: Column holding the measurement
        flag_cols: Boolean companion columns of value_col
        dataset: Optional dataset name for error messages

    Raises:
        ValueError: If any flag is True where value_col is null
    """
    if value_col not in df.columns or df.empty:
        return

    missing = df[value_col].isna()
    for col in flag_cols:
        if col not in df.columns:
            continue

        bad_mask = missing & df[col].astype(bool)
        bad_count = int(bad_mask.sum())
        if bad_count > 0:
            raise ValueError(
                _format_error(
                    dataset,
                    "Flag without value",
                    f"column '{col}' is set where '{value_col}' is missing",
                    df.index[bad_mask].tolist(),
                    bad_count,
                )
            )
