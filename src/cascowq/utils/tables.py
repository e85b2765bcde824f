"""Flat-file helpers shared by the pipeline stages.

Tables are CSV or parquet; the file suffix decides which. Writes go through
a temporary file and a rename so that readers never see a partial table.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd


def read_table(path: Path | str, as_text: bool = False) -> pd.DataFrame:
    """Read a CSV or parquet table.

    With as_text=True every CSV cell is kept as the literal string, so that
    qualifier codes and blanks reach the parser untouched.
    """
    path = Path(path)
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if as_text:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    return pd.read_csv(path)


def write_table(df: pd.DataFrame, path: Path | str) -> Path:
    """Write a table atomically; format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    if path.suffix == ".parquet":
        df.to_parquet(tmp_path, index=False)
    else:
        df.to_csv(tmp_path, index=False)
    tmp_path.replace(path)
    return path
