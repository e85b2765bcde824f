"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def make_raw_observations():
    """Factory fixture for raw extracts with text channel columns."""

    def _make(
        cells: dict[str, list[str]] | None = None,
        site: str = "P5BSD",
        start_date: datetime | None = None,
    ) -> pd.DataFrame:
        if cells is None:
            cells = {
                "turbidity": ["1.2", "U<0.02", ""],
                "nox": ["0.05", "JB0.02", "U0.01"],
                "tp": ["B0.013", "0.02", "J0.011"],
            }
        if start_date is None:
            start_date = datetime(2018, 7, 1)

        n_rows = len(next(iter(cells.values())))
        dates = pd.date_range(start=start_date, periods=n_rows, freq="D")

        return pd.DataFrame(
            {
                "site": site,
                "sample_date": dates.strftime("%Y-%m-%d"),
                "depth": [str(0.5 + i) for i in range(n_rows)],
                **cells,
            }
        )

    return _make


@pytest.fixture
def make_profile():
    """Factory fixture for one Beer-Lambert light profile."""

    def _make(
        k: float = np.log(2),
        depths: list[float] | None = None,
        site: str = "S1",
        sample_ts: datetime | None = None,
        minutes_apart: int = 2,
    ) -> pd.DataFrame:
        if depths is None:
            depths = [0.0, 1.0, 2.0, 3.0, 4.0]
        if sample_ts is None:
            sample_ts = datetime(2018, 7, 1, 9, 30)

        timestamps = pd.date_range(
            start=sample_ts,
            periods=len(depths),
            freq=f"{minutes_apart}min",
        )
        depth_arr = np.asarray(depths, dtype=float)

        return pd.DataFrame(
            {
                "site": site,
                "sample_date": timestamps,
                "depth": depth_arr,
                "irr_pct": 100 * np.exp(-k * depth_arr),
            }
        )

    return _make
