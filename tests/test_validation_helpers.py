"""Tests for validation helper functions."""

from __future__ import annotations

import pandas as pd
import pytest

from cascowq.schemas.validate import (
    require_bool,
    require_columns,
    require_false_where_null,
    require_int_range,
    require_no_nulls,
    require_range,
    require_unique,
)

class TestRequireColumns:
    """Tests for require_columns helper."""

    def test_all_columns_present_passes(self) -> None:
        """All required columns present passes."""
        require_columns(["site", "sample_date", "depth", "tp"], ["site", "sample_date"])

    def test_missing_column_raises(self) -> None:
        """A missing column raises with its name."""
        with pytest.raises(ValueError, match=r"Missing columns: \['depth'\]"):
            require_columns(["site", "sample_date"], ["site", "depth"])

    def test_dataset_name_in_error(self) -> None:
        """The dataset name appears in the error."""
        with pytest.raises(ValueError, match=r"\[site_lookup\]"):
            require_columns(["code"], ["site"], dataset="site_lookup")


class TestRequireNoNulls:
    """Tests for require_no_nulls helper."""

    def test_no_nulls_passes(self) -> None:
        """A column without nulls passes."""
        df = pd.DataFrame({"site": ["A", "B"], "k_est": [0.3, 0.4]})
        require_no_nulls(df, ["site", "k_est"])

    def test_null_raises_with_count_and_indices(self) -> None:
        """Nulls raise with a count and sample indices."""
        df = pd.DataFrame({"k_est": [None, 0.4, None]})
        with pytest.raises(ValueError, match=r"Null values.*\(2 rows\).*\[0, 2\]"):
            require_no_nulls(df, ["k_est"])


class TestRequireUnique:
    """Tests for require_unique helper."""

    def test_unique_passes(self) -> None:
        """Unique keys pass."""
        df = pd.DataFrame({"site": ["A", "A", "B"], "sample_date": [1, 2, 1]})
        require_unique(df, ["site", "sample_date"])

    def test_duplicate_raises(self) -> None:
        """Duplicate keys raise."""
        df = pd.DataFrame({"site": ["A", "A", "B"], "sample_date": [1, 1, 1]})
        with pytest.raises(ValueError, match="Duplicate keys"):
            require_unique(df, ["site", "sample_date"])

    def test_empty_df_passes(self) -> None:
        """An empty frame passes."""
        require_unique(pd.DataFrame({"site": [], "sample_date": []}), ["site", "sample_date"])


class TestRequireRange:
    """Tests for require_range helper."""

    def test_in_range_passes(self) -> None:
        """Values in range pass."""
        df = pd.DataFrame({"k": [0.1, 0.5, 2.0]})
        require_range(df, "k", lo=0, hi=5)

    def test_out_of_range_raises(self) -> None:
        """Values outside the range raise."""
        df = pd.DataFrame({"k": [-0.1, 0.5, 7.0]})
        with pytest.raises(ValueError, match=r"Out of range.*\(2 rows\)"):
            require_range(df, "k", lo=0, hi=5)

    def test_null_allowed(self) -> None:
        """Nulls are ignored by the range check."""
        df = pd.DataFrame({"k": [0.1, None, 2.0]})
        require_range(df, "k", lo=0, hi=5, allow_null=True)


class TestRequireIntRange:
    """Tests for require_int_range helper."""

    def test_whole_numbers_in_range_pass(self) -> None:
        """Whole numbers in range pass."""
        df = pd.DataFrame({"month": [1, 6, 12]})
        require_int_range(df, "month", lo=1, hi=12)

    def test_fractional_value_raises(self) -> None:
        """Fractional values raise."""
        df = pd.DataFrame({"month": [1.0, 6.5]})
        with pytest.raises(ValueError, match="Non-integer values"):
            require_int_range(df, "month", lo=1, hi=12)

    def test_out_of_range_raises(self) -> None:
        """Values outside the range raise."""
        df = pd.DataFrame({"month": [0, 13]})
        with pytest.raises(ValueError, match="Out of range"):
            require_int_range(df, "month", lo=1, hi=12)

    def test_all_null_passes(self) -> None:
        """An all-null column passes."""
        df = pd.DataFrame({"start_hour": [float("nan")] * 3})
        require_int_range(df, "start_hour", lo=0, hi=23)


class TestRequireBool:
    """Tests for require_bool helper."""

    def test_bool_passes(self) -> None:
        """A bool column passes."""
        require_bool(pd.DataFrame({"tp_flag": [True, False]}), "tp_flag")

    def test_object_raises(self) -> None:
        """An object column raises."""
        df = pd.DataFrame({"tp_flag": ["J", ""]})
        with pytest.raises(ValueError, match="must be bool"):
            require_bool(df, "tp_flag", dataset="observations")

    def test_missing_column_is_skipped(self) -> None:
        """An absent column is skipped."""
        require_bool(pd.DataFrame({"a": [1]}), "tp_flag")


class TestRequireFalseWhereNull:
    """Tests for require_false_where_null helper."""

    def test_flags_on_values_pass(self) -> None:
        """Flags set on present values pass."""
        df = pd.DataFrame(
            {"tp": [0.01, None], "tp_cens": [True, False], "tp_flag": [True, False]}
        )
        require_false_where_null(df, "tp", ["tp_cens", "tp_flag"])

    def test_flag_on_missing_value_raises(self) -> None:
        """A flag on a missing value raises."""
        df = pd.DataFrame(
            {"tp": [0.01, None], "tp_cens": [False, False], "tp_flag": [False, True]}
        )
        with pytest.raises(ValueError, match="'tp_flag' is set where 'tp' is missing"):
            require_false_where_null(df, "tp", ["tp_cens", "tp_flag"])
