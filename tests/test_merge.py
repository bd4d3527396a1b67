"""
Unit tests for the full outer join of both logs.

Tests join completeness, absent fields and the row-count invariant.
"""

import pytest
import sys
from pathlib import Path

import pandas as pd

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog_import.common.errors import DuplicateKeyError
from src.catalog_import.runner import load_stage

merge = load_stage("merge")


@pytest.fixture
def imports():
    df = pd.DataFrame({
        "date": pd.to_datetime(["2021-01-06", "2021-01-04", "2021-01-05"]),
        "total": pd.array([300, 500, 620], dtype="Int64"),
    })
    return df


@pytest.fixture
def times():
    return pd.DataFrame({
        "date": pd.to_datetime(["2021-01-04", "2021-01-07"]),
        "process_a_duration": pd.to_timedelta(["00:45:00", "01:05:00"]),
    })


class TestMergeLogs:
    """Tests for merge_logs."""

    def test_row_count_is_union_of_dates(self, imports, times):
        """Test |output| == |dates(imports) ∪ dates(times)|."""
        out = merge.merge_logs(imports, times)
        expected = set(imports["date"]) | set(times["date"])

        assert len(out) == len(expected)
        assert set(out["date"]) == expected
        assert out["date"].is_unique

    def test_sorted_by_date(self, imports, times):
        """Test that the result is ordered by date."""
        out = merge.merge_logs(imports, times)
        assert out["date"].is_monotonic_increasing

    def test_column_order(self, imports, times):
        """Test key, import columns, then time columns."""
        out = merge.merge_logs(imports, times)
        assert out.columns.tolist() == ["date", "total", "process_a_duration"]

    def test_both_sides_present(self, imports, times):
        """Test a date found in both logs carries both sides."""
        out = merge.merge_logs(imports, times).set_index("date")
        row = out.loc[pd.Timestamp("2021-01-04")]

        assert row["total"] == 500
        assert row["process_a_duration"] == pd.Timedelta(minutes=45)

    def test_import_only_date(self, imports, times):
        """Test that time fields are absent for an import-only date."""
        out = merge.merge_logs(imports, times).set_index("date")

        assert pd.isna(out.loc[pd.Timestamp("2021-01-05"), "process_a_duration"])
        assert out.loc[pd.Timestamp("2021-01-05"), "total"] == 620

    def test_time_only_date(self, imports, times):
        """Test that import fields are absent (not zero) for a time-only date."""
        out = merge.merge_logs(imports, times).set_index("date")

        assert pd.isna(out.loc[pd.Timestamp("2021-01-07"), "total"])
        assert str(out["total"].dtype) == "Int64"

    def test_duplicate_key_is_fatal(self, imports, times):
        """Test that a repeated key reaching the merge raises."""
        doubled = pd.concat([imports, imports.iloc[:1]], ignore_index=True)

        with pytest.raises(DuplicateKeyError):
            merge.merge_logs(doubled, times)

    def test_empty_side(self, imports, times):
        """Test a merge against an empty time log keeps all import dates."""
        out = merge.merge_logs(imports, times.iloc[0:0])

        assert len(out) == len(imports)
        assert out["process_a_duration"].isna().all()
