"""
Unit tests for import log deduplication.

Tests max-total selection, tie-breaking, ordering and idempotence.
"""

import pytest
import sys
from pathlib import Path

import pandas as pd

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog_import.runner import load_stage

dedup = load_stage("dedup")


def make_imports(rows):
    df = pd.DataFrame(rows, columns=["date", "total", "SWB"])
    df["date"] = pd.to_datetime(df["date"])
    df["total"] = df["total"].astype("Int64")
    return df


class TestDeduplicateByMax:
    """Tests for deduplicate_by_max."""

    def test_keeps_max_total(self):
        """Test that the row with the largest total survives."""
        df = make_imports([
            ("2021-01-04", 480, 1),
            ("2021-01-04", 500, 2),
            ("2021-01-05", 620, 3),
        ])
        out = dedup.deduplicate_by_max(df)

        assert len(out) == 2
        assert out.loc[out["date"] == "2021-01-04", "total"].item() == 500
        assert out.loc[out["date"] == "2021-01-04", "SWB"].item() == 2

    def test_surviving_total_is_group_max(self):
        """Test that each surviving total equals the max over its date."""
        df = make_imports([
            ("2021-01-01", 10, 0), ("2021-01-02", 7, 0), ("2021-01-01", 30, 0),
            ("2021-01-02", 9, 0), ("2021-01-01", 20, 0), ("2021-01-03", 1, 0),
        ])
        out = dedup.deduplicate_by_max(df)
        expected = df.groupby("date")["total"].max()

        assert out["date"].is_unique
        assert out.set_index("date")["total"].sort_index().tolist() == expected.tolist()

    def test_tie_keeps_first_seen(self):
        """Test that an exact tie keeps the first row in input order."""
        df = make_imports([
            ("2021-01-04", 500, 1),
            ("2021-01-04", 500, 2),
        ])
        out = dedup.deduplicate_by_max(df)

        assert out["SWB"].tolist() == [1]

    def test_original_order_kept(self):
        """Test that surviving rows keep their relative order."""
        df = make_imports([
            ("2021-01-09", 1, 0),
            ("2021-01-02", 5, 0),
            ("2021-01-02", 9, 0),
            ("2021-01-05", 3, 0),
        ])
        out = dedup.deduplicate_by_max(df)

        assert out["date"].dt.day.tolist() == [9, 2, 5]
        assert out.index.tolist() == [0, 2, 3]

    def test_absent_total_loses(self):
        """Test that a row with a total beats one without."""
        df = make_imports([
            ("2021-01-04", None, 1),
            ("2021-01-04", 3, 2),
        ])
        out = dedup.deduplicate_by_max(df)

        assert out["SWB"].tolist() == [2]

    def test_idempotent(self):
        """Test that deduplicating twice equals deduplicating once."""
        df = make_imports([
            ("2021-01-04", 480, 1), ("2021-01-04", 500, 2),
            ("2021-01-05", 620, 3), ("2021-01-05", 620, 4),
        ])
        once = dedup.deduplicate_by_max(df)
        twice = dedup.deduplicate_by_max(once)

        pd.testing.assert_frame_equal(once, twice)

    def test_input_not_modified(self):
        """Test that the input frame is left untouched."""
        df = make_imports([("2021-01-04", 480, 1), ("2021-01-04", 500, 2)])
        before = df.copy()
        dedup.deduplicate_by_max(df)

        pd.testing.assert_frame_equal(df, before)

    def test_missing_column(self):
        """Test that a missing value column is rejected."""
        df = make_imports([("2021-01-04", 1, 1)])
        with pytest.raises(ValueError):
            dedup.deduplicate_by_max(df, value_col="nope")
