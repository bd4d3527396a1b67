"""
Unit tests for duration parsing.

Tests HH:MM parsing, formatting and absent-value propagation.
"""

import pytest
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog_import.common.durations import (
    format_duration,
    parse_duration,
    parse_durations,
    to_seconds,
)


class TestParseDuration:
    """Tests for parse_duration."""

    def test_hours_and_minutes(self):
        """Test that HH:MM becomes hours*3600 + minutes*60 seconds."""
        assert parse_duration("00:45").total_seconds() == 2700
        assert parse_duration("01:10").total_seconds() == 4200
        assert parse_duration("23:59").total_seconds() == 23 * 3600 + 59 * 60

    def test_single_digit_hour(self):
        """Test that an unpadded hour is accepted."""
        assert parse_duration("1:05").total_seconds() == 3900

    def test_surrounding_whitespace(self):
        """Test that whitespace around the value is ignored."""
        assert parse_duration(" 02:00 ").total_seconds() == 7200

    @pytest.mark.parametrize("text", ["", "NA", None, np.nan, "-"])
    def test_missing_is_absent(self, text):
        """Test that missing values parse to NaT."""
        assert parse_duration(text) is pd.NaT

    @pytest.mark.parametrize("text", ["abc", "24:00", "12:60", "1:2", "01:23:45", "0123"])
    def test_malformed_is_absent(self, text):
        """Test that malformed text parses to NaT, never zero."""
        assert parse_duration(text) is pd.NaT

    def test_round_trip(self):
        """Test that formatting a parsed value gives the original text."""
        for text in ["00:00", "00:45", "01:10", "09:05", "12:30", "23:59"]:
            assert format_duration(parse_duration(text)) == text


class TestAbsentPropagation:
    """Tests for absent durations in arithmetic."""

    def test_absent_plus_duration_is_absent(self):
        """Test that NaT + x stays NaT."""
        result = parse_duration("bad") + parse_duration("00:45")
        assert pd.isna(result)

    def test_series_sum_with_absent(self):
        """Test element-wise sums keep absence per row."""
        a = parse_durations(pd.Series(["00:45", None], name="a"))
        b = parse_durations(pd.Series(["01:10", "01:00"], name="b"))
        total = a + b
        assert total.iloc[0] == pd.Timedelta(minutes=115)
        assert pd.isna(total.iloc[1])

    def test_format_absent(self):
        """Test that an absent value formats as an empty string."""
        assert format_duration(pd.NaT) == ""
        assert format_duration(None) == ""


class TestParseDurations:
    """Tests for the vectorised helpers."""

    def test_dtype_and_name(self):
        """Test that the result is a timedelta column with the input name."""
        parsed = parse_durations(pd.Series(["00:45", "xx"], name="process_a_duration"))
        assert pd.api.types.is_timedelta64_dtype(parsed)
        assert parsed.name == "process_a_duration"
        assert pd.isna(parsed.iloc[1])

    def test_malformed_values_are_logged(self, caplog):
        """Test that malformed (not merely missing) values are reported."""
        with caplog.at_level("WARNING"):
            parse_durations(pd.Series(["00:45", "xx", "NA"], name="d"))
        assert "1 malformed duration" in caplog.text

    def test_to_seconds(self):
        """Test the numeric projection keeps NaN for absent values."""
        seconds = to_seconds(parse_durations(pd.Series(["00:45", ""], name="d")))
        assert seconds.iloc[0] == 2700.0
        assert np.isnan(seconds.iloc[1])

    @pytest.mark.parametrize("values", [["NA", "NA"], ["", None], ["-"]])
    def test_all_absent_column(self, values):
        """Test that a column with no present value is still a timedelta column."""
        parsed = parse_durations(pd.Series(values, name="d"))
        assert pd.api.types.is_timedelta64_dtype(parsed)
        assert parsed.isna().all()

    def test_empty_column(self):
        """Test that an empty column parses to an empty timedelta column."""
        parsed = parse_durations(pd.Series([], dtype=object, name="d"))
        assert pd.api.types.is_timedelta64_dtype(parsed)
        assert len(parsed) == 0
