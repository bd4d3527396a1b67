#!/usr/bin/env python3
"""
04_add_calendar.py - Add weekday, month and year columns from the date key.

Weeks start on Monday. Weekday and month are ordered categoricals with
English labels, so their codes give the 1-based ordinals; year is kept as an
integer and treated as a label by downstream consumers.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Dict, Union

import pandas as pd

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import get_logger
from src.catalog_import.common.constants import DATE_KEY, MONTH_LABELS, WEEKDAY_LABELS

logger = get_logger(__name__)

WEEKDAY_DTYPE = pd.CategoricalDtype(WEEKDAY_LABELS, ordered=True)
MONTH_DTYPE = pd.CategoricalDtype(MONTH_LABELS, ordered=True)


def derive_calendar(value: Union[date, pd.Timestamp, str]) -> Dict[str, Union[int, str]]:
    """
    Calendar attributes of a single date.

    Args:
        value: A date, Timestamp or ISO date string

    Returns:
        Dict with weekday (1=Monday .. 7=Sunday), weekday_label, month
        (1..12), month_label and year
    """
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError("Cannot derive calendar features from an absent date")
    weekday = ts.isoweekday()
    return {
        "weekday": weekday,
        "weekday_label": WEEKDAY_LABELS[weekday - 1],
        "month": ts.month,
        "month_label": MONTH_LABELS[ts.month - 1],
        "year": ts.year,
    }


def add_calendar_features(df: pd.DataFrame, key: str = DATE_KEY) -> pd.DataFrame:
    """
    Append weekday, month and year derived from ``key``.

    Args:
        df: Input DataFrame with a datetime64 date column
        key: Date column name

    Returns:
        Copy of ``df`` with weekday and month (ordered categoricals) and
        year (Int64)
    """
    if key not in df.columns:
        raise ValueError(f"Missing date column '{key}'. Available: {df.columns.tolist()}")

    df = df.copy()
    dates = pd.to_datetime(df[key])

    df["weekday"] = pd.Categorical.from_codes(
        dates.dt.dayofweek.fillna(-1).astype(int), dtype=WEEKDAY_DTYPE
    )
    df["month"] = pd.Categorical.from_codes(
        (dates.dt.month - 1).fillna(-1).astype(int), dtype=MONTH_DTYPE
    )
    df["year"] = dates.dt.year.astype("Int64")

    missing = int(dates.isna().sum())
    if missing:
        logger.warning(f"{missing} row(s) without '{key}' have no calendar features")

    return df


def weekday_ordinal(values: pd.Series) -> pd.Series:
    """1-based weekday ordinal (Monday=1) of a weekday categorical column."""
    return _ordinal(values, WEEKDAY_DTYPE)


def month_ordinal(values: pd.Series) -> pd.Series:
    """1-based month ordinal (January=1) of a month categorical column."""
    return _ordinal(values, MONTH_DTYPE)


def _ordinal(values: pd.Series, dtype: pd.CategoricalDtype) -> pd.Series:
    codes = values.astype(dtype).cat.codes
    return (codes + 1).where(codes >= 0).astype("Int64")
