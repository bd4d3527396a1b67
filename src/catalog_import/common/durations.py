"""
Duration parsing for the process time log.

The time log records how long each import process ran as ``HH:MM`` text.
Values are parsed to pandas Timedelta; anything that is not a valid
sub-24-hour ``HH:MM`` becomes NaT, which stays NaT through any arithmetic.
"""

import logging
from typing import Any

import numpy as np
import pandas as pd

from src.catalog_import.common.constants import DURATION_PATTERN, NA_SENTINELS

logger = logging.getLogger(__name__)


def parse_duration(value: Any) -> pd.Timedelta:
    """
    Parse ``HH:MM`` text into an elapsed time.

    Args:
        value: Text such as "01:23", or None/NaN/empty

    Returns:
        Timedelta of hours*3600 + minutes*60 seconds, or NaT when the value
        is missing or malformed
    """
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return pd.NaT
    text = str(value).strip()
    if text in NA_SENTINELS:
        return pd.NaT

    match = DURATION_PATTERN.match(text)
    if not match:
        return pd.NaT

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    return pd.Timedelta(seconds=hours * 3600 + minutes * 60)


def parse_durations(values: pd.Series) -> pd.Series:
    """
    Parse a column of ``HH:MM`` text.

    Non-empty values that fail to parse are counted and reported, then kept
    as NaT.

    Args:
        values: Series of duration text

    Returns:
        Series of dtype timedelta64[ns] with the same index and name
    """
    parsed = pd.Series(
        [parse_duration(v) for v in values],
        index=values.index,
        name=values.name,
        dtype="timedelta64[ns]",
    )

    present = ~values.isna() & ~values.astype(str).str.strip().isin(NA_SENTINELS)
    bad = int((present & parsed.isna()).sum())
    if bad:
        logger.warning(f"Column '{values.name}': {bad} malformed duration(s) read as absent")

    return parsed


def format_duration(value: Any) -> str:
    """
    Render an elapsed time as ``HH:MM``.

    Args:
        value: Timedelta (or NaT/None)

    Returns:
        Zero-padded "HH:MM", or "" for an absent value
    """
    if value is None or pd.isna(value):
        return ""
    total_minutes = int(pd.Timedelta(value).total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def to_seconds(values: pd.Series) -> pd.Series:
    """Project a duration column to float seconds (NaN where absent)."""
    return pd.to_timedelta(values).dt.total_seconds()
