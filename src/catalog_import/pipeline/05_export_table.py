#!/usr/bin/env python3
"""
05_export_table.py - Write the merged import table as tab-separated text.

Column order is fixed: date, the import counts, the two process durations
and the calendar columns. Dates are ISO formatted, durations are written as
HH:MM and absent values as empty fields.
"""

import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import DEFAULT_EXPORT_SEP, get_logger
from src.catalog_import.common.constants import (
    COUNT_COLUMNS,
    DATE_KEY,
    DURATION_COLUMNS,
    EXPORT_DATE_FORMAT,
    MONTH_LABELS,
    OUTPUT_COLUMNS,
    WEEKDAY_LABELS,
)
from src.catalog_import.common.durations import format_duration, parse_durations
from src.catalog_import.common.errors import ExportError

logger = get_logger(__name__)


def output_columns(key: str = DATE_KEY) -> List[str]:
    """Export column order, with the date column renamed to ``key``."""
    return [key, *OUTPUT_COLUMNS[1:]]


def export_table(
    df: pd.DataFrame,
    path: Path,
    key: str = DATE_KEY,
    sep: str = DEFAULT_EXPORT_SEP,
) -> Path:
    """
    Serialize the merged table.

    Args:
        df: Merged table with calendar features
        path: Destination file
        key: Date column name
        sep: Field separator (default: tab)

    Returns:
        The written path

    Raises:
        ValueError: If a required column is missing
        ExportError: If the destination cannot be written
    """
    columns = output_columns(key)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns for export: {missing}. Available: {df.columns.tolist()}")

    out = df[columns].copy()
    out[key] = pd.to_datetime(out[key]).dt.strftime(EXPORT_DATE_FORMAT)
    for c in DURATION_COLUMNS:
        out[c] = out[c].map(format_duration)

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(path, sep=sep, index=False, na_rep="")
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise ExportError(f"Cannot write merged table to {path}: {e}") from e

    logger.info(f"✅ Wrote {len(out)} rows to {path}")
    return path


def read_exported_table(
    path: Path,
    key: str = DATE_KEY,
    sep: str = DEFAULT_EXPORT_SEP,
) -> pd.DataFrame:
    """
    Read a table written by export_table back into typed columns.

    Args:
        path: Exported file
        key: Date column name
        sep: Field separator

    Returns:
        DataFrame with datetime64 dates, Int64 counts, timedelta64
        durations, categorical weekday/month and Int64 year
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    df = pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False)

    missing = [c for c in output_columns(key) if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {path}: {missing}. Available: {df.columns.tolist()}")

    blank = df.apply(lambda s: s.str.strip() == "")
    df = df.mask(blank)

    df[key] = pd.to_datetime(df[key], format=EXPORT_DATE_FORMAT)
    for c in COUNT_COLUMNS + ["year"]:
        df[c] = pd.to_numeric(df[c]).astype("Int64")
    for c in DURATION_COLUMNS:
        df[c] = parse_durations(df[c])
    df["weekday"] = df["weekday"].astype(pd.CategoricalDtype(WEEKDAY_LABELS, ordered=True))
    df["month"] = df["month"].astype(pd.CategoricalDtype(MONTH_LABELS, ordered=True))

    return df


def preview(df: pd.DataFrame, n: Optional[int] = 5) -> str:
    """Short text rendering of the first rows, for log output."""
    shown = df.head(n).copy()
    for c in DURATION_COLUMNS:
        if c in shown.columns:
            shown[c] = shown[c].map(format_duration)
    return shown.to_string(index=False)
