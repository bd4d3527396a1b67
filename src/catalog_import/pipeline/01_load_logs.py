#!/usr/bin/env python3
"""
01_load_logs.py - Load the time log and the import statistics log.

Both logs are space-delimited text files with a header line whose labels are
discarded in favour of fixed column names. The import statistics log carries
one extra metadata line before the header.

Usage:
    python src/catalog_import/pipeline/01_load_logs.py \\
        --time-log raw_logs/time.log \\
        --import-log raw_logs/import_stats.log
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.common.constants import DEFAULT_DELIMITER, DEFAULT_ENCODING, setup_logging, get_logger
from src.catalog_import.common.config import PipelineConfig, add_config_arguments
from src.catalog_import.common.constants import (
    COUNT_COLUMNS,
    DURATION_COLUMNS,
    NA_SENTINELS,
)
from src.catalog_import.common.durations import format_duration, parse_durations
from src.catalog_import.common.errors import LoadError

logger = get_logger(__name__)


def split_fields(line: str, delimiter: str) -> List[str]:
    """
    Split one data line into fields.

    A whitespace delimiter splits on runs of whitespace, so aligned columns
    padded with several spaces still read as one field each.
    """
    if delimiter.isspace():
        return line.split()
    return [f.strip() for f in line.split(delimiter)]


def read_delimited(
    path: Path,
    columns: List[str],
    delimiter: str = DEFAULT_DELIMITER,
    skip_lines: int = 0,
    encoding: str = DEFAULT_ENCODING,
) -> pd.DataFrame:
    """
    Read a delimited log into a DataFrame of strings with fixed columns.

    Args:
        path: Path to the log file
        columns: Column names to assign, in file order
        delimiter: Field separator
        skip_lines: Metadata lines before the header line
        encoding: File encoding

    Returns:
        DataFrame with exactly ``columns``, one row per non-blank data line,
        in file order

    Raises:
        LoadError: If the file cannot be read, has no header line, or a row
            does not have ``len(columns)`` fields
    """
    path = Path(path)
    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read file {path}: {e}")
        raise LoadError(path, f"cannot read file ({e})") from e

    lines = content.splitlines()
    header_idx = skip_lines
    if len(lines) <= header_idx:
        raise LoadError(path, f"expected {skip_lines} metadata line(s) and a header line")

    rows = []
    for line_no, line in enumerate(lines[header_idx + 1:], start=header_idx + 2):
        if not line.strip():
            continue
        fields = split_fields(line, delimiter)
        if len(fields) != len(columns):
            raise LoadError(
                path,
                f"expected {len(columns)} fields {columns}, found {len(fields)}",
                line_no=line_no,
            )
        rows.append([line_no, *fields])

    df = pd.DataFrame(rows, columns=["line_no", *columns], dtype=object)
    df["line_no"] = df["line_no"].astype(int)
    logger.info(f"Read {len(df)} rows from {path}")
    return df


def parse_dates(df: pd.DataFrame, path: Path, key: str, date_format: str) -> pd.Series:
    """
    Parse the date key column, failing on the first bad value.

    Args:
        df: Frame from read_delimited (with line_no)
        path: Source file, for the error message
        key: Date column name
        date_format: strptime format

    Returns:
        Series of datetime64 dates normalised to midnight

    Raises:
        LoadError: If any date does not match ``date_format``
    """
    dates = pd.to_datetime(df[key], format=date_format, errors="coerce")
    bad = dates.isna()
    if bad.any():
        first = df.loc[bad].iloc[0]
        raise LoadError(
            path,
            f"unparseable date '{first[key]}' (format {date_format})",
            line_no=int(first["line_no"]),
        )
    return dates.dt.normalize()


def coerce_counts(values: pd.Series) -> pd.Series:
    """Convert count text to nullable integers; non-integer text becomes <NA>."""
    text = values.astype(str).str.strip()
    text = text.where(~text.isin(NA_SENTINELS))
    numeric = pd.to_numeric(text, errors="coerce")

    # Fractional values are not counts either
    numeric = numeric.where(numeric % 1 == 0)

    bad = int((text.notna() & numeric.isna()).sum())
    if bad:
        logger.warning(f"Column '{values.name}': {bad} non-integer count(s) read as absent")

    return numeric.astype("Int64")


def load_time_log(path: Path, config: Optional[PipelineConfig] = None) -> pd.DataFrame:
    """
    Load the process time log.

    Args:
        path: Path to the time log
        config: Run configuration (defaults apply when omitted)

    Returns:
        DataFrame with the date key and the two duration columns
        (timedelta64, NaT where absent)
    """
    config = config or PipelineConfig()
    key = config.date_key
    df = read_delimited(
        path,
        [key, *DURATION_COLUMNS],
        delimiter=config.delimiter,
        skip_lines=config.time_log_skip,
        encoding=config.encoding,
    )

    out = pd.DataFrame({key: parse_dates(df, path, key, config.date_format)})
    for c in DURATION_COLUMNS:
        out[c] = parse_durations(df[c])

    return out


def load_import_log(path: Path, config: Optional[PipelineConfig] = None) -> pd.DataFrame:
    """
    Load the import statistics log.

    Args:
        path: Path to the import statistics log
        config: Run configuration (defaults apply when omitted)

    Returns:
        DataFrame with the date key, total, source category counts and the
        two large-record counts (Int64). Dates may still repeat.
    """
    config = config or PipelineConfig()
    key = config.date_key
    df = read_delimited(
        path,
        [key, *COUNT_COLUMNS],
        delimiter=config.delimiter,
        skip_lines=config.import_log_skip,
        encoding=config.encoding,
    )

    out = pd.DataFrame({key: parse_dates(df, path, key, config.date_format)})
    for c in COUNT_COLUMNS:
        out[c] = coerce_counts(df[c])

    return out


def main() -> None:
    """Load both logs and print a short summary of each."""
    setup_logging()

    ap = argparse.ArgumentParser(
        description="Load and validate the time log and the import statistics log."
    )
    add_config_arguments(ap)
    args = ap.parse_args()
    config = PipelineConfig.from_args(args)

    times = load_time_log(config.time_log, config)
    imports = load_import_log(config.import_log, config)

    for c in DURATION_COLUMNS:
        present = times[c].dropna()
        longest = format_duration(present.max()) if len(present) else ""
        logger.info(f"{c}: {len(present)}/{len(times)} present, longest {longest}")

    dupes = int(imports[config.date_key].duplicated().sum())
    logger.info(f"Import log: {len(imports)} rows, {dupes} repeated date(s)")


if __name__ == "__main__":
    main()
