"""
Shared constants for the catalog import pipeline.

This module centralizes the fixed input schemas, the export column order,
the duration pattern and the calendar labels used across the pipeline
stages and the runner.
"""

import re
import logging
from typing import Pattern

# Configure module logger
logger = logging.getLogger(__name__)

# =============================================================================
# INPUT SCHEMAS
# =============================================================================

DATE_KEY: str = "date"

# KUPICA and AKKUAK, the two nightly import processes
PROCESS_A_DURATION: str = "process_a_duration"
PROCESS_B_DURATION: str = "process_b_duration"
DURATION_COLUMNS: list[str] = [PROCESS_A_DURATION, PROCESS_B_DURATION]

TIME_LOG_COLUMNS: list[str] = [DATE_KEY, *DURATION_COLUMNS]

SOURCE_CATEGORIES: list[str] = ["SWB", "ZDB", "EZB", "Online"]
LARGE_SUBFIELD_COLUMN: str = ">4000 Subfields"
LARGE_SIZE_COLUMN: str = ">40kB"
COUNT_COLUMNS: list[str] = [
    "total",
    *SOURCE_CATEGORIES,
    LARGE_SUBFIELD_COLUMN,
    LARGE_SIZE_COLUMN,
]

IMPORT_LOG_COLUMNS: list[str] = [DATE_KEY, *COUNT_COLUMNS]

# Leading lines before the column header line
TIME_LOG_SKIP: int = 0
IMPORT_LOG_SKIP: int = 1

DEFAULT_DATE_FORMAT: str = "%Y-%m-%d"
EXPORT_DATE_FORMAT: str = "%Y-%m-%d"

# Values read as absent besides the empty field
NA_SENTINELS: frozenset[str] = frozenset({"", "NA", "N/A", "-"})

# =============================================================================
# DURATIONS
# =============================================================================

DURATION_PATTERN: Pattern = re.compile(r"^(?P<hours>[01]?\d|2[0-3]):(?P<minutes>[0-5]\d)$")

# =============================================================================
# CALENDAR FEATURES
# =============================================================================

WEEKDAY_LABELS: list[str] = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]
MONTH_LABELS: list[str] = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
CALENDAR_COLUMNS: list[str] = ["weekday", "month", "year"]

# =============================================================================
# OUTPUT
# =============================================================================

OUTPUT_COLUMNS: list[str] = [
    *IMPORT_LOG_COLUMNS,
    *DURATION_COLUMNS,
    *CALENDAR_COLUMNS,
]

DEFAULT_TIME_LOG: str = "raw_logs/time.log"
DEFAULT_IMPORT_LOG: str = "raw_logs/import_stats.log"
DEFAULT_OUTPUT: str = "data/merged_import_log.tsv"
DEFAULT_MODEL_DIR: str = "models/duration_rf"

# =============================================================================
# FEATURE RANKING
# =============================================================================

DEFAULT_CV_SPLITS: int = 10
DEFAULT_CV_REPEATS: int = 3
DEFAULT_N_ESTIMATORS: int = 500
