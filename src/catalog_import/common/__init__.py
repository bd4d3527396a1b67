# Common module for the catalog import pipeline
"""Schemas, duration parsing, configuration and error types."""

from .constants import (
    DATE_KEY,
    DURATION_COLUMNS,
    DURATION_PATTERN,
    IMPORT_LOG_COLUMNS,
    OUTPUT_COLUMNS,
    SOURCE_CATEGORIES,
    TIME_LOG_COLUMNS,
)
from .config import PipelineConfig
from .errors import DuplicateKeyError, ExportError, LoadError, PipelineError

__all__ = [
    "DATE_KEY",
    "DURATION_COLUMNS",
    "DURATION_PATTERN",
    "IMPORT_LOG_COLUMNS",
    "OUTPUT_COLUMNS",
    "SOURCE_CATEGORIES",
    "TIME_LOG_COLUMNS",
    "PipelineConfig",
    "PipelineError",
    "LoadError",
    "DuplicateKeyError",
    "ExportError",
]
