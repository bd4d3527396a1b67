# Common module for catalog import analysis
"""Shared logging setup and base defaults."""

from .constants import (
    DEFAULT_DELIMITER,
    DEFAULT_EXPORT_SEP,
    DEFAULT_ENCODING,
    setup_logging,
    get_logger,
)

__all__ = [
    "DEFAULT_DELIMITER",
    "DEFAULT_EXPORT_SEP",
    "DEFAULT_ENCODING",
    "setup_logging",
    "get_logger",
]
