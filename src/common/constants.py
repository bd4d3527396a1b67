"""
Shared constants and utilities for the catalog import analysis.

This module centralizes base defaults and logging setup used by the
pipeline stages, the runner and the helper scripts.
"""

import logging

# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

DEFAULT_DELIMITER: str = " "
DEFAULT_EXPORT_SEP: str = "\t"
DEFAULT_ENCODING: str = "utf-8"
DEFAULT_RANDOM_STATE: int = 42

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for the catalog import analysis.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
