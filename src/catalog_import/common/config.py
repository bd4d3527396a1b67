"""
Run configuration for the catalog import pipeline.

A PipelineConfig is built once by the entry point (usually from the
command line) and passed to every stage that needs it.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from src.common.constants import DEFAULT_DELIMITER, DEFAULT_ENCODING
from src.catalog_import.common.constants import (
    DATE_KEY,
    DEFAULT_DATE_FORMAT,
    DEFAULT_IMPORT_LOG,
    DEFAULT_OUTPUT,
    DEFAULT_TIME_LOG,
    IMPORT_LOG_SKIP,
    TIME_LOG_SKIP,
)


@dataclass(frozen=True)
class PipelineConfig:
    """
    Options for one pipeline run.

    Attributes:
        time_log: Path to the process duration log
        import_log: Path to the import statistics log
        output: Path of the merged tab-separated table
        delimiter: Field separator of both input logs
        date_key: Name of the join key column
        date_format: strptime format of the input dates
        encoding: Text encoding of the input logs
        time_log_skip: Metadata lines before the time log header
        import_log_skip: Metadata lines before the import log header
    """

    time_log: Path = Path(DEFAULT_TIME_LOG)
    import_log: Path = Path(DEFAULT_IMPORT_LOG)
    output: Path = Path(DEFAULT_OUTPUT)
    delimiter: str = DEFAULT_DELIMITER
    date_key: str = DATE_KEY
    date_format: str = DEFAULT_DATE_FORMAT
    encoding: str = DEFAULT_ENCODING
    time_log_skip: int = TIME_LOG_SKIP
    import_log_skip: int = IMPORT_LOG_SKIP

    def __post_init__(self) -> None:
        # Accept plain strings for the paths
        object.__setattr__(self, "time_log", Path(self.time_log))
        object.__setattr__(self, "import_log", Path(self.import_log))
        object.__setattr__(self, "output", Path(self.output))
        if not self.delimiter:
            raise ValueError("delimiter must not be empty")
        if self.time_log_skip < 0 or self.import_log_skip < 0:
            raise ValueError("skip line counts must be >= 0")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "PipelineConfig":
        """Build a config from parsed command line arguments."""
        return cls(
            time_log=Path(args.time_log),
            import_log=Path(args.import_log),
            output=Path(args.output),
            delimiter=args.delimiter,
            date_key=args.date_key,
            date_format=args.date_format,
            encoding=args.encoding,
        )


def add_config_arguments(ap: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """
    Register the PipelineConfig options on an argument parser.

    Args:
        ap: Parser to extend

    Returns:
        The same parser
    """
    ap.add_argument(
        "--time-log",
        default=DEFAULT_TIME_LOG,
        help="Space-delimited log of process durations (date, HH:MM, HH:MM)"
    )
    ap.add_argument(
        "--import-log",
        default=DEFAULT_IMPORT_LOG,
        help="Space-delimited log of import counts per night"
    )
    ap.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        help="Merged tab-separated output table"
    )
    ap.add_argument("--delimiter", default=DEFAULT_DELIMITER)
    ap.add_argument("--date-key", default=DATE_KEY)
    ap.add_argument("--date-format", default=DEFAULT_DATE_FORMAT)
    ap.add_argument("--encoding", default=DEFAULT_ENCODING)
    return ap
