"""
Error types for the catalog import pipeline.

Structural problems (bad input schema, duplicate keys reaching the merge,
unwritable output) abort the run. Malformed duration text is not an error;
it is read as an absent value.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for fatal pipeline errors."""


class LoadError(PipelineError, ValueError):
    """An input file is missing, unreadable or does not match its schema."""

    def __init__(self, path, message: str, line_no: Optional[int] = None):
        self.path = path
        self.line_no = line_no
        where = f"{path}:{line_no}" if line_no is not None else f"{path}"
        super().__init__(f"{where}: {message}")


class DuplicateKeyError(PipelineError, ValueError):
    """A table expected to have unique keys contains a repeated key."""


class ExportError(PipelineError, OSError):
    """The merged table could not be written."""
