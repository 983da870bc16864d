"""
Custom exceptions for helixir.

Only file access and the live-execution boundary fail hard. Problems in the
learner's DSL text never raise; they show up as differences in a diff report.
"""

from pathlib import Path
from typing import Union


class HelixirError(Exception):
    """Base exception for all helixir errors."""

    pass


class HxFileError(HelixirError):
    """Raised when a schema or query file cannot be read."""

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read file '{self.path}': {cause}")


class QueryExecutionError(HelixirError):
    """Raised when a query cannot be executed against a running instance."""

    def __init__(self, query_name: str, message: str):
        self.query_name = query_name
        super().__init__(message)


class HelixCommandError(HelixirError):
    """Raised when the external helix command cannot be run."""

    pass
