"""Exceptions raised by etag-sync."""

from pathlib import Path
from typing import Any, Union


class SyncError(Exception):
    """Base exception for etag-sync errors."""

    pass


class PreconditionError(SyncError, ValueError):
    """Raised when a function is called with invalid arguments."""

    pass


class SnapshotError(SyncError):
    """Raised when snapshot data cannot be parsed."""

    pass


class FileAccessError(SyncError):
    """Raised when a file cannot be stat'ed or read."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to access {self.path}: {cause}")


class ExecutorError(SyncError):
    """Wraps the first worker failure of a bounded batch.

    Attributes:
        index: position of the failing input in the batch
        item: the failing input itself
        cause: the exception raised by the worker
    """

    def __init__(self, index: int, item: Any, cause: BaseException):
        self.index = index
        self.item = item
        self.cause = cause
        super().__init__(f"Worker failed on item {index} ({item!r}): {cause}")
