"""
Exceptions for the transaction processing pipeline.

Business rule failures never raise: they become DECLINED events. The
exceptions here cover input and output problems, which abort a run.
"""

from pathlib import Path
from typing import Any, Optional, Union


class TransactionProcessingError(Exception):
    """Base exception for fatal processing errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InputFileError(TransactionProcessingError):
    """
    Raised when an input table cannot be read.

    Examples:
    - File missing or unreadable
    - Wrong number of columns on a line
    - Value that does not parse (e.g. a non-numeric amount)
    """

    def __init__(self, path: Union[str, Path], message: str, line: Optional[int] = None):
        details: dict[str, Any] = {"path": str(path)}
        if line is not None:
            details["line"] = line
        location = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{location}: {message}", details)


class OutputFileError(TransactionProcessingError):
    """Raised when a result table cannot be written."""

    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(f"{path}: {message}", {"path": str(path)})


ERROR_STATUS_MAP = {
    InputFileError: 400,
    OutputFileError: 500,
    TransactionProcessingError: 400,
}


def get_status_code(error: Exception) -> int:
    """Map an exception to an HTTP status code (500 for unknown errors).

    Subclasses inherit the code of their nearest mapped ancestor.
    """
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_MAP:
            return ERROR_STATUS_MAP[cls]
    return 500
