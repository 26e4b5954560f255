"""Domain errors raised by the bookkeeping workflows."""
from __future__ import annotations


class CashbookError(ValueError):
    """Base class for rejections the caller can act on."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InsufficientBalanceError(CashbookError):
    """Raised when an outcome exceeds the current balance."""


class CategoryResolutionError(CashbookError):
    """Raised when an imported row references a category missing from the pool."""


class InvalidImportFileError(CashbookError):
    """Raised when the CSV file to import cannot be found."""
