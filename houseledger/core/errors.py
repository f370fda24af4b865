"""
Ledger error taxonomy and the write result envelope.

Writers never raise across the service boundary. They return a WriteResult
carrying either the written data or one of the errors below, and the caller
decides whether to retry, revert optimistic state, or surface a message.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class LedgerError(Exception):
    """Base class for ledger failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Bad input: non-positive amount, payer in split, missing reference."""
    pass


class NotFoundError(LedgerError):
    """A referenced expense, member, house or poll does not exist."""
    pass


class PersistenceError(LedgerError):
    """Opaque failure passed through from the storage layer."""
    pass


@dataclass
class WriteResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[LedgerError] = None

    @classmethod
    def ok(cls, data: T) -> "WriteResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: LedgerError) -> "WriteResult[T]":
        return cls(success=False, error=error)
