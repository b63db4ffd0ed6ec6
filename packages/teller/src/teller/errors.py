"""
Exception types for the teller package.

Deposits report bad arguments by raising; withdrawals never raise for bad
requests and report failure through their return value instead.
"""

from typing import Any, Optional

from teller_types.schemas.models import FailureReason


class TellerError(Exception):
    """Base exception for teller errors."""


class InvalidArgument(TellerError, ValueError):
    """Raised when a note request is malformed or names an unsupported note."""

    def __init__(self, message: str, reason: FailureReason, value: Optional[Any] = None):
        self.message = message
        self.reason = reason
        self.value = value
        super().__init__(message)


class ConfigurationError(TellerError, ValueError):
    """Raised when a register configuration cannot be loaded or is invalid."""
