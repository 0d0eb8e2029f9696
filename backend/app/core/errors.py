"""
Error taxonomy shared by the store adapter, the services and the API layer.
"""

from typing import Any, Optional


class JobBoardError(Exception):
    """Base class for every error raised by the core."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationGap(JobBoardError):
    """Request body failed schema validation at the boundary."""

    def __init__(self, message: str, details: Optional[list[Any]] = None):
        super().__init__(message)
        self.details = details or []


class StoreError(JobBoardError):
    """Any failure reported by the record store (connectivity, constraints, timeouts)."""


class NotFound(JobBoardError):
    """A lookup returned zero rows where at least one was expected."""


class OwnershipError(JobBoardError):
    """Requester does not own the record it tried to modify."""
