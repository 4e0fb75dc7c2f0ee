"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for dayplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PlannerError):
    """Resource not found."""

    pass


class ValidationError(PlannerError):
    """Validation error."""

    pass


class InvalidIntervalError(ValidationError):
    """Interval with end <= start, a non-positive duration, or an off-grid slot."""

    pass


class InfrastructureError(PlannerError):
    """Infrastructure-related error (DB, storage)."""

    pass
