"""
Domain-specific exceptions for the weekend app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class WeekendServiceError(Exception):
    """Base exception for all weekend service errors."""
    pass


class ActivityNotFoundError(WeekendServiceError):
    """Raised when a vote targets an activity that does not exist."""
    pass


class PackItemNotFoundError(WeekendServiceError):
    """Raised when an update targets a pack item that does not exist."""
    pass
