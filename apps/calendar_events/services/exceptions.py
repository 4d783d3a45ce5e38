"""Domain-specific exceptions for calendar services."""


class CalendarServiceError(Exception):
    """Base exception for calendar services."""
    pass


class CalendarEventNotFoundError(CalendarServiceError):
    """Raised when calendar event does not exist."""
    pass


class InvalidEventTimesError(CalendarServiceError):
    """Raised when an event would end at or before its start."""
    pass
