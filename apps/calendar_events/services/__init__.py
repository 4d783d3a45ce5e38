"""Services for calendar events."""

from .exceptions import (
    CalendarServiceError,
    CalendarEventNotFoundError,
    InvalidEventTimesError,
)
from .event_management import (
    create_calendar_event,
    get_calendar_event_by_id,
    update_calendar_event,
    delete_calendar_event,
    list_calendar_events,
)
from .schedule import (
    get_events_for_date_range,
    get_upcoming_events,
    get_today_events,
    get_week_events,
    get_month_events,
    get_calendar_stats,
)

__all__ = [
    # Exceptions
    'CalendarServiceError',
    'CalendarEventNotFoundError',
    'InvalidEventTimesError',
    # Event Management
    'create_calendar_event',
    'get_calendar_event_by_id',
    'update_calendar_event',
    'delete_calendar_event',
    'list_calendar_events',
    # Schedule
    'get_events_for_date_range',
    'get_upcoming_events',
    'get_today_events',
    'get_week_events',
    'get_month_events',
    'get_calendar_stats',
]
