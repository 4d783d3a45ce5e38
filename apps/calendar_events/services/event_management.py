"""Calendar event CRUD operations service."""

import datetime
import logging
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import QuerySet

from ..models import CalendarEvent
from .exceptions import CalendarEventNotFoundError, InvalidEventTimesError
from .schedule import day_start, day_end, overlapping

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['title', 'start_time', 'end_time']


def _check_times(start_time: datetime.datetime, end_time: datetime.datetime) -> None:
    if end_time <= start_time:
        raise InvalidEventTimesError("End time must be after start time")


@transaction.atomic
def create_calendar_event(
    *,
    title: str,
    start_time: datetime.datetime,
    end_time: datetime.datetime,
) -> CalendarEvent:
    """
    Create a calendar event.

    Raises:
        InvalidEventTimesError: If end_time is not after start_time
    """
    _check_times(start_time, end_time)

    event = CalendarEvent.objects.create(title=title, start_time=start_time, end_time=end_time)

    logger.info("Calendar event created: %s", event.title)
    return event


def get_calendar_event_by_id(*, event_id: int) -> CalendarEvent:
    """
    Get calendar event by ID.

    Raises:
        CalendarEventNotFoundError: If event doesn't exist
    """
    try:
        return CalendarEvent.objects.get(id=event_id)
    except CalendarEvent.DoesNotExist:
        raise CalendarEventNotFoundError(f"Calendar event {event_id} not found")


@transaction.atomic
def update_calendar_event(*, event_id: int, data: Dict[str, Any]) -> CalendarEvent:
    """
    Update a calendar event.

    A new start or end is checked against the stored other end.

    Raises:
        CalendarEventNotFoundError: If event doesn't exist
        InvalidEventTimesError: If the event would end at or before its start
    """
    try:
        event = CalendarEvent.objects.select_for_update().get(id=event_id)
    except CalendarEvent.DoesNotExist:
        raise CalendarEventNotFoundError(f"Calendar event {event_id} not found")

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(event, field, value)

    _check_times(event.start_time, event.end_time)
    event.save()

    logger.info("Calendar event updated: %s", event.title)
    return event


@transaction.atomic
def delete_calendar_event(*, event_id: int) -> None:
    """
    Delete a calendar event.

    Raises:
        CalendarEventNotFoundError: If event doesn't exist
    """
    try:
        event = CalendarEvent.objects.select_for_update().get(id=event_id)
    except CalendarEvent.DoesNotExist:
        raise CalendarEventNotFoundError(f"Calendar event {event_id} not found")

    title = event.title
    event.delete()
    logger.info("Calendar event deleted: %s", title)


def list_calendar_events(
    *,
    search: Optional[str] = None,
    start_date: Optional[datetime.date] = None,
    end_date: Optional[datetime.date] = None,
) -> QuerySet:
    """
    List calendar events, earliest start first.

    Args:
        search: Case-insensitive match on the title
        start_date: Keep events still running on or after this day
        end_date: Keep events starting on or before this day

    With both dates, this keeps every event that overlaps the range.
    """
    queryset = CalendarEvent.objects.all()

    if search:
        queryset = queryset.filter(title__icontains=search)

    return overlapping(
        queryset,
        day_start(start_date) if start_date else None,
        day_end(end_date) if end_date else None,
    ).order_by('start_time', 'id')
