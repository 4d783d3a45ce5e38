"""
Calendar views over the event table: ranges, upcoming events and counts.

Days, weeks and months are taken in the configured time zone. Weeks start
on Sunday. An event belongs to a window when it overlaps it at all, so a
shoot that runs past midnight shows up on both days.
"""

import datetime
from typing import Optional, Dict, List

from django.db.models import QuerySet
from django.utils import timezone

from ..models import CalendarEvent

DEFAULT_UPCOMING_LIMIT = 5


def day_start(day: datetime.date) -> datetime.datetime:
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.min))


def day_end(day: datetime.date) -> datetime.datetime:
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.max))


def week_bounds(today: datetime.date):
    """First and last day of the Sunday-based week containing `today`."""
    # weekday() is 0 on Monday
    sunday = today - datetime.timedelta(days=(today.weekday() + 1) % 7)
    return sunday, sunday + datetime.timedelta(days=6)


def month_bounds(today: datetime.date):
    first = today.replace(day=1)
    next_month = (first + datetime.timedelta(days=32)).replace(day=1)
    return first, next_month - datetime.timedelta(days=1)


def overlapping(
    queryset: QuerySet,
    start: Optional[datetime.datetime],
    end: Optional[datetime.datetime],
) -> QuerySet:
    """Events that are running at some moment between start and end, inclusive."""
    if start is not None:
        queryset = queryset.filter(end_time__gte=start)
    if end is not None:
        queryset = queryset.filter(start_time__lte=end)
    return queryset


def get_events_for_date_range(
    *,
    start: datetime.datetime,
    end: datetime.datetime,
) -> List[CalendarEvent]:
    """All events overlapping [start, end], earliest start first."""
    return list(overlapping(CalendarEvent.objects.all(), start, end).order_by('start_time', 'id'))


def _events_between_days(first: datetime.date, last: datetime.date) -> List[CalendarEvent]:
    return get_events_for_date_range(start=day_start(first), end=day_end(last))


def get_upcoming_events(
    *,
    limit: int = DEFAULT_UPCOMING_LIMIT,
    now: Optional[datetime.datetime] = None,
) -> List[CalendarEvent]:
    """The next `limit` events that have not started yet."""
    now = now or timezone.now()
    return list(
        CalendarEvent.objects.filter(start_time__gte=now).order_by('start_time', 'id')[:limit]
    )


def get_today_events(*, today: Optional[datetime.date] = None) -> List[CalendarEvent]:
    today = today or timezone.localdate()
    return _events_between_days(today, today)


def get_week_events(*, today: Optional[datetime.date] = None) -> List[CalendarEvent]:
    today = today or timezone.localdate()
    return _events_between_days(*week_bounds(today))


def get_month_events(*, today: Optional[datetime.date] = None) -> List[CalendarEvent]:
    today = today or timezone.localdate()
    return _events_between_days(*month_bounds(today))


def get_calendar_stats(*, now: Optional[datetime.datetime] = None) -> Dict[str, int]:
    """
    Count events for the calendar dashboard.

    Returns:
        Dict with total_events, upcoming_events (not started yet),
        past_events (already ended), events_this_month and
        events_this_week (starting inside the current month or week)
    """
    now = now or timezone.now()
    today = timezone.localdate(now)
    month_first, month_last = month_bounds(today)
    week_first, week_last = week_bounds(today)
    events = CalendarEvent.objects.all()

    return {
        'total_events': events.count(),
        'upcoming_events': events.filter(start_time__gte=now).count(),
        'past_events': events.filter(end_time__lt=now).count(),
        'events_this_month': events.filter(
            start_time__gte=day_start(month_first),
            start_time__lte=day_end(month_last),
        ).count(),
        'events_this_week': events.filter(
            start_time__gte=day_start(week_first),
            start_time__lte=day_end(week_last),
        ).count(),
    }
