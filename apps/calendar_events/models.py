# ==========================================
# apps/calendar_events/models.py
# ==========================================

from django.db import models
from django.db.models import F, Q


class CalendarEvent(models.Model):
    """A studio calendar entry such as a shoot, a meeting or a delivery."""

    title = models.CharField(max_length=255)
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'calendar_events'
        ordering = ['start_time']
        indexes = [
            models.Index(fields=['start_time', 'end_time'], name='calendar_event_range_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                check=Q(end_time__gt=F('start_time')),
                name='calendar_event_ends_after_start',
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.start_time:%Y-%m-%d %H:%M})"
