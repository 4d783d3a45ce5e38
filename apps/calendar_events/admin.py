from django.contrib import admin
from apps.calendar_events.models import CalendarEvent


@admin.register(CalendarEvent)
class CalendarEventAdmin(admin.ModelAdmin):
    """Admin interface for Calendar Events."""

    list_display = ['title', 'start_time', 'end_time']
    search_fields = ['title']
    date_hierarchy = 'start_time'
    ordering = ['start_time']
