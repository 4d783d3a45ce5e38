from rest_framework import serializers
from .models import CalendarEvent


class CalendarEventSerializer(serializers.ModelSerializer):
    """Serializer for calendar events."""

    class Meta:
        model = CalendarEvent
        fields = [
            'id',
            'title',
            'start_time',
            'end_time',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CalendarEventWriteSerializer(serializers.Serializer):
    """Input serializer for event create/update."""

    title = serializers.CharField(min_length=1, max_length=255)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()

    def validate(self, attrs):
        start = attrs.get('start_time')
        end = attrs.get('end_time')
        if start and end and end <= start:
            raise serializers.ValidationError('End time must be after start time')
        return attrs


class EventListQuerySerializer(serializers.Serializer):
    """Query parameters for the event list."""

    search = serializers.CharField(required=False, allow_blank=True)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError('Start date must be before end date')
        return attrs


class EventRangeQuerySerializer(EventListQuerySerializer):
    """Query parameters for the calendar range view; both bounds required."""

    search = None
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class UpcomingQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=50, default=5)


class CalendarStatsSerializer(serializers.Serializer):
    total_events = serializers.IntegerField()
    upcoming_events = serializers.IntegerField()
    past_events = serializers.IntegerField()
    events_this_month = serializers.IntegerField()
    events_this_week = serializers.IntegerField()
