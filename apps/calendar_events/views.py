from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsManagerOrAdmin
from .serializers import (
    CalendarEventSerializer,
    CalendarEventWriteSerializer,
    EventListQuerySerializer,
    EventRangeQuerySerializer,
    UpcomingQuerySerializer,
    CalendarStatsSerializer,
)
from .services import (
    create_calendar_event,
    get_calendar_event_by_id,
    update_calendar_event,
    delete_calendar_event,
    list_calendar_events,
    get_events_for_date_range,
    get_upcoming_events,
    get_today_events,
    get_week_events,
    get_month_events,
    get_calendar_stats,
    CalendarEventNotFoundError,
    InvalidEventTimesError,
)
from .services.schedule import day_start, day_end


class EventPagination(PageNumberPagination):
    """Custom pagination for event lists."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


def _query(serializer_class, request):
    query_serializer = serializer_class(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    return query_serializer.validated_data


class CalendarEventViewSet(viewsets.ViewSet):
    """
    Calendar event endpoints.

    Any signed-in user can read the calendar; managers and admins edit it.
    """

    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsManagerOrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR),
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses={200: CalendarEventSerializer(many=True)},
    )
    def list(self, request):
        params = _query(EventListQuerySerializer, request)
        queryset = list_calendar_events(
            search=params.get('search'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
        paginator = EventPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(CalendarEventSerializer(page, many=True).data)

    @extend_schema(request=CalendarEventWriteSerializer, responses={201: CalendarEventSerializer})
    def create(self, request):
        serializer = CalendarEventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            event = create_calendar_event(**serializer.validated_data)
        except InvalidEventTimesError as e:
            raise ValidationError({'end_time': [str(e)]})

        return Response(CalendarEventSerializer(event).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CalendarEventSerializer})
    def retrieve(self, request, pk=None):
        try:
            event = get_calendar_event_by_id(event_id=pk)
        except CalendarEventNotFoundError as e:
            raise NotFound(str(e))
        return Response(CalendarEventSerializer(event).data)

    @extend_schema(request=CalendarEventWriteSerializer, responses={200: CalendarEventSerializer})
    def update(self, request, pk=None, partial=False):
        serializer = CalendarEventWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            event = update_calendar_event(event_id=pk, data=serializer.validated_data)
        except CalendarEventNotFoundError as e:
            raise NotFound(str(e))
        except InvalidEventTimesError as e:
            raise ValidationError({'end_time': [str(e)]})

        return Response(CalendarEventSerializer(event).data)

    @extend_schema(request=CalendarEventWriteSerializer, responses={200: CalendarEventSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            delete_calendar_event(event_id=pk)
        except CalendarEventNotFoundError as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: CalendarStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Event counts for the calendar dashboard."""
        return Response(CalendarStatsSerializer(get_calendar_stats()).data)

    @extend_schema(
        parameters=[OpenApiParameter('limit', OpenApiTypes.INT, description='1-50, default 5')],
        responses={200: CalendarEventSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """Next events that have not started yet."""
        params = _query(UpcomingQuerySerializer, request)
        events = get_upcoming_events(limit=params['limit'])
        return Response(CalendarEventSerializer(events, many=True).data)

    @extend_schema(responses={200: CalendarEventSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def today(self, request):
        return Response(CalendarEventSerializer(get_today_events(), many=True).data)

    @extend_schema(responses={200: CalendarEventSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def week(self, request):
        """Events of the current Sunday-to-Saturday week."""
        return Response(CalendarEventSerializer(get_week_events(), many=True).data)

    @extend_schema(responses={200: CalendarEventSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def month(self, request):
        return Response(CalendarEventSerializer(get_month_events(), many=True).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('start_date', OpenApiTypes.DATE, required=True),
            OpenApiParameter('end_date', OpenApiTypes.DATE, required=True),
        ],
        responses={200: CalendarEventSerializer(many=True)},
    )
    @action(detail=False, methods=['get'], url_path='range', url_name='range')
    def date_range(self, request):
        """Every event overlapping the given days, for calendar views."""
        params = _query(EventRangeQuerySerializer, request)
        events = get_events_for_date_range(
            start=day_start(params['start_date']),
            end=day_end(params['end_date']),
        )
        return Response(CalendarEventSerializer(events, many=True).data)
