from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'calendar_events'

router = DefaultRouter()
router.register(r'events', views.CalendarEventViewSet, basename='event')

urlpatterns = [
    # GET    /api/calendar/events/                      - List events (paginated)
    # POST   /api/calendar/events/                      - Create event (manager/admin)
    # GET    /api/calendar/events/{id}/                 - Get event
    # PATCH  /api/calendar/events/{id}/                 - Update event (manager/admin)
    # DELETE /api/calendar/events/{id}/                 - Delete event (manager/admin)
    # GET    /api/calendar/events/stats/                - Event counts
    # GET    /api/calendar/events/upcoming/             - Next events
    # GET    /api/calendar/events/today/                - Today's events
    # GET    /api/calendar/events/week/                 - This week's events
    # GET    /api/calendar/events/month/                - This month's events
    # GET    /api/calendar/events/range/                - Events overlapping a date range
    path('', include(router.urls)),
]
