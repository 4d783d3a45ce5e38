import pytest
from datetime import datetime, timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.calendar_events.models import CalendarEvent


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular studio user."""
    return User.objects.create_user(
        email='crew@example.com',
        password='TestPass123!',
        display_name='Crew Member',
    )


@pytest.fixture
def manager_user(db):
    """Create and return a manager."""
    return User.objects.create_user(
        email='scheduler@example.com',
        password='TestPass123!',
        display_name='Studio Scheduler',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as a regular user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def manager_client(api_client, manager_user):
    """Return API client authenticated as a manager."""
    refresh = RefreshToken.for_user(manager_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def make_event(db):
    """Factory: make_event(title, start, hours=1) with a naive local start."""
    def _make(title, start, hours=1):
        start = timezone.make_aware(start) if timezone.is_naive(start) else start
        return CalendarEvent.objects.create(
            title=title,
            start_time=start,
            end_time=start + timedelta(hours=hours),
        )
    return _make


@pytest.fixture
def october(make_event):
    """
    Events around Wednesday 14 October 2026.

    Week of the 14th runs Sunday 11th to Saturday 17th.
    """
    return {
        'edit': make_event('Edit session', datetime(2026, 10, 12, 10, 0), hours=2),
        'shoot': make_event('Mehta shoot', datetime(2026, 10, 14, 11, 0), hours=2),
        'meeting': make_event('Client meeting', datetime(2026, 10, 17, 9, 0)),
        'delivery': make_event('Album delivery', datetime(2026, 10, 25, 9, 0)),
        'old': make_event('September recce', datetime(2026, 9, 30, 9, 0)),
        'next': make_event('November shoot', datetime(2026, 11, 2, 9, 0)),
    }
