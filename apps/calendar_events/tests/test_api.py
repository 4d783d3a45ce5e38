"""
API tests for the calendar endpoints.
"""

import pytest
from datetime import datetime, timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.calendar_events.models import CalendarEvent


# =============================================================================
# Event CRUD Endpoints
# =============================================================================

@pytest.mark.django_db
class TestCalendarEventEndpoints:

    def test_requires_authentication(self, api_client, db):
        response = api_client.get(reverse('calendar_events:event-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_manager_creates_event(self, manager_client):
        response = manager_client.post(reverse('calendar_events:event-list'), {
            'title': 'Engagement shoot',
            'start_time': '2026-10-20T07:00:00Z',
            'end_time': '2026-10-20T10:00:00Z',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['title'] == 'Engagement shoot'

    def test_regular_user_cannot_create(self, authenticated_client):
        response = authenticated_client.post(reverse('calendar_events:event-list'), {
            'title': 'Engagement shoot',
            'start_time': '2026-10-20T07:00:00Z',
            'end_time': '2026-10-20T10:00:00Z',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not CalendarEvent.objects.exists()

    def test_create_end_before_start(self, manager_client):
        response = manager_client.post(reverse('calendar_events:event-list'), {
            'title': 'Backwards',
            'start_time': '2026-10-20T10:00:00Z',
            'end_time': '2026-10-20T07:00:00Z',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_is_paginated_by_ten(self, authenticated_client, make_event):
        for day in range(1, 13):
            make_event(f'Shoot {day}', datetime(2026, 10, day, 9, 0))

        response = authenticated_client.get(reverse('calendar_events:event-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 12
        assert len(response.data['results']) == 10
        assert response.data['results'][0]['title'] == 'Shoot 1'

    def test_list_rejects_inverted_dates(self, authenticated_client, db):
        response = authenticated_client.get(reverse('calendar_events:event-list'), {
            'start_date': '2026-10-20',
            'end_date': '2026-10-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_regular_user_reads_event(self, authenticated_client, october):
        url = reverse('calendar_events:event-detail', args=[october['shoot'].id])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Mehta shoot'

    def test_partial_update_checks_stored_times(self, manager_client, october):
        url = reverse('calendar_events:event-detail', args=[october['shoot'].id])
        response = manager_client.patch(url, {'end_time': '2026-10-14T10:00:00Z'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_time' in response.data

    def test_regular_user_cannot_delete(self, authenticated_client, october):
        url = reverse('calendar_events:event-detail', args=[october['shoot'].id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_manager_deletes(self, manager_client, october):
        url = reverse('calendar_events:event-detail', args=[october['shoot'].id])

        assert manager_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert manager_client.get(url).status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Calendar View Endpoints
# =============================================================================

@pytest.mark.django_db
class TestCalendarViewEndpoints:

    def test_range(self, authenticated_client, october):
        response = authenticated_client.get(reverse('calendar_events:event-range'), {
            'start_date': '2026-10-11',
            'end_date': '2026-10-17',
        })

        assert response.status_code == status.HTTP_200_OK
        assert [e['title'] for e in response.data] == ['Edit session', 'Mehta shoot', 'Client meeting']

    @pytest.mark.parametrize('params', [
        {'start_date': '2026-10-11'},
        {'end_date': '2026-10-17'},
        {'start_date': '2026-10-17', 'end_date': '2026-10-11'},
    ])
    def test_range_needs_both_dates_in_order(self, authenticated_client, db, params):
        response = authenticated_client.get(reverse('calendar_events:event-range'), params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_upcoming(self, authenticated_client, make_event):
        now = timezone.now()
        make_event('Started', now - timedelta(hours=1), hours=2)
        make_event('Soon', now + timedelta(hours=1))
        make_event('Later', now + timedelta(days=1))

        response = authenticated_client.get(reverse('calendar_events:event-upcoming'), {'limit': 1})

        assert response.status_code == status.HTTP_200_OK
        assert [e['title'] for e in response.data] == ['Soon']

    @pytest.mark.parametrize('limit', [0, 51])
    def test_upcoming_limit_bounds(self, authenticated_client, db, limit):
        response = authenticated_client.get(reverse('calendar_events:event-upcoming'), {'limit': limit})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_today_week_month(self, authenticated_client, make_event):
        now = timezone.localtime()
        make_event('Right now', now, hours=1)

        for name in ['today', 'week', 'month']:
            response = authenticated_client.get(reverse(f'calendar_events:event-{name}'))

            assert response.status_code == status.HTTP_200_OK
            assert [e['title'] for e in response.data] == ['Right now']

    def test_stats(self, authenticated_client, make_event):
        now = timezone.now()
        make_event('Done', now - timedelta(days=400))
        make_event('Ahead', now + timedelta(days=400))

        response = authenticated_client.get(reverse('calendar_events:event-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_events'] == 2
        assert response.data['upcoming_events'] == 1
        assert response.data['past_events'] == 1
        assert response.data['events_this_month'] == 0
