"""
Tests for completion evaluation and the completion path.
"""

import datetime

import pytest
from decimal import Decimal

from apps.finances.models import Income, IncomeStatus
from apps.lifecycle.models import ProjectCompletionEvent
from apps.lifecycle.services import (
    check_completion_criteria,
    mark_project_complete,
    auto_complete_projects,
    get_completion_stats,
    ProjectNotFoundError,
    MissingCompletionReasonError,
)
from apps.lifecycle.services import completion
from apps.projects.models import ProjectStatus


TODAY = datetime.date(2024, 6, 15)
YESTERDAY = TODAY - datetime.timedelta(days=1)
TOMORROW = TODAY + datetime.timedelta(days=1)


# =============================================================================
# Completion Criteria
# =============================================================================

@pytest.mark.django_db
class TestCheckCompletionCriteria:

    def test_underpaid_after_end_date(self, make_project):
        project = make_project(
            received=['60000.00'],
            expenses=['10000.00'],
            outsourcing_amt=Decimal('5000.00'),
            shoot_end_date=YESTERDAY,
        )

        assert project.received_amt == Decimal('60000.00')
        assert project.pending_amt == Decimal('40000.00')
        assert project.profit == Decimal('85000.00')

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.should_complete is False
        assert result.reason == ''
        assert result.criteria.fully_paid is False
        assert result.criteria.date_passed_with_partial_payment is False

    def test_threshold_reached_after_end_date(self, make_project):
        project = make_project(received=['85000.00'], shoot_end_date=YESTERDAY)

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.should_complete is True
        assert result.reason == 'Shoot end date passed with 80% payment received'

    def test_threshold_is_inclusive(self, make_project):
        project = make_project(received=['80000.00'], shoot_end_date=YESTERDAY)

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.criteria.date_passed_with_partial_payment is True

    def test_end_date_today_is_not_passed(self, make_project):
        project = make_project(received=['90000.00'], shoot_end_date=TODAY)

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.should_complete is False

    def test_fully_paid(self, make_project):
        project = make_project(received=['60000.00', '40000.00'], shoot_end_date=TOMORROW)

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.should_complete is True
        assert result.reason == 'Project fully paid'
        assert result.criteria.received_amount == Decimal('100000.00')

    def test_manual_status_takes_precedence(self, make_project):
        project = make_project(status=ProjectStatus.COMPLETED, received=['1000.00'])

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.should_complete is True
        assert result.reason == 'Manual status change to completed'
        assert result.criteria.fully_paid is False

    def test_reads_ledger_not_cached_fields(self, make_project):
        project = make_project(received=['100000.00'])
        project.received_amt = Decimal('0.00')
        project.save(update_fields=['received_amt'])

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.criteria.fully_paid is True

    def test_zero_amount_counts_as_fully_paid(self, make_project):
        project = make_project(amount=Decimal('0.00'))

        result = check_completion_criteria(project_id=project.id, today=TODAY)

        assert result.reason == 'Project fully paid'

    def test_unknown_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            check_completion_criteria(project_id=99999)


# =============================================================================
# Mark Complete
# =============================================================================

@pytest.mark.django_db
class TestMarkProjectComplete:

    def test_completes_and_converts_pending(self, make_project, admin_user):
        project = make_project(received=['85000.00'], shoot_end_date=YESTERDAY)

        project = mark_project_complete(
            project_id=project.id,
            reason='Client signed off',
            admin_override=True,
            triggered_by=admin_user,
        )

        assert project.status == ProjectStatus.COMPLETED
        assert not Income.objects.filter(project=project, status=IncomeStatus.PENDING).exists()

        # The outstanding 15000 is still owed after completion
        assert project.received_amt == Decimal('85000.00')
        assert project.pending_amt == Decimal('15000.00')

        event = ProjectCompletionEvent.objects.get(project=project)
        assert event.reason == 'Client signed off'
        assert event.admin_override is True
        assert event.triggered_by == admin_user
        assert event.is_automatic is False

    def test_already_completed_is_noop(self, make_project):
        project = make_project(status=ProjectStatus.COMPLETED)

        mark_project_complete(project_id=project.id, reason='Again')

        assert ProjectCompletionEvent.objects.count() == 0
        assert Income.objects.filter(project=project, status=IncomeStatus.PENDING).count() == 1

    def test_reason_required(self, make_project):
        project = make_project()

        with pytest.raises(MissingCompletionReasonError):
            mark_project_complete(project_id=project.id, reason='')

        project.refresh_from_db()
        assert project.status == ProjectStatus.IN_PROGRESS

    def test_unknown_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            mark_project_complete(project_id=99999, reason='Done')


# =============================================================================
# Auto Completion
# =============================================================================

@pytest.mark.django_db
class TestAutoCompleteProjects:

    def test_partial_failure_does_not_stop_pass(self, make_project, monkeypatch):
        a = make_project(name='A', received=['100000.00'])
        b = make_project(name='B', received=['100000.00'])
        c = make_project(name='C', received=['100000.00'])
        real_check = completion.check_completion_criteria

        def flaky(*, project_id, today=None):
            if project_id == b.id:
                raise RuntimeError('ledger unavailable')
            return real_check(project_id=project_id, today=today)

        monkeypatch.setattr(completion, 'check_completion_criteria', flaky)

        result = auto_complete_projects(today=TODAY)

        assert result['completed'] == 2
        assert result['errors'] == 1
        failed = [d for d in result['details'] if not d['success']]
        assert failed == [{'project_id': b.id, 'reason': 'Error: ledger unavailable', 'success': False}]

        a.refresh_from_db()
        b.refresh_from_db()
        c.refresh_from_db()
        assert a.status == ProjectStatus.COMPLETED
        assert b.status == ProjectStatus.IN_PROGRESS
        assert c.status == ProjectStatus.COMPLETED

    def test_ineligible_projects_untouched(self, make_project):
        project = make_project(received=['10000.00'], shoot_end_date=YESTERDAY)

        result = auto_complete_projects(today=TODAY)

        assert result == {'completed': 0, 'errors': 0, 'details': []}
        project.refresh_from_db()
        assert project.status == ProjectStatus.IN_PROGRESS

    def test_on_hold_is_skipped(self, make_project):
        project = make_project(status=ProjectStatus.ON_HOLD, received=['100000.00'], shoot_end_date=YESTERDAY)

        result = auto_complete_projects(today=TODAY)

        assert result['completed'] == 0
        project.refresh_from_db()
        assert project.status == ProjectStatus.ON_HOLD

    def test_events_are_automatic(self, make_project):
        project = make_project(received=['90000.00'], shoot_end_date=YESTERDAY)

        auto_complete_projects(today=TODAY)

        event = ProjectCompletionEvent.objects.get(project=project)
        assert event.admin_override is False
        assert event.triggered_by is None
        assert event.reason == 'Shoot end date passed with 80% payment received'


@pytest.mark.django_db
class TestCompletionStats:

    def test_counts(self, make_project):
        make_project(name='Paid', received=['100000.00'])
        make_project(name='Open')
        done = make_project(name='Done')
        mark_project_complete(project_id=done.id, reason='By hand', admin_override=True)

        auto_complete_projects(today=TODAY)

        stats = get_completion_stats()
        assert stats == {
            'total_projects': 3,
            'completed_projects': 2,
            'pending_projects': 1,
            'auto_completed_this_month': 1,
        }
