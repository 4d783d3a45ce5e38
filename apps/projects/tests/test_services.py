"""
Service layer tests for projects app.

Tests cover:
- Project creation side effects (code, pending income, status, finances)
- Updates that touch amount, status and shoot dates
- Delete protection
- Ledger aggregation
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from apps.finances.models import Income, IncomeStatus, Expense
from apps.lifecycle.models import ProjectCompletionEvent
from apps.projects.models import Project, ProjectStatus
from apps.projects.services import (
    create_project,
    get_project_by_code,
    get_project_by_id,
    list_projects,
    update_project,
    delete_project,
    get_project_codes,
    get_project_stats,
    calculate_expected_finances,
    recompute_project_finances,
)
from apps.projects.services.exceptions import (
    ProjectNotFoundError,
    InvalidClientError,
    ProjectHasLedgerEntriesError,
)


# =============================================================================
# Project Creation Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateProject:
    """Tests for create_project()."""

    def test_create_project_assigns_code(self, studio_client, settings):
        settings.PROJECT_CODE_PREFIX = 'CYM'
        project = create_project(client_id=studio_client.id, name='Portraits')

        assert project.code == f'CYM-{project.id}'

    def test_create_project_creates_pending_income(self, studio_client):
        project = create_project(
            client_id=studio_client.id,
            name='Portraits',
            amount=Decimal('50000.00'),
            outsourcing_amt=Decimal('2000.00'),
        )

        income = Income.objects.get(project=project)
        assert income.status == IncomeStatus.PENDING
        assert income.amount == Decimal('50000.00')
        assert income.description == 'Project Payment - Portraits'
        assert income.project_income is True
        assert income.placeholder is True

        # Pending income is not money received
        assert project.received_amt == Decimal('0.00')
        assert project.pending_amt == Decimal('50000.00')
        assert project.profit == Decimal('48000.00')

    def test_create_zero_amount_project_has_no_income(self, studio_client):
        project = create_project(client_id=studio_client.id, name='Free Shoot')

        assert not Income.objects.filter(project=project).exists()

    def test_create_project_pending_income_uses_code_without_name(self, studio_client):
        project = create_project(client_id=studio_client.id, amount=Decimal('1000.00'))

        income = Income.objects.get(project=project)
        assert income.description == f'Project Payment - {project.code}'

    def test_create_project_invalid_client(self, db):
        with pytest.raises(InvalidClientError, match='Client not found'):
            create_project(client_id=99999, name='Nobody')

    def test_create_project_uppercases_status(self, studio_client):
        project = create_project(client_id=studio_client.id, status='on_hold')

        assert project.status == ProjectStatus.ON_HOLD

    def test_create_project_applies_date_status(self, studio_client):
        today = timezone.localdate()
        project = create_project(
            client_id=studio_client.id,
            shoot_start_date=today - timedelta(days=1),
            shoot_end_date=today + timedelta(days=1),
        )

        assert project.status == ProjectStatus.IN_PROGRESS

    def test_create_project_explicit_status_skips_date_status(self, studio_client):
        today = timezone.localdate()
        project = create_project(
            client_id=studio_client.id,
            status='NOT_STARTED',
            shoot_start_date=today - timedelta(days=1),
        )

        assert project.status == ProjectStatus.NOT_STARTED

    def test_create_project_with_past_shoot_completes_without_being_paid(self, studio_client):
        today = timezone.localdate()
        project = create_project(
            client_id=studio_client.id,
            name='Old Shoot',
            amount=Decimal('30000.00'),
            shoot_start_date=today - timedelta(days=10),
            shoot_end_date=today - timedelta(days=5),
        )

        assert project.status == ProjectStatus.COMPLETED
        income = Income.objects.get(project=project)
        assert income.status == IncomeStatus.RECEIVED
        assert income.description == 'Project Payment Received - Old Shoot'
        assert income.amount == Decimal('30000.00')
        assert income.placeholder is True

        # Completion relabels the placeholder; no money was received
        assert project.received_amt == Decimal('0.00')
        assert project.pending_amt == Decimal('30000.00')
        assert ProjectCompletionEvent.objects.filter(project=project).count() == 1


# =============================================================================
# Lookup Tests
# =============================================================================

@pytest.mark.django_db
class TestProjectLookup:
    """Tests for get/list helpers."""

    def test_get_project_by_id(self, project):
        assert get_project_by_id(project_id=project.id) == project

    def test_get_project_by_id_not_found(self, db):
        with pytest.raises(ProjectNotFoundError):
            get_project_by_id(project_id=99999)

    def test_get_project_by_code_is_case_insensitive(self, project):
        assert get_project_by_code(code=project.code.lower()) == project

    def test_get_project_by_code_not_found(self, db):
        with pytest.raises(ProjectNotFoundError):
            get_project_by_code(code='CYM-0')

    def test_list_projects_filters_by_status_list(self, studio_client, project):
        Project.objects.create(client=studio_client, name='Held', status=ProjectStatus.ON_HOLD)
        Project.objects.create(client=studio_client, name='Done', status=ProjectStatus.COMPLETED)

        names = set(list_projects(status='in_progress,on_hold').values_list('name', flat=True))

        assert names == {'Rao Wedding', 'Held'}

    def test_list_projects_search_matches_client_name(self, project):
        assert list(list_projects(search='asha')) == [project]

    def test_get_project_codes(self, project):
        codes = get_project_codes()

        assert codes == [{'id': project.id, 'code': project.code, 'name': 'Rao Wedding'}]

    def test_get_project_stats(self, studio_client, project):
        Project.objects.create(client=studio_client, type='Wedding', amount=Decimal('20000.00'))

        stats = get_project_stats()

        assert stats['total_projects'] == 2
        assert stats['total_revenue'] == Decimal('120000.00')
        assert {'status': ProjectStatus.IN_PROGRESS, 'count': 1} in stats['status_breakdown']
        assert stats['type_breakdown'] == [{'type': 'Wedding', 'count': 1}]


# =============================================================================
# Project Update Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateProject:
    """Tests for update_project()."""

    def test_update_amount_syncs_pending_income(self, studio_client):
        project = create_project(client_id=studio_client.id, name='Sync', amount=Decimal('10000.00'))

        updated = update_project(project_id=project.id, data={'amount': Decimal('12000.00')})

        income = Income.objects.get(project=project)
        assert income.amount == Decimal('12000.00')
        assert updated.pending_amt == Decimal('12000.00')

    def test_update_status_to_completed_converts_income(self, studio_client, user):
        project = create_project(client_id=studio_client.id, name='Manual', amount=Decimal('8000.00'))

        updated = update_project(
            project_id=project.id,
            data={'status': 'completed'},
            updated_by=user,
        )

        assert updated.status == ProjectStatus.COMPLETED
        assert Income.objects.get(project=project).status == IncomeStatus.RECEIVED
        event = ProjectCompletionEvent.objects.get(project=project)
        assert event.reason == 'Manual status change to completed'
        assert event.admin_override is True
        assert event.triggered_by == user

    def test_update_dates_reapplies_transition(self, project):
        project.status = ProjectStatus.NOT_STARTED
        project.save()
        today = timezone.localdate()

        updated = update_project(
            project_id=project.id,
            data={'shoot_start_date': today - timedelta(days=1)},
        )

        assert updated.status == ProjectStatus.IN_PROGRESS

    def test_update_dates_with_explicit_status_keeps_status(self, project):
        today = timezone.localdate()

        updated = update_project(
            project_id=project.id,
            data={'shoot_start_date': today + timedelta(days=3), 'status': 'IN_PROGRESS'},
        )

        assert updated.status == ProjectStatus.IN_PROGRESS

    def test_update_completed_project_can_be_reopened(self, project):
        project.status = ProjectStatus.COMPLETED
        project.save()

        updated = update_project(project_id=project.id, data={'status': 'IN_PROGRESS'})

        assert updated.status == ProjectStatus.IN_PROGRESS

    def test_update_invalid_client(self, project):
        with pytest.raises(InvalidClientError):
            update_project(project_id=project.id, data={'client_id': 99999})

    def test_update_not_found(self, db):
        with pytest.raises(ProjectNotFoundError):
            update_project(project_id=99999, data={'name': 'x'})


# =============================================================================
# Project Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteProject:
    """Tests for delete_project()."""

    def test_delete_project_without_ledger(self, project):
        delete_project(project_id=project.id)

        assert not Project.objects.filter(id=project.id).exists()

    def test_delete_project_with_ledger_conflicts(self, project):
        Expense.objects.create(project=project, category='Travel', description='Taxi', amount=Decimal('500.00'))

        with pytest.raises(ProjectHasLedgerEntriesError, match='existing financial records'):
            delete_project(project_id=project.id)

        assert Project.objects.filter(id=project.id).exists()

    def test_force_delete_removes_ledger(self, project):
        Expense.objects.create(project=project, category='Travel', description='Taxi', amount=Decimal('500.00'))
        Income.objects.create(project=project, description='Advance', amount=Decimal('1000.00'))

        delete_project(project_id=project.id, force=True)

        assert not Project.objects.filter(id=project.id).exists()
        assert not Income.objects.exists()
        assert not Expense.objects.exists()

    def test_delete_not_found(self, db):
        with pytest.raises(ProjectNotFoundError):
            delete_project(project_id=99999)


# =============================================================================
# Ledger Aggregation Tests
# =============================================================================

@pytest.mark.django_db
class TestLedger:
    """Tests for calculate_expected_finances() and recompute_project_finances()."""

    def test_received_is_sum_of_received_incomes(self, project):
        Income.objects.create(project=project, description='Advance', amount=Decimal('25000.00'))
        Income.objects.create(project=project, description='Second', amount=Decimal('15000.50'))
        Income.objects.create(
            project=project,
            description='Project Payment - Rao Wedding',
            amount=Decimal('100000.00'),
            status=IncomeStatus.PENDING,
            placeholder=True,
        )

        updated = recompute_project_finances(project_id=project.id)

        assert updated.received_amt == Decimal('40000.50')
        assert updated.pending_amt == Decimal('59999.50')

    def test_relabelled_placeholder_is_not_received(self, project):
        Income.objects.create(project=project, description='Advance', amount=Decimal('85000.00'))
        Income.objects.create(
            project=project,
            description='Project Payment Received - Rao Wedding',
            amount=Decimal('100000.00'),
            status=IncomeStatus.RECEIVED,
            placeholder=True,
        )

        finances = calculate_expected_finances(project)

        assert finances.received_amt == Decimal('85000.00')
        assert finances.pending_amt == Decimal('15000.00')
        assert finances.total_income == Decimal('85000.00')

    def test_profit_subtracts_outsourcing_and_expenses(self, project):
        Expense.objects.create(project=project, category='Crew', description='Assistant', amount=Decimal('10000.00'))

        updated = recompute_project_finances(project_id=project.id)

        assert updated.profit == Decimal('85000.00')

    def test_overpayment_gives_negative_pending(self, project):
        Income.objects.create(project=project, description='Paid', amount=Decimal('120000.00'))

        updated = recompute_project_finances(project_id=project.id)

        assert updated.pending_amt == Decimal('-20000.00')

    def test_recompute_is_idempotent(self, project):
        Income.objects.create(project=project, description='Advance', amount=Decimal('33333.33'))
        Expense.objects.create(project=project, category='Gear', description='Lens', amount=Decimal('777.77'))

        first = recompute_project_finances(project_id=project.id)
        first_values = (first.received_amt, first.pending_amt, first.profit)
        second = recompute_project_finances(project_id=project.id)

        assert (second.received_amt, second.pending_amt, second.profit) == first_values

    def test_calculate_expected_finances_does_not_write(self, project):
        Income.objects.create(project=project, description='Advance', amount=Decimal('1000.00'))

        finances = calculate_expected_finances(project)
        project.refresh_from_db()

        assert finances.received_amt == Decimal('1000.00')
        assert finances.total_income == Decimal('1000.00')
        assert project.received_amt == Decimal('0.00')

    def test_recompute_not_found(self, db):
        with pytest.raises(ProjectNotFoundError):
            recompute_project_finances(project_id=99999)
