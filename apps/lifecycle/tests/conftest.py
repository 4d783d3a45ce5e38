import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.finances.models import Income, IncomeStatus, Expense
from apps.projects.models import Client, Project, ProjectStatus
from apps.projects.services import recompute_project_finances


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Studio Owner',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def manager_user(db):
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Studio Manager',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff Member',
    )


@pytest.fixture
def admin_api_client(admin_user):
    """API client authenticated as an admin."""
    return _client_for(admin_user)


@pytest.fixture
def manager_api_client(manager_user):
    """API client authenticated as a manager."""
    return _client_for(manager_user)


@pytest.fixture
def user_api_client(user):
    """API client authenticated as a regular user."""
    return _client_for(user)


@pytest.fixture
def studio_client(db):
    return Client.objects.create(name='Kiran Das', company='Das Studio')


@pytest.fixture
def make_project(studio_client):
    """
    Factory creating a project with a consistent ledger.

    A PENDING "Project Payment" placeholder for the full amount is created the
    way project creation does it, then one RECEIVED income per entry in
    `received` and one expense per entry in `expenses`.
    """
    def _make(
        name='Das Wedding',
        amount=Decimal('100000.00'),
        status=ProjectStatus.IN_PROGRESS,
        received=(),
        expenses=(),
        outsourcing_amt=Decimal('0.00'),
        with_pending=True,
        **fields,
    ):
        project = Project.objects.create(
            client=studio_client,
            name=name,
            amount=amount,
            outsourcing_amt=outsourcing_amt,
            status=status,
            **fields,
        )
        project.code = Project.generate_code(project.id)
        project.save(update_fields=['code'])

        if with_pending and amount > 0:
            Income.objects.create(
                project=project,
                description=f'Project Payment - {name}',
                amount=amount,
                status=IncomeStatus.PENDING,
                placeholder=True,
                project_income=True,
            )
        for value in received:
            Income.objects.create(
                project=project,
                description='Advance',
                amount=Decimal(value),
                project_income=True,
            )
        for value in expenses:
            Expense.objects.create(
                project=project,
                category='Crew',
                description='Crew',
                amount=Decimal(value),
                project_expense=True,
            )

        return recompute_project_finances(project_id=project.id)

    return _make
