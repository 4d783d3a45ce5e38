import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Client, Project, ProjectStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a studio user."""
    return User.objects.create_user(
        email='accounts@example.com',
        password='TestPass123!',
        display_name='Accounts',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def studio_client(db):
    return Client.objects.create(name='Meera Iyer', company='Iyer Events')


def _make_project(client, name, amount):
    project = Project.objects.create(
        client=client,
        name=name,
        amount=amount,
        pending_amt=amount,
        profit=amount,
        status=ProjectStatus.IN_PROGRESS,
    )
    project.code = Project.generate_code(project.id)
    project.save(update_fields=['code'])
    return project


@pytest.fixture
def project(studio_client):
    """Project worth 100000 with derived fields matching an empty ledger."""
    return _make_project(studio_client, 'Iyer Reception', Decimal('100000.00'))


@pytest.fixture
def other_project(studio_client):
    """Second project worth 50000."""
    return _make_project(studio_client, 'Iyer Sangeet', Decimal('50000.00'))
