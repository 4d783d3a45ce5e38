import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.projects.models import Client, Project, ProjectStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular studio user."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff Member',
    )


@pytest.fixture
def manager_user(db):
    """Create and return a manager."""
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Studio Manager',
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
def studio_client(db):
    """Create and return a billing client."""
    return Client.objects.create(
        name='Asha Rao',
        company='Rao Weddings',
        email='asha@example.com',
    )


@pytest.fixture
def project(studio_client):
    """Project with an amount but no ledger rows and no shoot dates."""
    project = Project.objects.create(
        client=studio_client,
        name='Rao Wedding',
        amount=Decimal('100000.00'),
        outsourcing_amt=Decimal('5000.00'),
        status=ProjectStatus.IN_PROGRESS,
    )
    project.code = Project.generate_code(project.id)
    project.save(update_fields=['code'])
    return project
