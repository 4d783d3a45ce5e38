import pytest
from datetime import datetime
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.budgets.models import BudgetCategory
from apps.finances.models import Income, IncomeStatus, Expense


def _aware(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a studio user."""
    return User.objects.create_user(
        email='budget@example.com',
        password='TestPass123!',
        display_name='Budget Owner',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def ledger(db):
    """
    Balance of 80000: 100000 received, 20000 spent.

    A pending income and a contract placeholder sit beside them and must
    never count as money in hand.
    """
    Income.objects.create(description='Wedding advance', amount=Decimal('60000.00'), date=_aware(2026, 3, 2))
    Income.objects.create(description='Print sale', amount=Decimal('40000.00'), date=_aware(2026, 1, 20))
    Income.objects.create(
        description='Invoice sent',
        amount=Decimal('25000.00'),
        status=IncomeStatus.PENDING,
        date=_aware(2026, 3, 5),
    )
    Income.objects.create(
        description='Project Payment Received - Iyer Reception',
        amount=Decimal('90000.00'),
        project_income=True,
        placeholder=True,
        status=IncomeStatus.RECEIVED,
        date=_aware(2026, 3, 6),
    )
    Expense.objects.create(category='Gear', description='Lens', amount=Decimal('20000.00'), date=_aware(2026, 2, 1))


@pytest.fixture
def categories(db):
    """Savings 50% and Equipment 25%, leaving 25% unallocated."""
    return [
        BudgetCategory.objects.create(name='Savings', percentage=Decimal('50.00'), color='#4CAF50'),
        BudgetCategory.objects.create(name='Equipment', percentage=Decimal('25.00'), color='#2196F3'),
    ]
