"""
Service layer tests for budgets app.

Category amounts and the overview are derived from received money only.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from django.utils import timezone

from apps.budgets.models import BudgetCategory
from apps.budgets.services import (
    allocate,
    create_budget_category,
    get_budget_category_by_id,
    update_budget_category,
    delete_budget_category,
    get_budget_categories,
    get_current_balance,
    get_monthly_received,
    get_budget_overview,
)
from apps.budgets.services.exceptions import (
    BudgetCategoryNotFoundError,
    DuplicateBudgetCategoryError,
    BudgetAllocationExceededError,
)
from apps.finances.models import Income, Expense


def _aware(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


# =============================================================================
# Category Management Tests
# =============================================================================

@pytest.mark.django_db
class TestCategoryManagement:
    """Tests for category_management.py service functions."""

    def test_create_category_with_amount(self, ledger):
        category = create_budget_category(
            name='Savings',
            percentage=Decimal('30.00'),
            color='#4CAF50',
            description='Rainy day fund',
        )

        assert category.id is not None
        assert category.amount == Decimal('24000.00')

    def test_create_duplicate_name_ignores_case(self, categories):
        with pytest.raises(DuplicateBudgetCategoryError):
            create_budget_category(name='savings', percentage=Decimal('5.00'), color='#000000')

    def test_create_over_allocation(self, categories):
        with pytest.raises(BudgetAllocationExceededError):
            create_budget_category(name='Travel', percentage=Decimal('25.01'), color='#FF9800')

        assert not BudgetCategory.objects.filter(name='Travel').exists()

    def test_create_up_to_full_allocation(self, categories):
        category = create_budget_category(name='Travel', percentage=Decimal('25.00'), color='#FF9800')

        assert category.percentage == Decimal('25.00')

    def test_update_own_percentage_is_not_double_counted(self, categories):
        savings = categories[0]

        updated = update_budget_category(
            category_id=savings.id,
            data={'percentage': Decimal('75.00')},
        )

        assert updated.percentage == Decimal('75.00')

    def test_update_over_allocation(self, categories):
        with pytest.raises(BudgetAllocationExceededError):
            update_budget_category(category_id=categories[0].id, data={'percentage': Decimal('76.00')})

        categories[0].refresh_from_db()
        assert categories[0].percentage == Decimal('50.00')

    def test_update_to_taken_name(self, categories):
        with pytest.raises(DuplicateBudgetCategoryError):
            update_budget_category(category_id=categories[1].id, data={'name': 'SAVINGS'})

    def test_update_keeps_own_name(self, categories):
        updated = update_budget_category(
            category_id=categories[0].id,
            data={'name': 'Savings', 'color': '#111111'},
        )

        assert updated.color == '#111111'

    def test_update_unknown(self, db):
        with pytest.raises(BudgetCategoryNotFoundError):
            update_budget_category(category_id=99999, data={'color': '#111111'})

    def test_get_and_delete(self, categories):
        category = get_budget_category_by_id(category_id=categories[1].id)
        assert category.name == 'Equipment'

        delete_budget_category(category_id=category.id)

        with pytest.raises(BudgetCategoryNotFoundError):
            get_budget_category_by_id(category_id=category.id)

    def test_delete_unknown(self, db):
        with pytest.raises(BudgetCategoryNotFoundError):
            delete_budget_category(category_id=99999)

    def test_list_categories(self, ledger, categories):
        data = get_budget_categories()

        assert data['current_balance'] == Decimal('80000.00')
        assert data['allocated_percentage'] == Decimal('75.00')
        assert data['unallocated_percentage'] == Decimal('25.00')
        amounts = {c.name: c.amount for c in data['categories']}
        assert amounts == {'Equipment': Decimal('20000.00'), 'Savings': Decimal('40000.00')}

    def test_list_without_categories(self, db):
        data = get_budget_categories()

        assert data['categories'] == []
        assert data['allocated_percentage'] == Decimal('0')
        assert data['unallocated_percentage'] == Decimal('100')


# =============================================================================
# Overview Tests
# =============================================================================

@pytest.mark.django_db
class TestOverview:
    """Tests for overview.py service functions."""

    def test_allocate_rounds_to_cents(self):
        assert allocate(Decimal('33.33'), Decimal('100.00')) == Decimal('33.33')
        assert allocate(Decimal('12.5'), Decimal('0.20')) == Decimal('0.03')

    def test_balance_ignores_pending_and_placeholders(self, ledger):
        assert get_current_balance() == Decimal('80000.00')

    def test_negative_balance(self, db):
        Expense.objects.create(category='Rent', description='Studio', amount=Decimal('500.00'))

        assert get_current_balance() == Decimal('-500.00')

    def test_monthly_chart_covers_twelve_months(self, ledger):
        Income.objects.create(description='Old job', amount=Decimal('7000.00'), date=_aware(2025, 4, 10))
        Income.objects.create(description='Too old', amount=Decimal('9000.00'), date=_aware(2025, 3, 10))

        chart = get_monthly_received(today=date(2026, 3, 15))

        assert len(chart) == 12
        assert chart[0] == {'month': 'APR', 'value': Decimal('7000.00')}
        assert chart[-1] == {'month': 'MAR', 'value': Decimal('60000.00')}
        by_month = {row['month']: row['value'] for row in chart}
        assert by_month['JAN'] == Decimal('40000.00')
        assert by_month['FEB'] == Decimal('0.00')

    def test_overview(self, ledger, categories):
        data = get_budget_overview(today=date(2026, 3, 15))

        assert data['current_balance'] == Decimal('80000.00')
        assert data['received_amount_this_month'] == Decimal('60000.00')
        assert len(data['total_received_chart']) == 12
        assert data['budget_split_up'] == [
            {'name': 'Equipment', 'amount': Decimal('20000.00'), 'color': '#2196F3'},
            {'name': 'Savings', 'amount': Decimal('40000.00'), 'color': '#4CAF50'},
        ]
