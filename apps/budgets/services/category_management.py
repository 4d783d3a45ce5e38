"""Budget category CRUD operations service."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any, List

from django.db import transaction
from django.db.models import Sum

from ..models import BudgetCategory
from .overview import FULL_ALLOCATION, allocate, get_current_balance
from .exceptions import (
    BudgetCategoryNotFoundError,
    DuplicateBudgetCategoryError,
    BudgetAllocationExceededError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['name', 'percentage', 'color', 'description']


def _with_amount(category: BudgetCategory, balance: Decimal) -> BudgetCategory:
    category.amount = allocate(category.percentage, balance)
    return category


def _check_name(name: str, exclude_id: Optional[int] = None) -> None:
    queryset = BudgetCategory.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateBudgetCategoryError(f"Budget category '{name}' already exists")


def _check_allocation(percentage: Decimal, exclude_id: Optional[int] = None) -> None:
    others = BudgetCategory.objects.select_for_update()
    if exclude_id is not None:
        others = others.exclude(id=exclude_id)
    # Lock the rows, then sum; aggregates cannot be taken FOR UPDATE
    allocated = sum((c.percentage for c in others), Decimal('0'))
    if allocated + percentage > FULL_ALLOCATION:
        raise BudgetAllocationExceededError(
            f"Budget categories would be allocated {allocated + percentage}% (max 100%)"
        )


@transaction.atomic
def create_budget_category(
    *,
    name: str,
    percentage: Decimal,
    color: str,
    description: str = '',
) -> BudgetCategory:
    """
    Create a budget category.

    Returns:
        Created BudgetCategory with its current `amount`

    Raises:
        DuplicateBudgetCategoryError: If the name is taken (case-insensitive)
        BudgetAllocationExceededError: If percentages would exceed 100
    """
    _check_name(name)
    _check_allocation(percentage)

    category = BudgetCategory.objects.create(
        name=name,
        percentage=percentage,
        color=color,
        description=description,
    )

    logger.info("Budget category created: %s (%s%%)", category.name, category.percentage)
    return _with_amount(category, get_current_balance())


def get_budget_category_by_id(*, category_id: int) -> BudgetCategory:
    """
    Get budget category by ID, with its current `amount`.

    Raises:
        BudgetCategoryNotFoundError: If category doesn't exist
    """
    try:
        category = BudgetCategory.objects.get(id=category_id)
    except BudgetCategory.DoesNotExist:
        raise BudgetCategoryNotFoundError(f"Budget category {category_id} not found")
    return _with_amount(category, get_current_balance())


@transaction.atomic
def update_budget_category(*, category_id: int, data: Dict[str, Any]) -> BudgetCategory:
    """
    Update a budget category.

    Raises:
        BudgetCategoryNotFoundError: If category doesn't exist
        DuplicateBudgetCategoryError: If the new name is taken
        BudgetAllocationExceededError: If percentages would exceed 100
    """
    try:
        category = BudgetCategory.objects.select_for_update().get(id=category_id)
    except BudgetCategory.DoesNotExist:
        raise BudgetCategoryNotFoundError(f"Budget category {category_id} not found")

    if 'name' in data:
        _check_name(data['name'], exclude_id=category.id)
    if 'percentage' in data:
        _check_allocation(data['percentage'], exclude_id=category.id)

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(category, field, value)

    category.save()

    logger.info("Budget category updated: %s", category.name)
    return _with_amount(category, get_current_balance())


@transaction.atomic
def delete_budget_category(*, category_id: int) -> None:
    """
    Delete a budget category.

    Raises:
        BudgetCategoryNotFoundError: If category doesn't exist
    """
    try:
        category = BudgetCategory.objects.select_for_update().get(id=category_id)
    except BudgetCategory.DoesNotExist:
        raise BudgetCategoryNotFoundError(f"Budget category {category_id} not found")

    name = category.name
    category.delete()
    logger.info("Budget category deleted: %s", name)


def get_budget_categories() -> Dict[str, Any]:
    """
    List categories with the amount each receives from the current balance.

    Returns:
        Dict with categories, current_balance, allocated_percentage and
        unallocated_percentage
    """
    balance = get_current_balance()
    categories: List[BudgetCategory] = [
        _with_amount(category, balance)
        for category in BudgetCategory.objects.all()
    ]
    allocated = BudgetCategory.objects.aggregate(total=Sum('percentage'))['total'] or Decimal('0')

    return {
        'categories': categories,
        'current_balance': balance,
        'allocated_percentage': allocated,
        'unallocated_percentage': FULL_ALLOCATION - allocated,
    }
