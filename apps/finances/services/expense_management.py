"""Expense CRUD operations service."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any, List

from django.db import transaction
from django.db.models import Q, Sum, Count

from apps.projects.models import Project
from apps.projects.services import recompute_project_finances
from ..models import Expense
from .exceptions import ExpenseNotFoundError, InvalidProjectReferenceError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['date', 'category', 'description', 'amount', 'notes', 'project_expense']


def _validate_project(project_id) -> Optional[Project]:
    if project_id is None:
        return None
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise InvalidProjectReferenceError("Project not found")


def _date_filtered(queryset, start_date, end_date):
    if start_date:
        queryset = queryset.filter(date__date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__date__lte=end_date)
    return queryset


@transaction.atomic
def create_expense(
    *,
    category: str,
    description: str,
    amount: Decimal,
    date=None,
    notes: str = '',
    project_expense: bool = False,
    project_id: Optional[int] = None,
) -> Expense:
    """
    Create an expense entry and recompute its project.

    Raises:
        InvalidProjectReferenceError: If project doesn't exist
    """
    project = _validate_project(project_id)

    fields = {
        'category': category,
        'description': description,
        'amount': amount,
        'notes': notes,
        'project_expense': project_expense or project is not None,
        'project': project,
    }
    if date is not None:
        fields['date'] = date

    expense = Expense.objects.create(**fields)

    if project is not None:
        recompute_project_finances(project_id=project.id)

    logger.info("Expense created: %s - %s %s", expense.id, expense.category, expense.amount)
    return expense


def get_expense_by_id(*, expense_id: int) -> Expense:
    """
    Get expense by ID.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        return Expense.objects.select_related('project').get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")


@transaction.atomic
def update_expense(*, expense_id: int, data: Dict[str, Any]) -> Expense:
    """
    Update an expense entry.

    Recomputes the owning project, and the previous one when the entry
    moved between projects.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InvalidProjectReferenceError: If new project doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")

    old_project_id = expense.project_id

    if 'project_id' in data:
        expense.project = _validate_project(data['project_id'])

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(expense, field, value)

    expense.save()

    for project_id in {old_project_id, expense.project_id} - {None}:
        recompute_project_finances(project_id=project_id)

    return expense


@transaction.atomic
def delete_expense(*, expense_id: int) -> None:
    """
    Delete an expense entry and recompute its project.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")

    project_id = expense.project_id
    expense.delete()

    if project_id is not None:
        recompute_project_finances(project_id=project_id)

    logger.info("Expense deleted: %s", expense_id)


def list_expenses(
    *,
    search: Optional[str] = None,
    project_id: Optional[int] = None,
    category: Optional[str] = None,
    start_date=None,
    end_date=None,
):
    """Filter expenses by text, project, category and date range."""
    queryset = Expense.objects.select_related('project')

    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) |
            Q(category__icontains=search) |
            Q(notes__icontains=search)
        )

    if project_id:
        queryset = queryset.filter(project_id=project_id)

    if category:
        queryset = queryset.filter(category__iexact=category)

    return _date_filtered(queryset, start_date, end_date)


def get_expense_categories() -> List[str]:
    """Get distinct expense categories, sorted."""
    return list(
        Expense.objects
        .order_by('category')
        .values_list('category', flat=True)
        .distinct()
    )


def get_categorized_expense_totals(*, start_date=None, end_date=None) -> Dict[str, Any]:
    """
    Sum expenses per category.

    Returns:
        Dict with 'categories' (category, total, count; largest first)
        and 'grand_total'
    """
    queryset = _date_filtered(Expense.objects.all(), start_date, end_date)
    rows = (
        queryset
        .values('category')
        .annotate(total=Sum('amount'), count=Count('id'))
        .order_by('-total')
    )
    categories = [
        {'category': row['category'], 'total': row['total'], 'count': row['count']}
        for row in rows
    ]
    return {
        'categories': categories,
        'grand_total': sum((c['total'] for c in categories), Decimal('0.00')),
    }
