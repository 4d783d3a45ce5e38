"""Income CRUD operations service."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import Q

from apps.projects.models import Project
from apps.projects.services import recompute_project_finances
from ..models import Income, IncomeStatus
from .exceptions import IncomeNotFoundError, InvalidProjectReferenceError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['date', 'description', 'amount', 'note', 'project_income', 'status']


def _validate_project(project_id) -> Optional[Project]:
    if project_id is None:
        return None
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise InvalidProjectReferenceError("Project not found")


@transaction.atomic
def create_income(
    *,
    description: str,
    amount: Decimal,
    date=None,
    note: str = '',
    project_income: bool = False,
    project_id: Optional[int] = None,
    status: str = IncomeStatus.RECEIVED,
) -> Income:
    """
    Create an income entry and recompute its project.

    Args:
        description: Display description
        amount: Income amount
        date: Defaults to now
        project_id: Optional owning project

    Returns:
        Created Income instance

    Raises:
        InvalidProjectReferenceError: If project doesn't exist
    """
    project = _validate_project(project_id)

    fields = {
        'description': description,
        'amount': amount,
        'note': note,
        'project_income': project_income or project is not None,
        'project': project,
        'status': status,
    }
    if date is not None:
        fields['date'] = date

    income = Income.objects.create(**fields)

    if project is not None:
        recompute_project_finances(project_id=project.id)

    logger.info("Income created: %s - %s", income.id, income.amount)
    return income


def get_income_by_id(*, income_id: int) -> Income:
    """
    Get income by ID.

    Raises:
        IncomeNotFoundError: If income doesn't exist
    """
    try:
        return Income.objects.select_related('project').get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError(f"Income {income_id} not found")


@transaction.atomic
def update_income(*, income_id: int, data: Dict[str, Any]) -> Income:
    """
    Update an income entry.

    Recomputes the owning project, and the previous one when the entry
    moved between projects.

    Raises:
        IncomeNotFoundError: If income doesn't exist
        InvalidProjectReferenceError: If new project doesn't exist
    """
    try:
        income = Income.objects.select_for_update().get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError(f"Income {income_id} not found")

    old_project_id = income.project_id

    if 'project_id' in data:
        income.project = _validate_project(data['project_id'])

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(income, field, value)

    income.save()

    for project_id in {old_project_id, income.project_id} - {None}:
        recompute_project_finances(project_id=project_id)

    return income


@transaction.atomic
def delete_income(*, income_id: int) -> None:
    """
    Delete an income entry and recompute its project.

    Raises:
        IncomeNotFoundError: If income doesn't exist
    """
    try:
        income = Income.objects.select_for_update().get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError(f"Income {income_id} not found")

    project_id = income.project_id
    income.delete()

    if project_id is not None:
        recompute_project_finances(project_id=project_id)

    logger.info("Income deleted: %s", income_id)


def list_incomes(
    *,
    search: Optional[str] = None,
    project_id: Optional[int] = None,
    start_date=None,
    end_date=None,
):
    """Filter incomes by text, project and date range."""
    queryset = Income.objects.select_related('project')

    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) |
            Q(note__icontains=search) |
            Q(project__code__icontains=search) |
            Q(project__name__icontains=search)
        )

    if project_id:
        queryset = queryset.filter(project_id=project_id)

    if start_date:
        queryset = queryset.filter(date__date__gte=start_date)

    if end_date:
        queryset = queryset.filter(date__date__lte=end_date)

    return queryset
