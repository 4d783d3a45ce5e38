"""Financial summary and project payment services."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import Sum, Count

from apps.projects.models import Project
from apps.projects.services import recompute_project_finances, ProjectNotFoundError
from ..models import Income, IncomeStatus, Expense
from .exceptions import InvalidProjectReferenceError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def _date_filtered(queryset, start_date, end_date):
    if start_date:
        queryset = queryset.filter(date__date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__date__lte=end_date)
    return queryset


def get_financial_summary(*, start_date=None, end_date=None) -> Dict[str, Any]:
    """
    Summarize the ledger for a date range.

    Pending incomes are reported separately and are not part of
    total_income. Project placeholder incomes never count as income,
    including once completion has relabelled them as received.

    Returns:
        Dict with total_income, total_expenses, net_profit, project_income,
        non_project_income, project_expenses, non_project_expenses,
        pending_income, income_count and expense_count
    """
    incomes = _date_filtered(Income.objects.all(), start_date, end_date)
    expenses = _date_filtered(Expense.objects.all(), start_date, end_date)

    received = incomes.filter(placeholder=False, status=IncomeStatus.RECEIVED)
    income_stats = received.aggregate(total=Sum('amount'), count=Count('id'))
    project_income = received.filter(project_income=True).aggregate(total=Sum('amount'))['total'] or ZERO
    pending_income = incomes.filter(status=IncomeStatus.PENDING).aggregate(total=Sum('amount'))['total'] or ZERO

    expense_stats = expenses.aggregate(total=Sum('amount'), count=Count('id'))
    project_expenses = expenses.filter(project_expense=True).aggregate(total=Sum('amount'))['total'] or ZERO

    total_income = income_stats['total'] or ZERO
    total_expenses = expense_stats['total'] or ZERO

    return {
        'total_income': total_income,
        'total_expenses': total_expenses,
        'net_profit': total_income - total_expenses,
        'project_income': project_income,
        'non_project_income': total_income - project_income,
        'project_expenses': project_expenses,
        'non_project_expenses': total_expenses - project_expenses,
        'pending_income': pending_income,
        'income_count': income_stats['count'],
        'expense_count': expense_stats['count'],
    }


@transaction.atomic
def record_project_payment(
    *,
    project_id: int,
    amount: Decimal,
    description: Optional[str] = None,
) -> Income:
    """
    Record a payment received for a project.

    Creates a RECEIVED project income and recomputes the project.

    Args:
        project_id: Project ID
        amount: Amount received
        description: Defaults to "Project Payment - <name|code>"

    Returns:
        Created Income instance

    Raises:
        InvalidProjectReferenceError: If project doesn't exist
    """
    try:
        project = Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise InvalidProjectReferenceError("Project not found")

    income = Income.objects.create(
        project=project,
        description=description or f"Project Payment - {project.display_name}",
        amount=amount,
        project_income=True,
        status=IncomeStatus.RECEIVED,
    )
    recompute_project_finances(project_id=project.id)

    logger.info("Project payment recorded: %s - %s", project.code, amount)
    return income


def get_project_payment_history(*, project_id: int) -> Dict[str, Any]:
    """
    List the payments received for a project.

    Returns:
        Dict with payments (newest first), total_received, total_amount
        and pending_amount

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    payments = (
        Income.objects
        .filter(project=project, placeholder=False, status=IncomeStatus.RECEIVED)
        .order_by('-date', '-id')
    )
    total_received = payments.aggregate(total=Sum('amount'))['total'] or ZERO

    return {
        'payments': list(payments),
        'total_received': total_received,
        'total_amount': project.amount,
        'pending_amount': project.amount - total_received,
    }
