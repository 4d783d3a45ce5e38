"""
Ledger aggregation for projects.

Derived project fields are always recomputed from the income and expense
rows, never patched incrementally:

    received_amt = sum of received non-placeholder incomes
    pending_amt  = amount - received_amt          (may go negative)
    profit       = amount - (outsourcing_amt + total_expenses)

The placeholder income created with a project mirrors the contracted
amount and is never part of received_amt, whatever its status.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from ..models import Project
from .exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class ProjectFinances:
    received_amt: Decimal
    pending_amt: Decimal
    profit: Decimal
    total_income: Decimal
    total_expenses: Decimal


def _sum_amount(queryset) -> Decimal:
    return queryset.aggregate(total=Sum('amount'))['total'] or ZERO


def calculate_expected_finances(project: Project) -> ProjectFinances:
    """
    Compute what the derived fields of a project should be.

    Pure read: queries the ledger and returns the expected values without
    touching the project row.

    Args:
        project: Project instance

    Returns:
        ProjectFinances with received, pending, profit and ledger totals
    """
    from apps.finances.models import Expense, Income, IncomeStatus

    incomes = Income.objects.filter(project_id=project.id, placeholder=False)
    total_income = _sum_amount(incomes)
    received_amt = _sum_amount(incomes.filter(status=IncomeStatus.RECEIVED))
    total_expenses = _sum_amount(Expense.objects.filter(project_id=project.id))

    amount = project.amount or ZERO
    outsourcing_amt = project.outsourcing_amt or ZERO

    return ProjectFinances(
        received_amt=received_amt,
        pending_amt=amount - received_amt,
        profit=amount - (outsourcing_amt + total_expenses),
        total_income=total_income,
        total_expenses=total_expenses,
    )


@transaction.atomic
def recompute_project_finances(*, project_id: int) -> Project:
    """
    Rewrite a project's derived financial fields from its ledger.

    Called after every income/expense create, update or delete.
    Idempotent: a second call with no ledger change writes the same values.

    Args:
        project_id: Project ID

    Returns:
        Updated Project instance

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    finances = calculate_expected_finances(project)

    project.received_amt = finances.received_amt
    project.pending_amt = finances.pending_amt
    project.profit = finances.profit
    project.save(update_fields=['received_amt', 'pending_amt', 'profit', 'updated_at'])

    logger.debug(
        "Finances recomputed for %s: received=%s pending=%s profit=%s",
        project.code, project.received_amt, project.pending_amt, project.profit,
    )
    return project
