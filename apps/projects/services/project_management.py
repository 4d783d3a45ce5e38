"""Project CRUD operations service."""

import logging
from decimal import Decimal
from typing import Optional, Dict, Any, List

from django.db import transaction
from django.db.models import Q, Sum, Avg, Count

from ..models import Client, Project, ProjectStatus
from .exceptions import (
    ProjectNotFoundError,
    ClientNotFoundError,
    InvalidClientError,
    ProjectHasLedgerEntriesError,
)
from .ledger import recompute_project_finances

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = [
    'name', 'company', 'type', 'status', 'shoot_start_date', 'shoot_end_date',
    'location', 'reference', 'amount', 'outsourcing', 'outsourcing_amt',
    'out_for', 'outsourcing_paid',
]


def _normalize_status(status: Optional[str]) -> Optional[str]:
    if not status:
        return None
    return status.upper()


def _get_client(client_id) -> Client:
    try:
        return Client.objects.get(id=client_id)
    except Client.DoesNotExist:
        raise InvalidClientError("Client not found")


def get_client_by_id(*, client_id: int) -> Client:
    """
    Get client by ID.

    Raises:
        ClientNotFoundError: If client doesn't exist
    """
    try:
        return Client.objects.get(id=client_id)
    except Client.DoesNotExist:
        raise ClientNotFoundError(f"Client {client_id} not found")


@transaction.atomic
def create_project(
    *,
    client_id: int,
    name: str = '',
    company: str = '',
    type: str = '',
    status: Optional[str] = None,
    shoot_start_date=None,
    shoot_end_date=None,
    location: str = '',
    reference: str = '',
    amount: Decimal = Decimal('0.00'),
    outsourcing: bool = False,
    outsourcing_amt: Decimal = Decimal('0.00'),
    out_for: str = '',
    outsourcing_paid: bool = False,
) -> Project:
    """
    Create a new project.

    This operation:
    1. Validates the client exists
    2. Inserts the project and assigns its code from the new id
    3. Creates the pending "Project Payment" placeholder income when amount > 0
    4. Applies the date-driven status when no status was given
    5. Recomputes the derived financial fields

    Args:
        client_id: Client the project is billed to
        status: Optional initial status (case-insensitive)
        amount: Contracted total
        (remaining args map 1:1 to Project fields)

    Returns:
        Created Project instance

    Raises:
        InvalidClientError: If client doesn't exist
    """
    from apps.finances.models import Income, IncomeStatus
    from apps.lifecycle.services import apply_status_transition

    client = _get_client(client_id)
    status = _normalize_status(status)

    project = Project.objects.create(
        client=client,
        name=name,
        company=company,
        type=type,
        status=status,
        shoot_start_date=shoot_start_date,
        shoot_end_date=shoot_end_date,
        location=location,
        reference=reference,
        amount=amount,
        outsourcing=outsourcing,
        outsourcing_amt=outsourcing_amt,
        out_for=out_for,
        outsourcing_paid=outsourcing_paid,
        pending_amt=amount,
    )
    project.code = Project.generate_code(project.id)
    project.save(update_fields=['code', 'updated_at'])

    if amount and amount > 0:
        Income.objects.create(
            project=project,
            description=f"Project Payment - {project.display_name}",
            amount=amount,
            project_income=True,
            placeholder=True,
            status=IncomeStatus.PENDING,
        )

    if status is None:
        apply_status_transition(project_id=project.id)

    project = recompute_project_finances(project_id=project.id)
    logger.info("Project created: %s - %s", project.code, project.name)
    return project


def get_project_by_id(*, project_id: int) -> Project:
    """
    Get project by ID.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        return Project.objects.select_related('client').get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")


def get_project_by_code(*, code: str) -> Project:
    """
    Get project by its human-readable code (e.g. CYM-42).

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        return Project.objects.select_related('client').get(code__iexact=code)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {code} not found")


def list_projects(
    *,
    search: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    company: Optional[str] = None,
):
    """
    Filter projects.

    Args:
        search: Matches code, name, company, type, location or client name
        type: Exact project type (case-insensitive)
        status: One status or a comma separated list
        company: Company substring

    Returns:
        QuerySet of Project
    """
    queryset = Project.objects.select_related('client')

    if search:
        queryset = queryset.filter(
            Q(code__icontains=search) |
            Q(name__icontains=search) |
            Q(company__icontains=search) |
            Q(type__icontains=search) |
            Q(location__icontains=search) |
            Q(client__name__icontains=search)
        )

    if type:
        queryset = queryset.filter(type__iexact=type)

    if status:
        statuses = [s.strip().upper() for s in status.split(',') if s.strip()]
        queryset = queryset.filter(status__in=statuses)

    if company:
        queryset = queryset.filter(company__icontains=company)

    return queryset


def _sync_pending_income(project: Project) -> None:
    from apps.finances.models import Income, IncomeStatus

    pending = (
        Income.objects
        .filter(project=project, placeholder=True, status=IncomeStatus.PENDING)
        .order_by('date', 'id')
        .first()
    )
    if pending is not None and pending.amount != project.amount:
        pending.amount = project.amount
        pending.save(update_fields=['amount', 'updated_at'])


@transaction.atomic
def update_project(
    *,
    project_id: int,
    data: Dict[str, Any],
    updated_by=None,
) -> Project:
    """
    Update an existing project.

    This operation:
    1. Validates a changed client
    2. Saves the allowed fields (status uppercased)
    3. Keeps the pending placeholder income in sync with a changed amount
    4. Completes the project through the completion path when status
       moves to COMPLETED, otherwise re-applies date transitions when the
       shoot dates changed and no status was supplied
    5. Recomputes the derived financial fields

    Args:
        project_id: Project ID
        data: Fields to update (client_id accepted)
        updated_by: User making the change, recorded on completion

    Returns:
        Updated Project instance

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidClientError: If new client doesn't exist
    """
    from apps.lifecycle.services import (
        apply_status_transition,
        mark_project_complete,
        MANUAL_COMPLETION_REASON,
    )

    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    previous_status = project.status
    previous_amount = project.amount
    previous_dates = (project.shoot_start_date, project.shoot_end_date)

    if 'client_id' in data:
        project.client = _get_client(data['client_id'])
    elif 'client' in data:
        client = data['client']
        project.client = client if isinstance(client, Client) else _get_client(client)

    status_supplied = 'status' in data
    completing = False

    for field, value in data.items():
        if field not in UPDATABLE_FIELDS:
            continue
        if field == 'status':
            value = _normalize_status(value)
            if value == ProjectStatus.COMPLETED and previous_status != ProjectStatus.COMPLETED:
                completing = True
                continue
        setattr(project, field, value)

    project.save()

    if project.amount != previous_amount:
        _sync_pending_income(project)

    if completing:
        mark_project_complete(
            project_id=project.id,
            reason=MANUAL_COMPLETION_REASON,
            admin_override=True,
            triggered_by=updated_by,
        )
    elif not status_supplied and (project.shoot_start_date, project.shoot_end_date) != previous_dates:
        apply_status_transition(project_id=project.id)

    project = recompute_project_finances(project_id=project.id)
    logger.info("Project updated: %s", project.code)
    return project


@transaction.atomic
def delete_project(*, project_id: int, force: bool = False) -> None:
    """
    Delete a project.

    Args:
        project_id: Project ID
        force: Delete the project's incomes and expenses first

    Raises:
        ProjectNotFoundError: If project doesn't exist
        ProjectHasLedgerEntriesError: If ledger rows exist and force is False
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    has_ledger = project.incomes.exists() or project.expenses.exists()
    if has_ledger and not force:
        raise ProjectHasLedgerEntriesError(
            "Cannot delete project with existing financial records"
        )

    if has_ledger:
        income_count, _ = project.incomes.all().delete()
        expense_count, _ = project.expenses.all().delete()
        logger.warning(
            "Force deleting %s with %d incomes and %d expenses",
            project.code, income_count, expense_count,
        )

    code = project.code
    project.delete()
    logger.info("Project deleted: %s", code)


def get_project_codes() -> List[Dict[str, str]]:
    """Return code/name pairs for dropdowns."""
    return list(
        Project.objects
        .order_by('code')
        .values('id', 'code', 'name')
    )


def get_project_stats() -> Dict[str, Any]:
    """
    Aggregate project figures.

    Returns:
        Dict with total_projects, total_revenue, total_profit,
        total_pending, average_project_value, status_breakdown and
        type_breakdown
    """
    totals = Project.objects.aggregate(
        total_revenue=Sum('amount'),
        total_profit=Sum('profit'),
        total_pending=Sum('pending_amt'),
        average_project_value=Avg('amount'),
    )

    status_breakdown = (
        Project.objects
        .exclude(status__isnull=True)
        .values('status')
        .annotate(count=Count('id'))
        .order_by('status')
    )
    type_breakdown = (
        Project.objects
        .exclude(type='')
        .values('type')
        .annotate(count=Count('id'))
        .order_by('type')
    )

    return {
        'total_projects': Project.objects.count(),
        'total_revenue': totals['total_revenue'] or Decimal('0.00'),
        'total_profit': totals['total_profit'] or Decimal('0.00'),
        'total_pending': totals['total_pending'] or Decimal('0.00'),
        'average_project_value': totals['average_project_value'] or Decimal('0.00'),
        'status_breakdown': list(status_breakdown),
        'type_breakdown': list(type_breakdown),
    }
