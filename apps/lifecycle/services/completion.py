"""
Project completion evaluation and the completion path.

A project should complete when, in this order of precedence:
1. its status was manually set to COMPLETED
2. it is fully paid
3. its shoot end date has passed and at least the payment threshold
   (80% by default) of the amount was received
"""

import datetime
import logging
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Optional, Dict, Any, List

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.projects.models import Project, ProjectStatus
from apps.projects.services import calculate_expected_finances, recompute_project_finances
from ..models import ProjectCompletionEvent
from .exceptions import ProjectNotFoundError, MissingCompletionReasonError
from .income_conversion import convert_pending_to_received

logger = logging.getLogger(__name__)

MANUAL_COMPLETION_REASON = "Manual status change to completed"
FULLY_PAID_REASON = "Project fully paid"
DATE_PASSED_REASON = "Shoot end date passed with 80% payment received"


@dataclass
class CompletionCriteria:
    manual_status_change: bool
    fully_paid: bool
    date_passed_with_partial_payment: bool
    received_amount: Decimal
    total_amount: Decimal
    shoot_end_date: Optional[datetime.date] = None


@dataclass
class CompletionResult:
    should_complete: bool
    reason: str
    criteria: CompletionCriteria

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _get_project(project_id) -> Project:
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")


def evaluate_completion(project: Project, *, today: Optional[datetime.date] = None) -> CompletionResult:
    """Evaluate completion criteria for an already loaded project."""
    today = today or timezone.localdate()
    received = calculate_expected_finances(project).received_amt
    amount = project.amount
    threshold = Decimal(settings.COMPLETION_PAYMENT_THRESHOLD)
    end_date = project.shoot_end_date

    criteria = CompletionCriteria(
        manual_status_change=project.status == ProjectStatus.COMPLETED,
        fully_paid=received >= amount,
        date_passed_with_partial_payment=(
            end_date is not None
            and today > end_date
            and received >= amount * threshold
        ),
        received_amount=received,
        total_amount=amount,
        shoot_end_date=end_date,
    )

    if criteria.manual_status_change:
        return CompletionResult(True, MANUAL_COMPLETION_REASON, criteria)
    if criteria.fully_paid:
        return CompletionResult(True, FULLY_PAID_REASON, criteria)
    if criteria.date_passed_with_partial_payment:
        return CompletionResult(True, DATE_PASSED_REASON, criteria)
    return CompletionResult(False, '', criteria)


def check_completion_criteria(
    *,
    project_id: int,
    today: Optional[datetime.date] = None,
) -> CompletionResult:
    """
    Check whether a project should be completed.

    The received amount is summed from the income rows rather than read
    from the cached project field. No side effects.

    Args:
        project_id: Project ID
        today: Evaluation date, defaults to the local date

    Returns:
        CompletionResult with should_complete, reason and criteria

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    return evaluate_completion(_get_project(project_id), today=today)


@transaction.atomic
def mark_project_complete(
    *,
    project_id: int,
    reason: str,
    admin_override: bool = False,
    triggered_by=None,
) -> Project:
    """
    Mark a project as complete.

    This operation, in one transaction:
    1. Sets the status to COMPLETED
    2. Relabels the pending placeholder income as received
    3. Recomputes the derived financial fields
    4. Writes a ProjectCompletionEvent

    Already completed projects are left untouched.

    Args:
        project_id: Project ID
        reason: Why the project completed
        admin_override: True when completed by hand rather than by criteria
        triggered_by: User who requested the completion, if any

    Returns:
        The Project instance

    Raises:
        ProjectNotFoundError: If project doesn't exist
        MissingCompletionReasonError: If reason is empty
    """
    if not reason:
        raise MissingCompletionReasonError("Completion reason is required")

    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    if project.status == ProjectStatus.COMPLETED:
        logger.warning("Project %s is already completed", project.code)
        return project

    project.status = ProjectStatus.COMPLETED
    project.save(update_fields=['status', 'updated_at'])

    convert_pending_to_received(project_id=project.id)
    project = recompute_project_finances(project_id=project.id)

    ProjectCompletionEvent.objects.create(
        project=project,
        reason=reason,
        admin_override=admin_override,
        triggered_by=triggered_by,
    )
    logger.info(
        "Project completion event: Project %s, Reason: %s, Admin Override: %s",
        project.id, reason, admin_override,
    )
    return project


def auto_complete_projects(*, today: Optional[datetime.date] = None) -> Dict[str, Any]:
    """
    Complete every eligible project.

    Projects that are COMPLETED or ON_HOLD are not considered. Each project
    is handled in its own transaction; a failure is logged, counted and
    recorded in details without stopping the pass.

    Returns:
        Dict with completed, errors and details
        (list of {project_id, reason, success})
    """
    project_ids = list(
        Project.objects
        .exclude(status__in=[ProjectStatus.COMPLETED, ProjectStatus.ON_HOLD])
        .order_by('id')
        .values_list('id', flat=True)
    )

    completed = 0
    errors = 0
    details: List[Dict[str, Any]] = []

    for project_id in project_ids:
        try:
            result = check_completion_criteria(project_id=project_id, today=today)
            if result.should_complete:
                mark_project_complete(project_id=project_id, reason=result.reason)
                completed += 1
                details.append({
                    'project_id': project_id,
                    'reason': result.reason,
                    'success': True,
                })
        except Exception as e:
            errors += 1
            details.append({
                'project_id': project_id,
                'reason': f"Error: {e}",
                'success': False,
            })
            logger.exception("Error auto-completing project %s", project_id)

    logger.info(
        "Auto-completion completed: %d projects completed, %d errors",
        completed, errors,
    )
    return {'completed': completed, 'errors': errors, 'details': details}


def get_completion_stats() -> Dict[str, int]:
    """
    Count projects by completion state.

    Returns:
        Dict with total_projects, completed_projects, pending_projects and
        auto_completed_this_month
    """
    now = timezone.localtime()
    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    total = Project.objects.count()
    completed = Project.objects.filter(status=ProjectStatus.COMPLETED).count()
    auto_completed = ProjectCompletionEvent.objects.filter(
        admin_override=False,
        created_at__gte=start_of_month,
    ).count()

    return {
        'total_projects': total,
        'completed_projects': completed,
        'pending_projects': total - completed,
        'auto_completed_this_month': auto_completed,
    }
