"""Date-driven project status transitions."""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from django.db import transaction
from django.utils import timezone

from apps.projects.models import Project, ProjectStatus
from .completion import mark_project_complete
from .exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)

DATE_COMPLETION_REASON = "Shoot end date passed"

# Statuses the date engine never moves a project out of
FROZEN_STATUSES = (ProjectStatus.ON_HOLD, ProjectStatus.COMPLETED)


@dataclass
class TransitionResult:
    project_id: int
    previous_status: Optional[str]
    status: Optional[str]
    changed: bool


def compute_date_status(
    *,
    start: Optional[datetime.date],
    end: Optional[datetime.date],
    today: datetime.date,
) -> Optional[str]:
    """
    Status implied by the shoot dates, or None when no dates are set.

    Only a start date: IN_PROGRESS from that day on, NOT_STARTED before.
    Both dates: NOT_STARTED, IN_PROGRESS (end day inclusive), then COMPLETED.
    """
    if start is None:
        return None

    if end is not None:
        if today < start:
            return ProjectStatus.NOT_STARTED
        if today <= end:
            return ProjectStatus.IN_PROGRESS
        return ProjectStatus.COMPLETED

    return ProjectStatus.IN_PROGRESS if today >= start else ProjectStatus.NOT_STARTED


@transaction.atomic
def apply_status_transition(
    *,
    project_id: int,
    today: Optional[datetime.date] = None,
) -> TransitionResult:
    """
    Move a project to the status its shoot dates imply.

    ON_HOLD and COMPLETED projects are left alone, as are projects whose
    computed status equals the stored one. Landing on COMPLETED goes
    through mark_project_complete, so the pending income is converted in
    the same transaction.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    today = today or timezone.localdate()

    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    previous = project.status
    unchanged = TransitionResult(project.id, previous, previous, False)

    if previous in FROZEN_STATUSES:
        return unchanged

    target = compute_date_status(
        start=project.shoot_start_date,
        end=project.shoot_end_date,
        today=today,
    )
    if target is None or target == previous:
        return unchanged

    if target == ProjectStatus.COMPLETED:
        mark_project_complete(project_id=project.id, reason=DATE_COMPLETION_REASON)
    else:
        project.status = target
        project.save(update_fields=['status', 'updated_at'])

    logger.info("Project %s status changed: %s -> %s", project.code, previous, target)
    return TransitionResult(project.id, previous, target, True)


def batch_update_project_statuses(*, today: Optional[datetime.date] = None) -> Dict[str, Any]:
    """
    Apply date transitions to every project that is not ON_HOLD or COMPLETED.

    Returns:
        Dict with updated, errors and details
        (list of {project_id, previous_status, status, success})
    """
    project_ids = list(
        Project.objects
        .exclude(status__in=FROZEN_STATUSES)
        .order_by('id')
        .values_list('id', flat=True)
    )

    updated = 0
    errors = 0
    details: List[Dict[str, Any]] = []

    for project_id in project_ids:
        try:
            result = apply_status_transition(project_id=project_id, today=today)
        except Exception as e:
            errors += 1
            details.append({
                'project_id': project_id,
                'error': str(e),
                'success': False,
            })
            logger.exception("Error updating status for project %s", project_id)
            continue

        if result.changed:
            updated += 1
            details.append({
                'project_id': project_id,
                'previous_status': result.previous_status,
                'status': result.status,
                'success': True,
            })

    logger.info("Status update completed: %d projects updated, %d errors", updated, errors)
    return {'updated': updated, 'errors': errors, 'details': details}
