"""Pending to received relabelling of a completed project's placeholder income."""

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.finances.models import Income, IncomeStatus
from apps.projects.models import Project, ProjectStatus
from .exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def convert_pending_to_received(*, project_id: int) -> Optional[Income]:
    """
    Relabel the pending placeholder income of a completed project.

    Only acts on COMPLETED projects. Picks the oldest pending placeholder
    of the project, renames it "Project Payment Received - <name>" and
    dates it now. The amount is left as is and the row stays a
    placeholder, so received_amt and pending_amt do not move. Never
    creates rows: a completed project without a pending placeholder is
    left alone.

    Args:
        project_id: Project ID

    Returns:
        The relabelled Income, or None when nothing was converted

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    if project.status != ProjectStatus.COMPLETED:
        logger.debug("Skipping conversion for %s: status is %s", project.code, project.status)
        return None

    pending = (
        Income.objects
        .select_for_update()
        .filter(project=project, placeholder=True, status=IncomeStatus.PENDING)
        .order_by('date', 'id')
        .first()
    )
    if pending is None:
        return None

    pending.description = f"Project Payment Received - {project.display_name}"
    pending.date = timezone.now()
    pending.status = IncomeStatus.RECEIVED
    pending.save(update_fields=['description', 'date', 'status', 'updated_at'])

    logger.info("Converted pending income to received for project: %s", project.code)
    return pending
