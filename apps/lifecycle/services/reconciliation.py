"""
Financial reconciliation across all projects.

Every project's stored received_amt, pending_amt and profit are compared
with what the ledger implies. Comparison is exact.

    validate_financial_consistency  read-only check with recommendations
    reconcile_project_finances      read-only per-project report, recorded
    perform_automated_corrections   rewrites inconsistent projects
"""

import datetime
import logging
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Tuple

from apps.projects.models import Project
from apps.projects.services import (
    ProjectFinances,
    calculate_expected_finances,
    recompute_project_finances,
)
from ..models import ReconciliationRun, ReconciliationKind

logger = logging.getLogger(__name__)

# (label, project field) pairs checked on every project
CHECKED_FIELDS = (
    ('Received amount', 'received_amt'),
    ('Pending amount', 'pending_amt'),
    ('Profit', 'profit'),
)


@dataclass
class ReconciliationResult:
    project_id: int
    project_code: str
    issues: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)
    is_consistent: bool = True


@dataclass
class FinancialValidationResult:
    total_projects: int
    consistent_projects: int
    inconsistent_projects: int
    total_issues: int
    total_corrections: int
    details: List[ReconciliationResult]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ValidationResult:
    is_valid: bool
    issues: List[str]
    recommendations: List[str]
    warnings: List[str]
    inconsistent_project_ids: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CorrectionResult:
    corrections_applied: int
    errors: int
    details: List[str]
    projects: List[ReconciliationResult]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ReconciliationStats:
    last_reconciliation: Optional[datetime.datetime]
    total_projects: int
    consistent_projects: int
    inconsistent_projects: int
    total_issues: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _find_mismatches(project: Project) -> Tuple[List[Tuple[str, str, Any, Any]], ProjectFinances]:
    expected = calculate_expected_finances(project)
    mismatches = []
    for label, attr in CHECKED_FIELDS:
        stored = getattr(project, attr)
        calculated = getattr(expected, attr)
        if stored != calculated:
            mismatches.append((label, attr, stored, calculated))
    return mismatches, expected


def _issue(label, stored, calculated) -> str:
    return f"{label} mismatch: stored={stored}, calculated={calculated}"


def _correction(label, stored, calculated) -> str:
    return f"Updated {label.lower()} from {stored} to {calculated}"


def validate_financial_consistency() -> ValidationResult:
    """
    Check every project without writing anything.

    Field mismatches are issues; negative pending amounts (overpayment) and
    negative profit are reported as warnings only.

    Returns:
        ValidationResult
    """
    issues: List[str] = []
    recommendations: List[str] = []
    warnings: List[str] = []
    inconsistent_ids: List[int] = []

    for project in Project.objects.order_by('id').iterator():
        mismatches, _ = _find_mismatches(project)
        if mismatches:
            inconsistent_ids.append(project.id)
            issues.extend(
                f"{project.code}: {_issue(label, stored, calculated)}"
                for label, _attr, stored, calculated in mismatches
            )

    if inconsistent_ids:
        recommendations.append(
            f"Run automated corrections to recompute {len(inconsistent_ids)} inconsistent projects"
        )

    negative_pending = Project.objects.filter(pending_amt__lt=0).count()
    if negative_pending:
        warnings.append(f"Found {negative_pending} projects with negative pending amounts")
        recommendations.append('Review projects with negative pending amounts')

    negative_profit = Project.objects.filter(profit__lt=0).count()
    if negative_profit:
        warnings.append(f"Found {negative_profit} projects with negative profit")
        recommendations.append('Review projects with negative profit')

    return ValidationResult(
        is_valid=not issues,
        issues=issues,
        recommendations=recommendations,
        warnings=warnings,
        inconsistent_project_ids=inconsistent_ids,
    )


def reconcile_project_finances() -> FinancialValidationResult:
    """
    Report consistency for every project.

    Touches neither projects nor the ledger; only a ReconciliationRun
    history row is written.

    Returns:
        FinancialValidationResult with per-project details
    """
    details: List[ReconciliationResult] = []

    for project in Project.objects.order_by('id').iterator():
        mismatches, _ = _find_mismatches(project)
        details.append(ReconciliationResult(
            project_id=project.id,
            project_code=project.code,
            issues=[_issue(label, stored, calculated) for label, _attr, stored, calculated in mismatches],
            is_consistent=not mismatches,
        ))

    consistent = sum(1 for d in details if d.is_consistent)
    result = FinancialValidationResult(
        total_projects=len(details),
        consistent_projects=consistent,
        inconsistent_projects=len(details) - consistent,
        total_issues=sum(len(d.issues) for d in details),
        total_corrections=0,
        details=details,
    )

    ReconciliationRun.objects.create(
        kind=ReconciliationKind.RECONCILE,
        total_projects=result.total_projects,
        consistent_projects=result.consistent_projects,
        inconsistent_projects=result.inconsistent_projects,
        total_issues=result.total_issues,
    )
    logger.info(
        "Reconciliation completed: %d consistent, %d inconsistent projects",
        result.consistent_projects, result.inconsistent_projects,
    )
    return result


def perform_automated_corrections() -> CorrectionResult:
    """
    Recompute every inconsistent project.

    One correction entry is recorded per repaired field. A project that
    fails is logged and counted; the pass continues with the next one.

    Returns:
        CorrectionResult
    """
    corrections_applied = 0
    errors = 0
    details: List[str] = []
    projects: List[ReconciliationResult] = []
    total_projects = 0
    total_issues = 0

    for project in Project.objects.order_by('id'):
        total_projects += 1
        try:
            mismatches, _ = _find_mismatches(project)
            if not mismatches:
                continue

            total_issues += len(mismatches)
            recompute_project_finances(project_id=project.id)

            result = ReconciliationResult(
                project_id=project.id,
                project_code=project.code,
                issues=[_issue(label, stored, calculated) for label, _attr, stored, calculated in mismatches],
                corrections=[_correction(label, stored, calculated) for label, _attr, stored, calculated in mismatches],
                is_consistent=True,
            )
            projects.append(result)
            corrections_applied += len(result.corrections)
            details.extend(f"{project.code}: {c}" for c in result.corrections)
        except Exception as e:
            errors += 1
            details.append(f"Error correcting project {project.code}: {e}")
            logger.exception("Error correcting project %s", project.id)

    ReconciliationRun.objects.create(
        kind=ReconciliationKind.CORRECT,
        total_projects=total_projects,
        consistent_projects=total_projects - len(projects) - errors,
        inconsistent_projects=len(projects) + errors,
        total_issues=total_issues,
        total_corrections=corrections_applied,
        errors=errors,
    )
    logger.info(
        "Automated corrections completed: %d corrections applied, %d errors",
        corrections_applied, errors,
    )
    return CorrectionResult(
        corrections_applied=corrections_applied,
        errors=errors,
        details=details,
        projects=projects,
    )


def get_reconciliation_stats() -> ReconciliationStats:
    """
    Figures from the latest reconcile pass.

    Falls back to a zero report with the current project count when no
    pass has run yet.
    """
    run = (
        ReconciliationRun.objects
        .filter(kind=ReconciliationKind.RECONCILE)
        .order_by('-created_at', '-id')
        .first()
    )
    if run is None:
        total = Project.objects.count()
        return ReconciliationStats(
            last_reconciliation=None,
            total_projects=total,
            consistent_projects=0,
            inconsistent_projects=0,
            total_issues=0,
        )

    return ReconciliationStats(
        last_reconciliation=run.created_at,
        total_projects=run.total_projects,
        consistent_projects=run.consistent_projects,
        inconsistent_projects=run.inconsistent_projects,
        total_issues=run.total_issues,
    )
