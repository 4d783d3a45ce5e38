"""Services for the project lifecycle engine."""

from .exceptions import (
    LifecycleServiceError,
    MissingCompletionReasonError,
    ProjectNotFoundError,
)
from .income_conversion import (
    convert_pending_to_received,
)
from .completion import (
    MANUAL_COMPLETION_REASON,
    FULLY_PAID_REASON,
    DATE_PASSED_REASON,
    CompletionCriteria,
    CompletionResult,
    evaluate_completion,
    check_completion_criteria,
    mark_project_complete,
    auto_complete_projects,
    get_completion_stats,
)
from .status_transitions import (
    TransitionResult,
    compute_date_status,
    apply_status_transition,
    batch_update_project_statuses,
)
from .reconciliation import (
    ReconciliationResult,
    FinancialValidationResult,
    ValidationResult,
    CorrectionResult,
    ReconciliationStats,
    validate_financial_consistency,
    reconcile_project_finances,
    perform_automated_corrections,
    get_reconciliation_stats,
)

__all__ = [
    # Exceptions
    'LifecycleServiceError',
    'MissingCompletionReasonError',
    'ProjectNotFoundError',
    # Income Conversion
    'convert_pending_to_received',
    # Completion
    'MANUAL_COMPLETION_REASON',
    'FULLY_PAID_REASON',
    'DATE_PASSED_REASON',
    'CompletionCriteria',
    'CompletionResult',
    'evaluate_completion',
    'check_completion_criteria',
    'mark_project_complete',
    'auto_complete_projects',
    'get_completion_stats',
    # Status Transitions
    'TransitionResult',
    'compute_date_status',
    'apply_status_transition',
    'batch_update_project_statuses',
    # Reconciliation
    'ReconciliationResult',
    'FinancialValidationResult',
    'ValidationResult',
    'CorrectionResult',
    'ReconciliationStats',
    'validate_financial_consistency',
    'reconcile_project_finances',
    'perform_automated_corrections',
    'get_reconciliation_stats',
]
