"""Services for projects business logic."""

from .exceptions import (
    ProjectsServiceError,
    ProjectNotFoundError,
    ClientNotFoundError,
    InvalidClientError,
    ProjectHasLedgerEntriesError,
)
from .ledger import (
    ProjectFinances,
    calculate_expected_finances,
    recompute_project_finances,
)
from .project_management import (
    create_project,
    get_client_by_id,
    get_project_by_id,
    get_project_by_code,
    list_projects,
    update_project,
    delete_project,
    get_project_codes,
    get_project_stats,
)

__all__ = [
    # Exceptions
    'ProjectsServiceError',
    'ProjectNotFoundError',
    'ClientNotFoundError',
    'InvalidClientError',
    'ProjectHasLedgerEntriesError',
    # Ledger
    'ProjectFinances',
    'calculate_expected_finances',
    'recompute_project_finances',
    # Project Management
    'create_project',
    'get_client_by_id',
    'get_project_by_id',
    'get_project_by_code',
    'list_projects',
    'update_project',
    'delete_project',
    'get_project_codes',
    'get_project_stats',
]
