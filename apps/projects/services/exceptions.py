"""
Domain exceptions for projects services.

Exception Hierarchy:
    ProjectsServiceError (base)
    ├── ProjectNotFoundError          (not found)
    ├── ClientNotFoundError           (not found)
    ├── InvalidClientError            (validation)
    └── ProjectHasLedgerEntriesError  (conflict)
"""


class ProjectsServiceError(Exception):
    """Base exception for projects services."""
    pass


class ProjectNotFoundError(ProjectsServiceError):
    """Raised when project does not exist."""
    pass


class ClientNotFoundError(ProjectsServiceError):
    """Raised when client does not exist."""
    pass


class InvalidClientError(ProjectsServiceError):
    """Raised when a project references a client that does not exist."""
    pass


class ProjectHasLedgerEntriesError(ProjectsServiceError):
    """Raised when deleting a project that still has incomes or expenses."""
    pass
