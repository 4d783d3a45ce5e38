"""Domain-specific exceptions for lifecycle services."""

from apps.projects.services.exceptions import ProjectNotFoundError


class LifecycleServiceError(Exception):
    """Base exception for lifecycle services."""
    pass


class MissingCompletionReasonError(LifecycleServiceError):
    """Raised when a project is marked complete without a reason."""
    pass


__all__ = [
    'LifecycleServiceError',
    'MissingCompletionReasonError',
    'ProjectNotFoundError',
]
