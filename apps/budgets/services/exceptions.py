"""Domain-specific exceptions for budget services."""


class BudgetsServiceError(Exception):
    """Base exception for budget services."""
    pass


class BudgetCategoryNotFoundError(BudgetsServiceError):
    """Raised when budget category does not exist."""
    pass


class DuplicateBudgetCategoryError(BudgetsServiceError):
    """Raised when another category already uses the name."""
    pass


class BudgetAllocationExceededError(BudgetsServiceError):
    """Raised when category percentages would add up to more than 100."""
    pass
