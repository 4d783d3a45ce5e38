"""Domain-specific exceptions for finances services."""


class FinancesServiceError(Exception):
    """Base exception for finances services."""
    pass


class IncomeNotFoundError(FinancesServiceError):
    """Raised when income does not exist."""
    pass


class ExpenseNotFoundError(FinancesServiceError):
    """Raised when expense does not exist."""
    pass


class InvalidProjectReferenceError(FinancesServiceError):
    """Raised when a ledger row references a project that does not exist."""
    pass
