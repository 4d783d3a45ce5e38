"""Services for budget categories and the budget overview."""

from .exceptions import (
    BudgetsServiceError,
    BudgetCategoryNotFoundError,
    DuplicateBudgetCategoryError,
    BudgetAllocationExceededError,
)
from .category_management import (
    create_budget_category,
    get_budget_category_by_id,
    update_budget_category,
    delete_budget_category,
    get_budget_categories,
)
from .overview import (
    allocate,
    get_current_balance,
    get_monthly_received,
    get_budget_overview,
)

__all__ = [
    # Exceptions
    'BudgetsServiceError',
    'BudgetCategoryNotFoundError',
    'DuplicateBudgetCategoryError',
    'BudgetAllocationExceededError',
    # Category Management
    'create_budget_category',
    'get_budget_category_by_id',
    'update_budget_category',
    'delete_budget_category',
    'get_budget_categories',
    # Overview
    'allocate',
    'get_current_balance',
    'get_monthly_received',
    'get_budget_overview',
]
