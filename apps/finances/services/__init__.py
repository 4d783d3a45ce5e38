"""Services for income/expense ledger business logic."""

from .exceptions import (
    FinancesServiceError,
    IncomeNotFoundError,
    ExpenseNotFoundError,
    InvalidProjectReferenceError,
)
from .income_management import (
    create_income,
    get_income_by_id,
    update_income,
    delete_income,
    list_incomes,
)
from .expense_management import (
    create_expense,
    get_expense_by_id,
    update_expense,
    delete_expense,
    list_expenses,
    get_expense_categories,
    get_categorized_expense_totals,
)
from .summary import (
    get_financial_summary,
    record_project_payment,
    get_project_payment_history,
)

__all__ = [
    # Exceptions
    'FinancesServiceError',
    'IncomeNotFoundError',
    'ExpenseNotFoundError',
    'InvalidProjectReferenceError',
    # Income Management
    'create_income',
    'get_income_by_id',
    'update_income',
    'delete_income',
    'list_incomes',
    # Expense Management
    'create_expense',
    'get_expense_by_id',
    'update_expense',
    'delete_expense',
    'list_expenses',
    'get_expense_categories',
    'get_categorized_expense_totals',
    # Summary
    'get_financial_summary',
    'record_project_payment',
    'get_project_payment_history',
]
