"""Budget overview built from the income and expense ledger."""

import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Dict, Any, List

from django.db.models import Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.finances.models import Income, IncomeStatus, Expense
from ..models import BudgetCategory

ZERO = Decimal('0.00')
CENTS = Decimal('0.01')
FULL_ALLOCATION = Decimal('100')
CHART_MONTHS = 12


def allocate(percentage: Decimal, balance: Decimal) -> Decimal:
    """Amount of `balance` a category with `percentage` receives, to the cent."""
    return (balance * percentage / FULL_ALLOCATION).quantize(CENTS, rounding=ROUND_HALF_UP)


def _received_incomes():
    return Income.objects.filter(placeholder=False, status=IncomeStatus.RECEIVED)


def get_current_balance() -> Decimal:
    """Money received minus money spent, across the whole ledger."""
    received = _received_incomes().aggregate(total=Sum('amount'))['total'] or ZERO
    spent = Expense.objects.aggregate(total=Sum('amount'))['total'] or ZERO
    return received - spent


def _month_starts(today: datetime.date, count: int) -> List[datetime.date]:
    year, month = today.year, today.month
    starts = []
    for _ in range(count):
        starts.append(datetime.date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def get_monthly_received(*, today: Optional[datetime.date] = None) -> List[Dict[str, Any]]:
    """
    Received income per month for the last twelve months, oldest first.

    Months without income are reported as zero. Labels are upper-case
    month abbreviations (JAN, FEB, ...).
    """
    today = today or timezone.localdate()
    months = _month_starts(today, CHART_MONTHS)

    # TruncMonth groups in the current time zone
    rows = (
        _received_incomes()
        .filter(date__date__gte=months[0], date__date__lte=today)
        .annotate(month=TruncMonth('date'))
        .values('month')
        .annotate(total=Sum('amount'))
    )
    totals = {
        (row['month'].year, row['month'].month): row['total']
        for row in rows
    }

    return [
        {
            'month': start.strftime('%b').upper(),
            'value': totals.get((start.year, start.month), ZERO),
        }
        for start in months
    ]


def get_budget_overview(*, today: Optional[datetime.date] = None) -> Dict[str, Any]:
    """
    Get the budget dashboard figures.

    Pending incomes and project placeholders are not money received and
    are left out of every figure.

    Returns:
        Dict with current_balance, received_amount_this_month,
        total_received_chart (month/value pairs) and budget_split_up
        (name/amount/color per category)
    """
    today = today or timezone.localdate()
    balance = get_current_balance()

    received_this_month = (
        _received_incomes()
        .filter(date__date__gte=today.replace(day=1), date__date__lte=today)
        .aggregate(total=Sum('amount'))['total'] or ZERO
    )

    split_up = [
        {
            'name': category.name,
            'amount': allocate(category.percentage, balance),
            'color': category.color,
        }
        for category in BudgetCategory.objects.all()
    ]

    return {
        'current_balance': balance,
        'received_amount_this_month': received_this_month,
        'total_received_chart': get_monthly_received(today=today),
        'budget_split_up': split_up,
    }
