# ==========================================
# apps/finances/admin.py
# ==========================================

from django.contrib import admin
from apps.finances.models import Income, Expense


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    """
    Admin interface for Incomes.

    Edits here bypass the ledger services; run the project recompute
    action or reconcile_finances afterwards.
    """

    list_display = ['date', 'description', 'amount', 'status', 'project', 'project_income', 'placeholder']
    list_filter = ['status', 'project_income', 'placeholder', 'date']
    search_fields = ['description', 'note', 'project__code', 'project__name']
    raw_id_fields = ['project']
    date_hierarchy = 'date'
    ordering = ['-date']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['date', 'category', 'description', 'amount', 'project', 'project_expense']
    list_filter = ['category', 'project_expense', 'date']
    search_fields = ['description', 'category', 'notes', 'project__code']
    raw_id_fields = ['project']
    date_hierarchy = 'date'
    ordering = ['-date']
