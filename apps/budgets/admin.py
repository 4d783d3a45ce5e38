from django.contrib import admin
from apps.budgets.models import BudgetCategory


@admin.register(BudgetCategory)
class BudgetCategoryAdmin(admin.ModelAdmin):
    """
    Admin interface for Budget Categories.

    The 100% allocation limit is enforced by the category services only.
    """

    list_display = ['name', 'percentage', 'color', 'updated_at']
    search_fields = ['name', 'description']
    ordering = ['name']
