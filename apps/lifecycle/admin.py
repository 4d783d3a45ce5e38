# ==========================================
# apps/lifecycle/admin.py
# ==========================================

from django.contrib import admin
from apps.lifecycle.models import ProjectCompletionEvent, ReconciliationRun


@admin.register(ProjectCompletionEvent)
class ProjectCompletionEventAdmin(admin.ModelAdmin):
    """Read-only audit trail of project completions."""

    list_display = ['project', 'reason', 'admin_override', 'is_automatic', 'triggered_by', 'created_at']
    list_filter = ['admin_override', 'created_at']
    search_fields = ['project__code', 'project__name', 'reason']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def is_automatic(self, obj):
        return obj.is_automatic
    is_automatic.boolean = True
    is_automatic.short_description = 'Automatic'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(ReconciliationRun)
class ReconciliationRunAdmin(admin.ModelAdmin):
    """History of reconciliation and correction passes."""

    list_display = [
        'created_at',
        'kind',
        'total_projects',
        'consistent_projects',
        'inconsistent_projects',
        'total_issues',
        'total_corrections',
        'errors',
    ]
    list_filter = ['kind', 'created_at']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
