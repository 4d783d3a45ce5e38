# ==========================================
# apps/projects/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from apps.projects.models import Client, Project, ProjectStatus


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin interface for Clients."""

    list_display = ['name', 'company', 'email', 'phone', 'created_at']
    search_fields = ['name', 'company', 'email']
    ordering = ['name']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for Projects."""

    list_display = [
        'code',
        'name',
        'client',
        'status_badge',
        'shoot_end_date',
        'amount',
        'received_amt',
        'pending_amt',
        'profit',
    ]
    list_filter = [
        'status',
        'type',
        'outsourcing',
        'shoot_end_date',
    ]
    search_fields = [
        'code',
        'name',
        'company',
        'client__name',
        'location',
    ]
    readonly_fields = [
        'code',
        'received_amt',
        'pending_amt',
        'profit',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('code', 'name', 'client', 'company', 'type', 'status')
        }),
        ('Shoot', {
            'fields': ('shoot_start_date', 'shoot_end_date', 'location', 'reference')
        }),
        ('Outsourcing', {
            'fields': ('outsourcing', 'outsourcing_amt', 'out_for', 'outsourcing_paid'),
            'classes': ('collapse',)
        }),
        ('Finances (derived from ledger)', {
            'fields': ('amount', 'received_amt', 'pending_amt', 'profit')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['recompute_finances']

    def status_badge(self, obj):
        """Display status as colored badge."""
        colors = {
            ProjectStatus.NOT_STARTED: '#999',
            ProjectStatus.IN_PROGRESS: '#4A90D9',
            ProjectStatus.COMPLETED: '#6B8E5E',
            ProjectStatus.ON_HOLD: '#D98E04',
        }
        if not obj.status:
            return '-'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#999'), obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    @admin.action(description="Recompute finances from ledger")
    def recompute_finances(self, request, queryset):
        from apps.projects.services import recompute_project_finances

        for project in queryset:
            recompute_project_finances(project_id=project.id)
        self.message_user(request, f"Recomputed {queryset.count()} projects")
