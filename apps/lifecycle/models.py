# ==========================================
# apps/lifecycle/models.py
# ==========================================

from django.conf import settings
from django.db import models


class ProjectCompletionEvent(models.Model):
    """Audit row written each time a project is marked complete."""

    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='completion_events',
    )
    reason = models.CharField(max_length=255)
    admin_override = models.BooleanField(default=False)
    triggered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='completion_events',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_completion_events'
        indexes = [
            models.Index(fields=['created_at'], name='completion_events_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.project_id}: {self.reason}"

    @property
    def is_automatic(self):
        return not self.admin_override and self.triggered_by_id is None


class ReconciliationKind(models.TextChoices):
    RECONCILE = 'RECONCILE', 'Reconcile'
    CORRECT = 'CORRECT', 'Correct'


class ReconciliationRun(models.Model):
    """Summary of one reconcile or correction pass."""

    kind = models.CharField(max_length=20, choices=ReconciliationKind.choices)
    total_projects = models.PositiveIntegerField(default=0)
    consistent_projects = models.PositiveIntegerField(default=0)
    inconsistent_projects = models.PositiveIntegerField(default=0)
    total_issues = models.PositiveIntegerField(default=0)
    total_corrections = models.PositiveIntegerField(default=0)
    errors = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reconciliation_runs'
        indexes = [
            models.Index(fields=['created_at'], name='reconciliation_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.kind} {self.created_at:%Y-%m-%d %H:%M}"
