# ==========================================
# apps/projects/models.py
# ==========================================

from django.conf import settings
from django.db import models
from decimal import Decimal


class ProjectStatus(models.TextChoices):
    NOT_STARTED = 'NOT_STARTED', 'Not Started'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'
    ON_HOLD = 'ON_HOLD', 'On Hold'


class Client(models.Model):
    """Customer a project is billed to."""

    name = models.CharField(max_length=200)
    company = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        indexes = [
            models.Index(fields=['name'], name='clients_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.company})" if self.company else self.name


class Project(models.Model):
    """
    Billable unit of studio work.

    received_amt, pending_amt and profit are derived from the ledger and
    rewritten by the ledger service; they are never edited directly.
    """

    code = models.CharField(max_length=30, blank=True, db_index=True)
    name = models.CharField(max_length=200, blank=True)
    company = models.CharField(max_length=200, blank=True)
    type = models.CharField(max_length=100, blank=True)
    status = models.CharField(
        max_length=20,
        choices=ProjectStatus.choices,
        null=True,
        blank=True,
    )
    shoot_start_date = models.DateField(null=True, blank=True)
    shoot_end_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True)
    reference = models.CharField(max_length=255, blank=True)

    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    outsourcing = models.BooleanField(default=False)
    outsourcing_amt = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    out_for = models.CharField(max_length=200, blank=True)
    outsourcing_paid = models.BooleanField(default=False)

    # Derived from the ledger
    received_amt = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    pending_amt = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    profit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='projects')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        indexes = [
            models.Index(fields=['status'], name='projects_status_idx'),
            models.Index(fields=['shoot_end_date'], name='projects_shoot_end_idx'),
            models.Index(fields=['created_at'], name='projects_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.code} - {self.name}" if self.name else self.code

    @staticmethod
    def generate_code(project_id):
        return f"{settings.PROJECT_CODE_PREFIX}-{project_id}"

    @property
    def display_name(self):
        """Name used in generated ledger descriptions."""
        return self.name or self.code
