# ==========================================
# apps/finances/models.py
# ==========================================

from django.db import models
from django.utils import timezone


class IncomeStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    RECEIVED = 'RECEIVED', 'Received'


class Income(models.Model):
    """
    Ledger credit.

    A project with a contracted amount carries one placeholder row created
    with it. The placeholder starts PENDING and completion relabels it as
    received, but it never counts as money received. Only real payments
    (placeholder=False, status RECEIVED) do.
    """

    date = models.DateTimeField(default=timezone.now)
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    note = models.TextField(blank=True)
    project_income = models.BooleanField(default=False)
    placeholder = models.BooleanField(default=False)
    status = models.CharField(
        max_length=20,
        choices=IncomeStatus.choices,
        default=IncomeStatus.RECEIVED,
    )
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='incomes',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'incomes'
        indexes = [
            models.Index(fields=['project', 'status'], name='incomes_project_status_idx'),
            models.Index(fields=['date'], name='incomes_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.description} ({self.amount})"

    @property
    def is_pending(self):
        return self.status == IncomeStatus.PENDING

    @property
    def counts_as_received(self):
        return not self.placeholder and self.status == IncomeStatus.RECEIVED


class Expense(models.Model):
    """Ledger debit. Never auto-generated."""

    date = models.DateTimeField(default=timezone.now)
    category = models.CharField(max_length=100, db_index=True)
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True)
    project_expense = models.BooleanField(default=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='expenses',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['project'], name='expenses_project_idx'),
            models.Index(fields=['date'], name='expenses_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.category}: {self.description} ({self.amount})"
