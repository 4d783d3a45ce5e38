# ==========================================
# apps/budgets/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.db import models


HEX_COLOR_VALIDATOR = RegexValidator(
    regex=r'^#[0-9A-Fa-f]{6}$',
    message='Color must be a hex value like #4CAF50',
)


class BudgetCategory(models.Model):
    """
    Share of the studio's current balance set aside for one purpose.

    The percentages of all categories add up to at most 100. The amount of
    a category is never stored; it is derived from the current balance
    whenever categories are read.
    """

    name = models.CharField(max_length=100, unique=True)
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    color = models.CharField(max_length=7, validators=[HEX_COLOR_VALIDATOR])
    description = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'budget_categories'
        verbose_name_plural = 'budget categories'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.percentage}%)"
