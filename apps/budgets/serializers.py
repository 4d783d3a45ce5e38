from decimal import Decimal

from rest_framework import serializers
from .models import BudgetCategory, HEX_COLOR_VALIDATOR


class BudgetCategorySerializer(serializers.ModelSerializer):
    """Serializer for budget categories with their allocated amount."""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = BudgetCategory
        fields = [
            'id',
            'name',
            'percentage',
            'amount',
            'color',
            'description',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BudgetCategoryWriteSerializer(serializers.Serializer):
    """Input serializer for category create/update."""

    name = serializers.CharField(min_length=1, max_length=100)
    percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
    )
    color = serializers.CharField(max_length=7, validators=[HEX_COLOR_VALIDATOR])
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)


class BudgetCategoryListSerializer(serializers.Serializer):
    categories = BudgetCategorySerializer(many=True)
    current_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    allocated_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    unallocated_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)


class MonthlyValueSerializer(serializers.Serializer):
    month = serializers.CharField()
    value = serializers.DecimalField(max_digits=14, decimal_places=2)


class BudgetSplitSerializer(serializers.Serializer):
    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    color = serializers.CharField()


class BudgetOverviewSerializer(serializers.Serializer):
    current_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    received_amount_this_month = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_received_chart = MonthlyValueSerializer(many=True)
    budget_split_up = BudgetSplitSerializer(many=True)
