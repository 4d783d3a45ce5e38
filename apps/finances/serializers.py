from decimal import Decimal

from rest_framework import serializers
from .models import Income, IncomeStatus, Expense


class IncomeSerializer(serializers.ModelSerializer):
    """Serializer for incomes."""

    project_code = serializers.CharField(source='project.code', read_only=True, default=None)

    class Meta:
        model = Income
        fields = [
            'id',
            'date',
            'description',
            'amount',
            'note',
            'project_income',
            'placeholder',
            'status',
            'project',
            'project_code',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class IncomeWriteSerializer(serializers.Serializer):
    """Input serializer for income create/update."""

    date = serializers.DateTimeField(required=False)
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    note = serializers.CharField(required=False, allow_blank=True)
    project_income = serializers.BooleanField(required=False)
    status = serializers.ChoiceField(choices=IncomeStatus.choices, required=False)
    project_id = serializers.IntegerField(required=False, allow_null=True)


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for expenses."""

    project_code = serializers.CharField(source='project.code', read_only=True, default=None)

    class Meta:
        model = Expense
        fields = [
            'id',
            'date',
            'category',
            'description',
            'amount',
            'notes',
            'project_expense',
            'project',
            'project_code',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ExpenseWriteSerializer(serializers.Serializer):
    """Input serializer for expense create/update."""

    date = serializers.DateTimeField(required=False)
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True)
    project_expense = serializers.BooleanField(required=False)
    project_id = serializers.IntegerField(required=False, allow_null=True)


class DateRangeQuerySerializer(serializers.Serializer):
    """Query parameters for date-filtered endpoints."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError('Start date must be before end date')
        return attrs


class FinancialSummarySerializer(serializers.Serializer):
    total_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    project_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    non_project_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    project_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    non_project_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    income_count = serializers.IntegerField()
    expense_count = serializers.IntegerField()


class CategoryTotalSerializer(serializers.Serializer):
    category = serializers.CharField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()


class CategorizedTotalsSerializer(serializers.Serializer):
    categories = CategoryTotalSerializer(many=True)
    grand_total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ProjectPaymentSerializer(serializers.Serializer):
    """Input serializer for recording a project payment."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)


class PaymentHistorySerializer(serializers.Serializer):
    payments = IncomeSerializer(many=True)
    total_received = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
