from rest_framework import serializers


class MarkCompleteSerializer(serializers.Serializer):
    """Input serializer for marking a project complete."""

    reason = serializers.CharField(max_length=255)
    admin_override = serializers.BooleanField(required=False, default=True)


class CompletionCriteriaSerializer(serializers.Serializer):
    manual_status_change = serializers.BooleanField()
    fully_paid = serializers.BooleanField()
    date_passed_with_partial_payment = serializers.BooleanField()
    received_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    shoot_end_date = serializers.DateField(allow_null=True)


class CompletionResultSerializer(serializers.Serializer):
    should_complete = serializers.BooleanField()
    reason = serializers.CharField(allow_blank=True)
    criteria = CompletionCriteriaSerializer()


class CompletionStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    completed_projects = serializers.IntegerField()
    pending_projects = serializers.IntegerField()
    auto_completed_this_month = serializers.IntegerField()


class JobStatusSerializer(serializers.Serializer):
    is_running = serializers.BooleanField()
    last_auto_completion = serializers.DateTimeField(allow_null=True)
    last_reconciliation = serializers.DateTimeField(allow_null=True)
    next_reconciliation = serializers.DateTimeField(allow_null=True)


class ReconciliationResultSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    project_code = serializers.CharField()
    issues = serializers.ListField(child=serializers.CharField())
    corrections = serializers.ListField(child=serializers.CharField())
    is_consistent = serializers.BooleanField()


class FinancialValidationResultSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    consistent_projects = serializers.IntegerField()
    inconsistent_projects = serializers.IntegerField()
    total_issues = serializers.IntegerField()
    total_corrections = serializers.IntegerField()
    details = ReconciliationResultSerializer(many=True)


class ValidationResultSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    issues = serializers.ListField(child=serializers.CharField())
    recommendations = serializers.ListField(child=serializers.CharField())
    warnings = serializers.ListField(child=serializers.CharField())
    inconsistent_project_ids = serializers.ListField(child=serializers.IntegerField())


class CorrectionResultSerializer(serializers.Serializer):
    corrections_applied = serializers.IntegerField()
    errors = serializers.IntegerField()
    details = serializers.ListField(child=serializers.CharField())
    projects = ReconciliationResultSerializer(many=True)


class ReconciliationStatsSerializer(serializers.Serializer):
    last_reconciliation = serializers.DateTimeField(allow_null=True)
    total_projects = serializers.IntegerField()
    consistent_projects = serializers.IntegerField()
    inconsistent_projects = serializers.IntegerField()
    total_issues = serializers.IntegerField()


class TriggerResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    result = serializers.DictField(required=False)


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
