from rest_framework import serializers
from .models import Client, Project, ProjectStatus


class ClientSerializer(serializers.ModelSerializer):
    """Serializer for clients."""

    project_count = serializers.IntegerField(source='projects.count', read_only=True)

    class Meta:
        model = Client
        fields = [
            'id',
            'name',
            'company',
            'email',
            'phone',
            'project_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProjectSerializer(serializers.ModelSerializer):
    """Main serializer for projects."""

    client_name = serializers.CharField(source='client.name', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'code',
            'name',
            'company',
            'type',
            'status',
            'shoot_start_date',
            'shoot_end_date',
            'location',
            'reference',
            'amount',
            'outsourcing',
            'outsourcing_amt',
            'out_for',
            'outsourcing_paid',
            'received_amt',
            'pending_amt',
            'profit',
            'client',
            'client_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'code',
            'received_amt',
            'pending_amt',
            'profit',
            'created_at',
            'updated_at',
        ]


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    client_name = serializers.CharField(source='client.name', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'code',
            'name',
            'type',
            'status',
            'shoot_end_date',
            'amount',
            'received_amt',
            'pending_amt',
            'client_name',
        ]
        read_only_fields = fields


class ProjectWriteSerializer(serializers.Serializer):
    """Input serializer for project create/update."""

    client_id = serializers.IntegerField()
    name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    company = serializers.CharField(max_length=200, required=False, allow_blank=True)
    type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)
    shoot_start_date = serializers.DateField(required=False, allow_null=True)
    shoot_end_date = serializers.DateField(required=False, allow_null=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    outsourcing = serializers.BooleanField(required=False)
    outsourcing_amt = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    out_for = serializers.CharField(max_length=200, required=False, allow_blank=True)
    outsourcing_paid = serializers.BooleanField(required=False)

    def validate_status(self, value):
        if not value:
            return None
        value = value.upper()
        if value not in ProjectStatus.values:
            raise serializers.ValidationError(
                f"Invalid status. Valid options: {', '.join(ProjectStatus.values)}"
            )
        return value

    def validate(self, attrs):
        start = attrs.get('shoot_start_date')
        end = attrs.get('shoot_end_date')
        if start and end and end < start:
            raise serializers.ValidationError(
                {'shoot_end_date': 'Shoot end date must not be before the start date'}
            )
        return attrs


class ProjectCodeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()


class ProjectStatsSerializer(serializers.Serializer):
    total_projects = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_project_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    status_breakdown = serializers.ListField(child=serializers.DictField())
    type_breakdown = serializers.ListField(child=serializers.DictField())


class TransitionResultSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    previous_status = serializers.CharField(allow_null=True)
    status = serializers.CharField(allow_null=True)
    changed = serializers.BooleanField()
