from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdminRole, IsManagerOrAdmin
from .jobs import scheduled_jobs
from .serializers import (
    MarkCompleteSerializer,
    CompletionResultSerializer,
    CompletionStatsSerializer,
    JobStatusSerializer,
    FinancialValidationResultSerializer,
    ValidationResultSerializer,
    CorrectionResultSerializer,
    ReconciliationStatsSerializer,
    TriggerResponseSerializer,
    MessageSerializer,
    ErrorSerializer,
)
from .services import (
    check_completion_criteria,
    mark_project_complete,
    get_completion_stats,
    validate_financial_consistency,
    get_reconciliation_stats,
    ProjectNotFoundError,
)


# =============================================================================
# Project Completion
# =============================================================================

@extend_schema(
    responses={200: CompletionResultSerializer, 404: ErrorSerializer},
    description="Evaluate completion criteria for a project without changing it.",
    tags=['project-completion'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsManagerOrAdmin])
def check_completion(request, project_id):
    """Check completion criteria - thin HTTP handler."""
    try:
        result = check_completion_criteria(project_id=project_id)
    except ProjectNotFoundError as e:
        raise NotFound(str(e))
    return Response(CompletionResultSerializer(result).data)


@extend_schema(
    request=MarkCompleteSerializer,
    responses={200: MessageSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Mark a project complete, relabelling its pending payment placeholder.",
    tags=['project-completion'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def mark_complete(request, project_id):
    """Mark a project complete."""
    serializer = MarkCompleteSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': 'Reason is required'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        project = mark_project_complete(
            project_id=project_id,
            reason=serializer.validated_data['reason'],
            admin_override=serializer.validated_data['admin_override'],
            triggered_by=request.user,
        )
    except ProjectNotFoundError as e:
        raise NotFound(str(e))

    return Response({'message': f"Project {project.code} marked as complete"})


@extend_schema(
    request=None,
    responses={200: TriggerResponseSerializer, 500: TriggerResponseSerializer},
    description="Run the auto-completion pass now.",
    tags=['project-completion'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def auto_complete(request):
    """Run auto-completion immediately."""
    outcome = scheduled_jobs.trigger_auto_completion()
    code = status.HTTP_200_OK if outcome['success'] else status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(outcome, status=code)


@extend_schema(
    responses={200: CompletionStatsSerializer},
    tags=['project-completion'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsManagerOrAdmin])
def completion_stats(request):
    """Get completion statistics."""
    return Response(CompletionStatsSerializer(get_completion_stats()).data)


@extend_schema(
    request=None,
    responses={200: TriggerResponseSerializer},
    description="Apply date-driven status transitions to all projects.",
    tags=['project-completion'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def batch_update_statuses(request):
    """Run the status transition batch now."""
    result = scheduled_jobs.update_statuses()
    return Response({
        'success': True,
        'message': f"Status update completed: {result['updated']} projects updated, {result['errors']} errors",
        'result': result,
    })


# =============================================================================
# Scheduled Jobs
# =============================================================================

@extend_schema(
    responses={200: JobStatusSerializer},
    tags=['project-completion'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def job_status(request):
    """Get scheduler status."""
    return Response(JobStatusSerializer(scheduled_jobs.get_job_status()).data)


@extend_schema(request=None, responses={200: MessageSerializer}, tags=['project-completion'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def start_jobs(request):
    """Start the scheduled jobs in this process."""
    if scheduled_jobs.start():
        return Response({'message': 'Scheduled jobs started'})
    return Response({'message': 'Scheduled jobs are already running'})


@extend_schema(request=None, responses={200: MessageSerializer}, tags=['project-completion'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def stop_jobs(request):
    """Stop the scheduled jobs in this process."""
    if scheduled_jobs.stop():
        return Response({'message': 'Scheduled jobs stopped'})
    return Response({'message': 'Scheduled jobs are not running'})


# =============================================================================
# Data Reconciliation
# =============================================================================

@extend_schema(
    request=None,
    responses={200: FinancialValidationResultSerializer},
    description="Compare every project's derived finances with its ledger. Changes nothing.",
    tags=['data-reconciliation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reconcile(request):
    """Run a read-only reconciliation report."""
    result = scheduled_jobs.reconciliation_report()
    return Response(FinancialValidationResultSerializer(result).data)


@extend_schema(
    responses={200: ValidationResultSerializer},
    tags=['data-reconciliation'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def validate(request):
    """Check financial consistency."""
    return Response(ValidationResultSerializer(validate_financial_consistency()).data)


@extend_schema(
    request=None,
    responses={200: CorrectionResultSerializer},
    description="Recompute every inconsistent project from its ledger.",
    tags=['data-reconciliation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def correct(request):
    """Apply automated corrections."""
    return Response(CorrectionResultSerializer(scheduled_jobs.apply_corrections()).data)


@extend_schema(
    responses={200: ReconciliationStatsSerializer},
    tags=['data-reconciliation'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reconciliation_stats(request):
    """Get figures from the latest reconciliation."""
    return Response(ReconciliationStatsSerializer(get_reconciliation_stats()).data)
