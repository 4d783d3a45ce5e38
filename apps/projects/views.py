from django.db.models import ProtectedError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsManagerOrAdmin
from .models import Client, Project
from .serializers import (
    ClientSerializer,
    ProjectSerializer,
    ProjectListSerializer,
    ProjectWriteSerializer,
    ProjectCodeSerializer,
    ProjectStatsSerializer,
    TransitionResultSerializer,
)
from .services import (
    create_project,
    update_project,
    delete_project,
    get_project_by_id,
    get_project_by_code,
    list_projects,
    get_project_codes,
    get_project_stats,
    recompute_project_finances,
    ProjectNotFoundError,
    InvalidClientError,
    ProjectHasLedgerEntriesError,
)


class LedgerConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The request conflicts with existing financial records.'
    default_code = 'conflict'


class ProjectPagination(PageNumberPagination):
    """Custom pagination for projects."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ClientViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Client CRUD operations.

    Clients with projects cannot be deleted.
    """

    queryset = Client.objects.prefetch_related('projects')
    serializer_class = ClientSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ProjectPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        queryset = super().get_queryset()
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)
        return queryset

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError:
            raise LedgerConflict('Cannot delete client with existing projects')


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Project CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get all projects (with filters)
    create: Create a project and its pending payment income
    retrieve: Get a specific project
    update: Update a project
    partial_update: Partially update a project
    destroy: Delete a project (?force=true also deletes its ledger rows)
    """

    queryset = Project.objects.select_related('client')
    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ProjectPagination
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        """
        Filter projects based on query parameters.

        Filters:
        - search: Search in code, name, company, type, location, client
        - type: Project type
        - status: Status or comma separated statuses
        - company: Company name
        """
        return list_projects(
            search=self.request.query_params.get('search'),
            type=self.request.query_params.get('type'),
            status=self.request.query_params.get('status'),
            company=self.request.query_params.get('company'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ProjectListSerializer
        if self.action in ['create', 'update', 'partial_update']:
            return ProjectWriteSerializer
        return ProjectSerializer

    def get_permissions(self):
        if self.action in ['recompute', 'update_status']:
            return [IsAuthenticated(), IsManagerOrAdmin()]
        return [IsAuthenticated()]

    @extend_schema(request=ProjectWriteSerializer, responses={201: ProjectSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new project."""
        serializer = ProjectWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            project = create_project(**serializer.validated_data)
        except InvalidClientError as e:
            raise ValidationError({'client_id': [str(e)]})

        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProjectWriteSerializer, responses={200: ProjectSerializer})
    def update(self, request, *args, **kwargs):
        """Update a project; PATCH accepts any subset of fields."""
        partial = kwargs.pop('partial', False)
        serializer = ProjectWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            project = update_project(
                project_id=kwargs['pk'],
                data=serializer.validated_data,
                updated_by=request.user,
            )
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        except InvalidClientError as e:
            raise ValidationError({'client_id': [str(e)]})

        return Response(ProjectSerializer(project).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('force', OpenApiTypes.BOOL, description='Also delete incomes and expenses'),
        ],
    )
    def destroy(self, request, *args, **kwargs):
        """Delete a project."""
        force = request.query_params.get('force', '').lower() in ('1', 'true', 'yes')

        try:
            delete_project(project_id=kwargs['pk'], force=force)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        except ProjectHasLedgerEntriesError as e:
            raise LedgerConflict(str(e))

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ProjectCodeSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def codes(self, request):
        """Get code/name pairs of all projects."""
        return Response(get_project_codes())

    @extend_schema(responses={200: ProjectStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Get project totals and status/type breakdown."""
        return Response(ProjectStatsSerializer(get_project_stats()).data)

    @extend_schema(responses={200: ProjectSerializer})
    @action(detail=False, methods=['get'], url_path=r'by-code/(?P<code>[^/.]+)')
    def by_code(self, request, code=None):
        """Get a project by its code."""
        try:
            project = get_project_by_code(code=code)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        return Response(ProjectSerializer(project).data)

    @extend_schema(request=None, responses={200: ProjectSerializer})
    @action(detail=True, methods=['post'])
    def recompute(self, request, pk=None):
        """Recompute the derived financial fields from the ledger."""
        try:
            recompute_project_finances(project_id=pk)
            project = get_project_by_id(project_id=pk)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        return Response(ProjectSerializer(project).data)

    @extend_schema(request=None, responses={200: TransitionResultSerializer})
    @action(detail=True, methods=['post'], url_path='update-status')
    def update_status(self, request, pk=None):
        """Apply the date-driven status transition to one project."""
        from apps.lifecycle.services import apply_status_transition

        try:
            result = apply_status_transition(project_id=pk)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        return Response(TransitionResultSerializer(result).data)
