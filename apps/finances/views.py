from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.projects.services import ProjectNotFoundError
from .serializers import (
    IncomeSerializer,
    IncomeWriteSerializer,
    ExpenseSerializer,
    ExpenseWriteSerializer,
    DateRangeQuerySerializer,
    FinancialSummarySerializer,
    CategorizedTotalsSerializer,
    ProjectPaymentSerializer,
    PaymentHistorySerializer,
)
from .services import (
    create_income,
    get_income_by_id,
    update_income,
    delete_income,
    list_incomes,
    create_expense,
    get_expense_by_id,
    update_expense,
    delete_expense,
    list_expenses,
    get_expense_categories,
    get_categorized_expense_totals,
    get_financial_summary,
    record_project_payment,
    get_project_payment_history,
    IncomeNotFoundError,
    ExpenseNotFoundError,
    InvalidProjectReferenceError,
)


class LedgerPagination(PageNumberPagination):
    """Custom pagination for ledger lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _project_param(request):
    project = request.query_params.get('project', '')
    return int(project) if project.isdigit() else None


def _date_range(request):
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    return query_serializer.validated_data


class IncomeViewSet(viewsets.ViewSet):
    """
    Income ledger endpoints.

    Every write recomputes the owning project's derived finances.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR),
            OpenApiParameter('project', OpenApiTypes.INT),
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses={200: IncomeSerializer(many=True)},
    )
    def list(self, request):
        dates = _date_range(request)
        queryset = list_incomes(
            search=request.query_params.get('search'),
            project_id=_project_param(request),
            start_date=dates.get('start_date'),
            end_date=dates.get('end_date'),
        )
        paginator = LedgerPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(IncomeSerializer(page, many=True).data)

    @extend_schema(request=IncomeWriteSerializer, responses={201: IncomeSerializer})
    def create(self, request):
        serializer = IncomeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            income = create_income(**serializer.validated_data)
        except InvalidProjectReferenceError as e:
            raise ValidationError({'project_id': [str(e)]})

        return Response(IncomeSerializer(income).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: IncomeSerializer})
    def retrieve(self, request, pk=None):
        try:
            income = get_income_by_id(income_id=pk)
        except IncomeNotFoundError as e:
            raise NotFound(str(e))
        return Response(IncomeSerializer(income).data)

    @extend_schema(request=IncomeWriteSerializer, responses={200: IncomeSerializer})
    def update(self, request, pk=None, partial=False):
        serializer = IncomeWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            income = update_income(income_id=pk, data=serializer.validated_data)
        except IncomeNotFoundError as e:
            raise NotFound(str(e))
        except InvalidProjectReferenceError as e:
            raise ValidationError({'project_id': [str(e)]})

        return Response(IncomeSerializer(income).data)

    @extend_schema(request=IncomeWriteSerializer, responses={200: IncomeSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            delete_income(income_id=pk)
        except IncomeNotFoundError as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExpenseViewSet(viewsets.ViewSet):
    """
    Expense ledger endpoints.

    Every write recomputes the owning project's derived finances.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR),
            OpenApiParameter('project', OpenApiTypes.INT),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses={200: ExpenseSerializer(many=True)},
    )
    def list(self, request):
        dates = _date_range(request)
        queryset = list_expenses(
            search=request.query_params.get('search'),
            project_id=_project_param(request),
            category=request.query_params.get('category'),
            start_date=dates.get('start_date'),
            end_date=dates.get('end_date'),
        )
        paginator = LedgerPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(ExpenseSerializer(page, many=True).data)

    @extend_schema(request=ExpenseWriteSerializer, responses={201: ExpenseSerializer})
    def create(self, request):
        serializer = ExpenseWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = create_expense(**serializer.validated_data)
        except InvalidProjectReferenceError as e:
            raise ValidationError({'project_id': [str(e)]})

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ExpenseSerializer})
    def retrieve(self, request, pk=None):
        try:
            expense = get_expense_by_id(expense_id=pk)
        except ExpenseNotFoundError as e:
            raise NotFound(str(e))
        return Response(ExpenseSerializer(expense).data)

    @extend_schema(request=ExpenseWriteSerializer, responses={200: ExpenseSerializer})
    def update(self, request, pk=None, partial=False):
        serializer = ExpenseWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            expense = update_expense(expense_id=pk, data=serializer.validated_data)
        except ExpenseNotFoundError as e:
            raise NotFound(str(e))
        except InvalidProjectReferenceError as e:
            raise ValidationError({'project_id': [str(e)]})

        return Response(ExpenseSerializer(expense).data)

    @extend_schema(request=ExpenseWriteSerializer, responses={200: ExpenseSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            delete_expense(expense_id=pk)
        except ExpenseNotFoundError as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=['get'])
    def categories(self, request):
        """Get list of all expense categories."""
        return Response(get_expense_categories())

    @extend_schema(
        parameters=[
            OpenApiParameter('start_date', OpenApiTypes.DATE),
            OpenApiParameter('end_date', OpenApiTypes.DATE),
        ],
        responses={200: CategorizedTotalsSerializer},
    )
    @action(detail=False, methods=['get'], url_path='categorized')
    def categorized(self, request):
        """Get expense totals per category."""
        dates = _date_range(request)
        data = get_categorized_expense_totals(**dates)
        return Response(CategorizedTotalsSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={200: FinancialSummarySerializer},
    description="Get income/expense totals for a date range.",
    tags=['financial'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def financial_summary(request):
    """Get financial summary - thin HTTP handler."""
    dates = _date_range(request)
    data = get_financial_summary(**dates)
    return Response(FinancialSummarySerializer(data).data)


@extend_schema(
    methods=['GET'],
    responses={200: PaymentHistorySerializer},
    description="Get received payments for a project.",
    tags=['financial'],
)
@extend_schema(
    methods=['POST'],
    request=ProjectPaymentSerializer,
    responses={201: IncomeSerializer},
    description="Record a payment received for a project.",
    tags=['financial'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def project_payments(request, project_id):
    """List or record payments of a project."""
    if request.method == 'GET':
        try:
            data = get_project_payment_history(project_id=project_id)
        except ProjectNotFoundError as e:
            raise NotFound(str(e))
        return Response(PaymentHistorySerializer(data).data)

    serializer = ProjectPaymentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        income = record_project_payment(
            project_id=project_id,
            amount=serializer.validated_data['amount'],
            description=serializer.validated_data.get('description') or None,
        )
    except InvalidProjectReferenceError as e:
        raise NotFound(str(e))

    return Response(IncomeSerializer(income).data, status=status.HTTP_201_CREATED)
