from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    BudgetCategorySerializer,
    BudgetCategoryWriteSerializer,
    BudgetCategoryListSerializer,
    BudgetOverviewSerializer,
)
from .services import (
    create_budget_category,
    get_budget_category_by_id,
    update_budget_category,
    delete_budget_category,
    get_budget_categories,
    get_budget_overview,
    BudgetCategoryNotFoundError,
    DuplicateBudgetCategoryError,
    BudgetAllocationExceededError,
)


class BudgetCategoryViewSet(viewsets.ViewSet):
    """
    Budget category endpoints.

    Categories store a percentage; the amount is derived from the
    current balance on every read.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    @extend_schema(responses={200: BudgetCategoryListSerializer})
    def list(self, request):
        return Response(BudgetCategoryListSerializer(get_budget_categories()).data)

    @extend_schema(request=BudgetCategoryWriteSerializer, responses={201: BudgetCategorySerializer})
    def create(self, request):
        serializer = BudgetCategoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_budget_category(**serializer.validated_data)
        except DuplicateBudgetCategoryError as e:
            raise ValidationError({'name': [str(e)]})
        except BudgetAllocationExceededError as e:
            raise ValidationError({'percentage': [str(e)]})

        return Response(BudgetCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: BudgetCategorySerializer})
    def retrieve(self, request, pk=None):
        try:
            category = get_budget_category_by_id(category_id=pk)
        except BudgetCategoryNotFoundError as e:
            raise NotFound(str(e))
        return Response(BudgetCategorySerializer(category).data)

    @extend_schema(request=BudgetCategoryWriteSerializer, responses={200: BudgetCategorySerializer})
    def update(self, request, pk=None, partial=False):
        serializer = BudgetCategoryWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_budget_category(category_id=pk, data=serializer.validated_data)
        except BudgetCategoryNotFoundError as e:
            raise NotFound(str(e))
        except DuplicateBudgetCategoryError as e:
            raise ValidationError({'name': [str(e)]})
        except BudgetAllocationExceededError as e:
            raise ValidationError({'percentage': [str(e)]})

        return Response(BudgetCategorySerializer(category).data)

    @extend_schema(request=BudgetCategoryWriteSerializer, responses={200: BudgetCategorySerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            delete_budget_category(category_id=pk)
        except BudgetCategoryNotFoundError as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: BudgetOverviewSerializer},
    description="Get balance, this month's receipts, the twelve month chart and the budget split.",
    tags=['budget'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_overview(request):
    """Get budget overview - thin HTTP handler."""
    return Response(BudgetOverviewSerializer(get_budget_overview()).data)
