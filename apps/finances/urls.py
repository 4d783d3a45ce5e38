from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finances'

router = DefaultRouter()
router.register(r'incomes', views.IncomeViewSet, basename='income')
router.register(r'expenses', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # Income routes
    # GET    /api/financial/incomes/                    - List incomes
    # POST   /api/financial/incomes/                    - Create income
    # GET    /api/financial/incomes/{id}/               - Get income
    # PATCH  /api/financial/incomes/{id}/               - Update income
    # DELETE /api/financial/incomes/{id}/               - Delete income

    # Expense routes
    # GET    /api/financial/expenses/                   - List expenses
    # POST   /api/financial/expenses/                   - Create expense
    # GET    /api/financial/expenses/categories/        - Distinct categories
    # GET    /api/financial/expenses/categorized/       - Totals per category

    # GET    /api/financial/summary/                    - Financial summary
    # GET    /api/financial/projects/{id}/payments/     - Payment history
    # POST   /api/financial/projects/{id}/payments/     - Record payment
    path('summary/', views.financial_summary, name='summary'),
    path('projects/<int:project_id>/payments/', views.project_payments, name='project-payments'),

    path('', include(router.urls)),
]
