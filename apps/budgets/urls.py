from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'budgets'

router = DefaultRouter()
router.register(r'categories', views.BudgetCategoryViewSet, basename='category')

urlpatterns = [
    # GET    /api/budget/overview/                      - Budget dashboard
    # GET    /api/budget/categories/                    - Categories with amounts
    # POST   /api/budget/categories/                    - Create category
    # GET    /api/budget/categories/{id}/               - Get category
    # PUT    /api/budget/categories/{id}/               - Replace category
    # PATCH  /api/budget/categories/{id}/               - Update category
    # DELETE /api/budget/categories/{id}/               - Delete category
    path('overview/', views.budget_overview, name='overview'),

    path('', include(router.urls)),
]
