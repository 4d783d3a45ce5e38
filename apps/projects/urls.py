from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'projects'

router = DefaultRouter()
router.register(r'clients', views.ClientViewSet, basename='client')
router.register(r'projects', views.ProjectViewSet, basename='project')

urlpatterns = [
    # Client routes
    # GET    /api/clients/                        - List clients
    # POST   /api/clients/                        - Create client
    # GET    /api/clients/{id}/                   - Get client
    # PATCH  /api/clients/{id}/                   - Update client
    # DELETE /api/clients/{id}/                   - Delete client without projects

    # Project ViewSet routes
    # GET    /api/projects/                       - List projects
    # POST   /api/projects/                       - Create project
    # GET    /api/projects/{id}/                  - Get project
    # PUT    /api/projects/{id}/                  - Update project
    # PATCH  /api/projects/{id}/                  - Partial update
    # DELETE /api/projects/{id}/?force=true       - Delete project

    # Custom actions
    # GET    /api/projects/codes/                 - Project codes
    # GET    /api/projects/stats/                 - Project statistics
    # GET    /api/projects/by-code/{code}/        - Get project by code
    # POST   /api/projects/{id}/recompute/        - Recompute finances
    # POST   /api/projects/{id}/update-status/    - Apply date transition

    path('', include(router.urls)),
]
