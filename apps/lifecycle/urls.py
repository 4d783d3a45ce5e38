from django.urls import path
from . import views

app_name = 'lifecycle'

urlpatterns = [
    # Project completion
    path('project-completion/check/<int:project_id>/', views.check_completion, name='check-completion'),
    path('project-completion/mark-complete/<int:project_id>/', views.mark_complete, name='mark-complete'),
    path('project-completion/auto-complete/', views.auto_complete, name='auto-complete'),
    path('project-completion/stats/', views.completion_stats, name='completion-stats'),
    path('project-completion/batch-update-statuses/', views.batch_update_statuses, name='batch-update-statuses'),

    # Scheduled jobs
    path('project-completion/job-status/', views.job_status, name='job-status'),
    path('project-completion/start-jobs/', views.start_jobs, name='start-jobs'),
    path('project-completion/stop-jobs/', views.stop_jobs, name='stop-jobs'),

    # Data reconciliation
    path('data-reconciliation/reconcile/', views.reconcile, name='reconcile'),
    path('data-reconciliation/validate/', views.validate, name='validate'),
    path('data-reconciliation/correct/', views.correct, name='correct'),
    path('data-reconciliation/stats/', views.reconciliation_stats, name='reconciliation-stats'),
]
