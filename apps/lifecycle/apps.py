import os
import sys

from django.apps import AppConfig
from django.conf import settings


# Set by config/wsgi.py before the application loads
WSGI_HOST_ENV = 'LIFECYCLE_WSGI_HOST'


def _is_server_process(argv, environ) -> bool:
    """
    True only in processes that serve requests: a WSGI host that loaded
    config.wsgi, or the runserver child. Management commands, django-admin,
    `python -m django`, workers and scripts never start the scheduler;
    run_scheduled_jobs starts it itself.
    """
    if environ.get(WSGI_HOST_ENV) == 'true':
        return True
    if len(argv) >= 2 and argv[1] == 'runserver':
        # Only the autoreloader's child serves requests
        return environ.get('RUN_MAIN') == 'true' or '--noreload' in argv
    return False


class LifecycleConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.lifecycle'
    verbose_name = 'Project Lifecycle'

    def ready(self):
        if not settings.SCHEDULED_JOBS_ENABLED:
            return
        if not _is_server_process(sys.argv, os.environ):
            return

        from .jobs import scheduled_jobs
        scheduled_jobs.start()
