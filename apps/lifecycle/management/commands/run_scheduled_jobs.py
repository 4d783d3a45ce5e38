"""
Management command to run the lifecycle scheduler in the foreground.

Use this for a dedicated worker process instead of enabling
SCHEDULED_JOBS_ENABLED on every web worker.

Usage:
    python manage.py run_scheduled_jobs
"""

import signal
import threading

from django.core.management.base import BaseCommand

from apps.lifecycle.jobs import scheduled_jobs


class Command(BaseCommand):
    help = 'Run the project lifecycle scheduler (auto-completion and reconciliation) in the foreground'

    def handle(self, *args, **options):
        stop_event = threading.Event()

        def _shutdown(signum, frame):
            stop_event.set()

        signal.signal(signal.SIGINT, _shutdown)
        signal.signal(signal.SIGTERM, _shutdown)

        if scheduled_jobs.start():
            self.stdout.write(self.style.SUCCESS('Scheduled jobs started. Press Ctrl+C to stop.'))
        else:
            self.stdout.write(self.style.WARNING('Scheduled jobs were already running.'))

        stop_event.wait()

        scheduled_jobs.stop()
        self.stdout.write(self.style.SUCCESS('Scheduled jobs stopped.'))
