"""
Scheduled job runner for the project lifecycle engine.

One runner per process. On start a single startup job runs an
auto-completion pass and then a reconciliation pass. After that
auto-completion repeats every AUTO_COMPLETION_INTERVAL_HOURS and
reconciliation runs daily at RECONCILIATION_HOUR:00 local time.

Every project-wide pass, scheduled or requested over the API, holds the
same lock so two of them never overlap. A scheduled auto-completion that
finds the lock taken is skipped until its next interval; reconciliation
and manual requests wait for the lock instead.
"""

import logging
import threading
from typing import Optional, Dict, Any, Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone

from .services import (
    auto_complete_projects,
    batch_update_project_statuses,
    reconcile_project_finances,
    perform_automated_corrections,
)

logger = logging.getLogger(__name__)

AUTO_COMPLETION_JOB_ID = 'project_auto_completion'
STARTUP_JOB_ID = 'startup_passes'
DAILY_RECONCILIATION_JOB_ID = 'daily_reconciliation'


class ScheduledJobRunner:
    """
    Owns the APScheduler instance driving the lifecycle passes.

    The scheduler class and the clock are injectable so the cadence can be
    exercised without waiting on wall-clock time.
    """

    def __init__(
        self,
        scheduler_factory: Callable[..., Any] = BackgroundScheduler,
        clock: Callable[[], Any] = timezone.now,
    ):
        self._scheduler_factory = scheduler_factory
        self._clock = clock
        self._scheduler = None
        self._state_lock = threading.Lock()
        self._pass_lock = threading.Lock()
        self.last_auto_completion = None
        self.last_reconciliation = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    def start(self) -> bool:
        """
        Start the scheduler and register the lifecycle jobs.

        Returns:
            False when the runner was already running
        """
        with self._state_lock:
            if self._scheduler is not None:
                logger.warning("Scheduled jobs are already running")
                return False

            now = self._clock()
            scheduler = self._scheduler_factory(timezone=settings.TIME_ZONE)

            scheduler.add_job(
                func=self._scheduled_startup,
                trigger=DateTrigger(run_date=now, timezone=settings.TIME_ZONE),
                id=STARTUP_JOB_ID,
                name='Startup auto-completion and reconciliation',
                replace_existing=True,
                misfire_grace_time=None,
            )
            scheduler.add_job(
                func=self._scheduled_auto_completion,
                trigger=IntervalTrigger(
                    hours=settings.AUTO_COMPLETION_INTERVAL_HOURS,
                    timezone=settings.TIME_ZONE,
                ),
                id=AUTO_COMPLETION_JOB_ID,
                name='Project auto-completion',
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            scheduler.add_job(
                func=self._scheduled_reconciliation,
                trigger=CronTrigger(
                    hour=settings.RECONCILIATION_HOUR,
                    minute=0,
                    timezone=settings.TIME_ZONE,
                ),
                id=DAILY_RECONCILIATION_JOB_ID,
                name='Daily reconciliation',
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )

            scheduler.start()
            self._scheduler = scheduler

        logger.info(
            "Scheduled jobs started: auto-completion every %sh, reconciliation daily at %02d:00",
            settings.AUTO_COMPLETION_INTERVAL_HOURS, settings.RECONCILIATION_HOUR,
        )
        return True

    def stop(self) -> bool:
        """
        Stop future scheduling. A pass already running is not interrupted.

        Returns:
            False when the runner was not running
        """
        with self._state_lock:
            if self._scheduler is None:
                logger.warning("Scheduled jobs are not running")
                return False

            self._scheduler.shutdown(wait=False)
            self._scheduler = None

        logger.info("Scheduled jobs stopped")
        return True

    # =========================================================================
    # Passes
    # =========================================================================

    def _exclusive(self, name: str, func: Callable[[], Any], *, blocking: bool):
        if not self._pass_lock.acquire(blocking=blocking):
            logger.warning("Skipping %s: another pass is still running", name)
            return None
        try:
            return func()
        finally:
            self._pass_lock.release()

    def _auto_completion_pass(self, *, blocking: bool) -> Optional[Dict[str, Any]]:
        result = self._exclusive('auto-completion', auto_complete_projects, blocking=blocking)
        if result is not None:
            self.last_auto_completion = self._clock()
        return result

    def _reconcile_and_correct(self) -> Dict[str, Any]:
        reconciliation = reconcile_project_finances()
        corrections = None
        if reconciliation.inconsistent_projects > 0:
            logger.warning(
                "Found %d inconsistent projects, running automated corrections",
                reconciliation.inconsistent_projects,
            )
            corrections = perform_automated_corrections()
        return {'reconciliation': reconciliation, 'corrections': corrections}

    def _reconciliation_pass(self, *, blocking: bool) -> Optional[Dict[str, Any]]:
        result = self._exclusive('reconciliation', self._reconcile_and_correct, blocking=blocking)
        if result is not None:
            self.last_reconciliation = self._clock()
        return result

    def run_auto_completion(self, *, blocking: bool = False) -> Optional[Dict[str, Any]]:
        """Run one auto-completion pass; failures are logged, never raised."""
        try:
            return self._auto_completion_pass(blocking=blocking)
        except Exception:
            logger.exception("Scheduled auto-completion failed")
            return None

    def run_reconciliation(self) -> Optional[Dict[str, Any]]:
        """
        Run one reconciliation pass, correcting when needed; never raises.

        Waits for a running pass to finish rather than skipping, since the
        next scheduled reconciliation is a day away.
        """
        try:
            return self._reconciliation_pass(blocking=True)
        except Exception:
            logger.exception("Scheduled reconciliation failed")
            return None

    def run_startup_passes(self) -> None:
        """Auto-completion, then reconciliation of what it left behind."""
        self.run_auto_completion(blocking=True)
        self.run_reconciliation()

    def _scheduled_startup(self):
        close_old_connections()
        try:
            self.run_startup_passes()
        finally:
            close_old_connections()

    def _scheduled_auto_completion(self):
        close_old_connections()
        try:
            self.run_auto_completion()
        finally:
            close_old_connections()

    def _scheduled_reconciliation(self):
        close_old_connections()
        try:
            self.run_reconciliation()
        finally:
            close_old_connections()

    # =========================================================================
    # Manual triggers
    # =========================================================================

    def trigger_auto_completion(self) -> Dict[str, Any]:
        """Run auto-completion now and report the outcome."""
        try:
            result = self._auto_completion_pass(blocking=True)
        except Exception as e:
            logger.exception("Manual auto-completion failed")
            return {'success': False, 'message': f"Error: {e}"}

        return {
            'success': True,
            'message': (
                f"Auto-completion completed: {result['completed']} projects completed, "
                f"{result['errors']} errors"
            ),
            'result': result,
        }

    def trigger_reconciliation(self) -> Dict[str, Any]:
        """Run reconciliation (and corrections if needed) now and report the outcome."""
        try:
            result = self._reconciliation_pass(blocking=True)
        except Exception as e:
            logger.exception("Manual reconciliation failed")
            return {'success': False, 'message': f"Error: {e}"}

        reconciliation = result['reconciliation']
        corrections = result['corrections']
        return {
            'success': True,
            'message': (
                f"Reconciliation completed: {reconciliation.consistent_projects} consistent, "
                f"{reconciliation.inconsistent_projects} inconsistent projects"
            ),
            'result': {
                'reconciliation': reconciliation.to_dict(),
                'corrections': corrections.to_dict() if corrections else None,
            },
        }

    def reconciliation_report(self):
        """Read-only reconciliation under the pass lock. Errors propagate."""
        return self._exclusive('reconciliation report', reconcile_project_finances, blocking=True)

    def apply_corrections(self):
        """Automated corrections under the pass lock. Errors propagate."""
        return self._exclusive('corrections', perform_automated_corrections, blocking=True)

    def update_statuses(self) -> Dict[str, Any]:
        """Date-driven status batch under the pass lock. Errors propagate."""
        return self._exclusive('status update', batch_update_project_statuses, blocking=True)

    def get_job_status(self) -> Dict[str, Any]:
        next_reconciliation = None
        scheduler = self._scheduler
        if scheduler is not None:
            job = scheduler.get_job(DAILY_RECONCILIATION_JOB_ID)
            if job is not None:
                next_reconciliation = job.next_run_time

        return {
            'is_running': self.is_running,
            'last_auto_completion': self.last_auto_completion,
            'last_reconciliation': self.last_reconciliation,
            'next_reconciliation': next_reconciliation,
        }


scheduled_jobs = ScheduledJobRunner()
