"""In-process cron scheduler for the payment notification tasks."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from croniter import croniter
from sqlalchemy.orm import Session

from clutchpay.config import Settings, get_settings
from clutchpay.utils import ensure_app_timezone, now_in_app_timezone

from .use_cases.notifications.tasks import (
    TASK_CLEANUP,
    TASK_PAYMENT_DUE,
    TASK_PAYMENT_OVERDUE,
    ScheduledTaskName,
    run_scheduled_tasks,
)

logger = logging.getLogger(__name__)


@dataclass
class ScheduledJob:
    """A notification task bound to a cron expression."""

    name: str
    task: ScheduledTaskName
    cron_expression: str
    next_run: datetime | None = field(default=None)

    def schedule_after(self, base: datetime) -> datetime:
        self.next_run = croniter(self.cron_expression, base).get_next(datetime)
        return self.next_run

    def is_due(self, now: datetime) -> bool:
        return self.next_run is not None and now >= self.next_run


def build_default_jobs(settings: Settings) -> list[ScheduledJob]:
    return [
        ScheduledJob("paymentDueCheck", TASK_PAYMENT_DUE, settings.payment_due_cron),
        ScheduledJob(
            "paymentOverdueCheck", TASK_PAYMENT_OVERDUE, settings.payment_overdue_cron
        ),
        ScheduledJob(
            "notificationCleanup", TASK_CLEANUP, settings.notification_cleanup_cron
        ),
    ]


class PaymentScheduler:
    """Run the notification tasks whenever their cron expression fires.

    Every job opens its own session so a failing job cannot affect the
    others. Missed fire times are not replayed: after a run the next fire
    time is computed from the moment of the run.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        settings: Settings | None = None,
        jobs: list[ScheduledJob] | None = None,
        poll_interval: float | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._settings = settings or get_settings()
        self._session_factory = session_factory
        self._clock = clock
        self._poll_interval = poll_interval or self._settings.scheduler_poll_seconds
        self.jobs = jobs if jobs is not None else build_default_jobs(self._settings)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        started_at = self._clock()
        for job in self.jobs:
            if job.next_run is None:
                job.schedule_after(started_at)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_pending(self, now: datetime | None = None) -> dict[str, int]:
        """Run every job whose next fire time has passed and return their counts."""

        current = ensure_app_timezone(now) if now is not None else self._clock()
        results: dict[str, int] = {}
        for job in self.jobs:
            if not job.is_due(current):
                continue
            results.update(self._run_job(job, current))
            job.schedule_after(current)
        return results

    def _run_job(self, job: ScheduledJob, now: datetime) -> dict[str, int]:
        logger.info("Running scheduled job '%s'", job.name)
        session: Session | None = None
        try:
            session = self._session_factory()
            results = run_scheduled_tasks(
                session,
                job.task,
                days_ahead=self._settings.payment_due_days_ahead,
                retention_days=self._settings.notification_retention_days,
                now=now,
            )
        except Exception:
            logger.exception("Scheduled job '%s' failed", job.name)
            if session is not None:
                session.rollback()
            return {}
        finally:
            if session is not None:
                session.close()
        logger.info("Scheduled job '%s' completed: %s", job.name, results)
        return results

    def start(self) -> None:
        """Start polling for due jobs in a background daemon thread."""

        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop, name="payment-scheduler", daemon=True
        )
        self._thread.start()
        logger.info(
            "Payment scheduler started with jobs: %s",
            ", ".join(f"{job.name} ({job.cron_expression})" for job in self.jobs),
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the background thread to stop and wait for it."""

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Payment scheduler stopped")

    def _loop(self) -> None:
        while not self._stop_event.wait(self._poll_interval):
            self.run_pending()


__all__ = ["PaymentScheduler", "ScheduledJob", "build_default_jobs"]
