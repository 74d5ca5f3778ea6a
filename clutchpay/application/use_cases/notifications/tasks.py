"""Run the periodic notification tasks, all of them or a single one."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from sqlalchemy.orm import Session

from .reminders import (
    check_and_notify_payment_due,
    check_and_notify_payment_overdue,
    cleanup_old_read_notifications,
)

ScheduledTaskName = Literal["due", "overdue", "cleanup"]

TASK_PAYMENT_DUE: ScheduledTaskName = "due"
TASK_PAYMENT_OVERDUE: ScheduledTaskName = "overdue"
TASK_CLEANUP: ScheduledTaskName = "cleanup"
SCHEDULED_TASKS: tuple[ScheduledTaskName, ...] = (
    TASK_PAYMENT_DUE,
    TASK_PAYMENT_OVERDUE,
    TASK_CLEANUP,
)


def run_scheduled_tasks(
    session: Session,
    task: ScheduledTaskName | None = None,
    *,
    days_ahead: int | None = None,
    retention_days: int | None = None,
    now: datetime | None = None,
) -> dict[str, int]:
    """Execute ``task`` (or every task when ``None``) and return the counts.

    Result keys are ``paymentDue``, ``paymentOverdue`` and
    ``cleanupOldNotifications``, present only for the tasks that ran.
    """

    if task is not None and task not in SCHEDULED_TASKS:
        raise ValueError(f"Unknown scheduled task: {task!r}")

    results: dict[str, int] = {}
    if task in (None, TASK_PAYMENT_DUE):
        results["paymentDue"] = check_and_notify_payment_due(
            session, days_ahead, now=now
        )
    if task in (None, TASK_PAYMENT_OVERDUE):
        results["paymentOverdue"] = check_and_notify_payment_overdue(session, now=now)
    if task in (None, TASK_CLEANUP):
        results["cleanupOldNotifications"] = cleanup_old_read_notifications(
            session, retention_days, now=now
        )
    return results


__all__ = [
    "SCHEDULED_TASKS",
    "ScheduledTaskName",
    "TASK_CLEANUP",
    "TASK_PAYMENT_DUE",
    "TASK_PAYMENT_OVERDUE",
    "run_scheduled_tasks",
]
