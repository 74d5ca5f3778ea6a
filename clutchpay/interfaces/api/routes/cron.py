"""Manual trigger for the scheduled payment notification tasks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clutchpay.application.use_cases.notifications import (
    ScheduledTaskName,
    run_scheduled_tasks,
)
from clutchpay.config import Settings
from clutchpay.infrastructure.database import get_db
from clutchpay.interfaces.api.dependencies import get_app_settings, verify_cron_secret
from clutchpay.interfaces.api.schemas import ScheduledTasksResponse
from clutchpay.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


@router.get(
    "/check-payments",
    response_model=ScheduledTasksResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def check_payments(
    task: ScheduledTaskName | None = Query(
        default=None,
        description="Task to run: due, overdue or cleanup. Every task runs when omitted.",
    ),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ScheduledTasksResponse:
    """Run the payment due, overdue and cleanup tasks on demand."""

    now = now_in_app_timezone()
    try:
        results = run_scheduled_tasks(
            db,
            task,
            days_ahead=settings.payment_due_days_ahead,
            retention_days=settings.notification_retention_days,
            now=now,
        )
    except SQLAlchemyError as exc:
        logger.exception("Scheduled task run failed (task=%s)", task or "all")
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Scheduled tasks failed",
        ) from exc

    return ScheduledTasksResponse(results=results, timestamp=now)
