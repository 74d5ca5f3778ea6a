"""Pydantic models describing the scheduled task trigger responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ScheduledTasksResponse(BaseModel):
    """Counts produced by a manual run of the scheduled notification tasks."""

    success: bool = True
    message: str = "Scheduled tasks executed"
    results: dict[str, int] = Field(
        default_factory=dict,
        description="Items processed per task: paymentDue, paymentOverdue, cleanupOldNotifications",
    )
    timestamp: datetime


__all__ = ["ScheduledTasksResponse"]
