"""Domain entities representing user notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Kinds of invoice lifecycle events a user can be notified about."""

    INVOICE_ISSUED = "INVOICE_ISSUED"
    PAYMENT_DUE = "PAYMENT_DUE"
    PAYMENT_OVERDUE = "PAYMENT_OVERDUE"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    INVOICE_CANCELED = "INVOICE_CANCELED"


# At most one notification of these types may exist per user and invoice.
REMINDER_NOTIFICATION_TYPES: tuple[NotificationType, ...] = (
    NotificationType.PAYMENT_DUE,
    NotificationType.PAYMENT_OVERDUE,
)


@dataclass
class Notification:
    """In-app notification delivered to a specific user about an invoice."""

    id: int | None
    user_id: int
    invoice_id: int
    type: NotificationType
    read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FormattedNotification:
    """Notification prepared for display, with its human readable message."""

    id: int
    user_id: int
    invoice_id: int
    type: NotificationType
    read: bool
    message: str
    created_at: datetime | None


__all__ = [
    "FormattedNotification",
    "Notification",
    "NotificationType",
    "REMINDER_NOTIFICATION_TYPES",
]
