"""Domain entities exposed by the application."""

from .invoice import OPEN_INVOICE_STATUSES, Invoice, InvoiceStatus
from .notification import (
    REMINDER_NOTIFICATION_TYPES,
    FormattedNotification,
    Notification,
    NotificationType,
)
from .user import User

__all__ = [
    "FormattedNotification",
    "Invoice",
    "InvoiceStatus",
    "Notification",
    "NotificationType",
    "OPEN_INVOICE_STATUSES",
    "REMINDER_NOTIFICATION_TYPES",
    "User",
]
