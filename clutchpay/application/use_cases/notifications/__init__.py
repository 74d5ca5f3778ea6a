"""Public helpers for emitting and maintaining invoice notifications."""

from .dispatch import DispatchResult, dispatch_notification
from .events import (
    notify_invoice_canceled,
    notify_invoice_issued,
    notify_payment_received,
)
from .formatting import format_notification_response
from .messages import (
    NotificationContext,
    build_email_subject,
    build_notification_message,
)
from .queries import (
    NotificationPage,
    list_user_notifications,
    mark_notifications_as_read,
)
from .reminders import (
    check_and_notify_payment_due,
    check_and_notify_payment_overdue,
    cleanup_old_read_notifications,
)
from .tasks import SCHEDULED_TASKS, ScheduledTaskName, run_scheduled_tasks

__all__ = [
    "DispatchResult",
    "NotificationContext",
    "NotificationPage",
    "SCHEDULED_TASKS",
    "ScheduledTaskName",
    "build_email_subject",
    "build_notification_message",
    "check_and_notify_payment_due",
    "check_and_notify_payment_overdue",
    "cleanup_old_read_notifications",
    "dispatch_notification",
    "format_notification_response",
    "list_user_notifications",
    "mark_notifications_as_read",
    "notify_invoice_canceled",
    "notify_invoice_issued",
    "notify_payment_received",
    "run_scheduled_tasks",
]
