"""Periodic scans that remind debtors about due and overdue invoices.

Each scan is stateless: duplicates are suppressed by looking up the
notifications already stored, so re-running a scan over unchanged data
creates nothing new.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from clutchpay.config import get_settings
from clutchpay.domain.entities import (
    OPEN_INVOICE_STATUSES,
    Invoice,
    NotificationType,
)
from clutchpay.infrastructure.email_templates import NotificationEmail, build_invoice_url
from clutchpay.infrastructure.repositories import (
    InvoiceRepository,
    NotificationRepository,
)
from clutchpay.utils import ensure_app_timezone, now_in_app_timezone

from .dispatch import dispatch_notification
from .messages import format_amount, format_display_date, format_user_name

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


def _resolve_now(now: datetime | None) -> datetime:
    return ensure_app_timezone(now) if now is not None else now_in_app_timezone()


def _elapsed_days(start: datetime, end: datetime) -> float:
    # Same-zone aware datetimes subtract as wall-clock times; UTC gives elapsed time.
    delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return delta.total_seconds() / _SECONDS_PER_DAY


def days_until_due(due_date: datetime, now: datetime) -> int:
    """Whole days left before ``due_date``, rounded up and never negative."""

    remaining = _elapsed_days(now, due_date)
    return max(0, math.ceil(remaining))


def days_overdue(due_date: datetime, now: datetime) -> int:
    """Whole days elapsed since ``due_date``, rounded down and at least one."""

    elapsed = _elapsed_days(due_date, now)
    return max(1, math.floor(elapsed))


def _reminder_email(invoice: Invoice, **extra: int) -> NotificationEmail:
    return NotificationEmail(
        recipient_name=format_user_name(invoice.debtor_user),
        invoice_number=invoice.invoice_number,
        issuer_name=format_user_name(invoice.issuer_user),
        amount=format_amount(invoice.amount),
        currency=get_settings().default_currency,
        due_date=format_display_date(invoice.due_date),
        invoice_url=build_invoice_url(invoice.id),
        **extra,
    )


def _notify_once(
    session: Session,
    invoice: Invoice,
    notification_type: NotificationType,
    email: NotificationEmail,
    now: datetime,
) -> bool:
    debtor = invoice.debtor_user
    already_notified = NotificationRepository(session).exists(
        user_id=debtor.id,
        invoice_id=invoice.id,
        notification_type=notification_type,
    )
    if already_notified:
        logger.debug(
            "Invoice %s already has a %s notification; skipping",
            invoice.id,
            notification_type.value,
        )
        return False

    result = dispatch_notification(
        session,
        recipient=debtor,
        invoice=invoice,
        notification_type=notification_type,
        email=email,
        now=now,
    )
    return result.created


def check_and_notify_payment_due(
    session: Session,
    days_ahead: int | None = None,
    *,
    now: datetime | None = None,
) -> int:
    """Notify debtors of open invoices due within ``days_ahead`` days.

    The window is ``[now, now + days_ahead days]`` measured from the current
    instant. Returns the number of notifications created.
    """

    if days_ahead is None:
        days_ahead = get_settings().payment_due_days_ahead
    if days_ahead < 0:
        raise ValueError("days_ahead must be zero or positive")

    current = _resolve_now(now)
    window_end = (
        current.astimezone(timezone.utc) + timedelta(days=days_ahead)
    ).astimezone(current.tzinfo)
    invoices = InvoiceRepository(session).list_due_between(
        current, window_end, statuses=OPEN_INVOICE_STATUSES
    )

    count = 0
    for invoice in invoices:
        email = _reminder_email(
            invoice, days_until_due=days_until_due(invoice.due_date, current)
        )
        if _notify_once(session, invoice, NotificationType.PAYMENT_DUE, email, current):
            count += 1

    logger.info(
        "Payment due check completed: %s notification(s) sent (%s invoice(s) in window)",
        count,
        len(invoices),
    )
    return count


def check_and_notify_payment_overdue(
    session: Session,
    *,
    now: datetime | None = None,
) -> int:
    """Notify debtors of open invoices whose due date has already passed.

    ``PENDING`` invoices qualify as soon as their due date is in the past;
    the stored status does not need to be ``OVERDUE`` yet.
    """

    current = _resolve_now(now)
    invoices = InvoiceRepository(session).list_due_before(
        current, statuses=OPEN_INVOICE_STATUSES
    )

    count = 0
    for invoice in invoices:
        email = _reminder_email(
            invoice, days_overdue=days_overdue(invoice.due_date, current)
        )
        if _notify_once(
            session, invoice, NotificationType.PAYMENT_OVERDUE, email, current
        ):
            count += 1

    logger.info(
        "Payment overdue check completed: %s notification(s) sent (%s overdue invoice(s))",
        count,
        len(invoices),
    )
    return count


def cleanup_old_read_notifications(
    session: Session,
    older_than_days: int | None = None,
    *,
    now: datetime | None = None,
) -> int:
    """Delete read notifications not updated in the last ``older_than_days`` days.

    Unread notifications are kept regardless of age.
    """

    if older_than_days is None:
        older_than_days = get_settings().notification_retention_days
    if older_than_days <= 0:
        raise ValueError("older_than_days must be positive")

    cutoff = _resolve_now(now).astimezone(timezone.utc) - timedelta(days=older_than_days)
    deleted = NotificationRepository(session).delete_read_older_than(cutoff)
    logger.info(
        "Notification cleanup completed: %s read notification(s) older than %s day(s) deleted",
        deleted,
        older_than_days,
    )
    return deleted


__all__ = [
    "check_and_notify_payment_due",
    "check_and_notify_payment_overdue",
    "cleanup_old_read_notifications",
    "days_overdue",
    "days_until_due",
]
