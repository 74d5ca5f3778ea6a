"""Presentation of stored notifications for API consumers."""

from __future__ import annotations

from clutchpay.config import get_settings
from clutchpay.domain.entities import FormattedNotification, Invoice, Notification

from .messages import (
    NotificationContext,
    build_notification_message,
    format_amount,
    format_display_date,
    format_user_name,
)


def format_notification_response(
    notification: Notification,
    invoice: Invoice,
    *,
    currency: str | None = None,
) -> FormattedNotification:
    """Attach the human readable message for ``notification`` about ``invoice``."""

    context = NotificationContext(
        invoice_number=invoice.invoice_number,
        issuer_name=format_user_name(invoice.issuer_user),
        debtor_name=format_user_name(invoice.debtor_user),
        amount=format_amount(invoice.amount),
        currency=currency or get_settings().default_currency,
        due_date=format_display_date(invoice.due_date),
    )
    return FormattedNotification(
        id=notification.id or 0,
        user_id=notification.user_id,
        invoice_id=notification.invoice_id,
        type=notification.type,
        read=notification.read,
        message=build_notification_message(notification.type, context),
        created_at=notification.created_at,
    )


__all__ = ["format_notification_response"]
