"""Notifications triggered by invoice actions taken by users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from clutchpay.config import get_settings
from clutchpay.domain.entities import Invoice, NotificationType
from clutchpay.infrastructure.email_templates import (
    NotificationEmail,
    build_dashboard_url,
    build_invoice_url,
)
from clutchpay.utils import now_in_app_timezone

from .dispatch import DispatchResult, dispatch_notification
from .messages import format_amount, format_display_date, format_user_name


def notify_invoice_issued(
    session: Session, invoice: Invoice, *, now: datetime | None = None
) -> DispatchResult:
    """Tell the debtor that ``invoice`` has been issued to them."""

    email = NotificationEmail(
        recipient_name=format_user_name(invoice.debtor_user),
        invoice_number=invoice.invoice_number,
        issuer_name=format_user_name(invoice.issuer_user),
        amount=format_amount(invoice.amount),
        currency=get_settings().default_currency,
        due_date=format_display_date(invoice.due_date),
        invoice_subject=invoice.subject,
        invoice_url=build_invoice_url(invoice.id),
    )
    return dispatch_notification(
        session,
        recipient=invoice.debtor_user,
        invoice=invoice,
        notification_type=NotificationType.INVOICE_ISSUED,
        email=email,
        now=now,
    )


def notify_payment_received(
    session: Session,
    invoice: Invoice,
    *,
    payment_date: datetime | None = None,
    payment_method: str | None = None,
    now: datetime | None = None,
) -> DispatchResult:
    """Tell the issuer that the debtor paid ``invoice``."""

    email = NotificationEmail(
        recipient_name=format_user_name(invoice.issuer_user),
        invoice_number=invoice.invoice_number,
        payer_name=format_user_name(invoice.debtor_user),
        amount=format_amount(invoice.amount),
        currency=get_settings().default_currency,
        payment_date=format_display_date(payment_date or now or now_in_app_timezone()),
        payment_method=payment_method or "OTHER",
        invoice_url=build_invoice_url(invoice.id),
    )
    return dispatch_notification(
        session,
        recipient=invoice.issuer_user,
        invoice=invoice,
        notification_type=NotificationType.PAYMENT_RECEIVED,
        email=email,
        now=now,
    )


def notify_invoice_canceled(
    session: Session,
    invoice: Invoice,
    *,
    reason: str | None = None,
    now: datetime | None = None,
) -> DispatchResult:
    """Tell the debtor that ``invoice`` was canceled by its issuer."""

    email = NotificationEmail(
        recipient_name=format_user_name(invoice.debtor_user),
        invoice_number=invoice.invoice_number,
        issuer_name=format_user_name(invoice.issuer_user),
        amount=format_amount(invoice.amount),
        currency=get_settings().default_currency,
        reason=reason,
        invoice_url=build_dashboard_url(),
    )
    return dispatch_notification(
        session,
        recipient=invoice.debtor_user,
        invoice=invoice,
        notification_type=NotificationType.INVOICE_CANCELED,
        email=email,
        now=now,
    )


__all__ = [
    "notify_invoice_canceled",
    "notify_invoice_issued",
    "notify_payment_received",
]
