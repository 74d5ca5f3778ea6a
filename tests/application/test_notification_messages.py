"""Tests for notification message building and the response formatter."""

from __future__ import annotations

from datetime import timedelta

import pytest

from clutchpay.application.use_cases.notifications import (
    NotificationContext,
    build_email_subject,
    build_notification_message,
    format_notification_response,
)
from clutchpay.domain.entities import Notification, NotificationType


@pytest.fixture()
def invoice(make_invoice, now):
    return make_invoice(due_date=now + timedelta(days=3), invoice_number="INV-2026-001")


@pytest.mark.parametrize(
    ("notification_type", "expected"),
    [
        (
            NotificationType.INVOICE_ISSUED,
            "New invoice INV-2026-001 for 150.00 EUR has been issued to you by Ada Lovelace.",
        ),
        (
            NotificationType.PAYMENT_DUE,
            "Payment for invoice INV-2026-001 (150.00 EUR) is due on 2026-03-13.",
        ),
        (
            NotificationType.PAYMENT_OVERDUE,
            "Invoice INV-2026-001 (150.00 EUR) is overdue. Please make payment as soon as possible.",
        ),
        (
            NotificationType.PAYMENT_RECEIVED,
            "Payment of 150.00 EUR for invoice INV-2026-001 has been received from Alan Turing.",
        ),
        (
            NotificationType.INVOICE_CANCELED,
            "Invoice INV-2026-001 (150.00 EUR) has been canceled by Ada Lovelace.",
        ),
    ],
)
def test_formatter_builds_message_per_type(invoice, debtor, now, notification_type, expected):
    notification = Notification(
        id=7,
        user_id=debtor.id,
        invoice_id=invoice.id,
        type=notification_type,
        read=False,
        created_at=now,
    )

    formatted = format_notification_response(notification, invoice)

    assert formatted.message == expected
    assert formatted.id == 7
    assert formatted.invoice_id == invoice.id
    assert formatted.type is notification_type
    assert formatted.read is False
    assert formatted.created_at == now


def test_formatter_uses_explicit_currency(invoice, debtor):
    notification = Notification(
        id=1, user_id=debtor.id, invoice_id=invoice.id, type=NotificationType.PAYMENT_OVERDUE
    )

    formatted = format_notification_response(notification, invoice, currency="usd")

    assert "(150.00 USD)" in formatted.message


def test_missing_values_leave_placeholders():
    message = build_notification_message(
        NotificationType.PAYMENT_DUE,
        NotificationContext(invoice_number="INV-9", amount="10.00"),
    )

    assert message == "Payment for invoice INV-9 (10.00) is due on {dueDate}."


def test_email_subjects():
    context = NotificationContext(invoice_number="INV-9", issuer_name="Ada Lovelace")

    assert build_email_subject(NotificationType.INVOICE_ISSUED, context) == (
        "New Invoice INV-9 from Ada Lovelace"
    )
    assert build_email_subject(NotificationType.PAYMENT_DUE, context) == (
        "Payment Reminder: Invoice INV-9"
    )
    assert build_email_subject(NotificationType.INVOICE_CANCELED, context) == (
        "Invoice INV-9 Canceled"
    )
