"""Tests for notifications emitted by invoice actions and the shared dispatcher."""

from __future__ import annotations

from datetime import timedelta

from clutchpay.application.use_cases.notifications import (
    dispatch_notification,
    notify_invoice_canceled,
    notify_invoice_issued,
    notify_payment_received,
)
from clutchpay.domain.entities import NotificationType
from clutchpay.infrastructure.email import EmailDeliveryResult
from clutchpay.infrastructure.email_templates import NotificationEmail


def test_invoice_issued_notifies_debtor(session, make_invoice, debtor, mailer, notification_count, now):
    invoice = make_invoice(due_date=now + timedelta(days=30))

    result = notify_invoice_issued(session, invoice)

    assert result.created
    assert result.notification.user_id == debtor.id
    assert result.notification.type is NotificationType.INVOICE_ISSUED
    assert result.notification.read is False
    assert result.email.success
    assert mailer.sent[0].subject == f"New Invoice {invoice.invoice_number} from Ada Lovelace"
    assert "Consulting services" in mailer.sent[0].html_content
    assert notification_count(notification_type=NotificationType.INVOICE_ISSUED) == 1


def test_payment_received_notifies_issuer(session, make_invoice, issuer, mailer, now):
    invoice = make_invoice(due_date=now)

    result = notify_payment_received(
        session, invoice, payment_date=now, payment_method="STRIPE"
    )

    assert result.notification.user_id == issuer.id
    sent = mailer.sent[0]
    assert sent.recipient == "issuer@example.com"
    assert sent.subject == f"Payment Received for Invoice {invoice.invoice_number}"
    assert "Alan Turing" in sent.html_content
    assert "STRIPE" in sent.html_content
    assert "2026-03-10" in sent.html_content


def test_invoice_canceled_includes_escaped_reason(session, make_invoice, debtor, mailer, now):
    invoice = make_invoice(due_date=now)

    result = notify_invoice_canceled(session, invoice, reason="Duplicate <invoice>")

    assert result.notification.user_id == debtor.id
    assert "Duplicate &lt;invoice&gt;" in mailer.sent[0].html_content
    assert "/dashboard" in mailer.sent[0].html_content


def test_dispatch_skips_email_when_preference_disabled(session, make_user, make_invoice, mailer, now):
    quiet = make_user("quiet@example.com", email_notifications=False)
    invoice = make_invoice(due_date=now, debtor_user=quiet)

    result = dispatch_notification(
        session,
        recipient=quiet,
        invoice=invoice,
        notification_type=NotificationType.PAYMENT_DUE,
        email=NotificationEmail(
            recipient_name="Quiet",
            invoice_number=invoice.invoice_number,
            amount="150.00",
            currency="EUR",
            invoice_url="http://localhost/main.html",
        ),
        now=now,
    )

    assert result.created
    assert result.email is None
    assert result.notification.created_at == now
    assert mailer.sent == []


def test_dispatch_reports_failed_email_without_raising(session, make_invoice, debtor, mailer, now, caplog):
    mailer.result = EmailDeliveryResult(success=False, error="status 403")
    invoice = make_invoice(due_date=now)

    with caplog.at_level("WARNING"):
        result = notify_invoice_issued(session, invoice)

    assert result.created
    assert result.email.success is False
    assert "status 403" in caplog.text
