"""HTML bodies for the notification emails, one template per notification type."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from html import escape
from urllib.parse import urlencode

from clutchpay.config import get_settings
from clutchpay.domain.entities import NotificationType
from clutchpay.utils import now_in_app_timezone


@dataclass(frozen=True)
class NotificationEmail:
    """Values interpolated into a notification email.

    Only the fields relevant to the template selected for the notification
    type are required; the rest stay ``None``.
    """

    recipient_name: str
    invoice_number: str
    amount: str
    currency: str
    invoice_url: str
    issuer_name: str | None = None
    payer_name: str | None = None
    due_date: str | None = None
    days_until_due: int | None = None
    days_overdue: int | None = None
    invoice_subject: str | None = None
    payment_date: str | None = None
    payment_method: str | None = None
    reason: str | None = None


def build_invoice_url(invoice_id: int | None) -> str:
    """Return the dashboard link that opens the detail view of ``invoice_id``."""

    base = f"{get_settings().frontend_url}/main.html"
    if invoice_id is None:
        return base
    return f"{base}?{urlencode({'invoice': invoice_id})}"


def build_dashboard_url() -> str:
    return f"{get_settings().frontend_url}/dashboard"


def _plural_days(count: int) -> str:
    return f"{count} {'day' if count == 1 else 'days'}"


def _paragraph(content: str) -> str:
    return (
        '<p style="color:#525f7f;font-size:14px;line-height:24px;margin:16px 0">'
        f"{content}</p>"
    )


def _banner(content: str, *, background: str, color: str) -> str:
    return (
        f'<div style="background-color:{background};border-radius:4px;padding:12px;'
        f'margin:16px 0;text-align:center;color:{color};font-size:16px;font-weight:600">'
        f"{content}</div>"
    )


def _details(rows: list[tuple[str, str | None]]) -> str:
    items = "".join(
        f"<strong>{escape(label)}:</strong> {escape(value)}<br>"
        for label, value in rows
        if value
    )
    return (
        '<div style="background-color:#f6f9fc;border-radius:4px;padding:16px;margin:16px 0">'
        f"{items}</div>"
    )


def _button(label: str, href: str) -> str:
    return (
        '<p style="text-align:center;margin:24px 0">'
        f'<a href="{escape(href, quote=True)}" style="background-color:#5469d4;'
        "border-radius:4px;color:#ffffff;font-weight:600;padding:12px 24px;"
        f'text-decoration:none">{escape(label)}</a></p>'
    )


def _signature() -> str:
    return _paragraph("Best regards,<br>The ClutchPay Team")


def render_layout(*, heading: str, preview: str, body: str) -> str:
    """Wrap ``body`` in the shared ClutchPay email layout."""

    frontend_url = escape(get_settings().frontend_url, quote=True)
    year = now_in_app_timezone().year
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head>"
        '<body style="background-color:#f6f9fc;font-family:Helvetica,Arial,sans-serif">'
        f'<span style="display:none">{escape(preview)}</span>'
        '<div style="max-width:600px;margin:0 auto;background-color:#ffffff;padding:24px">'
        f'<h1 style="color:#32325d;font-size:24px;text-align:center">{escape(heading)}</h1>'
        f"{body}"
        '<hr style="border-color:#e6ebf1;margin:20px 0">'
        '<p style="color:#8898aa;font-size:12px">'
        "This email was sent by ClutchPay. If you have any questions, "
        "please contact our support team.<br>"
        f'<a href="{frontend_url}/main.html">Manage notification preferences</a> | '
        f'<a href="{frontend_url}">Visit ClutchPay</a><br>'
        f"&copy; {year} ClutchPay. All rights reserved.</p>"
        "</div></body></html>"
    )


def render_invoice_issued(email: NotificationEmail) -> str:
    body = "".join(
        (
            _paragraph(f"Hi {escape(email.recipient_name)},"),
            _paragraph(
                "You have received a new invoice from "
                f"<strong>{escape(email.issuer_name or '')}</strong>."
            ),
            _details(
                [
                    ("Invoice Number", email.invoice_number),
                    ("Subject", email.invoice_subject),
                    ("Amount", f"{email.amount} {email.currency}"),
                    ("Due Date", email.due_date),
                ]
            ),
            _button("View Invoice", email.invoice_url),
            _paragraph(
                "Please review the invoice and make payment before the due date "
                "to avoid any late fees."
            ),
            _signature(),
        )
    )
    return render_layout(
        heading="New Invoice Received",
        preview=f"New invoice {email.invoice_number} from {email.issuer_name}",
        body=body,
    )


def render_payment_due(email: NotificationEmail) -> str:
    days = email.days_until_due or 0
    body = "".join(
        (
            _paragraph(f"Hi {escape(email.recipient_name)},"),
            _paragraph(
                "This is a friendly reminder that your payment for an invoice from "
                f"<strong>{escape(email.issuer_name or '')}</strong> is due soon."
            ),
            _banner(
                f"Due in {_plural_days(days)}", background="#fff3cd", color="#856404"
            ),
            _details(
                [
                    ("Invoice Number", email.invoice_number),
                    ("Amount Due", f"{email.amount} {email.currency}"),
                    ("Due Date", email.due_date),
                ]
            ),
            _button("Pay Now", email.invoice_url),
            _paragraph(
                "Please make sure to complete the payment before the due date to "
                "avoid any late fees or penalties."
            ),
            _paragraph("If you have already made this payment, please disregard this reminder."),
            _signature(),
        )
    )
    return render_layout(
        heading="Payment Reminder",
        preview=f"Reminder: Invoice {email.invoice_number} is due in {_plural_days(days)}",
        body=body,
    )


def render_payment_overdue(email: NotificationEmail) -> str:
    days = email.days_overdue or 1
    body = "".join(
        (
            _paragraph(f"Hi {escape(email.recipient_name)},"),
            _paragraph(
                "Your payment for an invoice from "
                f"<strong>{escape(email.issuer_name or '')}</strong> is now overdue. "
                "Please settle this payment as soon as possible."
            ),
            _banner(
                f"{_plural_days(days)} overdue", background="#f8d7da", color="#721c24"
            ),
            _details(
                [
                    ("Invoice Number", email.invoice_number),
                    ("Amount Due", f"{email.amount} {email.currency}"),
                    ("Original Due Date", email.due_date),
                    ("Status", "OVERDUE"),
                ]
            ),
            _button("Pay Now", email.invoice_url),
            _paragraph(
                "Please make the payment immediately to avoid any additional "
                "penalties or actions. If you are experiencing difficulties making "
                "the payment, please contact the issuer directly."
            ),
            _paragraph(
                "If you have already made this payment, please disregard this "
                "notice and allow a few business days for processing."
            ),
            _signature(),
        )
    )
    return render_layout(
        heading="Payment Overdue",
        preview=f"Invoice {email.invoice_number} is {_plural_days(days)} overdue",
        body=body,
    )


def render_payment_received(email: NotificationEmail) -> str:
    body = "".join(
        (
            _paragraph(f"Hi {escape(email.recipient_name)},"),
            _paragraph(
                "Great news! You have received a payment from "
                f"<strong>{escape(email.payer_name or '')}</strong>."
            ),
            _details(
                [
                    ("Invoice Number", email.invoice_number),
                    ("Amount Received", f"{email.amount} {email.currency}"),
                    ("Payment Date", email.payment_date),
                    ("Payment Method", email.payment_method),
                ]
            ),
            _button("View Details", email.invoice_url),
            _paragraph(
                "The payment has been processed successfully. You can view the full "
                "details and download the receipt from your dashboard."
            ),
            _signature(),
        )
    )
    return render_layout(
        heading="Payment Received",
        preview=f"Payment received for invoice {email.invoice_number}",
        body=body,
    )


def render_invoice_canceled(email: NotificationEmail) -> str:
    body = "".join(
        (
            _paragraph(f"Hi {escape(email.recipient_name)},"),
            _paragraph(
                "We wanted to inform you that an invoice from "
                f"<strong>{escape(email.issuer_name or '')}</strong> has been canceled. "
                "No payment is required."
            ),
            _details(
                [
                    ("Invoice Number", email.invoice_number),
                    ("Amount", f"{email.amount} {email.currency}"),
                    ("Reason", email.reason),
                ]
            ),
            _button("Go to Dashboard", email.invoice_url),
            _paragraph(
                "If you have any questions about this cancellation, please contact "
                "the issuer directly."
            ),
            _signature(),
        )
    )
    return render_layout(
        heading="Invoice Canceled",
        preview=f"Invoice {email.invoice_number} has been canceled",
        body=body,
    )


EMAIL_TEMPLATES: dict[NotificationType, Callable[[NotificationEmail], str]] = {
    NotificationType.INVOICE_ISSUED: render_invoice_issued,
    NotificationType.PAYMENT_DUE: render_payment_due,
    NotificationType.PAYMENT_OVERDUE: render_payment_overdue,
    NotificationType.PAYMENT_RECEIVED: render_payment_received,
    NotificationType.INVOICE_CANCELED: render_invoice_canceled,
}


def render_notification_email(
    notification_type: NotificationType, email: NotificationEmail
) -> str:
    """Render the HTML body of the template registered for ``notification_type``."""

    return EMAIL_TEMPLATES[NotificationType(notification_type)](email)


__all__ = [
    "EMAIL_TEMPLATES",
    "NotificationEmail",
    "build_dashboard_url",
    "build_invoice_url",
    "render_layout",
    "render_notification_email",
]
