"""Message and subject templates shared by in-app and email notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from clutchpay.domain.entities import NotificationType, User

NOTIFICATION_MESSAGES: dict[NotificationType, str] = {
    NotificationType.INVOICE_ISSUED: (
        "New invoice {invoiceNumber} for {amount} has been issued to you by {issuerName}."
    ),
    NotificationType.PAYMENT_DUE: (
        "Payment for invoice {invoiceNumber} ({amount}) is due on {dueDate}."
    ),
    NotificationType.PAYMENT_OVERDUE: (
        "Invoice {invoiceNumber} ({amount}) is overdue. Please make payment as soon as possible."
    ),
    NotificationType.PAYMENT_RECEIVED: (
        "Payment of {amount} for invoice {invoiceNumber} has been received from {debtorName}."
    ),
    NotificationType.INVOICE_CANCELED: (
        "Invoice {invoiceNumber} ({amount}) has been canceled by {issuerName}."
    ),
}

EMAIL_SUBJECTS: dict[NotificationType, str] = {
    NotificationType.INVOICE_ISSUED: "New Invoice {invoiceNumber} from {issuerName}",
    NotificationType.PAYMENT_DUE: "Payment Reminder: Invoice {invoiceNumber}",
    NotificationType.PAYMENT_OVERDUE: "Urgent: Invoice {invoiceNumber} is Overdue",
    NotificationType.PAYMENT_RECEIVED: "Payment Received for Invoice {invoiceNumber}",
    NotificationType.INVOICE_CANCELED: "Invoice {invoiceNumber} Canceled",
}


@dataclass(frozen=True)
class NotificationContext:
    """Values available to the message placeholders.

    Placeholders whose value is missing are left untouched in the output.
    """

    invoice_number: str | None = None
    issuer_name: str | None = None
    debtor_name: str | None = None
    amount: str | None = None
    currency: str | None = None
    due_date: str | None = None

    def formatted_amount(self) -> str | None:
        if not self.amount:
            return None
        if self.currency:
            return f"{self.amount} {self.currency.upper()}"
        return self.amount

    def replacements(self) -> dict[str, str | None]:
        return {
            "{invoiceNumber}": self.invoice_number,
            "{issuerName}": self.issuer_name,
            "{debtorName}": self.debtor_name,
            "{amount}": self.formatted_amount(),
            "{dueDate}": self.due_date,
        }


def format_user_name(user: User) -> str:
    return user.display_name


def format_amount(amount: Decimal | float | int | str) -> str:
    """Render ``amount`` with two decimal places."""

    return f"{Decimal(str(amount)).quantize(Decimal('0.01'))}"


def format_display_date(value: datetime | None) -> str | None:
    """Render a due or payment date as shown to users."""

    return value.date().isoformat() if value else None


def _interpolate(template: str, context: NotificationContext) -> str:
    result = template
    for placeholder, value in context.replacements().items():
        if value:
            result = result.replace(placeholder, value)
    return result


def build_notification_message(
    notification_type: NotificationType, context: NotificationContext
) -> str:
    """Return the in-app message for ``notification_type`` filled from ``context``."""

    return _interpolate(NOTIFICATION_MESSAGES[NotificationType(notification_type)], context)


def build_email_subject(
    notification_type: NotificationType, context: NotificationContext
) -> str:
    """Return the email subject line for ``notification_type``."""

    return _interpolate(EMAIL_SUBJECTS[NotificationType(notification_type)], context)


__all__ = [
    "EMAIL_SUBJECTS",
    "NOTIFICATION_MESSAGES",
    "NotificationContext",
    "build_email_subject",
    "build_notification_message",
    "format_amount",
    "format_display_date",
    "format_user_name",
]
