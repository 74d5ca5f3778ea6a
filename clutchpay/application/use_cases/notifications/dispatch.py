"""Persist a notification and deliver its email copy on a best-effort basis."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clutchpay.domain.entities import (
    REMINDER_NOTIFICATION_TYPES,
    Invoice,
    Notification,
    NotificationType,
    User,
)
from clutchpay.infrastructure.email import EmailDeliveryResult, send_email
from clutchpay.infrastructure.email_templates import (
    NotificationEmail,
    render_notification_email,
)
from clutchpay.infrastructure.repositories import NotificationRepository

from .messages import NotificationContext, build_email_subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of :func:`dispatch_notification`.

    ``notification`` is ``None`` when the storage layer rejected the insert
    as a duplicate reminder. ``email`` is ``None`` when no email was
    attempted.
    """

    notification: Notification | None
    email: EmailDeliveryResult | None = None

    @property
    def created(self) -> bool:
        return self.notification is not None


def dispatch_notification(
    session: Session,
    *,
    recipient: User,
    invoice: Invoice,
    notification_type: NotificationType,
    email: NotificationEmail,
    now: datetime | None = None,
) -> DispatchResult:
    """Store a ``notification_type`` notification for ``recipient`` and email it.

    The stored row is the source of truth. Email failures are logged and
    reported in the result but never undo the insert nor raise.
    """

    notification_type = NotificationType(notification_type)
    repository = NotificationRepository(session)
    try:
        notification = repository.create(
            user_id=recipient.id,
            invoice_id=invoice.id,
            notification_type=notification_type,
            created_at=now,
        )
    except IntegrityError:
        session.rollback()
        # Only a reminder row already stored by a concurrent scan is a duplicate;
        # any other constraint failure propagates.
        if notification_type not in REMINDER_NOTIFICATION_TYPES or not repository.exists(
            user_id=recipient.id,
            invoice_id=invoice.id,
            notification_type=notification_type,
        ):
            raise
        logger.warning(
            "%s notification for invoice %s and user %s already exists; skipping",
            notification_type.value,
            invoice.id,
            recipient.id,
        )
        return DispatchResult(notification=None)

    logger.info(
        "%s notification created for invoice %s (%s), user %s",
        notification_type.value,
        invoice.id,
        invoice.invoice_number,
        recipient.id,
    )

    if not recipient.email_notifications:
        logger.debug(
            "User %s disabled email notifications; %s email not sent",
            recipient.id,
            notification_type.value,
        )
        return DispatchResult(notification=notification)

    delivery = _send_notification_email(
        recipient=recipient,
        invoice=invoice,
        notification_type=notification_type,
        email=email,
    )
    return DispatchResult(notification=notification, email=delivery)


def _send_notification_email(
    *,
    recipient: User,
    invoice: Invoice,
    notification_type: NotificationType,
    email: NotificationEmail,
) -> EmailDeliveryResult:
    context = NotificationContext(
        invoice_number=invoice.invoice_number,
        issuer_name=email.issuer_name,
        debtor_name=email.payer_name,
    )
    try:
        subject = build_email_subject(notification_type, context)
        html_content = render_notification_email(notification_type, email)
        delivery = send_email(subject, html_content, recipient.email)
    except Exception as exc:
        logger.exception(
            "Failed to send %s email for invoice %s to %s",
            notification_type.value,
            invoice.id,
            recipient.email,
        )
        return EmailDeliveryResult(success=False, error=str(exc) or exc.__class__.__name__)

    if delivery.success:
        logger.info(
            "%s email sent to %s for invoice %s",
            notification_type.value,
            recipient.email,
            invoice.invoice_number,
        )
    elif not delivery.skipped:
        logger.warning(
            "%s email to %s for invoice %s failed: %s",
            notification_type.value,
            recipient.email,
            invoice.invoice_number,
            delivery.error,
        )
    return delivery


__all__ = ["DispatchResult", "dispatch_notification"]
