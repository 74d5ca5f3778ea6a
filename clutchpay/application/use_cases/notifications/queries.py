"""Read and acknowledge the notifications of a user."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from clutchpay.domain.entities import FormattedNotification, NotificationType
from clutchpay.infrastructure.repositories import NotificationRepository

from .formatting import format_notification_response


@dataclass(frozen=True)
class NotificationPage:
    """A page of formatted notifications plus counters for the inbox badge."""

    items: list[FormattedNotification]
    page: int
    limit: int
    total: int
    unread_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def list_user_notifications(
    session: Session,
    user_id: int,
    *,
    read: bool | None = None,
    notification_type: NotificationType | None = None,
    page: int = 1,
    limit: int = 20,
) -> NotificationPage:
    """Return the newest notifications of ``user_id`` with their messages."""

    if page < 1:
        raise ValueError("page must be 1 or greater")
    if not 1 <= limit <= 100:
        raise ValueError("limit must be between 1 and 100")

    repository = NotificationRepository(session)
    rows = repository.list_for_user_with_invoices(
        user_id,
        read=read,
        notification_type=notification_type,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return NotificationPage(
        items=[format_notification_response(notification, invoice) for notification, invoice in rows],
        page=page,
        limit=limit,
        total=repository.count_for_user(
            user_id, read=read, notification_type=notification_type
        ),
        unread_count=repository.count_for_user(user_id, read=False),
    )


def mark_notifications_as_read(
    session: Session,
    user_id: int,
    notification_ids: Iterable[int] | None = None,
    *,
    mark_all: bool = False,
) -> int:
    """Mark the given notifications, or all unread ones, as read."""

    repository = NotificationRepository(session)
    if mark_all:
        return repository.mark_as_read(user_id)
    if notification_ids is None:
        return 0
    return repository.mark_as_read(user_id, list(dict.fromkeys(notification_ids)))


__all__ = [
    "NotificationPage",
    "list_user_notifications",
    "mark_notifications_as_read",
]
