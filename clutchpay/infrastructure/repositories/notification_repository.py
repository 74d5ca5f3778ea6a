"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Query, Session

from clutchpay.domain.entities import Invoice, Notification, NotificationType
from clutchpay.infrastructure.models import NotificationModel
from clutchpay.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .invoice_repository import InvoiceRepository


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(
        self, *, user_id: int, invoice_id: int, notification_type: NotificationType
    ) -> bool:
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.invoice_id == invoice_id,
            NotificationModel.type == NotificationType(notification_type).value,
        )
        return self.session.query(query.exists()).scalar() is True

    def create(
        self,
        *,
        user_id: int,
        invoice_id: int,
        notification_type: NotificationType,
        created_at: datetime | None = None,
    ) -> Notification:
        """Persist an unread notification.

        The insert is committed immediately; callers handle
        :class:`sqlalchemy.exc.IntegrityError` raised by the reminder
        uniqueness index.
        """

        timestamp = ensure_app_naive_datetime(created_at or now_in_app_timezone())
        model = NotificationModel(
            user_id=user_id,
            invoice_id=invoice_id,
            type=NotificationType(notification_type).value,
            read=False,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    def list_for_user_with_invoices(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        notification_type: NotificationType | None = None,
        offset: int = 0,
        limit: int | None = 20,
    ) -> Sequence[tuple[Notification, Invoice]]:
        query = self._user_query(
            user_id, read=read, notification_type=notification_type
        ).order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [
            (self.to_entity(model), InvoiceRepository.to_entity(model.invoice))
            for model in query.all()
        ]

    def count_for_user(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        notification_type: NotificationType | None = None,
    ) -> int:
        return self._user_query(
            user_id, read=read, notification_type=notification_type
        ).count()

    def mark_as_read(
        self,
        user_id: int,
        notification_ids: Iterable[int] | None = None,
        *,
        now: datetime | None = None,
    ) -> int:
        """Mark notifications of ``user_id`` as read and return how many changed.

        When ``notification_ids`` is ``None`` every unread notification of the
        user is marked.
        """

        query = self._user_query(user_id, read=False)
        if notification_ids is not None:
            ids = [notification_id for notification_id in notification_ids if notification_id is not None]
            if not ids:
                return 0
            query = query.filter(NotificationModel.id.in_(ids))
        count = query.update(
            {
                NotificationModel.read: True,
                NotificationModel.updated_at: ensure_app_naive_datetime(
                    now or now_in_app_timezone()
                ),
            },
            synchronize_session=False,
        )
        self.session.commit()
        return count

    def delete_read_older_than(self, cutoff: datetime) -> int:
        """Delete read notifications last updated before ``cutoff``.

        Unread notifications are never touched regardless of their age.
        """

        count = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.read.is_(True))
            .filter(NotificationModel.updated_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return count

    def _user_query(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        notification_type: NotificationType | None = None,
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        if notification_type is not None:
            query = query.filter(
                NotificationModel.type == NotificationType(notification_type).value
            )
        return query

    @staticmethod
    def to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            invoice_id=model.invoice_id,
            type=NotificationType(model.type),
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
