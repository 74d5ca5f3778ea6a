"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from clutchpay.infrastructure.database import Base
from clutchpay.utils import now_in_app_naive_datetime

_REMINDER_TYPES_CLAUSE = text("type IN ('PAYMENT_DUE', 'PAYMENT_OVERDUE')")


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        # Backstop for concurrent scans: one reminder per user, invoice and type.
        Index(
            "uq_notification_reminder",
            "user_id",
            "invoice_id",
            "type",
            unique=True,
            sqlite_where=_REMINDER_TYPES_CLAUSE,
            postgresql_where=_REMINDER_TYPES_CLAUSE,
            mssql_where=_REMINDER_TYPES_CLAUSE,
        ),
        Index("ix_notification_read_updated_at", "read", "updated_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    invoice_id = Column(
        Integer, ForeignKey("invoice.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(30), nullable=False)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    user = relationship("UserModel", lazy="joined")
    invoice = relationship("InvoiceModel", back_populates="notifications", lazy="joined")


__all__ = ["NotificationModel"]
