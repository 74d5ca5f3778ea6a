"""SQLAlchemy model for invoices exchanged between users."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from clutchpay.infrastructure.database import Base
from clutchpay.utils import now_in_app_naive_datetime


class InvoiceModel(Base):
    """Database representation of an invoice."""

    __tablename__ = "invoice"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(50), nullable=False, unique=True)
    issuer_user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    debtor_user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    subject = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    issue_date = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    due_date = Column(DateTime(), nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    issuer_user = relationship("UserModel", foreign_keys=[issuer_user_id], lazy="joined")
    debtor_user = relationship("UserModel", foreign_keys=[debtor_user_id], lazy="joined")
    notifications = relationship(
        "NotificationModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["InvoiceModel"]
