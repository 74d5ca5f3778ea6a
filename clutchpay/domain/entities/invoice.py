"""Domain entity representing an invoice between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from .user import User


class InvoiceStatus(str, Enum):
    """Lifecycle states of an invoice."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELED = "CANCELED"


# Invoices still waiting for payment; the only ones the reminder scans look at.
OPEN_INVOICE_STATUSES: tuple[InvoiceStatus, ...] = (
    InvoiceStatus.PENDING,
    InvoiceStatus.OVERDUE,
)


@dataclass
class Invoice:
    """Invoice issued by ``issuer_user`` to ``debtor_user``."""

    id: int | None
    invoice_number: str
    issuer_user: User
    debtor_user: User
    subject: str
    amount: Decimal
    status: InvoiceStatus
    issue_date: datetime | None = None
    due_date: datetime | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def issuer_user_id(self) -> int | None:
        return self.issuer_user.id

    @property
    def debtor_user_id(self) -> int | None:
        return self.debtor_user.id


__all__ = ["Invoice", "InvoiceStatus", "OPEN_INVOICE_STATUSES"]
