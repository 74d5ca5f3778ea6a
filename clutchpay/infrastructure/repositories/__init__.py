"""Repository implementations for infrastructure layer."""

from .invoice_repository import InvoiceRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "InvoiceRepository",
    "NotificationRepository",
    "UserRepository",
]
