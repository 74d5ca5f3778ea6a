"""ORM models used by the application infrastructure."""

from .user import UserModel
from .invoice import InvoiceModel
from .notification import NotificationModel

__all__ = [
    "InvoiceModel",
    "NotificationModel",
    "UserModel",
]
