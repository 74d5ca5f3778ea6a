"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Registered user able to issue and receive invoices."""

    id: int | None
    email: str
    name: str
    surnames: str
    email_notifications: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Return the full name shown in messages and emails."""

        return " ".join(part for part in (self.name, self.surnames) if part).strip()
