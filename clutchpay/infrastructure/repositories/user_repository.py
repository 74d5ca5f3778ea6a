"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from clutchpay.domain.entities import User
from clutchpay.infrastructure.models import UserModel
from clutchpay.utils import ensure_app_timezone


class UserRepository:
    """Provide basic operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            name=user.name,
            surnames=user.surnames,
            email_notifications=user.email_notifications,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    @staticmethod
    def to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            surnames=model.surnames or "",
            email_notifications=bool(model.email_notifications),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
