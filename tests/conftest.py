"""Shared fixtures: an isolated in-memory database and a recording mail transport."""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from itertools import count

import pytest
from sqlalchemy.orm import Session, sessionmaker

from clutchpay.application.use_cases.notifications import dispatch as dispatch_module
from clutchpay.config import reset_settings_cache
from clutchpay.domain.entities import Invoice, InvoiceStatus, NotificationType, User
from clutchpay.infrastructure.database import build_engine, initialize_database
from clutchpay.infrastructure.email import EmailDeliveryResult
from clutchpay.infrastructure.models import NotificationModel
from clutchpay.infrastructure.repositories import InvoiceRepository, UserRepository

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)

_invoice_numbers = count(1)


@dataclass
class SentEmail:
    subject: str
    html_content: str
    recipient: str


class RecordingMailer:
    """Stand-in for ``send_email`` that records every call."""

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []
        self.result = EmailDeliveryResult(success=True, message_id="test-message")
        self.error: Exception | None = None

    def __call__(self, subject: str, html_content: str, recipient: str) -> EmailDeliveryResult:
        self.sent.append(SentEmail(subject, html_content, recipient))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://")
    initialize_database(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def mailer(monkeypatch: pytest.MonkeyPatch) -> RecordingMailer:
    recorder = RecordingMailer()
    monkeypatch.setattr(dispatch_module, "send_email", recorder)
    return recorder


@pytest.fixture()
def make_user(session):
    def _make_user(
        email: str,
        *,
        name: str = "Test",
        surnames: str = "User",
        email_notifications: bool = True,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                email=email,
                name=name,
                surnames=surnames,
                email_notifications=email_notifications,
            )
        )

    return _make_user


@pytest.fixture()
def issuer(make_user) -> User:
    return make_user("issuer@example.com", name="Ada", surnames="Lovelace")


@pytest.fixture()
def debtor(make_user) -> User:
    return make_user("debtor@example.com", name="Alan", surnames="Turing")


@pytest.fixture()
def make_invoice(session, issuer, debtor):
    def _make_invoice(
        *,
        due_date: datetime | None,
        status: InvoiceStatus = InvoiceStatus.PENDING,
        amount: str = "150.00",
        issuer_user: User | None = None,
        debtor_user: User | None = None,
        invoice_number: str | None = None,
    ) -> Invoice:
        return InvoiceRepository(session).create(
            Invoice(
                id=None,
                invoice_number=invoice_number or f"INV-{next(_invoice_numbers):04d}",
                issuer_user=issuer_user or issuer,
                debtor_user=debtor_user or debtor,
                subject="Consulting services",
                amount=Decimal(amount),
                status=status,
                issue_date=NOW,
                due_date=due_date,
            )
        )

    return _make_invoice


@pytest.fixture()
def make_notification(session):
    """Insert a notification row with explicit read flag and timestamps."""

    def _make_notification(
        user: User,
        invoice: Invoice,
        notification_type: NotificationType,
        *,
        read: bool = False,
        updated_at: datetime = NOW,
    ) -> NotificationModel:
        naive = updated_at.astimezone(timezone.utc).replace(tzinfo=None)
        model = NotificationModel(
            user_id=user.id,
            invoice_id=invoice.id,
            type=notification_type.value,
            read=read,
            created_at=naive,
            updated_at=naive,
        )
        session.add(model)
        session.commit()
        return model

    return _make_notification


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def notification_count(session):
    def _count(
        *,
        notification_type: NotificationType | None = None,
        user_id: int | None = None,
        invoice_id: int | None = None,
    ) -> int:
        return _count_notifications(
            session,
            notification_type=notification_type,
            user_id=user_id,
            invoice_id=invoice_id,
        )

    return _count


def _count_notifications(
    session: Session,
    *,
    notification_type: NotificationType | None = None,
    user_id: int | None = None,
    invoice_id: int | None = None,
) -> int:
    query = session.query(NotificationModel)
    if notification_type is not None:
        query = query.filter(NotificationModel.type == notification_type.value)
    if user_id is not None:
        query = query.filter(NotificationModel.user_id == user_id)
    if invoice_id is not None:
        query = query.filter(NotificationModel.invoice_id == invoice_id)
    return query.count()
