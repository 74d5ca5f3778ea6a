"""Integration tests for the manual scheduled-task trigger."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from clutchpay.config import Settings
from clutchpay.domain.entities import NotificationType
from clutchpay.infrastructure.database import get_db
from clutchpay.interfaces.api.dependencies import get_app_settings
from clutchpay.interfaces.api.routes import cron as cron_module
from clutchpay.utils import now_in_app_timezone
from main import create_app


@pytest.fixture()
def app_settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture()
def client(session_factory, app_settings):
    """Return a test client whose sessions use the isolated test database."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_app_settings] = lambda: app_settings
    with TestClient(app) as test_client:
        yield test_client


def test_runs_every_task_by_default(client, make_invoice, mailer, notification_count):
    make_invoice(due_date=now_in_app_timezone() + timedelta(days=1))

    response = client.get("/cron/check-payments")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Scheduled tasks executed"
    assert body["results"] == {
        "paymentDue": 1,
        "paymentOverdue": 0,
        "cleanupOldNotifications": 0,
    }
    assert "timestamp" in body
    assert notification_count(notification_type=NotificationType.PAYMENT_DUE) == 1


def test_runs_single_task(client, make_invoice, mailer):
    make_invoice(due_date=now_in_app_timezone() - timedelta(days=2))

    response = client.get("/cron/check-payments", params={"task": "overdue"})

    assert response.status_code == 200
    assert response.json()["results"] == {"paymentOverdue": 1}


def test_rejects_unknown_task(client):
    response = client.get("/cron/check-payments", params={"task": "everything"})

    assert response.status_code == 422


def test_secret_not_required_outside_production(client, app_settings):
    app_settings.cron_secret = "s3cret"

    response = client.get("/cron/check-payments", params={"task": "cleanup"})

    assert response.status_code == 200


@pytest.mark.parametrize(
    ("headers", "expected_status"),
    [({}, 401), ({"x-cron-secret": "wrong"}, 401), ({"x-cron-secret": "s3cret"}, 200)],
)
def test_secret_required_in_production(client, app_settings, headers, expected_status):
    app_settings.environment = "production"
    app_settings.cron_secret = "s3cret"

    response = client.get(
        "/cron/check-payments", params={"task": "cleanup"}, headers=headers
    )

    assert response.status_code == expected_status
    if expected_status == 401:
        assert response.json()["detail"] == "Unauthorized"


def test_database_errors_return_server_error(client, monkeypatch, caplog):
    def _failing_run(*_args, **_kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(cron_module, "run_scheduled_tasks", _failing_run)

    with caplog.at_level("ERROR"):
        response = client.get("/cron/check-payments")

    assert response.status_code == 500
    assert response.json()["detail"] == "Scheduled tasks failed"
    assert "Scheduled task run failed" in caplog.text
