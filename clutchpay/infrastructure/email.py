"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from clutchpay.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Outcome of a single email delivery attempt.

    ``skipped`` is set when no transport is configured, in which case
    ``success`` is ``False`` but nothing went wrong.
    """

    success: bool
    message_id: str | None = None
    error: str | None = None
    skipped: bool = False


def _decode_body(body: Any) -> Any:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        body = body.strip()
        try:
            return json.loads(body) if body else None
        except json.JSONDecodeError:
            return body
    return body


def _sendgrid_error_details(body: Any) -> str | None:
    """Summarize a SendGrid error payload, e.g. ``{"errors": [{"message": ...}]}``."""

    payload = _decode_body(body)
    if not payload:
        return None
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list):
        return "; ".join(str(item) for item in payload)

    errors = payload.get("errors") if isinstance(payload, dict) else None
    messages = [
        f"{item['message']} (help: {item['help']})" if item.get("help") else str(item["message"])
        for item in errors or []
        if isinstance(item, dict) and item.get("message")
    ]
    if messages:
        return "; ".join(messages)
    try:
        return json.dumps(payload)
    except (TypeError, ValueError):
        return None


def _describe_failure(source: Any, what: str) -> str | None:
    """Log the status and details carried by ``source`` and return them as text.

    ``source`` is either a raised SendGrid ``HTTPError`` or a response object;
    both expose ``status_code`` and ``body``. ``None`` means neither was set.
    """

    status_code = getattr(source, "status_code", None)
    details = _sendgrid_error_details(getattr(source, "body", None))
    parts = [f"status {status_code}" if status_code else None, details]
    description = ": ".join(part for part in parts if part)
    if description:
        logger.error("SendGrid %s %s", what, description)
    return description or None


def _message_id(response: Any) -> str | None:
    headers = getattr(response, "headers", None) or {}
    try:
        return headers.get("X-Message-Id")
    except AttributeError:
        return None


def send_email(subject: str, html_content: str, recipient: str) -> EmailDeliveryResult:
    """Send an email using the configured SendGrid credentials.

    Never raises: transport errors are logged and reported in the result.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info(
            "SendGrid configuration incomplete; skipping email '%s' to %s",
            subject,
            recipient,
        )
        return EmailDeliveryResult(
            success=False, error="SendGrid not configured", skipped=True
        )

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        error = _describe_failure(exc, "request failed with")
        if error is None:
            logger.exception("Error sending email via SendGrid: %s", exc)
            error = str(exc) or exc.__class__.__name__
        return EmailDeliveryResult(success=False, error=error)

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        error = _describe_failure(response, "API responded with")
        return EmailDeliveryResult(success=False, error=error or f"status {status_code}")

    return EmailDeliveryResult(success=True, message_id=_message_id(response))


__all__ = ["EmailDeliveryResult", "send_email"]
