"""Clock and storage conversions for the application timezone.

Datetimes are stored naive, expressed in ``APP_TIMEZONE``; the rest of the
code works with aware values.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clutchpay.config import get_settings

logger = logging.getLogger(__name__)

UTC_ZONE = ZoneInfo("UTC")


@lru_cache(maxsize=8)
def _zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; falling back to UTC", name)
        return UTC_ZONE


def get_app_timezone() -> tzinfo:
    """Return the zone named by the ``APP_TIMEZONE`` setting (UTC when blank)."""

    name = (get_settings().app_timezone or "").strip()
    return _zone(name) if name else UTC_ZONE


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current time in the storage representation."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware datetime in the application timezone.

    Naive values come from the database and are taken to be local already.
    """

    if value is None:
        return None
    zone = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` into the naive local form used by the database columns."""

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)
