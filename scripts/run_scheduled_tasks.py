"""Run the payment notification tasks once, for use from a system crontab."""

from __future__ import annotations

import argparse
import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from clutchpay.application.use_cases.notifications import (
    SCHEDULED_TASKS,
    run_scheduled_tasks,
)
from clutchpay.config import get_settings
from clutchpay.infrastructure.database import SessionLocal, initialize_database
from clutchpay.logging_config import configure_logging

logger = logging.getLogger("clutchpay.scripts.run_scheduled_tasks")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or positive, got {number}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for a scheduled task run."""

    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run the ClutchPay payment reminder and cleanup tasks once.",
    )
    parser.add_argument(
        "--task",
        choices=SCHEDULED_TASKS,
        default=None,
        help="Task to run (default: all of them)",
    )
    parser.add_argument(
        "--days-ahead",
        type=_non_negative_int,
        default=settings.payment_due_days_ahead,
        help="Days before the due date to remind debtors (default: %(default)s)",
    )
    parser.add_argument(
        "--retention-days",
        type=_positive_int,
        default=settings.notification_retention_days,
        help="Delete read notifications older than this many days (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Execute the requested tasks and print their counts as JSON."""

    args = parse_args(argv)
    configure_logging(get_settings().log_level)
    initialize_database()

    session = SessionLocal()
    try:
        results = run_scheduled_tasks(
            session,
            args.task,
            days_ahead=args.days_ahead,
            retention_days=args.retention_days,
        )
    except SQLAlchemyError:
        logger.exception("Scheduled task run failed")
        session.rollback()
        return 1
    finally:
        session.close()

    print(json.dumps(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
