"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from croniter import croniter
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    environment: str = Field(
        default="development",
        description="Deployment environment name; 'production' enables the cron secret check",
    )
    cron_secret: str | None = Field(
        default=None,
        description="Shared secret expected in the x-cron-secret header of the manual trigger",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for the current time and stored datetimes",
    )
    frontend_url: str = Field(
        default="http://localhost:80",
        description="Base URL of the dashboard, used for links embedded in emails",
    )
    default_currency: str = Field(
        default="EUR",
        description="Currency code displayed next to invoice amounts",
        min_length=3,
        max_length=3,
    )
    payment_due_days_ahead: int = Field(
        default=3,
        description="Horizon in days used to remind debtors about upcoming due dates",
        ge=0,
    )
    notification_retention_days: int = Field(
        default=60,
        description="Age in days after which read notifications are removed",
        gt=0,
    )
    scheduler_enabled: bool = Field(
        default=False,
        description="Run the payment scheduler inside the API process",
    )
    scheduler_poll_seconds: float = Field(
        default=30.0,
        description="Seconds between scheduler checks for pending jobs",
        gt=0,
    )
    payment_due_cron: str = Field(default="0 9 * * *")
    payment_overdue_cron: str = Field(default="0 9 * * *")
    notification_cleanup_cron: str = Field(default="0 2 * * 0")
    log_level: str = Field(default="INFO")

    @field_validator("default_currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("frontend_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator(
        "payment_due_cron", "payment_overdue_cron", "notification_cleanup_cron"
    )
    @classmethod
    def _validate_cron_expression(cls, value: str) -> str:
        if not croniter.is_valid(value):
            raise ValueError(f"Invalid cron expression: {value!r}")
        return value

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
