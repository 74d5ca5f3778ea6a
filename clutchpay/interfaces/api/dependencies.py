"""FastAPI dependency utilities."""

from hmac import compare_digest

from fastapi import Depends, Header, HTTPException, status

from clutchpay.config import Settings, get_settings


def get_app_settings() -> Settings:
    """Return the cached application settings."""

    return get_settings()


def verify_cron_secret(
    x_cron_secret: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Require the shared cron secret in production deployments."""

    if not (settings.is_production and settings.cron_secret):
        return
    if not x_cron_secret or not compare_digest(x_cron_secret, settings.cron_secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
