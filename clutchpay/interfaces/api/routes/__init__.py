from fastapi import FastAPI

from .cron import router as cron_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(cron_router)
