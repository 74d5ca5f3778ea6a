from contextlib import asynccontextmanager

from fastapi import FastAPI

from clutchpay.application.scheduler import PaymentScheduler
from clutchpay.config import get_settings
from clutchpay.infrastructure.database import SessionLocal, engine, initialize_database
from clutchpay.interfaces.api.routes import register_routes
from clutchpay.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables, start the scheduler if enabled and release resources on exit."""

    settings = get_settings()
    configure_logging(settings.log_level)
    initialize_database()

    scheduler: PaymentScheduler | None = None
    if settings.scheduler_enabled:
        scheduler = PaymentScheduler(SessionLocal, settings=settings)
        scheduler.start()
    app.state.scheduler = scheduler
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the ClutchPay FastAPI application."""

    app = FastAPI(title="ClutchPay notifications", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
