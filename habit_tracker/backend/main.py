"""
FastAPI Application Entry Point.

The HTTP API, the notification dispatcher and the Telegram bot share one
event loop (one Uvicorn process).
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from habit_tracker.backend.api import health
from habit_tracker.backend.api.v1 import router as api_v1_router
from habit_tracker.backend.core.config import get_app_config, get_settings
from habit_tracker.backend.core.exception_handlers import register_exception_handlers
from habit_tracker.backend.core.logging import get_logger, setup_logging
from habit_tracker.backend.core.middleware import RequestContextMiddleware
from habit_tracker.backend.notifications.runtime import NotificationRuntime
from habit_tracker.backend.storage.provider import get_storage_provider, set_storage_provider

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start storage, the Telegram channel and the dispatcher; stop them in reverse."""
    app_config = get_app_config()
    setup_logging()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "storage_backend": app_config.database.storage_backend,
        },
    )

    provider = get_storage_provider()
    runtime = NotificationRuntime.build(
        provider,
        app_config.notifications,
        channel=getattr(app.state, "telegram_channel", None),
    )
    await runtime.start()
    app.state.notification_runtime = runtime

    yield

    logger.info("Application shutting down")
    await runtime.shutdown()
    app.state.notification_runtime = None
    await provider.close()
    set_storage_provider(None)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    _mount_telegram(app)

    return app


def _mount_telegram(app: FastAPI) -> None:
    """Create the Telegram channel and, in webhook mode, its endpoint."""
    telegram_config = get_app_config().application.telegram
    if not telegram_config.enabled:
        return

    from habit_tracker.telegram.channel import TelegramChannel

    channel = TelegramChannel(
        get_storage_provider(),
        telegram_config,
        webhook_secret=get_settings().telegram_webhook_secret or None,
    )
    app.state.telegram_channel = channel

    if telegram_config.mode == "webhook":
        from habit_tracker.telegram.webhook import get_webhook_router

        app.include_router(get_webhook_router(channel))
        logger.info("Telegram webhook mounted", extra={"path": telegram_config.webhook_path})


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn habit_tracker.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
