"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (storage reachable, dispatcher state)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from habit_tracker.backend.core.config import get_app_config
from habit_tracker.backend.core.logging import get_logger
from habit_tracker.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_storage() -> dict[str, Any]:
    """
    Check the configured storage backend.

    Returns:
        Dict with status, backend, latency, and optional error message
    """
    app_config = get_app_config()
    backend = app_config.database.storage_backend
    if backend == "memory":
        return {"status": "healthy", "backend": backend}

    try:
        from sqlalchemy import text

        from habit_tracker.backend.core.database import get_session_factory

        start = utc_now()
        async with asyncio.timeout(app_config.application.timeouts.database):
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {"status": "healthy", "backend": backend, "latency_ms": latency_ms}

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "backend": backend, "error": str(e)}


def check_dispatcher(request: Request) -> dict[str, Any]:
    """Dispatcher state; a stopped dispatcher is not a readiness failure."""
    runtime = getattr(request.app.state, "notification_runtime", None)
    if runtime is None:
        return {"status": "not_configured"}
    return {
        "status": "healthy",
        "state": runtime.state.value,
        "transport": type(runtime.dispatcher.transport).__name__,
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if the storage backend is unreachable.
    """
    checks = {
        "storage": await check_storage(),
        "dispatcher": check_dispatcher(request),
    }

    unhealthy_checks = [
        name for name, check in checks.items()
        if check.get("status") == "unhealthy"
    ]

    if unhealthy_checks:
        logger.warning(
            "Readiness check failed",
            extra={"unhealthy": unhealthy_checks, "checks": checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
