"""
Request Context Middleware.

Request id, frontend identification, timing, and structlog context for
every HTTP request.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from habit_tracker.backend.core.logging import get_logger

logger = get_logger(__name__)

# Should stay a subset of VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "cli", "telegram", "api", "internal"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Frontend-ID: Calling frontend (web, cli, telegram, api, internal)
    - X-Response-Time: Response duration in milliseconds

    Every log line emitted while handling the request carries
    request_id, frontend, method and path.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
        if frontend not in KNOWN_FRONTENDS:
            frontend = "unknown"

        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)

            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response

        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            # Context vars must not leak into the next request on this task
            structlog.contextvars.clear_contextvars()
