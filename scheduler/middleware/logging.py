"""Structured logging setup and per-request log context."""

import logging
import sys
import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from scheduler.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

# Request lines are logged by LoggingMiddleware
QUIET_LOGGERS = ("uvicorn.access",)


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Route stdlib and structlog output through one renderer.

    Args:
        log_level: Overrides ``LOG_LEVEL``
        log_format: ``json`` or ``console``, overrides ``LOG_FORMAT``
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    as_json = (log_format or settings.log_format).lower() == "json"

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if as_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log how it went."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """
        Bind ``request_id``, ``method`` and ``path`` for everything logged
        while the request is handled, then report status and duration.

        The caller's ``X-Request-ID`` is reused when present.
        """
        logger = structlog.get_logger()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed", duration=time.perf_counter() - started)
            raise

        duration = time.perf_counter() - started
        log = logger.warning if response.status_code >= 500 else logger.info
        log("request_completed", status_code=response.status_code, duration=round(duration, 6))

        response.headers["X-Process-Time"] = f"{duration:.6f}"
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
