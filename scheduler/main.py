"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from scheduler.api.v1.router import api_router
from scheduler.config import Settings, settings
from scheduler.middleware.error_handler import register_exception_handlers
from scheduler.middleware.logging import LoggingMiddleware, configure_logging
from scheduler.store import get_store

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Seed the store before the first request is served."""
    logger.info(
        "application_startup",
        environment=settings.environment,
        version=settings.app_version,
    )

    store = get_store()
    logger.info("store_ready", **store.stats())

    yield

    logger.info("application_shutdown", **store.stats())


def create_app(config: Settings = settings) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Settings to build from

    Returns:
        Configured FastAPI application
    """
    application = FastAPI(
        title=config.app_name,
        version=config.app_version,
        debug=config.debug,
        description="Book, reschedule and cancel clinic appointment slots",
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    application.add_middleware(LoggingMiddleware)

    register_exception_handlers(application)
    application.include_router(api_router, prefix=config.api_v1_prefix)

    # Request counts and latencies by route template
    Instrumentator(
        should_group_status_codes=True,
        excluded_handlers=["/metrics", "/docs", "/redoc", "/openapi.json"],
    ).instrument(application).expose(application, endpoint="/metrics", include_in_schema=False)

    @application.get("/", tags=["Root"], include_in_schema=False)
    async def root() -> dict[str, str]:
        return {
            "name": config.app_name,
            "version": config.app_version,
            "api": config.api_v1_prefix,
        }

    return application


app = create_app()


def run() -> None:
    """Serve ``app`` with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "scheduler.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
