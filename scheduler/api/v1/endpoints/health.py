"""Liveness endpoints."""

from fastapi import APIRouter

from scheduler.config import settings
from scheduler.dependencies import Store
from scheduler.schemas.common import CamelModel, MessageResponse

router = APIRouter(tags=["Health"])


class StoreStats(CamelModel):
    """Record counts held by the store."""

    users: int
    slots: int
    available_slots: int
    appointments: int


class HealthResponse(CamelModel):
    """Service status with store counts."""

    status: str
    version: str
    environment: str
    store: StoreStats


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check(store: Store) -> HealthResponse:
    """Report version, environment and how much the store holds."""
    return HealthResponse(
        status="healthy" if store.initialized else "starting",
        version=settings.app_version,
        environment=settings.environment,
        store=StoreStats(**store.stats()),
    )


@router.get("/ping", response_model=MessageResponse, summary="Ping")
async def ping() -> MessageResponse:
    return MessageResponse(message="pong")
