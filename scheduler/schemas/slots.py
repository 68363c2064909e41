"""Slot schemas for request/response validation."""

from datetime import datetime

from scheduler.schemas.common import CamelModel


class SlotCreate(CamelModel):
    """Schema for publishing a new slot."""

    start_time: datetime | None = None
    end_time: datetime | None = None


class SlotResponse(CamelModel):
    """Schema for slot response."""

    id: str
    provider_id: str
    provider_name: str
    start_time: datetime
    end_time: datetime
    is_available: bool


class SlotEnvelope(CamelModel):
    """Single slot wrapped under its key."""

    slot: SlotResponse


class SlotListResponse(CamelModel):
    """Schema for slot list response."""

    slots: list[SlotResponse]
