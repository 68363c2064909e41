"""Appointment schemas for request/response validation."""

from datetime import datetime

from scheduler.models.appointments import AppointmentStatus
from scheduler.schemas.common import CamelModel
from scheduler.schemas.slots import SlotResponse


class AppointmentCreate(CamelModel):
    """Schema for booking a slot."""

    slot_id: str | None = None


class AppointmentReschedule(CamelModel):
    """Schema for moving an appointment to another slot."""

    new_slot_id: str | None = None


class AppointmentResponse(CamelModel):
    """Schema for appointment response."""

    id: str
    user_id: str
    user_name: str
    slot_id: str
    slot: SlotResponse
    status: AppointmentStatus
    created_at: datetime


class AppointmentEnvelope(CamelModel):
    """Single appointment wrapped under its key."""

    appointment: AppointmentResponse


class AppointmentListResponse(CamelModel):
    """Schema for appointment list response."""

    appointments: list[AppointmentResponse]
