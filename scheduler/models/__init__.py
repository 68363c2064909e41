"""Domain records."""

from scheduler.models.appointments import (
    LIVE_STATUSES,
    Appointment,
    AppointmentStatus,
    is_live,
)
from scheduler.models.slots import AppointmentSlot
from scheduler.models.users import User, UserRole

__all__ = [
    "LIVE_STATUSES",
    "Appointment",
    "AppointmentSlot",
    "AppointmentStatus",
    "User",
    "UserRole",
    "is_live",
]
