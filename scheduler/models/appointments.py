"""Appointment record held by the in-memory store."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from scheduler.models.slots import AppointmentSlot


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    BOOKED = "booked"
    RESCHEDULED = "rescheduled"
    CANCELLED = "cancelled"


# Statuses that keep a slot reserved
LIVE_STATUSES = frozenset({AppointmentStatus.BOOKED, AppointmentStatus.RESCHEDULED})


def is_live(status: AppointmentStatus) -> bool:
    """Check whether an appointment in this status holds its slot."""
    return status in LIVE_STATUSES


@dataclass
class Appointment:
    """A user's claim on a slot.

    ``slot`` is a snapshot taken when the slot was booked or rescheduled
    into; ``slot_id`` always names the slot currently held.
    """

    id: str
    user_id: str
    user_name: str
    slot_id: str
    slot: AppointmentSlot
    status: AppointmentStatus
    created_at: datetime

    @property
    def is_live(self) -> bool:
        return is_live(self.status)
