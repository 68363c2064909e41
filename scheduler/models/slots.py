"""Appointment slot record held by the in-memory store."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass
class AppointmentSlot:
    """A provider-published bookable time interval."""

    id: str
    provider_id: str
    provider_name: str
    start_time: datetime
    end_time: datetime
    is_available: bool = True

    def snapshot(self) -> "AppointmentSlot":
        """Return a detached copy for embedding in an appointment."""
        return replace(self)
