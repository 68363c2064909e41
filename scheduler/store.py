"""In-memory store and its lifecycle."""

import secrets
import string
import threading
import time

import structlog

from scheduler.config import settings
from scheduler.models.appointments import Appointment
from scheduler.models.slots import AppointmentSlot
from scheduler.models.users import User
from scheduler.seed import seed_store

logger = structlog.get_logger()

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_SUFFIX_LENGTH = 7


class InMemoryStore:
    """Process-lifetime collections of users, slots and appointments.

    Services are the only writers and hold ``lock`` for the whole of each
    operation, so one operation always completes before the next begins.
    """

    def __init__(self) -> None:
        """Initialize empty collections."""
        self.users: list[User] = []
        self.slots: list[AppointmentSlot] = []
        self.appointments: list[Appointment] = []
        self.lock = threading.RLock()
        self.initialized = False

    def initialize(self, seed: bool | None = None) -> None:
        """Seed demo data once. Later calls are no-ops."""
        with self.lock:
            if self.initialized:
                return
            if settings.seed_demo_data if seed is None else seed:
                seed_store(self)
                logger.info(
                    "store_seeded",
                    users=len(self.users),
                    slots=len(self.slots),
                )
            self.initialized = True

    def generate_id(self, prefix: str) -> str:
        """Generate a fresh id such as ``appt-1735722000000-k3j9x0a``."""
        while True:
            suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
            candidate = f"{prefix}-{int(time.time() * 1000)}-{suffix}"
            if not self._id_taken(candidate):
                return candidate

    def _id_taken(self, record_id: str) -> bool:
        return (
            any(user.id == record_id for user in self.users)
            or any(slot.id == record_id for slot in self.slots)
            or any(appointment.id == record_id for appointment in self.appointments)
        )

    # Users

    def find_user_by_email(self, email: str) -> User | None:
        return next((user for user in self.users if user.email == email), None)

    def find_user_by_id(self, user_id: str) -> User | None:
        return next((user for user in self.users if user.id == user_id), None)

    def add_user(self, user: User) -> User:
        self.users.append(user)
        return user

    # Slots

    def find_slot(self, slot_id: str) -> AppointmentSlot | None:
        return next((slot for slot in self.slots if slot.id == slot_id), None)

    def add_slot(self, slot: AppointmentSlot) -> AppointmentSlot:
        self.slots.append(slot)
        return slot

    def remove_slot(self, slot: AppointmentSlot) -> int:
        """
        Remove a slot together with every appointment that referenced it.

        Returns:
            Number of appointment rows removed
        """
        self.slots.remove(slot)
        before = len(self.appointments)
        self.appointments = [a for a in self.appointments if a.slot_id != slot.id]
        return before - len(self.appointments)

    def set_slot_availability(self, slot_id: str, is_available: bool) -> None:
        """Flip a slot's availability; silently ignore slots that are gone."""
        slot = self.find_slot(slot_id)
        if slot is not None:
            slot.is_available = is_available

    # Appointments

    def find_appointment(self, appointment_id: str) -> Appointment | None:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def appointments_for_slot(self, slot_id: str) -> list[Appointment]:
        return [a for a in self.appointments if a.slot_id == slot_id]

    def live_appointment_for_slot(self, slot_id: str) -> Appointment | None:
        return next((a for a in self.appointments_for_slot(slot_id) if a.is_live), None)

    def add_appointment(self, appointment: Appointment) -> Appointment:
        self.appointments.append(appointment)
        return appointment

    def stats(self) -> dict[str, int]:
        """Count records for health reporting."""
        with self.lock:
            return {
                "users": len(self.users),
                "slots": len(self.slots),
                "available_slots": sum(1 for slot in self.slots if slot.is_available),
                "appointments": len(self.appointments),
            }


# Global store instance
_store: InMemoryStore | None = None
_store_guard = threading.Lock()


def get_store() -> InMemoryStore:
    """
    Get or create the process-wide store, seeding it on first access.

    Returns:
        Store instance
    """
    global _store

    with _store_guard:
        if _store is None:
            _store = InMemoryStore()
        store = _store

    store.initialize()
    return store


def reset_store() -> None:
    """Drop the process-wide store so the next access starts fresh."""
    global _store

    with _store_guard:
        _store = None
