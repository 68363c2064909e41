"""Demo data loaded into a fresh store."""

from datetime import UTC, date, datetime, time, timedelta, tzinfo
from functools import lru_cache
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from scheduler.config import settings
from scheduler.core.security import get_password_hash
from scheduler.models.slots import AppointmentSlot
from scheduler.models.users import User, UserRole

if TYPE_CHECKING:
    from scheduler.store import InMemoryStore

ADMIN_ID = "admin-1"
ADMIN_NAME = "Dr. Priya Sharma"
ADMIN_EMAIL = "admin@clinic.com"
ADMIN_PASSWORD = "admin123"

USER_ID = "user-1"
USER_NAME = "Ravi Kumar"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "user123"

SLOT_LENGTH = timedelta(hours=1)


@lru_cache
def _hashed(password: str) -> str:
    # bcrypt is slow on purpose; the demo passwords only need hashing once
    return get_password_hash(password)


def _seed_timezone() -> tzinfo:
    if settings.seed_timezone.upper() == "UTC":
        return UTC
    return ZoneInfo(settings.seed_timezone)


def build_seed_slots(
    today: date,
    days: int,
    hours: list[int],
    tz: tzinfo = UTC,
) -> list[AppointmentSlot]:
    """
    Build one-hour slots owned by the seeded admin.

    Args:
        today: First day to cover
        days: Number of consecutive days
        hours: Start hours within each day
        tz: Timezone the hours are expressed in

    Returns:
        Slots with ids ``slot-1`` onwards, in chronological order
    """
    slots = []
    for day_offset in range(days):
        day = today + timedelta(days=day_offset)
        for hour in hours:
            start = datetime.combine(day, time(hour), tzinfo=tz).astimezone(UTC)
            slots.append(
                AppointmentSlot(
                    id=f"slot-{len(slots) + 1}",
                    provider_id=ADMIN_ID,
                    provider_name=ADMIN_NAME,
                    start_time=start,
                    end_time=start + SLOT_LENGTH,
                    is_available=True,
                )
            )
    return slots


def seed_store(store: "InMemoryStore") -> None:
    """Load the demo admin, the demo user and a week of slots."""
    store.add_user(
        User(
            id=ADMIN_ID,
            name=ADMIN_NAME,
            email=ADMIN_EMAIL,
            password_hash=_hashed(ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    store.add_user(
        User(
            id=USER_ID,
            name=USER_NAME,
            email=USER_EMAIL,
            password_hash=_hashed(USER_PASSWORD),
            role=UserRole.USER,
        )
    )

    tz = _seed_timezone()
    for slot in build_seed_slots(
        datetime.now(tz).date(),
        settings.seed_days,
        settings.seed_slot_hours,
        tz,
    ):
        store.add_slot(slot)
