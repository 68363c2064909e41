import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Settings are read at import time; make sure tests never need a real secret
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from httpx import ASGITransport, AsyncClient  # noqa: E402

from scheduler.core.security import create_access_token  # noqa: E402
from scheduler.main import app  # noqa: E402
from scheduler.models.users import User, UserRole  # noqa: E402
from scheduler.schemas.auth import TokenPayload  # noqa: E402
from scheduler.seed import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_ID,
    ADMIN_NAME,
    USER_EMAIL,
    USER_ID,
    USER_NAME,
)
from scheduler.store import InMemoryStore, get_store  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    """Create a freshly seeded store."""
    store = InMemoryStore()
    store.initialize(seed=True)
    return store


@pytest.fixture
def empty_store() -> InMemoryStore:
    """Create a store with no demo data."""
    store = InMemoryStore()
    store.initialize(seed=False)
    return store


@pytest_asyncio.fixture
async def client(store: InMemoryStore) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to the test store."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_identity() -> TokenPayload:
    """Identity of the seeded admin."""
    return TokenPayload(user_id=ADMIN_ID, email=ADMIN_EMAIL, role=UserRole.ADMIN, name=ADMIN_NAME)


@pytest.fixture
def user_identity() -> TokenPayload:
    """Identity of the seeded regular user."""
    return TokenPayload(user_id=USER_ID, email=USER_EMAIL, role=UserRole.USER, name=USER_NAME)


@pytest.fixture
def other_identity() -> TokenPayload:
    """Identity of a regular user who owns nothing."""
    return TokenPayload(
        user_id="user-2", email="other@example.com", role=UserRole.USER, name="Asha Patel"
    )


def _bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(store: InMemoryStore) -> dict:
    """Create authentication headers for the seeded admin."""
    return _bearer(store.find_user_by_id(ADMIN_ID))


@pytest.fixture
def user_headers(store: InMemoryStore) -> dict:
    """Create authentication headers for the seeded user."""
    return _bearer(store.find_user_by_id(USER_ID))


@pytest.fixture
def other_headers() -> dict:
    """Create authentication headers for a user that owns nothing."""
    return _bearer(
        User(
            id="user-2",
            name="Asha Patel",
            email="other@example.com",
            password_hash="unused",
            role=UserRole.USER,
        )
    )


@pytest.fixture
def slot_times() -> dict:
    """A one-hour window well clear of the seeded week."""
    start = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)
    return {
        "startTime": start.isoformat(),
        "endTime": (start + timedelta(hours=1)).isoformat(),
    }


def _check_store(store: InMemoryStore) -> None:
    for slot in store.slots:
        live = [a for a in store.appointments if a.slot_id == slot.id and a.is_live]
        assert len(live) <= 1, f"{slot.id} is held by {len(live)} appointments"
        assert slot.is_available == (not live), f"{slot.id} availability is out of sync"

    slot_ids = {slot.id for slot in store.slots}
    for appointment in store.appointments:
        if appointment.is_live:
            assert appointment.slot_id in slot_ids, f"{appointment.id} holds a missing slot"


@pytest.fixture
def assert_consistent(store: InMemoryStore):
    """Return a checker that slot availability matches the live appointments exactly."""
    return lambda: _check_store(store)
