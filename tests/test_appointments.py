"""Tests for appointment endpoints."""

import pytest
from httpx import AsyncClient

from scheduler.config import settings
from scheduler.main import app

API = "/api/v1"


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get(f"{API}/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["store"]["slots"] == 42
    assert data["store"]["appointments"] == 0


@pytest.mark.asyncio
async def test_ping(client: AsyncClient) -> None:
    """Test ping endpoint."""
    response = await client.get(f"{API}/ping")
    assert response.status_code == 200
    assert response.json() == {"message": "pong"}


async def book(client: AsyncClient, headers: dict, slot_id: str) -> dict:
    response = await client.post(f"{API}/appointments", json={"slotId": slot_id}, headers=headers)
    assert response.status_code == 201
    return response.json()["appointment"]


@pytest.mark.asyncio
async def test_create_appointment(
    client: AsyncClient,
    user_headers: dict,
    assert_consistent,
) -> None:
    """Test booking an available slot."""
    response = await client.post(
        f"{API}/appointments",
        json={"slotId": "slot-1"},
        headers=user_headers,
    )
    assert response.status_code == 201
    data = response.json()["appointment"]
    assert data["id"].startswith("appt-")
    assert data["userId"] == "user-1"
    assert data["userName"] == "Ravi Kumar"
    assert data["slotId"] == "slot-1"
    assert data["status"] == "booked"
    assert data["slot"]["id"] == "slot-1"
    assert data["slot"]["isAvailable"] is False
    assert "createdAt" in data
    assert_consistent()


@pytest.mark.asyncio
async def test_create_appointment_unauthorized(client: AsyncClient) -> None:
    """Test booking without authentication."""
    response = await client.post(f"{API}/appointments", json={"slotId": "slot-1"})
    assert response.status_code == 401
    data = response.json()
    assert data["error"] == "UnauthorizedException"
    assert data["message"] == "Authentication required"
    assert data["path"].endswith(f"{API}/appointments")
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_create_appointment_invalid_token(client: AsyncClient) -> None:
    """Test booking with a token that does not verify."""
    response = await client.post(
        f"{API}/appointments",
        json={"slotId": "slot-1"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_appointment_missing_slot_id(client: AsyncClient, user_headers: dict) -> None:
    """Test booking without naming a slot."""
    response = await client.post(f"{API}/appointments", json={}, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Slot ID is required"


@pytest.mark.asyncio
async def test_create_appointment_unknown_slot(client: AsyncClient, user_headers: dict) -> None:
    """Test booking a slot that does not exist."""
    response = await client.post(
        f"{API}/appointments", json={"slotId": "slot-999"}, headers=user_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Slot not found"


@pytest.mark.asyncio
async def test_double_booking_rejected(
    client: AsyncClient,
    user_headers: dict,
    other_headers: dict,
    assert_consistent,
) -> None:
    """Test that a slot can only be booked once."""
    await book(client, user_headers, "slot-2")

    response = await client.post(
        f"{API}/appointments", json={"slotId": "slot-2"}, headers=other_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "This slot is no longer available"
    assert_consistent()


@pytest.mark.asyncio
async def test_list_appointments_scoped_to_owner(
    client: AsyncClient,
    admin_headers: dict,
    user_headers: dict,
    other_headers: dict,
) -> None:
    """Test that users see their own appointments and admins see all."""
    mine = await book(client, user_headers, "slot-1")
    theirs = await book(client, other_headers, "slot-2")

    response = await client.get(f"{API}/appointments", headers=user_headers)
    assert response.status_code == 200
    assert [a["id"] for a in response.json()["appointments"]] == [mine["id"]]

    response = await client.get(f"{API}/appointments", headers=other_headers)
    assert [a["id"] for a in response.json()["appointments"]] == [theirs["id"]]

    response = await client.get(f"{API}/appointments", headers=admin_headers)
    assert {a["id"] for a in response.json()["appointments"]} == {mine["id"], theirs["id"]}


@pytest.mark.asyncio
async def test_list_appointments_unauthorized(client: AsyncClient) -> None:
    """Test listing without authentication."""
    response = await client.get(f"{API}/appointments")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_reschedule_appointment(
    client: AsyncClient,
    user_headers: dict,
    assert_consistent,
) -> None:
    """Test moving an appointment to another slot."""
    appointment = await book(client, user_headers, "slot-1")

    response = await client.put(
        f"{API}/appointments/{appointment['id']}",
        json={"newSlotId": "slot-3"},
        headers=user_headers,
    )
    assert response.status_code == 200
    data = response.json()["appointment"]
    assert data["id"] == appointment["id"]
    assert data["slotId"] == "slot-3"
    assert data["slot"]["id"] == "slot-3"
    assert data["status"] == "rescheduled"

    slots = await client.get(f"{API}/slots")
    available = {slot["id"] for slot in slots.json()["slots"]}
    assert "slot-1" in available
    assert "slot-3" not in available
    assert_consistent()


@pytest.mark.asyncio
async def test_reschedule_to_taken_slot(
    client: AsyncClient,
    user_headers: dict,
    other_headers: dict,
    assert_consistent,
) -> None:
    """Test that rescheduling onto a booked slot is rejected and changes nothing."""
    appointment = await book(client, user_headers, "slot-1")
    await book(client, other_headers, "slot-2")

    response = await client.put(
        f"{API}/appointments/{appointment['id']}",
        json={"newSlotId": "slot-2"},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "The selected slot is not available"

    listed = await client.get(f"{API}/appointments", headers=user_headers)
    assert listed.json()["appointments"][0]["slotId"] == "slot-1"
    assert listed.json()["appointments"][0]["status"] == "booked"
    assert_consistent()


@pytest.mark.asyncio
async def test_reschedule_errors(client: AsyncClient, user_headers: dict) -> None:
    """Test reschedule lookups in order: body, appointment, then new slot."""
    appointment = await book(client, user_headers, "slot-1")
    url = f"{API}/appointments/{appointment['id']}"

    response = await client.put(url, json={}, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "New slot ID is required"

    response = await client.put(
        f"{API}/appointments/appointment-missing",
        json={"newSlotId": "slot-3"},
        headers=user_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Appointment not found"

    response = await client.put(url, json={"newSlotId": "slot-999"}, headers=user_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "New slot not found"


@pytest.mark.asyncio
async def test_reschedule_someone_elses_appointment(
    client: AsyncClient,
    user_headers: dict,
    other_headers: dict,
    admin_headers: dict,
) -> None:
    """Test that only the owner or an admin may reschedule."""
    appointment = await book(client, user_headers, "slot-1")
    url = f"{API}/appointments/{appointment['id']}"

    response = await client.put(url, json={"newSlotId": "slot-3"}, headers=other_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to reschedule this appointment"

    response = await client.put(url, json={"newSlotId": "slot-3"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["appointment"]["userId"] == "user-1"


@pytest.mark.asyncio
async def test_cancel_appointment(
    client: AsyncClient,
    user_headers: dict,
    assert_consistent,
) -> None:
    """Test cancelling an appointment releases its slot."""
    appointment = await book(client, user_headers, "slot-4")

    response = await client.delete(
        f"{API}/appointments/{appointment['id']}", headers=user_headers
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Appointment cancelled successfully"}

    listed = await client.get(f"{API}/appointments", headers=user_headers)
    assert listed.json()["appointments"][0]["status"] == "cancelled"

    slots = await client.get(f"{API}/slots")
    assert "slot-4" in {slot["id"] for slot in slots.json()["slots"]}
    assert_consistent()

    again = await book(client, user_headers, "slot-4")
    assert again["id"] != appointment["id"]
    assert_consistent()


@pytest.mark.asyncio
async def test_cancel_twice(client: AsyncClient, user_headers: dict) -> None:
    """Test that a cancelled appointment cannot be cancelled again."""
    appointment = await book(client, user_headers, "slot-4")
    url = f"{API}/appointments/{appointment['id']}"
    await client.delete(url, headers=user_headers)

    response = await client.delete(url, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Appointment is already cancelled"


@pytest.mark.asyncio
async def test_cancel_someone_elses_appointment(
    client: AsyncClient,
    user_headers: dict,
    other_headers: dict,
    admin_headers: dict,
    assert_consistent,
) -> None:
    """Test that a non-owner cannot cancel but an admin can."""
    appointment = await book(client, user_headers, "slot-5")
    url = f"{API}/appointments/{appointment['id']}"

    response = await client.delete(url, headers=other_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "ForbiddenException"

    response = await client.delete(url, headers=admin_headers)
    assert response.status_code == 200
    assert_consistent()


@pytest.mark.asyncio
async def test_cancel_missing_appointment(client: AsyncClient, user_headers: dict) -> None:
    """Test cancelling an appointment that does not exist."""
    response = await client.delete(
        f"{API}/appointments/appointment-missing", headers=user_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_response_headers(client: AsyncClient) -> None:
    """Test that every response carries request tracing headers."""
    response = await client.get(f"{API}/ping", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient) -> None:
    """Test that unknown routes use the common error body."""
    response = await client.get(f"{API}/nowhere")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "HTTPException"
    assert data["path"].endswith(f"{API}/nowhere")


def test_app_debug_follows_settings() -> None:
    """Test that the DEBUG setting reaches the application."""
    assert app.debug is settings.debug
