"""Appointment endpoints."""

from fastapi import APIRouter, status

from scheduler.dependencies import AppointmentServiceDep, CurrentIdentity
from scheduler.schemas.appointments import (
    AppointmentCreate,
    AppointmentEnvelope,
    AppointmentListResponse,
    AppointmentReschedule,
)
from scheduler.schemas.common import MessageResponse

router = APIRouter()


@router.get(
    "",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="List appointments",
)
async def list_appointments(
    identity: CurrentIdentity,
    service: AppointmentServiceDep,
) -> AppointmentListResponse:
    """
    List the caller's appointments, or every appointment for admins.

    Args:
        identity: Authenticated caller
        service: Appointment service

    Returns:
        Appointment list
    """
    return AppointmentListResponse(appointments=service.list_appointments(identity))


@router.post(
    "",
    response_model=AppointmentEnvelope,
    status_code=status.HTTP_201_CREATED,
    tags=["Appointments"],
    summary="Book a slot",
)
async def book_appointment(
    data: AppointmentCreate,
    identity: CurrentIdentity,
    service: AppointmentServiceDep,
) -> AppointmentEnvelope:
    """
    Book an available slot for the authenticated user.

    Args:
        data: Slot to book
        identity: Authenticated caller
        service: Appointment service

    Returns:
        Created appointment
    """
    return AppointmentEnvelope(appointment=service.book_slot(identity, data.slot_id))


@router.put(
    "/{appointment_id}",
    response_model=AppointmentEnvelope,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Reschedule appointment",
)
async def reschedule_appointment(
    appointment_id: str,
    data: AppointmentReschedule,
    identity: CurrentIdentity,
    service: AppointmentServiceDep,
) -> AppointmentEnvelope:
    """
    Move an appointment to another available slot.

    Args:
        appointment_id: Appointment ID
        data: New slot
        identity: Authenticated caller
        service: Appointment service

    Returns:
        Updated appointment
    """
    appointment = service.reschedule_appointment(identity, appointment_id, data.new_slot_id)
    return AppointmentEnvelope(appointment=appointment)


@router.delete(
    "/{appointment_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    tags=["Appointments"],
    summary="Cancel appointment",
)
async def cancel_appointment(
    appointment_id: str,
    identity: CurrentIdentity,
    service: AppointmentServiceDep,
) -> MessageResponse:
    """
    Cancel an appointment and release its slot.

    Args:
        appointment_id: Appointment ID
        identity: Authenticated caller
        service: Appointment service

    Returns:
        Confirmation message
    """
    service.cancel_appointment(identity, appointment_id)
    return MessageResponse(message="Appointment cancelled successfully")
