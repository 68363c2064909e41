"""Appointment service for business logic."""

from datetime import UTC, datetime

import structlog

from scheduler.core.exceptions import (
    AppointmentStateException,
    BadRequestException,
    NotFoundException,
    SlotConflictException,
    UnauthorizedException,
)
from scheduler.core.permissions import Action, authorize, is_allowed
from scheduler.models.appointments import Appointment, AppointmentStatus
from scheduler.schemas.appointments import AppointmentResponse
from scheduler.schemas.auth import TokenPayload
from scheduler.store import InMemoryStore

logger = structlog.get_logger()


def _require_identity(identity: TokenPayload | None) -> TokenPayload:
    if identity is None:
        raise UnauthorizedException("Authentication required")
    return identity


class AppointmentService:
    """Service for booking, rescheduling and cancelling appointments.

    Every operation checks all of its preconditions before touching the
    store, so a rejected call leaves slots and appointments unchanged.
    """

    def __init__(self, store: InMemoryStore):
        """Initialize service with the store it owns writes to."""
        self.store = store

    def list_appointments(self, identity: TokenPayload | None) -> list[AppointmentResponse]:
        """
        List appointments visible to the caller.

        Args:
            identity: Authenticated caller

        Returns:
            Every appointment for admins, the caller's own otherwise

        Raises:
            UnauthorizedException: If there is no caller
        """
        identity = _require_identity(identity)
        see_all = is_allowed(identity, Action.VIEW_ALL_APPOINTMENTS)

        with self.store.lock:
            return [
                AppointmentResponse.model_validate(appointment)
                for appointment in self.store.appointments
                if see_all or appointment.user_id == identity.user_id
            ]

    def book_slot(self, identity: TokenPayload | None, slot_id: str | None) -> AppointmentResponse:
        """
        Book an available slot for the caller.

        Args:
            identity: Authenticated caller
            slot_id: Slot to book

        Returns:
            Created appointment

        Raises:
            UnauthorizedException: If there is no caller
            BadRequestException: If no slot id was given
            NotFoundException: If the slot does not exist
            SlotConflictException: If the slot is already taken
        """
        identity = _require_identity(identity)

        if not slot_id:
            raise BadRequestException("Slot ID is required")

        with self.store.lock:
            slot = self.store.find_slot(slot_id)
            if slot is None:
                raise NotFoundException("Slot not found")

            if not slot.is_available:
                raise SlotConflictException("This slot is no longer available")

            slot.is_available = False
            appointment = self.store.add_appointment(
                Appointment(
                    id=self.store.generate_id("appt"),
                    user_id=identity.user_id,
                    user_name=identity.name,
                    slot_id=slot.id,
                    slot=slot.snapshot(),
                    status=AppointmentStatus.BOOKED,
                    created_at=datetime.now(UTC),
                )
            )
            response = AppointmentResponse.model_validate(appointment)

        logger.info(
            "slot_booked",
            appointment_id=appointment.id,
            slot_id=slot_id,
            user_id=identity.user_id,
        )
        return response

    def reschedule_appointment(
        self,
        identity: TokenPayload | None,
        appointment_id: str,
        new_slot_id: str | None,
    ) -> AppointmentResponse:
        """
        Move a live appointment to another available slot.

        The old slot is released (if it still exists) and the new one
        reserved in the same step.

        Args:
            identity: Authenticated caller
            appointment_id: Appointment to move
            new_slot_id: Slot to move it to

        Returns:
            Updated appointment

        Raises:
            UnauthorizedException: If there is no caller
            BadRequestException: If no new slot id was given
            NotFoundException: If the appointment or the new slot does not exist
            ForbiddenException: If the caller neither owns it nor is an admin
            AppointmentStateException: If the appointment is cancelled
            SlotConflictException: If the new slot is not available
        """
        identity = _require_identity(identity)

        if not new_slot_id:
            raise BadRequestException("New slot ID is required")

        with self.store.lock:
            appointment = self.store.find_appointment(appointment_id)
            if appointment is None:
                raise NotFoundException("Appointment not found")

            authorize(
                identity,
                Action.MANAGE_APPOINTMENT,
                appointment,
                message="Not authorized to reschedule this appointment",
            )

            new_slot = self.store.find_slot(new_slot_id)
            if new_slot is None:
                raise NotFoundException("New slot not found")

            if not appointment.is_live:
                raise AppointmentStateException("Cannot reschedule a cancelled appointment")

            if not new_slot.is_available:
                raise SlotConflictException("The selected slot is not available")

            old_slot_id = appointment.slot_id
            self.store.set_slot_availability(old_slot_id, True)
            new_slot.is_available = False

            appointment.slot_id = new_slot.id
            appointment.slot = new_slot.snapshot()
            appointment.status = AppointmentStatus.RESCHEDULED
            response = AppointmentResponse.model_validate(appointment)

        logger.info(
            "appointment_rescheduled",
            appointment_id=appointment_id,
            old_slot_id=old_slot_id,
            new_slot_id=new_slot_id,
        )
        return response

    def cancel_appointment(self, identity: TokenPayload | None, appointment_id: str) -> None:
        """
        Cancel a live appointment and release its slot.

        Args:
            identity: Authenticated caller
            appointment_id: Appointment to cancel

        Raises:
            UnauthorizedException: If there is no caller
            NotFoundException: If the appointment does not exist
            ForbiddenException: If the caller neither owns it nor is an admin
            AppointmentStateException: If it is already cancelled
        """
        identity = _require_identity(identity)

        with self.store.lock:
            appointment = self.store.find_appointment(appointment_id)
            if appointment is None:
                raise NotFoundException("Appointment not found")

            authorize(
                identity,
                Action.MANAGE_APPOINTMENT,
                appointment,
                message="Not authorized to cancel this appointment",
            )

            if not appointment.is_live:
                raise AppointmentStateException("Appointment is already cancelled")

            self.store.set_slot_availability(appointment.slot_id, True)
            appointment.status = AppointmentStatus.CANCELLED

        logger.info(
            "appointment_cancelled",
            appointment_id=appointment_id,
            slot_id=appointment.slot_id,
            cancelled_by=identity.user_id,
        )
