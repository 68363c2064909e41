"""Slot service for business logic."""

from datetime import UTC, datetime

import structlog

from scheduler.core.exceptions import (
    BadRequestException,
    NotFoundException,
    SlotConflictException,
)
from scheduler.core.permissions import Action, authorize, is_allowed
from scheduler.models.slots import AppointmentSlot
from scheduler.schemas.auth import TokenPayload
from scheduler.schemas.slots import SlotResponse
from scheduler.store import InMemoryStore

logger = structlog.get_logger()


def _as_utc(moment: datetime) -> datetime:
    # Timestamps without an offset are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class SlotService:
    """Service for publishing, listing and withdrawing slots."""

    def __init__(self, store: InMemoryStore):
        """Initialize service with the store it owns writes to."""
        self.store = store

    def list_slots(
        self,
        identity: TokenPayload | None,
        include_unavailable: bool = False,
    ) -> list[SlotResponse]:
        """
        List slots visible to the caller.

        Unavailable slots are only returned when asked for by an admin.

        Args:
            identity: Authenticated caller, or None for anonymous
            include_unavailable: Whether booked slots are wanted too

        Returns:
            Slots in publication order
        """
        show_all = include_unavailable and is_allowed(identity, Action.LIST_ALL_SLOTS)

        with self.store.lock:
            return [
                SlotResponse.model_validate(slot)
                for slot in self.store.slots
                if show_all or slot.is_available
            ]

    def create_slot(
        self,
        identity: TokenPayload | None,
        start_time: datetime | None,
        end_time: datetime | None,
    ) -> SlotResponse:
        """
        Publish a new available slot owned by the calling admin.

        Args:
            identity: Authenticated caller
            start_time: Slot start
            end_time: Slot end, strictly after the start

        Returns:
            Created slot

        Raises:
            ForbiddenException: If the caller is not an admin
            BadRequestException: If a time is missing, out of range or the range is empty
        """
        authorize(identity, Action.CREATE_SLOT)

        if start_time is None or end_time is None:
            raise BadRequestException("Start time and end time are required")

        try:
            start_time, end_time = _as_utc(start_time), _as_utc(end_time)
        except OverflowError:
            raise BadRequestException("Invalid start or end time")

        if start_time >= end_time:
            raise BadRequestException("End time must be after start time")

        with self.store.lock:
            slot = self.store.add_slot(
                AppointmentSlot(
                    id=self.store.generate_id("slot"),
                    provider_id=identity.user_id,
                    provider_name=identity.name,
                    start_time=start_time,
                    end_time=end_time,
                    is_available=True,
                )
            )

        logger.info("slot_created", slot_id=slot.id, provider_id=slot.provider_id)
        return SlotResponse.model_validate(slot)

    def delete_slot(self, identity: TokenPayload | None, slot_id: str) -> int:
        """
        Withdraw a slot and drop the appointment history attached to it.

        Args:
            identity: Authenticated caller
            slot_id: Slot to delete

        Returns:
            Number of appointment rows removed with the slot

        Raises:
            ForbiddenException: If the caller is not an admin
            NotFoundException: If the slot does not exist
            SlotConflictException: If a live appointment holds the slot
        """
        authorize(identity, Action.DELETE_SLOT)

        with self.store.lock:
            slot = self.store.find_slot(slot_id)
            if slot is None:
                raise NotFoundException("Slot not found")

            if self.store.live_appointment_for_slot(slot_id) is not None:
                raise SlotConflictException("Cannot delete a slot with an active booking")

            removed = self.store.remove_slot(slot)

        logger.info("slot_deleted", slot_id=slot_id, appointments_removed=removed)
        return removed
