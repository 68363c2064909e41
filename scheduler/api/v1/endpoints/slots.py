"""Slot endpoints."""

from fastapi import APIRouter, Query, status

from scheduler.dependencies import OptionalIdentity, SlotServiceDep
from scheduler.schemas.common import MessageResponse
from scheduler.schemas.slots import SlotCreate, SlotEnvelope, SlotListResponse

router = APIRouter()


@router.get(
    "",
    response_model=SlotListResponse,
    status_code=status.HTTP_200_OK,
    tags=["Slots"],
    summary="List slots",
)
async def list_slots(
    identity: OptionalIdentity,
    slot_service: SlotServiceDep,
    include_all: str | None = Query(
        None, alias="all", description="Pass `true` to include booked slots (admin only)"
    ),
) -> SlotListResponse:
    """
    List available slots; admins may ask for booked ones too.

    Args:
        identity: Caller, if a valid token was sent
        slot_service: Slot service
        include_all: Raw `all` query value; only `true` counts

    Returns:
        Slot list
    """
    return SlotListResponse(slots=slot_service.list_slots(identity, include_all == "true"))


@router.post(
    "",
    response_model=SlotEnvelope,
    status_code=status.HTTP_201_CREATED,
    tags=["Slots"],
    summary="Publish a slot (admin only)",
)
async def create_slot(
    data: SlotCreate,
    identity: OptionalIdentity,
    slot_service: SlotServiceDep,
) -> SlotEnvelope:
    """
    Publish a new bookable slot owned by the calling admin.

    Args:
        data: Start and end time
        identity: Caller
        slot_service: Slot service

    Returns:
        Created slot
    """
    slot = slot_service.create_slot(identity, data.start_time, data.end_time)
    return SlotEnvelope(slot=slot)


@router.delete(
    "/{slot_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    tags=["Slots"],
    summary="Delete a slot (admin only)",
)
async def delete_slot(
    slot_id: str,
    identity: OptionalIdentity,
    slot_service: SlotServiceDep,
) -> MessageResponse:
    """
    Delete a slot that no live appointment holds.

    Args:
        slot_id: Slot ID
        identity: Caller
        slot_service: Slot service

    Returns:
        Confirmation message
    """
    slot_service.delete_slot(identity, slot_id)
    return MessageResponse(message="Slot deleted successfully")
