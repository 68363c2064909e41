"""Role and ownership checks shared by every service operation."""

from enum import Enum

from scheduler.core.exceptions import ForbiddenException
from scheduler.models.appointments import Appointment
from scheduler.schemas.auth import TokenPayload


class Action(str, Enum):
    """Things a caller may try to do."""

    LIST_ALL_SLOTS = "list_all_slots"
    CREATE_SLOT = "create_slot"
    DELETE_SLOT = "delete_slot"
    VIEW_ALL_APPOINTMENTS = "view_all_appointments"
    MANAGE_APPOINTMENT = "manage_appointment"


ADMIN_ONLY = frozenset(
    {
        Action.LIST_ALL_SLOTS,
        Action.CREATE_SLOT,
        Action.DELETE_SLOT,
        Action.VIEW_ALL_APPOINTMENTS,
    }
)

DENIED_MESSAGES = {
    Action.CREATE_SLOT: "Unauthorized. Admin access required.",
    Action.DELETE_SLOT: "Unauthorized. Admin access required.",
    Action.MANAGE_APPOINTMENT: "Not authorized to modify this appointment",
}


def is_allowed(
    identity: TokenPayload | None,
    action: Action,
    resource: Appointment | None = None,
) -> bool:
    """
    Decide whether an identity may perform an action.

    Args:
        identity: Authenticated caller, or None for anonymous
        action: Requested action
        resource: Appointment the action targets, when it targets one

    Returns:
        True if allowed
    """
    if identity is None:
        return False

    if identity.is_admin:
        return True

    if action in ADMIN_ONLY:
        return False

    if action == Action.MANAGE_APPOINTMENT:
        return resource is not None and resource.user_id == identity.user_id

    return False


def authorize(
    identity: TokenPayload | None,
    action: Action,
    resource: Appointment | None = None,
    message: str | None = None,
) -> None:
    """
    Raise ForbiddenException unless the identity may perform the action.

    Raises:
        ForbiddenException: If the policy denies the action
    """
    if not is_allowed(identity, action, resource):
        raise ForbiddenException(message or DENIED_MESSAGES.get(action, "Forbidden"))
