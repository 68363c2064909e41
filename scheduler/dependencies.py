"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from scheduler.core.exceptions import UnauthorizedException
from scheduler.core.security import authenticate_header
from scheduler.schemas.auth import TokenPayload
from scheduler.services.appointment_service import AppointmentService
from scheduler.services.auth_service import AuthService
from scheduler.services.slot_service import SlotService
from scheduler.store import InMemoryStore, get_store


async def get_optional_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> TokenPayload | None:
    """
    Resolve the caller from the Authorization header, if any.

    Args:
        authorization: ``Bearer <token>`` header value

    Returns:
        Token payload, or None for anonymous or invalid credentials
    """
    return authenticate_header(authorization)


async def get_current_identity(
    identity: Annotated[TokenPayload | None, Depends(get_optional_identity)],
) -> TokenPayload:
    """
    Require an authenticated caller.

    Raises:
        UnauthorizedException: If the token is missing or invalid
    """
    if identity is None:
        raise UnauthorizedException("Authentication required")
    return identity


Store = Annotated[InMemoryStore, Depends(get_store)]


def get_slot_service(store: Store) -> SlotService:
    return SlotService(store)


def get_appointment_service(store: Store) -> AppointmentService:
    return AppointmentService(store)


def get_auth_service(store: Store) -> AuthService:
    return AuthService(store)


# Type aliases for dependency injection
OptionalIdentity = Annotated[TokenPayload | None, Depends(get_optional_identity)]
CurrentIdentity = Annotated[TokenPayload, Depends(get_current_identity)]
SlotServiceDep = Annotated[SlotService, Depends(get_slot_service)]
AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
