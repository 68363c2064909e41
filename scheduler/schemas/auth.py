"""Authentication schemas."""

from pydantic import Field

from scheduler.models.users import UserRole
from scheduler.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Registration request.

    Fields are optional at the schema level so that missing values are
    reported by the account service as a 400 with a readable message.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = Field(None, description="Either 'user' (default) or 'admin'")


class LoginRequest(CamelModel):
    """Login request."""

    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    """Public view of a user."""

    id: str
    name: str
    email: str
    role: UserRole


class AuthResponse(CamelModel):
    """Token issued on register or login, with the user it belongs to."""

    token: str
    user: UserResponse


class TokenPayload(CamelModel):
    """Claims carried by an access token; the authenticated identity."""

    user_id: str
    email: str
    role: UserRole
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
