"""Security utilities for JWT and password handling."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from scheduler.config import settings
from scheduler.models.users import User
from scheduler.schemas.auth import TokenPayload

BEARER_PREFIX = "Bearer "

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(
    user: User,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user: User the token is issued to
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    claims = TokenPayload(
        user_id=user.id,
        email=user.email,
        role=user.role,
        name=user.name,
    ).model_dump(by_alias=True, mode="json")

    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)

    claims.update({"exp": now + expires_delta, "iat": now})

    return jwt.encode(
        claims,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> TokenPayload | None:
    """
    Decode and validate a JWT access token.

    Expired, tampered and malformed tokens are all reported the same way.

    Args:
        token: JWT token to decode

    Returns:
        Token payload or None if invalid
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        return TokenPayload.model_validate(claims)
    except (JWTError, ValidationError):
        return None


def authenticate_header(authorization: str | None) -> TokenPayload | None:
    """
    Resolve an Authorization header to the identity it carries.

    Args:
        authorization: Raw header value

    Returns:
        Token payload, or None unless the header is ``Bearer <valid token>``
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        return None

    return decode_access_token(token)
