"""Authentication service for registration and login."""

import structlog
from starlette.concurrency import run_in_threadpool

from scheduler.config import settings
from scheduler.core.exceptions import (
    BadRequestException,
    ConflictException,
    UnauthorizedException,
)
from scheduler.core.security import create_access_token, get_password_hash, verify_password
from scheduler.models.users import User, UserRole
from scheduler.schemas.auth import AuthResponse, UserResponse
from scheduler.store import InMemoryStore

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Authentication service for issuing tokens to accounts."""

    def __init__(self, store: InMemoryStore):
        """Initialize auth service with the store holding accounts."""
        self.store = store

    @staticmethod
    def _auth_response(user: User) -> AuthResponse:
        return AuthResponse(
            token=create_access_token(user),
            user=UserResponse.model_validate(user),
        )

    async def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | None = None,
    ) -> AuthResponse:
        """
        Create an account and sign it in.

        Args:
            name: Display name
            email: Unique login email
            password: Plain-text password, stored only as a bcrypt hash
            role: ``user`` (default) or ``admin``

        Returns:
            Token and public user data

        Raises:
            BadRequestException: If a field is missing or the role is not allowed
            ConflictException: If the email is already registered
        """
        if not name or not email or not password:
            raise BadRequestException("Name, email, and password are required")

        try:
            user_role = UserRole(role or UserRole.USER.value)
        except ValueError:
            raise BadRequestException("Invalid role")

        if user_role == UserRole.ADMIN and not settings.allow_admin_registration:
            raise BadRequestException("Admin registration is disabled")

        with self.store.lock:
            if self.store.find_user_by_email(email):
                raise ConflictException("Email already registered")

        # Hashing is slow; keep it off the event loop and outside the lock
        password_hash = await run_in_threadpool(get_password_hash, password)

        with self.store.lock:
            # Re-check: another registration may have won while hashing
            if self.store.find_user_by_email(email):
                raise ConflictException("Email already registered")

            user = self.store.add_user(
                User(
                    id=self.store.generate_id("user"),
                    name=name,
                    email=email,
                    password_hash=password_hash,
                    role=user_role,
                )
            )

        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return self._auth_response(user)

    async def login(self, email: str | None, password: str | None) -> AuthResponse:
        """
        Verify credentials and issue a token.

        Args:
            email: Login email
            password: Plain-text password

        Returns:
            Token and public user data

        Raises:
            BadRequestException: If a field is missing
            UnauthorizedException: If the email is unknown or the password wrong
        """
        if not email or not password:
            raise BadRequestException("Email and password are required")

        with self.store.lock:
            user = self.store.find_user_by_email(email)

        if user is None:
            logger.info("login_failed", reason="unknown_email")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise UnauthorizedException(INVALID_CREDENTIALS)

        return self._auth_response(user)
