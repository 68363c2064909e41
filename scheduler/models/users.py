"""User record held by the in-memory store."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """User role enumeration."""

    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """A registered account. Never mutated after creation."""

    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
