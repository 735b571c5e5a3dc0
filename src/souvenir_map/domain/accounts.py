"""Domain models for accounts and sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class Identity:
    """Authenticated identity returned by the auth service."""

    id: UUID
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """Client-held session passed explicitly to components that need it."""

    access_token: str
    user_id: UUID
    email: str | None = None
    refresh_token: str | None = None


@dataclass(frozen=True)
class Profile:
    """Public profile row."""

    id: UUID
    username: str
    email: str
    created_at: datetime | None
    updated_at: datetime | None


def normalize_username(username: str) -> str:
    """Return the stored form of a username."""
    return username.strip().lower()
