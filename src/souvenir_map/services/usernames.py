"""Username availability lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from souvenir_map.domain.accounts import (
    MIN_USERNAME_LENGTH,
    Profile,
    normalize_username,
)
from souvenir_map.exceptions import ValidationError


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""

    def username_exists(self, username: str) -> bool:
        """Return True when a profile already uses the username."""

    def update_username(self, user_id: UUID, username: str) -> None:
        """Change a user's username."""


@dataclass
class UsernameService:
    """Checks whether usernames are free to claim."""

    repository: ProfileRepository

    def is_available(self, username: str) -> bool:
        """Return True when no profile uses the normalized username."""
        normalized = normalize_username(username)
        if len(normalized) < MIN_USERNAME_LENGTH:
            raise ValidationError("Username must be at least 3 characters")
        return not self.repository.username_exists(normalized)
