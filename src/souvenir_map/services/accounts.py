"""Account settings: username and password changes."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from souvenir_map.domain.accounts import (
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
    Identity,
    normalize_username,
)
from souvenir_map.exceptions import AuthenticationError, ValidationError
from souvenir_map.services.usernames import ProfileRepository, UsernameService

logger = logging.getLogger(__name__)


class PasswordGateway(Protocol):
    """Auth operations needed to change a password."""

    def verify_password(self, email: str, password: str) -> bool:
        """Return True when the credentials are valid."""

    def update_password(self, new_password: str) -> None:
        """Set a new password for the signed-in user."""


class AuthGateway(PasswordGateway, Protocol):
    """Session verification plus password operations."""

    def get_user(self, access_token: str) -> Identity | None:
        """Return the identity behind a session token, or None when invalid."""


@dataclass
class AccountService:
    """Applies account settings changes."""

    profiles: ProfileRepository
    auth: PasswordGateway
    usernames: UsernameService

    def update_username(self, user_id: UUID, current: str | None, new: str) -> str:
        """Change the username and return the stored form."""
        normalized = normalize_username(new)
        if not normalized or normalized == current:
            raise ValidationError("Please enter a new username")
        if len(normalized) < MIN_USERNAME_LENGTH:
            raise ValidationError("Username must be at least 3 characters")
        if not self.usernames.is_available(normalized):
            raise ValidationError("Please choose an available username")
        self.profiles.update_username(user_id, normalized)
        logger.info("Updated username", extra={"user_id": user_id})
        return normalized

    def change_password(
        self, email: str, current_password: str, new_password: str, confirm: str
    ) -> None:
        """Verify the current password, then set the new one."""
        if not current_password or not new_password or not confirm:
            raise ValidationError("Please fill in all password fields")
        if new_password != confirm:
            raise ValidationError("New passwords do not match")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("New password must be at least 6 characters")
        if current_password == new_password:
            raise ValidationError(
                "New password must be different from current password"
            )
        if not self.auth.verify_password(email, current_password):
            raise AuthenticationError("Current password is incorrect")
        self.auth.update_password(new_password)
