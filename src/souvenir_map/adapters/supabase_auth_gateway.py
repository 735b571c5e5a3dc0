"""Supabase Auth gateway."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from souvenir_map.domain.accounts import AuthSession, Identity
from souvenir_map.services.accounts import AuthGateway

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Verifies session tokens and manages passwords through Supabase Auth."""

    client: Client

    def get_user(self, access_token: str) -> Identity | None:
        """Return the identity behind a session token, or None when invalid."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            logger.info("Rejected session token")
            return None
        if response is None or response.user is None:
            return None
        return Identity(id=UUID(str(response.user.id)), email=response.user.email)

    def verify_password(self, email: str, password: str) -> bool:
        """Return True when the credentials sign in successfully."""
        try:
            self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError:
            return False
        return True

    def update_password(self, new_password: str) -> None:
        """Set a new password for the signed-in user."""
        self.client.auth.update_user({"password": new_password})

    def use_session(self, session: AuthSession) -> None:
        """Attach a client-held session so user-scoped calls act as that user."""
        if session.refresh_token is None:
            raise ValueError("A refresh token is required to restore the session")
        self.client.auth.set_session(session.access_token, session.refresh_token)
