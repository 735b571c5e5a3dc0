"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from souvenir_map.domain.accounts import Profile
from souvenir_map.services.usernames import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("profiles")
            .select("id, username, email, created_at, updated_at")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            id=UUID(row["id"]),
            username=row["username"],
            email=row["email"],
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    def username_exists(self, username: str) -> bool:
        """Return True when a profile already uses the username."""
        response = (
            self.client.table("profiles")
            .select("username")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def update_username(self, user_id: UUID, username: str) -> None:
        """Change a user's username."""
        response = (
            self.client.table("profiles")
            .update(
                {
                    "username": username,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update username")


def _parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))
