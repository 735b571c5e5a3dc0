"""Supabase-backed souvenir repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from souvenir_map.domain.souvenirs import Souvenir, SouvenirDraft, souvenir_from_dict
from souvenir_map.services.souvenirs import SouvenirRepository


@dataclass
class SupabaseSouvenirRepository(SouvenirRepository):
    """Supabase implementation for souvenir persistence."""

    client: Client

    def create_souvenir(
        self, user_id: UUID, draft: SouvenirDraft, algorand_tx_id: str | None
    ) -> Souvenir:
        """Insert a souvenir row and return it."""
        response = (
            self.client.table("souvenirs")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": draft.title,
                    "audio_url": draft.audio_url,
                    "image_url": draft.image_url,
                    "transcript_text": draft.transcript,
                    "algorand_tx_id": algorand_tx_id,
                    "latitude": draft.latitude,
                    "longitude": draft.longitude,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create souvenir in Supabase")
        return souvenir_from_dict(response.data[0])

    def list_souvenirs(self) -> list[Souvenir]:
        """Return all souvenirs, newest first."""
        response = (
            self.client.table("souvenirs")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [souvenir_from_dict(row) for row in response.data or []]

    def get_souvenir(self, souvenir_id: UUID) -> Souvenir | None:
        """Return a souvenir by id, if present."""
        response = (
            self.client.table("souvenirs")
            .select("*")
            .eq("id", str(souvenir_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return souvenir_from_dict(response.data[0])
        return None
