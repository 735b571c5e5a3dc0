"""Souvenir persistence service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from souvenir_map.domain.souvenirs import Souvenir, SouvenirDraft
from souvenir_map.exceptions import StorageError
from souvenir_map.services.minting import MintingService

logger = logging.getLogger(__name__)


class SouvenirRepository(Protocol):
    """Persistence interface for souvenirs."""

    def create_souvenir(
        self, user_id: UUID, draft: SouvenirDraft, algorand_tx_id: str | None
    ) -> Souvenir:
        """Insert a souvenir row and return it."""

    def list_souvenirs(self) -> list[Souvenir]:
        """Return all souvenirs, newest first."""

    def get_souvenir(self, souvenir_id: UUID) -> Souvenir | None:
        """Return a souvenir by id, if present."""


@dataclass
class SouvenirService:
    """Validates, mints and stores new souvenirs."""

    repository: SouvenirRepository
    minting_service: MintingService

    def create_souvenir(self, user_id: UUID, draft: SouvenirDraft) -> Souvenir:
        """Persist a souvenir owned by the user.

        Minting always resolves (to a real or mock id) before the single insert.
        """
        draft.validate()
        tx_id = self.minting_service.mint(draft)
        try:
            souvenir = self.repository.create_souvenir(user_id, draft, tx_id)
        except StorageError:
            raise
        except Exception as exc:
            logger.exception("Database insert failed", extra={"user_id": user_id})
            raise StorageError("Failed to create souvenir") from exc
        logger.info(
            "Created souvenir",
            extra={"souvenir_id": souvenir.id, "user_id": user_id},
        )
        return souvenir

    def list_souvenirs(self) -> list[Souvenir]:
        """Return every souvenir for the public map."""
        return self.repository.list_souvenirs()
