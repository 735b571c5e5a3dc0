"""Best-effort minting of souvenirs as single-unit ledger assets."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from souvenir_map.domain.souvenirs import SouvenirDraft
from souvenir_map.services.storage import (
    IMAGE_BUCKET,
    ObjectStore,
    metadata_key,
    random_token,
    timestamp_millis,
)

logger = logging.getLogger(__name__)

MOCK_TX_PREFIX = "ALGO_MOCK_"
UNIT_NAME = "STORY"
MAX_ASSET_NAME = 32
MAX_ASSET_URL = 96
MAX_NOTE_BYTES = 1024


class LedgerClient(Protocol):
    """Interface for creating a non-fungible asset on a ledger."""

    def create_asset(
        self, *, unit_name: str, asset_name: str, url: str, note: bytes
    ) -> str:
        """Create a one-of-one asset and return the transaction id."""


@dataclass
class MintingService:
    """Mints souvenirs; failures resolve to a mock transaction id."""

    ledger: LedgerClient | None
    object_store: ObjectStore | None = None

    def mint(self, draft: SouvenirDraft) -> str:
        """Return a transaction id for the souvenir, never raising."""
        if self.ledger is None:
            tx_id = mock_transaction_id()
            logger.warning("Ledger is not configured; using %s", tx_id)
            return tx_id
        try:
            metadata = build_metadata(draft, datetime.now(tz=UTC))
            if self.object_store is not None:
                metadata["external_url"] = self.object_store.upload(
                    IMAGE_BUCKET,
                    metadata_key(),
                    json.dumps(metadata).encode("utf-8"),
                    "application/json",
                )
            tx_id = self.ledger.create_asset(
                unit_name=UNIT_NAME,
                asset_name=truncate_utf8(draft.title, MAX_ASSET_NAME),
                url=truncate_utf8(draft.image_url, MAX_ASSET_URL),
                note=encode_note(metadata),
            )
        except Exception:
            tx_id = mock_transaction_id()
            logger.exception("Minting failed; using %s", tx_id)
            return tx_id
        logger.info("Minted souvenir asset", extra={"tx_id": tx_id})
        return tx_id


def mock_transaction_id() -> str:
    """Return a placeholder id in the ALGO_MOCK_<millis>_<token> format."""
    return f"{MOCK_TX_PREFIX}{timestamp_millis()}_{random_token()}"


def truncate_utf8(value: str, max_bytes: int) -> str:
    """Cut a string to at most max_bytes of UTF-8 without splitting a character."""
    return value.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def build_metadata(draft: SouvenirDraft, created_at: datetime) -> dict[str, object]:
    """Build ARC-69 style metadata for a souvenir."""
    return {
        "standard": "arc69",
        "name": draft.title,
        "description": draft.transcript,
        "image": draft.image_url,
        "audio": draft.audio_url,
        "properties": {
            "latitude": draft.latitude,
            "longitude": draft.longitude,
            "created_at": created_at.isoformat(),
            "story_type": "audio_visual_memory",
        },
    }


def encode_note(metadata: dict[str, object]) -> bytes:
    """Encode metadata as a transaction note, trimming the description to fit."""
    note = _dump(metadata)
    description = str(metadata.get("description", ""))
    while len(note) > MAX_NOTE_BYTES and description:
        overflow = len(note) - MAX_NOTE_BYTES
        raw = description.encode("utf-8")
        description = raw[: max(len(raw) - overflow - 3, 0)].decode(
            "utf-8", errors="ignore"
        )
        note = _dump({**metadata, "description": f"{description}..."})
    return note


def _dump(payload: dict[str, object]) -> bytes:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )
