"""Tests for the minting service."""

import json
import re
from datetime import UTC, datetime

from souvenir_map.services.minting import (
    MAX_NOTE_BYTES,
    MintingService,
    build_metadata,
    encode_note,
    mock_transaction_id,
)
from souvenir_map.services.storage import IMAGE_BUCKET
from tests.conftest import FakeLedgerClient, InMemoryObjectStore, make_draft

MOCK_PATTERN = re.compile(r"^ALGO_MOCK_\d+_[a-z0-9]{9}$")


def test_mock_transaction_id_format() -> None:
    assert MOCK_PATTERN.match(mock_transaction_id())


def test_mint_without_ledger_returns_mock_id() -> None:
    service = MintingService(ledger=None)

    assert MOCK_PATTERN.match(service.mint(make_draft()))


def test_mint_failure_returns_mock_id() -> None:
    service = MintingService(ledger=FakeLedgerClient(error=RuntimeError("node down")))

    assert MOCK_PATTERN.match(service.mint(make_draft()))


def test_mint_truncates_asset_fields_and_uploads_metadata() -> None:
    ledger = FakeLedgerClient()
    store = InMemoryObjectStore()
    service = MintingService(ledger=ledger, object_store=store)
    draft = make_draft(
        title="A very long title about the summer we spent at the lake house",
        image_url="https://storage.test/" + "x" * 200 + ".png",
    )

    tx_id = service.mint(draft)

    assert tx_id == "TXID123"
    asset = ledger.assets[0]
    assert asset["unit_name"] == "STORY"
    assert asset["asset_name"] == draft.title[:32]
    assert asset["url"] == draft.image_url[:96]
    note = json.loads(asset["note"])
    assert note["standard"] == "arc69"
    assert note["properties"]["latitude"] == draft.latitude
    assert note["external_url"].startswith(f"https://storage.test/{IMAGE_BUCKET}/")
    [key] = store.keys(IMAGE_BUCKET)
    assert key.startswith("metadata/souvenir_")


def test_mint_truncates_multibyte_fields_on_byte_boundaries() -> None:
    ledger = FakeLedgerClient()
    service = MintingService(ledger=ledger, object_store=InMemoryObjectStore())
    draft = make_draft(
        title="Caf\u00e9 cr\u00e8me \U0001F30A " * 4,
        image_url="https://storage.test/" + "\u00e9" * 100 + ".png",
    )

    assert service.mint(draft) == "TXID123"

    asset = ledger.assets[0]
    assert len(asset["asset_name"].encode("utf-8")) <= 32
    assert draft.title.startswith(asset["asset_name"])
    assert len(asset["url"].encode("utf-8")) <= 96
    assert draft.image_url.startswith(asset["url"])


def test_mint_metadata_upload_failure_returns_mock_id() -> None:
    ledger = FakeLedgerClient()
    service = MintingService(
        ledger=ledger, object_store=InMemoryObjectStore(fail_uploads=True)
    )

    assert MOCK_PATTERN.match(service.mint(make_draft()))
    assert ledger.assets == []


def test_encode_note_trims_long_descriptions() -> None:
    metadata = build_metadata(
        make_draft(transcript="memory " * 400), datetime(2025, 1, 1, tzinfo=UTC)
    )

    note = encode_note(metadata)

    assert len(note) <= MAX_NOTE_BYTES
    decoded = json.loads(note)
    assert decoded["description"].endswith("...")
    assert decoded["name"] == metadata["name"]
