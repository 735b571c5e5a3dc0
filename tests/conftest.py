"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from souvenir_map.config import Settings
from souvenir_map.containers import AppContainer
from souvenir_map.domain.accounts import AuthSession, Identity, Profile
from souvenir_map.domain.souvenirs import Souvenir, SouvenirDraft
from souvenir_map.services.accounts import AuthGateway
from souvenir_map.services.availability import UsernameLookup
from souvenir_map.services.images import ImageGenerator
from souvenir_map.services.map_viewer import SouvenirFeed
from souvenir_map.services.minting import LedgerClient, MintingService
from souvenir_map.services.notifications import Notifier
from souvenir_map.services.recording import AudioSource
from souvenir_map.services.souvenirs import SouvenirRepository, SouvenirService
from souvenir_map.services.storage import ObjectStore
from souvenir_map.services.transcription import (
    SpeechToTextClient,
    TranscriptionService,
)
from souvenir_map.services.usernames import ProfileRepository, UsernameService
from souvenir_map.services.workflow import SouvenirBackend

VALID_TOKEN = "valid-token"
TEST_USER_ID = UUID("11111111-1111-1111-1111-111111111111")


def make_souvenir(
    latitude: float = 40.7128,
    longitude: float = -74.0060,
    title: str = "Grandma's kitchen",
    created_at: datetime | None = None,
) -> Souvenir:
    return Souvenir(
        id=uuid4(),
        created_at=created_at or datetime(2025, 6, 1, 12, 0, tzinfo=UTC),
        user_id=TEST_USER_ID,
        title=title,
        audio_url="https://storage.test/audio_stories/audio_1.wav",
        image_url="https://storage.test/souvenir_images/souvenir_1_abc.png",
        transcript_text="I remember the smell of vanilla.",
        algorand_tx_id="ALGO_MOCK_1_abcdefghi",
        latitude=latitude,
        longitude=longitude,
    )


def make_draft(**overrides: object) -> SouvenirDraft:
    values: dict[str, object] = {
        "title": "Grandma's kitchen",
        "audio_url": "https://storage.test/audio_stories/audio_1.wav",
        "image_url": "https://storage.test/souvenir_images/souvenir_1_abc.png",
        "transcript": "I remember the smell of vanilla.",
        "latitude": 40.7128,
        "longitude": -74.0060,
    }
    values.update(overrides)
    return SouvenirDraft(**values)  # type: ignore[arg-type]


@dataclass
class InMemorySouvenirRepository(SouvenirRepository):
    """In-memory souvenir repository for tests."""

    souvenirs: list[Souvenir] = field(default_factory=list)
    fail_inserts: bool = False
    insert_calls: int = 0

    def create_souvenir(
        self, user_id: UUID, draft: SouvenirDraft, algorand_tx_id: str | None
    ) -> Souvenir:
        self.insert_calls += 1
        if self.fail_inserts:
            raise RuntimeError("insert rejected")
        souvenir = Souvenir(
            id=uuid4(),
            created_at=datetime.now(tz=UTC),
            user_id=user_id,
            title=draft.title,
            audio_url=draft.audio_url,
            image_url=draft.image_url,
            transcript_text=draft.transcript,
            algorand_tx_id=algorand_tx_id,
            latitude=draft.latitude,
            longitude=draft.longitude,
        )
        self.souvenirs.append(souvenir)
        return souvenir

    def list_souvenirs(self) -> list[Souvenir]:
        ordered = sorted(self.souvenirs, key=lambda item: item.created_at)
        return list(reversed(ordered))

    def get_souvenir(self, souvenir_id: UUID) -> Souvenir | None:
        for souvenir in self.souvenirs:
            if souvenir.id == souvenir_id:
                return souvenir
        return None


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def add(self, username: str, user_id: UUID | None = None) -> Profile:
        profile = Profile(
            id=user_id or uuid4(),
            username=username,
            email=f"{username}@example.com",
            created_at=None,
            updated_at=None,
        )
        self.profiles[profile.id] = profile
        return profile

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def username_exists(self, username: str) -> bool:
        return any(item.username == username for item in self.profiles.values())

    def update_username(self, user_id: UUID, username: str) -> None:
        profile = self.profiles[user_id]
        self.profiles[user_id] = Profile(
            id=profile.id,
            username=username,
            email=profile.email,
            created_at=profile.created_at,
            updated_at=datetime.now(tz=UTC),
        )


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway that accepts one token and one password."""

    password: str = "secret123"
    updated_passwords: list[str] = field(default_factory=list)

    def get_user(self, access_token: str) -> Identity | None:
        if access_token == VALID_TOKEN:
            return Identity(id=TEST_USER_ID, email="user@example.com")
        return None

    def verify_password(self, email: str, password: str) -> bool:
        return password == self.password

    def update_password(self, new_password: str) -> None:
        self.updated_passwords.append(new_password)
        self.password = new_password


@dataclass
class FakeSpeechToTextClient(SpeechToTextClient):
    """Speech-to-text client returning canned data."""

    text: str = "The tide came in while we were building the sandcastle."
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def transcribe(self, audio_url: str) -> dict[str, object]:
        self.calls.append(audio_url)
        if self.error is not None:
            raise self.error
        return {"text": self.text, "language_code": "en"}


@dataclass
class FakeLedgerClient(LedgerClient):
    """Ledger client that records created assets."""

    tx_id: str = "TXID123"
    error: Exception | None = None
    assets: list[dict[str, object]] = field(default_factory=list)

    def create_asset(
        self, *, unit_name: str, asset_name: str, url: str, note: bytes
    ) -> str:
        if self.error is not None:
            raise self.error
        self.assets.append(
            {"unit_name": unit_name, "asset_name": asset_name, "url": url, "note": note}
        )
        return self.tx_id


@dataclass
class InMemoryObjectStore(ObjectStore):
    """Object store keeping blobs in a dict."""

    objects: dict[tuple[str, str], tuple[bytes, str]] = field(default_factory=dict)
    fail_uploads: bool = False

    def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        if self.fail_uploads:
            raise RuntimeError("upload rejected")
        if (bucket, key) in self.objects:
            raise RuntimeError("object already exists")
        self.objects[(bucket, key)] = (data, content_type)
        return self.get_public_url(bucket, key)

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"https://storage.test/{bucket}/{key}"

    def keys(self, bucket: str) -> list[str]:
        return [key for stored_bucket, key in self.objects if stored_bucket == bucket]


@dataclass
class FakeBackend(SouvenirBackend, SouvenirFeed, UsernameLookup):
    """Backend double used by client-side services."""

    transcript: str = "We watched the fireworks from the roof."
    souvenirs: list[Souvenir] = field(default_factory=list)
    taken: set[str] = field(default_factory=set)
    process_error: Exception | None = None
    create_error: Exception | None = None
    list_error: Exception | None = None
    tokens: list[str] = field(default_factory=list)
    drafts: list[SouvenirDraft] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)

    async def process_audio(self, audio_url: str, access_token: str) -> str:
        self.tokens.append(access_token)
        if self.process_error is not None:
            raise self.process_error
        return self.transcript

    async def create_souvenir(
        self, draft: SouvenirDraft, access_token: str
    ) -> Souvenir:
        self.tokens.append(access_token)
        self.drafts.append(draft)
        if self.create_error is not None:
            raise self.create_error
        souvenir = Souvenir(
            id=uuid4(),
            created_at=datetime.now(tz=UTC),
            user_id=TEST_USER_ID,
            title=draft.title,
            audio_url=draft.audio_url,
            image_url=draft.image_url,
            transcript_text=draft.transcript,
            algorand_tx_id="ALGO_MOCK_1_abcdefghi",
            latitude=draft.latitude,
            longitude=draft.longitude,
        )
        self.souvenirs.insert(0, souvenir)
        return souvenir

    async def list_souvenirs(self) -> list[Souvenir]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.souvenirs)

    async def check_username(self, username: str) -> bool:
        self.checked.append(username)
        return username not in self.taken


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps every message."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    @property
    def errors(self) -> list[str]:
        return [text for kind, text in self.messages if kind == "error"]


@dataclass
class FakeAudioSource(AudioSource):
    """Microphone double returning a fixed clip."""

    clip: bytes = b"RIFF-fake-wav"
    is_open: bool = False
    open_calls: int = 0

    def open(self) -> None:
        if self.is_open:
            raise RuntimeError("Microphone is already in use")
        self.is_open = True
        self.open_calls += 1

    def read_all(self) -> bytes:
        return self.clip

    def close(self) -> None:
        self.is_open = False


@dataclass
class FakeImageGenerator(ImageGenerator):
    """Image generator returning fixed bytes."""

    image: bytes = b"\x89PNG-fake"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str) -> bytes:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon.header.signature",
        supabase_service_key="service.header.signature",
    )


@pytest.fixture
def session() -> AuthSession:
    return AuthSession(access_token=VALID_TOKEN, user_id=TEST_USER_ID)


@pytest.fixture
def souvenir_repository() -> InMemorySouvenirRepository:
    return InMemorySouvenirRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def speech_client() -> FakeSpeechToTextClient:
    return FakeSpeechToTextClient()


@pytest.fixture
def container(
    settings: Settings,
    souvenir_repository: InMemorySouvenirRepository,
    profile_repository: InMemoryProfileRepository,
    speech_client: FakeSpeechToTextClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_gateway=FakeAuthGateway(),
        transcription_service=TranscriptionService(speech_client),
        souvenir_service=SouvenirService(
            repository=souvenir_repository,
            minting_service=MintingService(ledger=None),
        ),
        username_service=UsernameService(profile_repository),
        close_resources=close_resources,
    )
