"""Dependency container wiring for the backend and the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from souvenir_map.adapters.algorand_client import AlgorandMintingClient
from souvenir_map.adapters.backend_client import HttpxSouvenirBackendClient
from souvenir_map.adapters.buffered_audio_source import BufferedAudioSource
from souvenir_map.adapters.elevenlabs_client import HttpxElevenLabsClient
from souvenir_map.adapters.openai_image_client import OpenAIImageGenerator
from souvenir_map.adapters.supabase_auth_gateway import SupabaseAuthGateway
from souvenir_map.adapters.supabase_object_store import SupabaseObjectStore
from souvenir_map.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from souvenir_map.adapters.supabase_souvenir_repository import (
    SupabaseSouvenirRepository,
)
from souvenir_map.config import ClientSettings, Settings
from souvenir_map.domain.accounts import AuthSession
from souvenir_map.domain.souvenirs import Souvenir
from souvenir_map.services.accounts import AccountService, AuthGateway
from souvenir_map.services.availability import UsernameAvailabilityChecker
from souvenir_map.services.images import ImageService
from souvenir_map.services.map_viewer import MapViewer
from souvenir_map.services.minting import LedgerClient, MintingService
from souvenir_map.services.notifications import LoggingNotifier, Notifier
from souvenir_map.services.recording import AudioRecorder
from souvenir_map.services.souvenirs import SouvenirService
from souvenir_map.services.transcription import TranscriptionService
from souvenir_map.services.usernames import UsernameService
from souvenir_map.services.workflow import CreationWorkflow


@dataclass
class AppContainer:
    """Holds backend dependencies."""

    settings: Settings
    auth_gateway: AuthGateway
    transcription_service: TranscriptionService
    souvenir_service: SouvenirService
    username_service: UsernameService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default backend container."""
    resolved_settings = settings or Settings()
    service_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    anon_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    object_store = SupabaseObjectStore(service_client)

    elevenlabs_client = None
    if resolved_settings.elevenlabs_api_key:
        elevenlabs_client = HttpxElevenLabsClient.create(
            api_key=resolved_settings.elevenlabs_api_key,
            model_id=resolved_settings.elevenlabs_model_id,
            base_url=resolved_settings.elevenlabs_base_url,
        )
    ledger: LedgerClient | None = None
    if resolved_settings.algorand_mnemonic and resolved_settings.nodely_api_token:
        ledger = AlgorandMintingClient.create(
            node_url=resolved_settings.algorand_node_url,
            api_token=resolved_settings.nodely_api_token,
            account_mnemonic=resolved_settings.algorand_mnemonic,
        )

    souvenir_service = SouvenirService(
        repository=SupabaseSouvenirRepository(service_client),
        minting_service=MintingService(ledger=ledger, object_store=object_store),
    )
    username_service = UsernameService(SupabaseProfileRepository(service_client))

    async def close_resources() -> None:
        if elevenlabs_client is not None:
            await elevenlabs_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_gateway=SupabaseAuthGateway(anon_client),
        transcription_service=TranscriptionService(elevenlabs_client),
        souvenir_service=souvenir_service,
        username_service=username_service,
        close_resources=close_resources,
    )


@dataclass
class ClientContainer:
    """Holds the app-side dependencies for one signed-in (or anonymous) user."""

    settings: ClientSettings
    session: AuthSession | None
    backend: HttpxSouvenirBackendClient
    audio_source: BufferedAudioSource
    map_viewer: MapViewer
    account_service: AccountService
    username_checker: UsernameAvailabilityChecker
    close_resources: Callable[[], Awaitable[None]]


def build_client_container(
    settings: ClientSettings | None = None,
    session: AuthSession | None = None,
    notifier: Notifier | None = None,
) -> ClientContainer:
    """Create the client container; the session is passed in explicitly."""
    resolved_settings = settings or ClientSettings()
    resolved_notifier = notifier or LoggingNotifier()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    auth_gateway = SupabaseAuthGateway(supabase_client)
    if session is not None and session.refresh_token is not None:
        auth_gateway.use_session(session)
    object_store = SupabaseObjectStore(supabase_client)
    backend = HttpxSouvenirBackendClient.create(
        base_url=resolved_settings.backend_base_url,
        anon_key=resolved_settings.supabase_anon_key,
    )
    image_generator = None
    if resolved_settings.openai_api_key:
        image_generator = OpenAIImageGenerator.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_image_model,
        )
    image_service = ImageService(image_generator) if image_generator else None
    audio_source = BufferedAudioSource()

    def workflow_factory(
        latitude: float,
        longitude: float,
        workflow_session: AuthSession,
        on_created: Callable[[Souvenir], Awaitable[None]],
    ) -> CreationWorkflow:
        return CreationWorkflow(
            latitude=latitude,
            longitude=longitude,
            session=workflow_session,
            recorder=AudioRecorder(audio_source),
            object_store=object_store,
            backend=backend,
            notifier=resolved_notifier,
            image_service=image_service,
            on_created=on_created,
        )

    profiles = SupabaseProfileRepository(supabase_client)
    account_service = AccountService(
        profiles=profiles,
        auth=auth_gateway,
        usernames=UsernameService(profiles),
    )

    async def close_resources() -> None:
        await backend.close()
        if image_generator is not None:
            await image_generator.close()

    return ClientContainer(
        settings=resolved_settings,
        session=session,
        backend=backend,
        audio_source=audio_source,
        map_viewer=MapViewer(
            feed=backend,
            notifier=resolved_notifier,
            workflow_factory=workflow_factory,
            session=session,
        ),
        account_service=account_service,
        username_checker=UsernameAvailabilityChecker(backend),
        close_resources=close_resources,
    )
