"""HTTP client the app uses to reach the serverless backend."""

from dataclasses import dataclass

import httpx

from souvenir_map.domain.souvenirs import Souvenir, SouvenirDraft, souvenir_from_dict
from souvenir_map.exceptions import (
    AuthenticationError,
    SouvenirMapError,
    ValidationError,
)
from souvenir_map.services.availability import UsernameLookup
from souvenir_map.services.map_viewer import SouvenirFeed
from souvenir_map.services.workflow import SouvenirBackend


@dataclass
class HttpxSouvenirBackendClient(SouvenirBackend, SouvenirFeed, UsernameLookup):
    """HTTPX-backed client for the backend endpoints."""

    base_url: str
    anon_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, anon_key: str) -> "HttpxSouvenirBackendClient":
        """Create a backend client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            anon_key=anon_key,
            http_client=httpx.AsyncClient(),
        )

    async def process_audio(self, audio_url: str, access_token: str) -> str:
        """Return the transcript for uploaded audio."""
        payload = await self._post(
            "/process-audio", {"audioUrl": audio_url}, access_token, timeout=90
        )
        return str(payload["transcript"])

    async def create_souvenir(
        self, draft: SouvenirDraft, access_token: str
    ) -> Souvenir:
        """Mint and persist the souvenir, returning the stored record."""
        payload = await self._post(
            "/create-souvenir",
            {
                "title": draft.title,
                "audioUrl": draft.audio_url,
                "imageUrl": draft.image_url,
                "transcript": draft.transcript,
                "latitude": draft.latitude,
                "longitude": draft.longitude,
            },
            access_token,
            timeout=60,
        )
        return souvenir_from_dict(payload)

    async def check_username(self, username: str) -> bool:
        """Return True when the username is free."""
        payload = await self._post(
            "/check-username", {"username": username}, self.anon_key, timeout=10
        )
        return bool(payload["available"])

    async def list_souvenirs(self) -> list[Souvenir]:
        """Return all souvenirs, newest first."""
        response = await self.http_client.get(
            f"{self.base_url}/souvenirs",
            headers={"apikey": self.anon_key},
            timeout=15,
        )
        _raise_for_error(response)
        return [souvenir_from_dict(row) for row in response.json()["souvenirs"]]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(
        self, path: str, body: dict[str, object], token: str, timeout: float
    ) -> dict[str, object]:
        response = await self.http_client.post(
            f"{self.base_url}{path}",
            json=body,
            headers={"Authorization": f"Bearer {token}", "apikey": self.anon_key},
            timeout=timeout,
        )
        _raise_for_error(response)
        return response.json()


def _raise_for_error(response: httpx.Response) -> None:
    """Raise the matching application error for a non-2xx response."""
    if response.is_success:
        return
    try:
        message = str(response.json().get("error") or response.reason_phrase)
    except ValueError:
        message = response.reason_phrase
    if response.status_code == 401:
        raise AuthenticationError(message)
    if response.status_code == 400:
        raise ValidationError(message)
    raise SouvenirMapError(message)
