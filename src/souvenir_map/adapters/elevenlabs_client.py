"""ElevenLabs speech-to-text client."""

from dataclasses import dataclass

import httpx

from souvenir_map.services.transcription import SpeechToTextClient


@dataclass
class HttpxElevenLabsClient(SpeechToTextClient):
    """HTTPX-backed ElevenLabs client that fetches audio by URL first."""

    api_key: str
    model_id: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, model_id: str, base_url: str
    ) -> "HttpxElevenLabsClient":
        """Create an ElevenLabs client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model_id=model_id,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def transcribe(self, audio_url: str) -> dict[str, object]:
        """Download the clip and submit it for transcription."""
        audio_response = await self.http_client.get(audio_url, timeout=20)
        audio_response.raise_for_status()
        content_type = audio_response.headers.get("content-type", "audio/wav")
        response = await self.http_client.post(
            f"{self.base_url}/speech-to-text",
            headers={"xi-api-key": self.api_key},
            files={"file": ("audio.wav", audio_response.content, content_type)},
            data={"model_id": self.model_id},
            timeout=60,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
