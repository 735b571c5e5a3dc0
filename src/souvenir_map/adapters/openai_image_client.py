"""OpenAI Images API client for story artwork."""

import base64
from dataclasses import dataclass

from openai import AsyncOpenAI

from souvenir_map.services.images import ImageGenerator


@dataclass
class OpenAIImageGenerator(ImageGenerator):
    """Image generator backed by the OpenAI Images API."""

    client: AsyncOpenAI
    model: str
    size: str = "1024x1024"

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIImageGenerator":
        """Create an OpenAI image generator."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def generate(self, prompt: str) -> bytes:
        """Generate one image and return its decoded bytes."""
        response = await self.client.images.generate(
            model=self.model, prompt=prompt, size=self.size, n=1
        )
        if not response.data or not response.data[0].b64_json:
            raise RuntimeError("OpenAI returned no image data")
        return base64.b64decode(response.data[0].b64_json)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
