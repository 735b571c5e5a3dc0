"""Image generation from story transcripts."""

from dataclasses import dataclass
from typing import Protocol

MAX_PROMPT_TRANSCRIPT = 1500


class ImageGenerator(Protocol):
    """Interface for text-to-image generation."""

    async def generate(self, prompt: str) -> bytes:
        """Return PNG bytes for the prompt."""


@dataclass
class ImageService:
    """Builds prompts and requests artwork for a transcript."""

    generator: ImageGenerator

    async def generate_for_transcript(self, transcript: str) -> bytes:
        """Return an illustration of the story."""
        return await self.generator.generate(build_image_prompt(transcript))


def build_image_prompt(transcript: str) -> str:
    """Return the artwork prompt for a transcript."""
    story = transcript.strip()[:MAX_PROMPT_TRANSCRIPT]
    return (
        "Create a dreamy, painterly illustration of this personal memory. "
        "No text or lettering in the image.\n\n"
        f"Memory: {story}"
    )
