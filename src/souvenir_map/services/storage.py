"""Object store interface and key naming."""

import random
import string
import time
from typing import Protocol

AUDIO_BUCKET = "audio_stories"
IMAGE_BUCKET = "souvenir_images"

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


class ObjectStore(Protocol):
    """Interface for public blob storage."""

    def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        """Upload bytes and return their public URL."""

    def get_public_url(self, bucket: str, key: str) -> str:
        """Return the public URL for a stored object."""


def timestamp_millis() -> int:
    """Return the current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def random_token(length: int = 9) -> str:
    """Return a short lowercase base36 token."""
    return "".join(random.choices(_TOKEN_ALPHABET, k=length))


def audio_key() -> str:
    """Return a time-stamp-derived key for a recorded clip."""
    return f"audio_{timestamp_millis()}.wav"


def image_key(filename: str) -> str:
    """Return a unique key that keeps the uploaded file's extension."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "png"
    return f"souvenir_{timestamp_millis()}_{random_token()}.{extension}"


def generated_image_key() -> str:
    """Return a unique key for a generated image."""
    return f"generated_{timestamp_millis()}_{random_token()}.png"


def metadata_key() -> str:
    """Return a unique key for token metadata JSON."""
    return f"metadata/souvenir_{timestamp_millis()}_{random_token()}.json"
