"""States of the souvenir creation workflow.

Each state is a frozen dataclass carrying only the data valid at that step.
"""

from dataclasses import dataclass
from enum import Enum

from souvenir_map.domain.souvenirs import Souvenir


class ImageSource(Enum):
    """Where the souvenir image comes from."""

    UPLOAD = "upload"
    GENERATED = "generated"


@dataclass(frozen=True)
class Recording:
    """Initial step; holds the captured audio once recording stops."""

    audio: bytes | None = None


@dataclass(frozen=True)
class Processing:
    """Audio is being uploaded and transcribed."""

    audio: bytes


@dataclass(frozen=True)
class TranscriptReady:
    """Transcript is available; waiting for an image."""

    audio_url: str
    transcript: str


@dataclass(frozen=True)
class AcquiringImage:
    """Image is being uploaded or generated."""

    audio_url: str
    transcript: str
    source: ImageSource


@dataclass(frozen=True)
class Review:
    """User edits the title and story before saving."""

    audio_url: str
    transcript: str
    image_url: str
    title: str = ""


@dataclass(frozen=True)
class Saving:
    """Souvenir is being minted and persisted."""

    review: Review


@dataclass(frozen=True)
class Completed:
    """Souvenir was persisted."""

    souvenir: Souvenir


@dataclass(frozen=True)
class Closed:
    """Workflow was dismissed; session state is gone."""


WorkflowState = (
    Recording
    | Processing
    | TranscriptReady
    | AcquiringImage
    | Review
    | Saving
    | Completed
    | Closed
)

BUSY_STATES = (Processing, AcquiringImage, Saving)
TERMINAL_STATES = (Completed, Closed)
