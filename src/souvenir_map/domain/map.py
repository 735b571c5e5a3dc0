"""Domain models for the map viewer."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

# Roughly 11 meters at the equator.
COORDINATE_TOLERANCE = 0.0001
HIGHLIGHT_SECONDS = 3.0
HIGHLIGHT_ZOOM = 12


class MarkerIcon(Enum):
    """Icon variants rendered by the map."""

    SOUVENIR = "souvenir"
    HIGHLIGHT = "highlight"
    SELECTED_LOCATION = "selected_location"


@dataclass(frozen=True)
class Marker:
    """A pin at a coordinate."""

    latitude: float
    longitude: float
    icon: MarkerIcon
    souvenir_id: UUID | None = None


@dataclass(frozen=True)
class Popup:
    """Content shown when a souvenir marker is clicked."""

    souvenir_id: UUID
    title: str
    created_on: date
    latitude_label: str
    longitude_label: str
    transcript_excerpt: str
    image_url: str
    audio_url: str


@dataclass(frozen=True)
class FlyTo:
    """View animation target."""

    latitude: float
    longitude: float
    zoom: int = HIGHLIGHT_ZOOM


@dataclass(frozen=True)
class PlaybackState:
    """Audio player state shared by all popups."""

    is_playing: bool = False
    current_url: str | None = None
    progress: float = 0.0
