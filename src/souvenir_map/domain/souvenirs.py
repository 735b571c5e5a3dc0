"""Domain models for souvenirs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from souvenir_map.exceptions import ValidationError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class Souvenir:
    """A persisted audio, image and text memory pinned to a location."""

    id: UUID
    created_at: datetime
    user_id: UUID
    title: str
    audio_url: str
    image_url: str
    transcript_text: str
    algorand_tx_id: str | None
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SouvenirDraft:
    """Souvenir content before the store assigns id and timestamp."""

    title: str
    audio_url: str
    image_url: str
    transcript: str
    latitude: float
    longitude: float

    def validate(self) -> None:
        """Raise ValidationError unless the draft can be persisted."""
        required = (self.title, self.audio_url, self.image_url, self.transcript)
        if any(not value or not value.strip() for value in required):
            raise ValidationError("Missing required fields")
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValidationError("Coordinates out of range")


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Return True when both values are inside the geographic range."""
    return (
        MIN_LATITUDE <= latitude <= MAX_LATITUDE
        and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE
    )


def souvenir_to_dict(souvenir: Souvenir) -> dict[str, object]:
    """Serialize a souvenir using the table's column names."""
    return {
        "id": str(souvenir.id),
        "created_at": souvenir.created_at.isoformat(),
        "user_id": str(souvenir.user_id),
        "title": souvenir.title,
        "audio_url": souvenir.audio_url,
        "image_url": souvenir.image_url,
        "transcript_text": souvenir.transcript_text,
        "algorand_tx_id": souvenir.algorand_tx_id,
        "latitude": souvenir.latitude,
        "longitude": souvenir.longitude,
    }


def souvenir_from_dict(row: dict[str, object]) -> Souvenir:
    """Parse a souvenirs row (numeric columns may arrive as strings)."""
    return Souvenir(
        id=UUID(str(row["id"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        audio_url=str(row.get("audio_url", "")),
        image_url=str(row.get("image_url", "")),
        transcript_text=str(row.get("transcript_text", "")),
        algorand_tx_id=row.get("algorand_tx_id"),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
    )
