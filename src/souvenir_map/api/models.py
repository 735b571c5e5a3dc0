"""Pydantic request bodies for the backend endpoints.

Fields are optional so missing values surface as 400 responses with the
endpoint's own message instead of a generic validation error.
"""

from pydantic import BaseModel, ConfigDict, Field

from souvenir_map.domain.souvenirs import SouvenirDraft
from souvenir_map.exceptions import ValidationError


class ProcessAudioRequest(BaseModel):
    """Body of POST /process-audio."""

    model_config = ConfigDict(populate_by_name=True)

    audio_url: str | None = Field(default=None, alias="audioUrl")


class CreateSouvenirRequest(BaseModel):
    """Body of POST /create-souvenir."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    audio_url: str | None = Field(default=None, alias="audioUrl")
    image_url: str | None = Field(default=None, alias="imageUrl")
    transcript: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def to_draft(self) -> SouvenirDraft:
        """Return a validated draft or raise ValidationError."""
        if (
            self.title is None
            or self.audio_url is None
            or self.image_url is None
            or self.transcript is None
            or self.latitude is None
            or self.longitude is None
        ):
            raise ValidationError("Missing required fields")
        draft = SouvenirDraft(
            title=self.title.strip(),
            audio_url=self.audio_url.strip(),
            image_url=self.image_url.strip(),
            transcript=self.transcript.strip(),
            latitude=self.latitude,
            longitude=self.longitude,
        )
        draft.validate()
        return draft


class CheckUsernameRequest(BaseModel):
    """Body of POST /check-username."""

    username: str | None = None
