"""State machine that walks a user through creating one souvenir.

Record -> upload and transcribe -> upload or generate an image -> review -> save.
Upload and persistence failures return to the nearest recoverable step with an
error toast. Results that arrive after the workflow was closed are dropped.
Blobs already uploaded when the workflow is closed are left in storage.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from souvenir_map.domain.accounts import AuthSession
from souvenir_map.domain.souvenirs import Souvenir, SouvenirDraft
from souvenir_map.domain.workflow import (
    BUSY_STATES,
    TERMINAL_STATES,
    AcquiringImage,
    Closed,
    Completed,
    ImageSource,
    Processing,
    Recording,
    Review,
    Saving,
    TranscriptReady,
    WorkflowState,
)
from souvenir_map.exceptions import InvalidTransitionError, ValidationError
from souvenir_map.services.images import ImageService
from souvenir_map.services.notifications import Notifier
from souvenir_map.services.recording import AudioRecorder
from souvenir_map.services.storage import (
    AUDIO_BUCKET,
    IMAGE_BUCKET,
    ObjectStore,
    audio_key,
    generated_image_key,
    image_key,
)

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024
MICROPHONE_ERROR = (
    "Error accessing microphone. "
    "Please ensure you have granted microphone permissions."
)

_State = TypeVar("_State")


class SouvenirBackend(Protocol):
    """Authenticated backend calls made by the workflow."""

    async def process_audio(self, audio_url: str, access_token: str) -> str:
        """Return the transcript for uploaded audio."""

    async def create_souvenir(
        self, draft: SouvenirDraft, access_token: str
    ) -> Souvenir:
        """Mint and persist the souvenir, returning the stored record."""


@dataclass
class CreationWorkflow:
    """One open creation session seeded with a map coordinate."""

    latitude: float
    longitude: float
    session: AuthSession | None
    recorder: AudioRecorder
    object_store: ObjectStore
    backend: SouvenirBackend
    notifier: Notifier
    image_service: ImageService | None = None
    on_created: Callable[[Souvenir], Awaitable[None]] | None = None
    state: WorkflowState = field(default_factory=Recording)

    @property
    def busy(self) -> bool:
        """True while a network call is in flight."""
        return isinstance(self.state, BUSY_STATES)

    @property
    def finished(self) -> bool:
        """True once the workflow completed or was closed."""
        return isinstance(self.state, TERMINAL_STATES)

    def start_recording(self) -> None:
        """Begin a new take, discarding any previous one."""
        self._require(Recording, "start recording")
        try:
            self.recorder.start()
        except (RuntimeError, OSError):
            logger.exception("Failed to acquire the microphone")
            self.notifier.error(MICROPHONE_ERROR)
            return
        self.state = Recording()

    def stop_recording(self) -> bytes | None:
        """Finish the take and keep the clip for upload."""
        self._require(Recording, "stop recording")
        try:
            audio = self.recorder.stop()
        except ValidationError as exc:
            self.notifier.error(exc.detail)
            self.state = Recording()
            return None
        self.state = Recording(audio=audio)
        return audio

    async def upload_audio(self) -> None:
        """Upload the clip, then request its transcript."""
        current = self._require(Recording, "upload audio")
        if current.audio is None or self.recorder.is_recording:
            raise InvalidTransitionError("Finish recording before uploading")
        session = self._require_session()
        if session is None:
            return
        processing = Processing(audio=current.audio)
        self.state = processing
        try:
            audio_url = self.object_store.upload(
                AUDIO_BUCKET, audio_key(), current.audio, "audio/wav"
            )
        except Exception:
            logger.exception("Failed to upload audio")
            self._fall_back(processing, current, "Failed to upload audio")
            return
        try:
            transcript = await self.backend.process_audio(
                audio_url, session.access_token
            )
        except Exception:
            logger.exception("Failed to process audio", extra={"audio_url": audio_url})
            self._fall_back(processing, current, "Failed to process audio")
            return
        if self.state is not processing:
            logger.info("Dropping transcript for a closed workflow")
            return
        self.state = TranscriptReady(audio_url=audio_url, transcript=transcript)

    def upload_image(self, data: bytes, filename: str, content_type: str) -> None:
        """Validate and upload a user-provided image."""
        current = self._require(TranscriptReady, "upload an image")
        if not content_type.startswith("image/"):
            self.notifier.error("Please select an image file")
            return
        if len(data) > MAX_IMAGE_BYTES:
            self.notifier.error("Image size must be less than 5MB")
            return
        acquiring = AcquiringImage(
            audio_url=current.audio_url,
            transcript=current.transcript,
            source=ImageSource.UPLOAD,
        )
        self.state = acquiring
        try:
            image_url = self.object_store.upload(
                IMAGE_BUCKET, image_key(filename), data, content_type
            )
        except Exception:
            logger.exception("Failed to upload image")
            self._fall_back(acquiring, current, "Failed to upload image")
            return
        self.state = Review(
            audio_url=current.audio_url,
            transcript=current.transcript,
            image_url=image_url,
        )
        self.notifier.success("Image uploaded successfully!")

    async def generate_image(self) -> None:
        """Generate artwork from the transcript and store it."""
        current = self._require(TranscriptReady, "generate an image")
        if self.image_service is None:
            raise InvalidTransitionError("Image generation is not configured")
        acquiring = AcquiringImage(
            audio_url=current.audio_url,
            transcript=current.transcript,
            source=ImageSource.GENERATED,
        )
        self.state = acquiring
        try:
            image = await self.image_service.generate_for_transcript(
                current.transcript
            )
            if self.state is not acquiring:
                logger.info("Dropping generated image for a closed workflow")
                return
            image_url = self.object_store.upload(
                IMAGE_BUCKET, generated_image_key(), image, "image/png"
            )
        except Exception:
            logger.exception("Failed to generate image")
            self._fall_back(acquiring, current, "Failed to generate image")
            return
        self.state = Review(
            audio_url=current.audio_url,
            transcript=current.transcript,
            image_url=image_url,
        )

    def edit_title(self, title: str) -> None:
        """Replace the working title."""
        review = self._require(Review, "edit the title")
        self.state = Review(
            audio_url=review.audio_url,
            transcript=review.transcript,
            image_url=review.image_url,
            title=title,
        )

    def edit_story(self, story: str) -> None:
        """Replace the story text that will be saved as the transcript."""
        review = self._require(Review, "edit the story")
        self.state = Review(
            audio_url=review.audio_url,
            transcript=story,
            image_url=review.image_url,
            title=review.title,
        )

    async def save(self) -> Souvenir | None:
        """Persist the souvenir; the backend mints before inserting."""
        review = self._require(Review, "save")
        title = review.title.strip()
        if not title:
            self.notifier.error("Please give your story a title")
            return None
        if not review.transcript.strip():
            self.notifier.error("Your story text cannot be empty")
            return None
        session = self._require_session()
        if session is None:
            return None
        draft = SouvenirDraft(
            title=title,
            audio_url=review.audio_url,
            image_url=review.image_url,
            transcript=review.transcript.strip(),
            latitude=self.latitude,
            longitude=self.longitude,
        )
        saving = Saving(review=review)
        self.state = saving
        try:
            souvenir = await self.backend.create_souvenir(draft, session.access_token)
        except Exception:
            logger.exception("Failed to create souvenir")
            self._fall_back(saving, review, "Failed to create souvenir")
            return None
        if self.state is not saving:
            logger.info("Souvenir saved after its workflow was closed")
            return None
        self.state = Completed(souvenir=souvenir)
        self.recorder.release()
        self.notifier.success("Story souvenir created successfully!")
        if self.on_created is not None:
            await self.on_created(souvenir)
        return souvenir

    def close(self) -> None:
        """Dismiss the workflow from any state."""
        self.recorder.release()
        if not isinstance(self.state, Closed):
            logger.info(
                "Closing creation workflow",
                extra={"state": type(self.state).__name__},
            )
        self.state = Closed()

    def _require(self, state_type: type[_State], action: str) -> _State:
        if not isinstance(self.state, state_type):
            raise InvalidTransitionError(
                f"Cannot {action} while {type(self.state).__name__}"
            )
        return self.state

    def _require_session(self) -> AuthSession | None:
        if self.session is None or not self.session.access_token:
            self.notifier.error("Not authenticated")
            return None
        return self.session

    def _fall_back(
        self, expected: WorkflowState, fallback: WorkflowState, message: str
    ) -> None:
        """Return to a recoverable step unless the workflow moved on."""
        if self.state is not expected:
            return
        self.state = fallback
        self.notifier.error(message)
