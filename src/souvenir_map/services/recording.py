"""Microphone capture for the recording step."""

import logging
from dataclasses import dataclass
from typing import Protocol

from souvenir_map.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AudioSource(Protocol):
    """Exclusive handle on a microphone stream."""

    def open(self) -> None:
        """Acquire the stream; raise if another session holds it."""

    def read_all(self) -> bytes:
        """Return everything captured since open as an encoded clip."""

    def close(self) -> None:
        """Release the stream."""


@dataclass
class AudioRecorder:
    """Starts and stops one capture session over an audio source."""

    source: AudioSource
    is_recording: bool = False

    def start(self) -> None:
        """Acquire the microphone and begin capturing."""
        if self.is_recording:
            raise RuntimeError("Recording is already in progress")
        self.source.open()
        self.is_recording = True

    def stop(self) -> bytes:
        """Stop capturing, release the microphone and return the clip."""
        if not self.is_recording:
            raise RuntimeError("Recording has not started")
        try:
            audio = self.source.read_all()
        finally:
            self.source.close()
            self.is_recording = False
        if not audio:
            raise ValidationError("No audio was captured")
        return audio

    def release(self) -> None:
        """Release the microphone if a capture is still active."""
        if self.is_recording:
            logger.info("Releasing microphone from an unfinished recording")
            self.source.close()
            self.is_recording = False
