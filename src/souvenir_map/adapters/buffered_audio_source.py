"""In-memory microphone source fed with raw PCM frames."""

import io
import wave
from dataclasses import dataclass, field

from souvenir_map.services.recording import AudioSource


@dataclass
class BufferedAudioSource(AudioSource):
    """Collects 16-bit PCM chunks and encodes them as a WAV clip.

    The capture device pushes frames through ``write`` while the source is
    open. Only one session can hold the source at a time.
    """

    sample_rate: int = 16_000
    channels: int = 1
    sample_width: int = 2
    is_open: bool = False
    _frames: bytearray = field(default_factory=bytearray, repr=False)

    def open(self) -> None:
        if self.is_open:
            raise RuntimeError("Microphone is already in use")
        self._frames.clear()
        self.is_open = True

    def write(self, chunk: bytes) -> None:
        """Append captured PCM frames."""
        if not self.is_open:
            raise RuntimeError("Microphone is not open")
        self._frames.extend(chunk)

    def read_all(self) -> bytes:
        if not self._frames:
            return b""
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as clip:
            clip.setnchannels(self.channels)
            clip.setsampwidth(self.sample_width)
            clip.setframerate(self.sample_rate)
            clip.writeframes(bytes(self._frames))
        return buffer.getvalue()

    def close(self) -> None:
        self._frames.clear()
        self.is_open = False
