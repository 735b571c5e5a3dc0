"""Audio player state for souvenir popups."""

import math
from dataclasses import dataclass, field

from souvenir_map.domain.map import PlaybackState


@dataclass
class AudioPlayer:
    """Tracks one shared audio element across all popups."""

    state: PlaybackState = field(default_factory=PlaybackState)
    duration: float | None = None
    seeking: bool = False

    def toggle(self, audio_url: str) -> PlaybackState:
        """Play a new clip from the start, or pause/resume the current one."""
        if self.state.current_url != audio_url:
            self.duration = None
            self.state = PlaybackState(is_playing=True, current_url=audio_url)
        else:
            self.state = PlaybackState(
                is_playing=not self.state.is_playing,
                current_url=audio_url,
                progress=self.state.progress,
            )
        return self.state

    def tick(self, current_time: float, duration: float) -> None:
        """Update progress from the element's time, unless the user is seeking."""
        if self.seeking or not duration or not math.isfinite(duration):
            return
        self.duration = duration
        self._set_progress(current_time / duration * 100)

    def begin_seek(self) -> None:
        self.seeking = True

    def end_seek(self) -> None:
        self.seeking = False

    def seek(self, percent: float) -> float | None:
        """Move the thumb and return the new playback time in seconds."""
        if not self.duration:
            return None
        percent = min(max(percent, 0.0), 100.0)
        self._set_progress(percent)
        return percent / 100 * self.duration

    def ended(self) -> None:
        """Reset once the clip finishes."""
        self.stop()

    def stop(self) -> None:
        self.duration = None
        self.state = PlaybackState()

    def progress_for(self, audio_url: str) -> float:
        """Return slider progress for a popup's clip."""
        if self.state.current_url != audio_url:
            return 0.0
        return self.state.progress

    def is_playing(self, audio_url: str) -> bool:
        return self.state.is_playing and self.state.current_url == audio_url

    def _set_progress(self, progress: float) -> None:
        self.state = PlaybackState(
            is_playing=self.state.is_playing,
            current_url=self.state.current_url,
            progress=progress,
        )
