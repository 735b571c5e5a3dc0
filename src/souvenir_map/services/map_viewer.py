"""Map viewer: markers, click-to-create, popups and highlight."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from souvenir_map.domain.accounts import AuthSession
from souvenir_map.domain.map import (
    COORDINATE_TOLERANCE,
    HIGHLIGHT_SECONDS,
    FlyTo,
    Marker,
    MarkerIcon,
    Popup,
)
from souvenir_map.domain.souvenirs import Souvenir, is_valid_coordinate
from souvenir_map.exceptions import ValidationError
from souvenir_map.services.notifications import Notifier
from souvenir_map.services.playback import AudioPlayer
from souvenir_map.services.workflow import CreationWorkflow

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 180

WorkflowFactory = Callable[
    [float, float, AuthSession, Callable[[Souvenir], Awaitable[None]]],
    CreationWorkflow,
]


class SouvenirFeed(Protocol):
    """Read access to the public souvenir list."""

    async def list_souvenirs(self) -> list[Souvenir]:
        """Return all souvenirs, newest first."""


@dataclass
class MapViewer:
    """Client-side state of the world map."""

    feed: SouvenirFeed
    notifier: Notifier
    workflow_factory: WorkflowFactory
    session: AuthSession | None = None
    highlight_seconds: float = HIGHLIGHT_SECONDS
    souvenirs: list[Souvenir] = field(default_factory=list)
    player: AudioPlayer = field(default_factory=AudioPlayer)
    workflow: CreationWorkflow | None = None
    selected_location: tuple[float, float] | None = None
    highlighted: Souvenir | None = None
    fly_to: FlyTo | None = None
    _highlight_timer: asyncio.TimerHandle | None = field(default=None, repr=False)

    async def reload(self) -> None:
        """Fetch the latest souvenirs."""
        try:
            self.souvenirs = await self.feed.list_souvenirs()
        except Exception:
            logger.exception("Failed to load souvenirs")
            self.notifier.error("Failed to load souvenirs")

    def markers(self) -> list[Marker]:
        """Return one marker per souvenir plus the pending location, if any."""
        highlighted_id = self.highlighted.id if self.highlighted else None
        markers = [
            Marker(
                latitude=souvenir.latitude,
                longitude=souvenir.longitude,
                icon=(
                    MarkerIcon.HIGHLIGHT
                    if souvenir.id == highlighted_id
                    else MarkerIcon.SOUVENIR
                ),
                souvenir_id=souvenir.id,
            )
            for souvenir in self.souvenirs
        ]
        if self.selected_location is not None:
            latitude, longitude = self.selected_location
            markers.append(
                Marker(
                    latitude=latitude,
                    longitude=longitude,
                    icon=MarkerIcon.SELECTED_LOCATION,
                )
            )
        return markers

    def click_map(self, latitude: float, longitude: float) -> CreationWorkflow | None:
        """Open a creation workflow at the clicked coordinate."""
        if self.session is None:
            self.notifier.info("Please sign in to create a story souvenir")
            return None
        if not is_valid_coordinate(latitude, longitude):
            raise ValidationError("Coordinates out of range")
        if self.workflow is not None and not self.workflow.finished:
            return self.workflow
        self.selected_location = (latitude, longitude)
        self.workflow = self.workflow_factory(
            latitude, longitude, self.session, self._handle_created
        )
        return self.workflow

    def close_workflow(self) -> None:
        """Dismiss the open workflow and its pending location."""
        if self.workflow is not None:
            self.workflow.close()
        self.workflow = None
        self.selected_location = None

    def open_popup(self, souvenir_id: UUID) -> Popup:
        """Return popup content for a marker."""
        souvenir = self._get(souvenir_id)
        return Popup(
            souvenir_id=souvenir.id,
            title=souvenir.title,
            created_on=souvenir.created_at.date(),
            latitude_label=f"{souvenir.latitude:.4f}",
            longitude_label=f"{souvenir.longitude:.4f}",
            transcript_excerpt=_excerpt(souvenir.transcript_text),
            image_url=souvenir.image_url,
            audio_url=souvenir.audio_url,
        )

    def close_popup(self, souvenir_id: UUID) -> None:
        """Stop playback when the popup playing it closes."""
        souvenir = self._get(souvenir_id)
        if self.player.state.current_url == souvenir.audio_url:
            self.player.stop()

    def highlight(self, souvenir: Souvenir) -> None:
        """Fly to the souvenir and swap its icon until cleared."""
        self._cancel_highlight_timer()
        self.highlighted = souvenir
        self.fly_to = FlyTo(latitude=souvenir.latitude, longitude=souvenir.longitude)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; highlight clears on acknowledgement")
            return
        self._highlight_timer = loop.call_later(
            self.highlight_seconds, self.acknowledge_highlight
        )

    def acknowledge_highlight(self) -> None:
        """Clear the highlight now."""
        self._cancel_highlight_timer()
        self.highlighted = None

    def search(self, latitude: float, longitude: float) -> Souvenir | None:
        """Highlight the souvenir at the coordinate, if one is close enough."""
        if not is_valid_coordinate(latitude, longitude):
            raise ValidationError("Coordinates out of range")
        match = find_souvenir_at(self.souvenirs, latitude, longitude)
        if match is None:
            self.notifier.info("No souvenir found at that location")
            return None
        self.highlight(match)
        return match

    async def _handle_created(self, souvenir: Souvenir) -> None:
        logger.info("Souvenir created; reloading map", extra={"id": souvenir.id})
        self.workflow = None
        self.selected_location = None
        await self.reload()

    def _get(self, souvenir_id: UUID) -> Souvenir:
        for souvenir in self.souvenirs:
            if souvenir.id == souvenir_id:
                return souvenir
        raise KeyError(souvenir_id)

    def _cancel_highlight_timer(self) -> None:
        if self._highlight_timer is not None:
            self._highlight_timer.cancel()
            self._highlight_timer = None


def find_souvenir_at(
    souvenirs: Sequence[Souvenir],
    latitude: float,
    longitude: float,
    tolerance: float = COORDINATE_TOLERANCE,
) -> Souvenir | None:
    """Return the first souvenir within the tolerance on both axes."""
    for souvenir in souvenirs:
        if (
            abs(souvenir.latitude - latitude) <= tolerance
            and abs(souvenir.longitude - longitude) <= tolerance
        ):
            return souvenir
    return None


def _excerpt(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= EXCERPT_LENGTH:
        return text
    return text[:EXCERPT_LENGTH].rstrip() + "..."
