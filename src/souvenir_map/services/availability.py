"""Debounced username availability checks for the settings form."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from souvenir_map.domain.accounts import MIN_USERNAME_LENGTH, normalize_username

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5


class AvailabilityStatus(StrEnum):
    IDLE = "idle"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"
    CURRENT = "current"
    ERROR = "error"


STATUS_MESSAGES: dict[AvailabilityStatus, str] = {
    AvailabilityStatus.CHECKING: "Checking availability...",
    AvailabilityStatus.AVAILABLE: "Username is available!",
    AvailabilityStatus.TAKEN: "Username is already taken",
    AvailabilityStatus.CURRENT: "Current username",
    AvailabilityStatus.ERROR: "Error checking availability",
}


class UsernameLookup(Protocol):
    """Remote availability check."""

    async def check_username(self, username: str) -> bool:
        """Return True when the username is free."""


@dataclass
class UsernameAvailabilityChecker:
    """Tracks availability of the username being typed.

    Each ``update`` supersedes the previous one; only the latest value's
    result is ever applied.
    """

    lookup: UsernameLookup
    current_username: str | None = None
    debounce_seconds: float = DEBOUNCE_SECONDS
    status: AvailabilityStatus = AvailabilityStatus.IDLE
    _generation: int = field(default=0, repr=False)
    _pending: asyncio.Task[None] | None = field(default=None, repr=False)

    @property
    def message(self) -> str | None:
        return STATUS_MESSAGES.get(self.status)

    def update(self, value: str) -> None:
        """Record a new input value and schedule a check if needed."""
        self._cancel_pending()
        self._generation += 1
        username = normalize_username(value)
        if self.current_username is not None and username == normalize_username(
            self.current_username
        ):
            self.status = AvailabilityStatus.CURRENT
            return
        if len(username) < MIN_USERNAME_LENGTH:
            self.status = AvailabilityStatus.IDLE
            return
        self.status = AvailabilityStatus.CHECKING
        self._pending = asyncio.get_running_loop().create_task(
            self._check(username, self._generation)
        )

    async def wait(self) -> None:
        """Wait for the pending check, if any, to finish."""
        if self._pending is None:
            return
        try:
            await self._pending
        except asyncio.CancelledError:
            pass

    def cancel(self) -> None:
        """Stop any pending check, e.g. when the form closes."""
        self._cancel_pending()
        self._generation += 1

    async def _check(self, username: str, generation: int) -> None:
        await asyncio.sleep(self.debounce_seconds)
        try:
            available = await self.lookup.check_username(username)
        except Exception:
            logger.exception("Username check failed", extra={"username": username})
            result = AvailabilityStatus.ERROR
        else:
            result = (
                AvailabilityStatus.AVAILABLE if available else AvailabilityStatus.TAKEN
            )
        if generation != self._generation:
            return
        self.status = result

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
