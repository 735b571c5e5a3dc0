"""User-facing notifications (toasts)."""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for surfacing short messages to the user."""

    def success(self, message: str) -> None:
        """Show a success message."""

    def error(self, message: str) -> None:
        """Show an error message."""

    def info(self, message: str) -> None:
        """Show an informational message."""


class LoggingNotifier(Notifier):
    """Notifier that writes toasts to the application log."""

    def success(self, message: str) -> None:
        logger.info("toast success: %s", message)

    def error(self, message: str) -> None:
        logger.warning("toast error: %s", message)

    def info(self, message: str) -> None:
        logger.info("toast info: %s", message)
