"""User-facing notifications raised by the board flows."""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Blocking, user-visible notification (an alert dialog in a browser UI)."""

    def alert(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier for headless use: alerts are written to the log."""

    def alert(self, message: str) -> None:
        logger.error("alert: %s", message)


class RecordingNotifier:
    """Keeps every alert in ``messages``; handy for scripted sessions and tests."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def alert(self, message: str) -> None:
        self.messages.append(message)
