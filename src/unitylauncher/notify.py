"""User-visible warning channel.

Every degraded source, dropped record and failed launch ends up here as
a one-line message. The host decides how to show it: a toast in a
launcher UI, a line on stderr for the CLI, a list in tests.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class WarningChannel(ABC):
    """Fire-and-forget sink for user-visible warnings.

    Implementations must never raise and never block for long: the
    channel is called from worker threads in the middle of a reload.
    """

    @abstractmethod
    def warn(self, message: str) -> None:
        """Deliver ``message`` to the user."""

    def __call__(self, message: str) -> None:
        self.warn(message)


class LoggingWarningChannel(WarningChannel):
    """Forward warnings to the ``logging`` module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def warn(self, message: str) -> None:
        self._log.warning("%s", message)


class CollectingWarningChannel(WarningChannel):
    """Keep warnings in memory, in arrival order.

    Also forwards each message to ``logging`` at DEBUG level so a verbose
    run still shows them in context.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: list[str] = []

    def warn(self, message: str) -> None:
        logger.debug("warning: %s", message)
        with self._lock:
            self._messages.append(message)

    @property
    def messages(self) -> list[str]:
        with self._lock:
            return list(self._messages)

    def drain(self) -> list[str]:
        """Return all collected messages and forget them."""
        with self._lock:
            drained, self._messages = self._messages, []
        return drained
