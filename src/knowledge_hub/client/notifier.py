"""
Mutation Notifications

Every store mutation outcome produces exactly one one-line message. How
it is shown (toast, status bar, log line) belongs to the caller.
"""

import logging
from typing import Protocol


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Default notifier: writes messages to the ``knowledge_hub`` log."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("knowledge_hub.notifications")

    def success(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.logger.error(message)
