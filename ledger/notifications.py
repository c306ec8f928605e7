"""User-visible notifications emitted by the ledger controllers."""

from __future__ import annotations

import logging
from typing import Protocol


logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def success(self, message: str) -> None:
        """Show a confirmation message."""

    def error(self, message: str) -> None:
        """Show a non-fatal failure message."""


class LoggingNotifier:
    """Notifier used when no view is attached; messages go to the log."""

    def success(self, message: str) -> None:
        logger.info("ledger_notification_success message=%s", message)

    def error(self, message: str) -> None:
        logger.warning("ledger_notification_error message=%s", message)
