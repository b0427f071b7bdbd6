# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: success/error toast sink.
Writes to the notification feed and the log; never raises.
"""

from geyser_remote.core.logging import get_logger
from geyser_remote.metrics.prometheus import NOTIFICATIONS_SHOWN
from geyser_remote.repositories.notification_repository import NotificationRepository

logger = get_logger(__name__)


class Notifier:
    """Short-lived user-facing messages."""

    def __init__(self, notification_repo: NotificationRepository) -> None:
        self._notifications = notification_repo

    def success(self, message: str) -> None:
        self._notifications.record("success", message)
        NOTIFICATIONS_SHOWN.labels(level="success").inc()
        logger.info("Toast: %s", message)

    def error(self, message: str) -> None:
        self._notifications.record("error", message)
        NOTIFICATIONS_SHOWN.labels(level="error").inc()
        logger.warning("Toast: %s", message)
