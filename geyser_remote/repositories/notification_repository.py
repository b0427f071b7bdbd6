# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: user-facing notification feed.
Bounded append-only log of the success/error toasts shown on the panel.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from geyser_remote.core.config import settings


class NotificationRepository:
    """In-memory toast log (bounded ring buffer)."""

    def __init__(self, max_size: Optional[int] = None) -> None:
        self._entries: list[dict[str, Any]] = []
        self._max_size = max_size or settings.MAX_NOTIFICATIONS

    # ── Read ──

    def get_recent(
        self,
        level: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        effective_limit = limit or settings.DEFAULT_NOTIFICATION_LIMIT
        result = list(self._entries)
        if level:
            result = [e for e in result if e["level"] == level]
        return result[-effective_limit:]

    def latest(self) -> Optional[dict[str, Any]]:
        return self._entries[-1] if self._entries else None

    def count(self) -> int:
        return len(self._entries)

    # ── Write ──

    def record(self, level: str, message: str) -> dict[str, Any]:
        """Append a toast, trimming the oldest if over max."""
        entry: dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._entries.append(entry)
        if len(self._entries) > self._max_size:
            del self._entries[: len(self._entries) - self._max_size]
        return entry

    def clear(self) -> None:
        self._entries.clear()
