# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: periodic status poll.

A plain fixed-interval read loop with an explicit stop handle. It shares
nothing with the schedule sync besides the controller base URL.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from geyser_remote.core.config import settings
from geyser_remote.core.logging import get_logger
from geyser_remote.metrics.prometheus import STATUS_POLLS
from geyser_remote.models.domain import DeviceStatus
from geyser_remote.services.device_client import DeviceClient

logger = get_logger(__name__)


class StatusPoller:
    """Polls GET /status every `interval` seconds until stopped."""

    def __init__(self, device_client: DeviceClient, interval: Optional[float] = None) -> None:
        self._device = device_client
        self.interval = interval if interval is not None else settings.STATUS_POLL_INTERVAL
        self._task: Optional[asyncio.Task] = None
        self.latest: Optional[DeviceStatus] = None
        self.last_updated: Optional[str] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> Optional[DeviceStatus]:
        status = await self._device.fetch_status()
        if status is None:
            STATUS_POLLS.labels(outcome="failed").inc()
            return None
        STATUS_POLLS.labels(outcome="ok").inc()
        self.latest = status
        self.last_updated = datetime.now(timezone.utc).isoformat()
        return status

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            logger.debug("Fetching status...")
            await self.poll_once()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Status poller started: interval=%.1fs", self.interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Status poller stopped")
