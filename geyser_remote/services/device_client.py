# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP client for the controller's status and command endpoints.
Commands are fire-and-forget: failures are logged, never raised.
"""

from typing import Optional

import httpx

from geyser_remote.core.logging import get_logger
from geyser_remote.metrics.prometheus import COMMANDS_SENT, CONTROLLER_CALLS
from geyser_remote.models.domain import DeviceStatus, ManualCommand, ModeCommand

logger = get_logger(__name__)


class DeviceClient:
    """Reads /status and dispatches /manual and /mode commands."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._client = http_client
        self.base_url = base_url

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    async def fetch_status(self) -> Optional[DeviceStatus]:
        """One status read; None when the controller can't be read."""
        try:
            resp = await self._client.get(self._url("/status"))
            resp.raise_for_status()
            status = DeviceStatus.from_payload(resp.json())
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            CONTROLLER_CALLS.labels(operation="status", outcome="failed").inc()
            logger.warning("Status fetch failed: %s", exc)
            return None
        CONTROLLER_CALLS.labels(operation="status", outcome="ok").inc()
        return status

    async def send_manual(self, command: ManualCommand) -> None:
        await self._dispatch("manual", "/manual", command.value)

    async def set_mode(self, command: ModeCommand) -> None:
        await self._dispatch("mode", "/mode", command.value)

    async def _dispatch(self, kind: str, path: str, command: str) -> None:
        try:
            await self._client.get(self._url(path), params={"cmd": command})
            COMMANDS_SENT.labels(kind=kind, command=command).inc()
            logger.info("Command sent: %s=%s", kind, command, extra={"command": command})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Command %s=%s failed: %s", kind, command, exc, extra={"command": command})
