# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP client for the controller's /schedule resource.
Returns raw decoded JSON; coercion happens in the service layer.
"""

from typing import Any, Optional

import httpx

from geyser_remote.core.logging import get_logger
from geyser_remote.metrics.prometheus import CONTROLLER_CALLS
from geyser_remote.models.domain import ScheduleKey

logger = get_logger(__name__)

SCHEDULE_PATH = "/schedule"


class ScheduleSyncError(Exception):
    """A schedule call failed: bad URL, unreachable host, non-2xx status or unreadable body.

    There is one error kind; callers tell causes apart by the message only.
    """


def schedule_endpoint(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{SCHEDULE_PATH}"


class ScheduleApiClient:
    """Thin async wrapper over GET/POST/PUT/PATCH/DELETE on /schedule."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._client = http_client
        self.base_url = base_url

    @property
    def endpoint(self) -> str:
        return schedule_endpoint(self.base_url)

    def item_url(self, schedule_id: ScheduleKey) -> str:
        return f"{self.endpoint}/{schedule_id}"

    # ── Calls ──

    async def list_schedules(self) -> Any:
        resp = await self._request("list", "GET", self.endpoint)
        return self._decode(resp)

    async def create_schedule(self, payload: dict[str, Any]) -> Any:
        resp = await self._request("create", "POST", self.endpoint, payload)
        return self._decode(resp)

    async def update_schedule(self, schedule_id: ScheduleKey, payload: dict[str, Any]) -> Any:
        resp = await self._request("update", "PUT", self.item_url(schedule_id), payload)
        return self._decode(resp)

    async def set_enabled(self, schedule_id: ScheduleKey, enabled: bool) -> Any:
        resp = await self._request(
            "toggle", "PATCH", self.item_url(schedule_id), {"enabled": enabled}
        )
        return self._decode(resp)

    async def delete_schedule(self, schedule_id: ScheduleKey) -> None:
        # Body of a successful DELETE is ignored
        await self._request("delete", "DELETE", self.item_url(schedule_id))

    # ── Internals ──

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, json=payload)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            CONTROLLER_CALLS.labels(operation=operation, outcome="unreachable").inc()
            logger.warning("Controller unreachable: %s %s: %s", method, url, exc)
            raise ScheduleSyncError(str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            CONTROLLER_CALLS.labels(operation=operation, outcome="http_error").inc()
            logger.warning("Controller returned %d for %s %s", resp.status_code, method, url)
            raise ScheduleSyncError(f"HTTP {resp.status_code}")

        CONTROLLER_CALLS.labels(operation=operation, outcome="ok").inc()
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise ScheduleSyncError(f"Invalid JSON body: {exc}") from exc
