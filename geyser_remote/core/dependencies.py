# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Dependency injection: HTTP client, repositories and service singletons.
"""

from typing import Optional

import httpx

from geyser_remote.core.config import settings
from geyser_remote.repositories.notification_repository import NotificationRepository
from geyser_remote.repositories.schedule_repository import ScheduleRepository
from geyser_remote.services.device_client import DeviceClient
from geyser_remote.services.notifier import Notifier
from geyser_remote.services.schedule_client import ScheduleApiClient
from geyser_remote.services.schedule_editor import ScheduleEditor
from geyser_remote.services.schedule_service import ScheduleService
from geyser_remote.services.status_poller import StatusPoller

# ── Singleton repository instances (in-memory stores) ──
_schedule_repo = ScheduleRepository()
_notification_repo = NotificationRepository()
_notifier = Notifier(_notification_repo)

# ── Built once the panel starts (they hold the HTTP client) ──
_http_client: httpx.AsyncClient | None = None
_device_client: DeviceClient | None = None
_schedule_service: ScheduleService | None = None
_schedule_editor: ScheduleEditor | None = None
_status_poller: StatusPoller | None = None


def init_services(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    base_url: Optional[str] = None,
) -> None:
    """Create the shared HTTP client and wire the services around it."""
    global _http_client, _device_client, _schedule_service, _schedule_editor, _status_poller
    target = base_url or settings.GEYSER_BASE_URL
    _http_client = httpx.AsyncClient(timeout=settings.GEYSER_HTTP_TIMEOUT, transport=transport)
    _device_client = DeviceClient(_http_client, target)
    _schedule_service = ScheduleService(
        schedule_repo=_schedule_repo,
        api_client=ScheduleApiClient(_http_client, target),
        notifier=_notifier,
    )
    _schedule_editor = ScheduleEditor(_schedule_service)
    _status_poller = StatusPoller(_device_client)


def services_ready() -> bool:
    return _http_client is not None


async def close_services() -> None:
    global _http_client
    if _status_poller:
        await _status_poller.stop()
    if _http_client:
        await _http_client.aclose()
    _http_client = None


async def change_base_url(base_url: str) -> bool:
    """Retarget every client; the schedule list reloads when the URL changed."""
    get_device_client().base_url = base_url
    return await get_schedule_service().set_base_url(base_url)


# ── FastAPI dependency functions ──
def get_schedule_repo() -> ScheduleRepository:
    return _schedule_repo


def get_notification_repo() -> NotificationRepository:
    return _notification_repo


def get_device_client() -> DeviceClient:
    assert _device_client is not None
    return _device_client


def get_schedule_service() -> ScheduleService:
    assert _schedule_service is not None
    return _schedule_service


def get_schedule_editor() -> ScheduleEditor:
    assert _schedule_editor is not None
    return _schedule_editor


def get_status_poller() -> StatusPoller:
    assert _status_poller is not None
    return _status_poller
