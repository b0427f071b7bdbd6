"""
Shared test fixtures: an in-process fake of the geyser controller.
Requests are served through httpx.MockTransport; nothing touches the network.
"""

import json
from typing import Any, Optional

import httpx
import pytest

from geyser_remote.repositories.notification_repository import NotificationRepository
from geyser_remote.repositories.schedule_repository import ScheduleRepository
from geyser_remote.services.notifier import Notifier
from geyser_remote.services.schedule_client import ScheduleApiClient
from geyser_remote.services.schedule_service import ScheduleService

BASE_URL = "http://geyser.test/"


class FakeController:
    """Minimal stand-in for the controller's HTTP API."""

    def __init__(self) -> None:
        self.schedules: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.commands: list[tuple[str, str]] = []
        self.status: dict[str, Any] = {
            "temp": 48.5, "gas": 72, "electric": 1,
            "gasRelay": 0, "ignition": False, "pump": True,
        }
        self.next_id = 100
        self.wrap_items = False
        self.fail_status: Optional[int] = None
        self.fail_exc: Optional[Exception] = None
        # (method, path) -> body returned verbatim instead of the default handling
        self.overrides: dict[tuple[str, str], Any] = {}

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: Optional[str] = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_exc is not None:
            raise self.fail_exc
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, text="boom")

        method, path = request.method, request.url.path
        if (method, path) in self.overrides:
            return httpx.Response(200, json=self.overrides[(method, path)])

        if path in ("/manual", "/mode"):
            self.commands.append((path.lstrip("/"), request.url.params["cmd"]))
            return httpx.Response(200, text="OK")
        if path == "/status":
            return httpx.Response(200, json=self.status)
        if path == "/schedule":
            if method == "GET":
                body = {"items": self.schedules} if self.wrap_items else self.schedules
                return httpx.Response(200, json=body)
            if method == "POST":
                record = {"id": self.next_id, **json.loads(request.content)}
                self.next_id += 1
                self.schedules.append(record)
                return httpx.Response(201, json=record)
        if path.startswith("/schedule/"):
            key = path.rsplit("/", 1)[1]
            record = next((s for s in self.schedules if str(s.get("id")) == key), None)
            if method == "DELETE":
                self.schedules = [s for s in self.schedules if str(s.get("id")) != key]
                return httpx.Response(204)
            if record is None:
                return httpx.Response(404, json={"error": "not found"})
            if method in ("PUT", "PATCH"):
                record.update(json.loads(request.content))
                return httpx.Response(200, json=record)
        return httpx.Response(405)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def controller() -> FakeController:
    return FakeController()


@pytest.fixture
def notifications() -> NotificationRepository:
    return NotificationRepository()


@pytest.fixture
def schedule_repo() -> ScheduleRepository:
    return ScheduleRepository()


@pytest.fixture
def http_client(controller) -> httpx.AsyncClient:
    # MockTransport holds no connections, so the client needs no closing
    return httpx.AsyncClient(transport=controller.transport)


@pytest.fixture
def schedule_service(http_client, schedule_repo, notifications) -> ScheduleService:
    return ScheduleService(
        schedule_repo=schedule_repo,
        api_client=ScheduleApiClient(http_client, BASE_URL),
        notifier=Notifier(notifications),
    )
