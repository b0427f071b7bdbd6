"""
Tests for schedule synchronization against a fake controller.
Run: pytest test_schedule_service.py -v
"""

import asyncio
import json

import httpx
import pytest

from geyser_remote.models.domain import ScheduleDraft
from geyser_remote.repositories.notification_repository import NotificationRepository
from geyser_remote.repositories.schedule_repository import ScheduleRepository
from geyser_remote.services.normalization import normalize_schedule
from geyser_remote.services.notifier import Notifier
from geyser_remote.services.schedule_client import (
    ScheduleApiClient,
    ScheduleSyncError,
    schedule_endpoint,
)
from geyser_remote.services.schedule_service import ScheduleService, to_wire_fields

BASE_URL = "http://geyser.test/"

MORNING = {
    "id": 1, "name": "Morning", "startTime": "06:00", "endTime": "07:00",
    "days": [1, 2, 3], "mode": "electric", "setpoint": 55, "enabled": True,
}
EVENING = {
    "id": "eve", "name": "Evening", "startTime": "18:00", "endTime": "19:30",
    "days": [0, 6], "mode": 1, "setpoint": "62", "active": "true",
}


def draft(**overrides) -> ScheduleDraft:
    fields = dict(name="Bath", start_time="20:00", end_time="21:00", days=[5], mode="gas", setpoint=60, enabled=True)
    fields.update(overrides)
    return ScheduleDraft(**fields)


def last_message(notifications: NotificationRepository) -> tuple[str, str]:
    entry = notifications.latest()
    return entry["level"], entry["message"]


# ============================================
# Endpoint
# ============================================
class TestEndpoint:
    def test_trailing_slash_stripped(self):
        assert schedule_endpoint("http://10.0.0.5/") == "http://10.0.0.5/schedule"
        assert schedule_endpoint("http://10.0.0.5") == "http://10.0.0.5/schedule"

    def test_to_wire_fields_maps_attribute_names(self):
        assert to_wire_fields({"start_time": "05:00", "setpoint": 50}) == {
            "startTime": "05:00",
            "setpoint": 50,
        }
        assert to_wire_fields({"endTime": "08:00"}) == {"endTime": "08:00"}


# ============================================
# fetch_all
# ============================================
class TestFetchAll:
    @pytest.mark.anyio
    async def test_replaces_collection_from_bare_list(self, schedule_service, controller):
        controller.schedules = [MORNING, EVENING]
        assert await schedule_service.fetch_all() is True
        schedules = schedule_service.list_schedules()
        assert [s.id for s in schedules] == [1, "eve"]
        assert schedules[1].mode == "gas"
        assert schedules[1].setpoint == 62
        assert schedules[1].enabled is True
        assert str(controller.requests[0].url) == "http://geyser.test/schedule"

    @pytest.mark.anyio
    async def test_accepts_wrapped_items(self, schedule_service, controller):
        controller.schedules = [MORNING]
        controller.wrap_items = True
        await schedule_service.fetch_all()
        assert len(schedule_service.list_schedules()) == 1

    @pytest.mark.anyio
    async def test_unexpected_body_yields_empty_collection(self, schedule_service, controller):
        controller.overrides[("GET", "/schedule")] = {"unexpected": True}
        await schedule_service.fetch_all()
        assert schedule_service.list_schedules() == []
        assert schedule_service.error is None

    @pytest.mark.anyio
    async def test_failure_keeps_previous_collection(self, schedule_service, controller, notifications):
        controller.schedules = [MORNING, EVENING]
        await schedule_service.fetch_all()

        controller.fail_status = 503
        assert await schedule_service.fetch_all() is False

        assert [s.id for s in schedule_service.list_schedules()] == [1, "eve"]
        assert schedule_service.error == "HTTP 503"
        assert last_message(notifications) == ("error", "Failed to load schedules: HTTP 503")
        assert schedule_service.loading is False

    @pytest.mark.anyio
    async def test_transport_error_reported_by_message(self, schedule_service, controller):
        controller.fail_exc = httpx.ConnectError("host unreachable")
        await schedule_service.fetch_all()
        assert schedule_service.error == "host unreachable"

    @pytest.mark.anyio
    async def test_success_clears_error(self, schedule_service, controller):
        controller.fail_status = 500
        await schedule_service.fetch_all()
        assert schedule_service.error is not None

        controller.fail_status = None
        await schedule_service.fetch_all()
        assert schedule_service.error is None

    @pytest.mark.anyio
    async def test_loading_while_pending(self, notifications):
        release = asyncio.Event()

        async def slow_handler(request):
            await release.wait()
            return httpx.Response(200, json=[MORNING])

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)) as client:
            service = ScheduleService(
                ScheduleRepository(), ScheduleApiClient(client, BASE_URL), Notifier(notifications)
            )
            task = asyncio.create_task(service.fetch_all())
            await asyncio.sleep(0)
            assert service.loading is True
            release.set()
            await task
            assert service.loading is False
            assert len(service.list_schedules()) == 1


# ============================================
# create / update / delete / toggle
# ============================================
class TestCreate:
    @pytest.mark.anyio
    async def test_appends_server_copy(self, schedule_service, controller, notifications):
        controller.schedules = [MORNING]
        await schedule_service.fetch_all()

        created = await schedule_service.create(draft())

        assert created.id == 100
        schedules = schedule_service.list_schedules()
        assert len(schedules) == 2
        assert schedules[-1].id == created.id
        assert last_message(notifications) == ("success", "Schedule created")

        body = json.loads(controller.calls("POST")[0].content)
        assert "id" not in body
        assert body["startTime"] == "20:00"
        assert body["mode"] == "gas"

    @pytest.mark.anyio
    async def test_adopts_normalized_response(self, schedule_service, controller):
        controller.overrides[("POST", "/schedule")] = {
            "id": 7, "name": "Morning", "startTime": "6:30", "endTime": "7:00",
            "days": [1, 2], "mode": 1, "setpoint": "60", "active": True,
        }
        created = await schedule_service.create(draft())
        assert created == normalize_schedule(controller.overrides[("POST", "/schedule")])
        assert created.to_wire() == {
            "id": 7, "scheduleId": 0, "name": "Morning", "startTime": "6:30",
            "endTime": "7:00", "days": [1, 2], "mode": "gas", "setpoint": 60, "enabled": True,
        }
        assert schedule_service.list_schedules() == [created]

    @pytest.mark.anyio
    async def test_failure_notifies_and_reraises(self, schedule_service, controller, notifications):
        controller.fail_status = 500
        with pytest.raises(ScheduleSyncError, match="HTTP 500"):
            await schedule_service.create(draft())
        assert schedule_service.list_schedules() == []
        assert last_message(notifications) == ("error", "Failed to create schedule: HTTP 500")

    @pytest.mark.anyio
    async def test_invalid_json_is_a_sync_error(self, notifications):
        def bad_body(request):
            return httpx.Response(200, text="<html>not json</html>")

        async with httpx.AsyncClient(transport=httpx.MockTransport(bad_body)) as client:
            service = ScheduleService(
                ScheduleRepository(), ScheduleApiClient(client, BASE_URL), Notifier(notifications)
            )
            with pytest.raises(ScheduleSyncError, match="Invalid JSON"):
                await service.create(draft())
            assert service.list_schedules() == []


class TestUpdate:
    @pytest.mark.anyio
    async def test_replaces_matching_entry_in_place(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING), dict(EVENING)]
        await schedule_service.fetch_all()

        updated = await schedule_service.update("1", {"name": "Early", "start_time": "05:30"})

        assert updated.name == "Early"
        schedules = schedule_service.list_schedules()
        assert [s.id for s in schedules] == [1, "eve"]
        assert schedules[0].start_time == "05:30"
        assert json.loads(controller.calls("PUT")[0].content) == {"name": "Early", "startTime": "05:30"}
        assert controller.calls("PUT")[0].url.path == "/schedule/1"
        assert last_message(notifications) == ("success", "Schedule updated")

    @pytest.mark.anyio
    async def test_failure_leaves_entry(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()
        controller.fail_status = 409

        with pytest.raises(ScheduleSyncError):
            await schedule_service.update(1, {"name": "Changed"})
        assert schedule_service.list_schedules()[0].name == "Morning"
        assert last_message(notifications) == ("error", "Failed to update schedule: HTTP 409")


class TestDelete:
    @pytest.mark.anyio
    async def test_removes_entry(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING), dict(EVENING)]
        await schedule_service.fetch_all()

        await schedule_service.delete("eve")

        assert [s.id for s in schedule_service.list_schedules()] == [1]
        assert last_message(notifications) == ("success", "Schedule deleted")

    @pytest.mark.anyio
    async def test_unknown_id_still_calls_server(self, schedule_service, controller):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()

        await schedule_service.delete("missing")

        assert controller.calls("DELETE")[0].url.path == "/schedule/missing"
        assert len(schedule_service.list_schedules()) == 1

    @pytest.mark.anyio
    async def test_failure_keeps_collection(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()
        controller.fail_exc = httpx.ReadError("connection reset")

        with pytest.raises(ScheduleSyncError, match="connection reset"):
            await schedule_service.delete(1)
        assert len(schedule_service.list_schedules()) == 1
        assert last_message(notifications) == ("error", "Failed to delete schedule: connection reset")


class TestToggle:
    @pytest.mark.anyio
    async def test_patches_enabled_flag(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()
        before = notifications.count()

        updated = await schedule_service.toggle_enabled(1, False)

        assert updated.enabled is False
        assert schedule_service.list_schedules()[0].enabled is False
        assert json.loads(controller.calls("PATCH")[0].content) == {"enabled": False}
        assert notifications.count() == before

    @pytest.mark.anyio
    async def test_no_optimistic_flip_on_failure(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()
        controller.fail_status = 502

        with pytest.raises(ScheduleSyncError):
            await schedule_service.toggle_enabled(1, False)
        assert schedule_service.list_schedules()[0].enabled is True
        assert last_message(notifications) == ("error", "Failed to toggle schedule: HTTP 502")


# ============================================
# Base URL changes
# ============================================
class TestBaseUrl:
    @pytest.mark.anyio
    async def test_change_triggers_fetch(self, schedule_service, controller):
        controller.schedules = [dict(MORNING)]
        changed = await schedule_service.set_base_url("http://geyser.test/v2/")
        assert changed is True
        assert controller.calls("GET")[-1].url.path == "/v2/schedule"
        assert len(schedule_service.list_schedules()) == 1

    @pytest.mark.anyio
    async def test_same_url_does_not_refetch(self, schedule_service, controller):
        changed = await schedule_service.set_base_url(BASE_URL)
        assert changed is False
        assert controller.requests == []

    @pytest.mark.anyio
    async def test_attach_loads_collection(self, schedule_service, controller):
        controller.schedules = [dict(MORNING), dict(EVENING)]
        await schedule_service.attach()
        assert len(schedule_service.list_schedules()) == 2

    @pytest.mark.anyio
    async def test_malformed_url_reported_not_raised(self, schedule_service, controller, notifications):
        controller.schedules = [dict(MORNING)]
        await schedule_service.fetch_all()

        changed = await schedule_service.set_base_url("http://geyser.test:abc")

        assert changed is True
        assert schedule_service.error is not None
        assert schedule_service.loading is False
        assert len(schedule_service.list_schedules()) == 1
        level, message = last_message(notifications)
        assert level == "error"
        assert message.startswith("Failed to load schedules:")

    @pytest.mark.anyio
    async def test_malformed_url_on_create_is_a_sync_error(self, schedule_service, controller):
        await schedule_service.set_base_url("http://geyser.test:abc")
        with pytest.raises(ScheduleSyncError):
            await schedule_service.create(draft())
        assert controller.requests == []
