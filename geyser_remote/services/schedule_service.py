# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule synchronization: the only writer of the local collection.

Every operation goes to the controller first; the collection only changes
after a confirmed response, and always with the normalized server copy.
Writes are not serialized: when two calls for the same schedule overlap,
whichever response lands last wins.
"""

from typing import Any, Mapping, Optional, Union

from geyser_remote.core.logging import get_logger
from geyser_remote.metrics.prometheus import SCHEDULES_LOADED
from geyser_remote.models.domain import Schedule, ScheduleDraft, ScheduleKey
from geyser_remote.repositories.schedule_repository import ScheduleRepository
from geyser_remote.services.normalization import extract_items, normalize_schedule
from geyser_remote.services.notifier import Notifier
from geyser_remote.services.schedule_client import ScheduleApiClient, ScheduleSyncError

logger = get_logger(__name__)


def to_wire_fields(updates: Union[ScheduleDraft, Mapping[str, Any]]) -> dict[str, Any]:
    """Partial update body with the controller's field names."""
    if isinstance(updates, ScheduleDraft):
        return updates.to_wire()
    fields = ScheduleDraft.model_fields
    body: dict[str, Any] = {}
    for key, value in updates.items():
        field = fields.get(key)
        body[field.alias if field is not None and field.alias else key] = value
    return body


class ScheduleService:
    """fetch_all / create / update / delete / toggle_enabled against /schedule."""

    def __init__(
        self,
        schedule_repo: ScheduleRepository,
        api_client: ScheduleApiClient,
        notifier: Notifier,
    ) -> None:
        self._schedules = schedule_repo
        self._api = api_client
        self._notifier = notifier
        self._pending_fetches = 0
        self.error: Optional[str] = None

    # ── State ──

    @property
    def loading(self) -> bool:
        return self._pending_fetches > 0

    @property
    def base_url(self) -> str:
        return self._api.base_url

    def list_schedules(self) -> list[Schedule]:
        return self._schedules.get_all()

    def get_schedule(self, schedule_id: ScheduleKey) -> Schedule:
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            raise KeyError(f"No schedule with id '{schedule_id}'")
        return schedule

    # ── Lifecycle ──

    async def attach(self) -> None:
        """Initial load when the panel comes up."""
        await self.fetch_all()

    async def set_base_url(self, base_url: str) -> bool:
        """Point at another controller; a change triggers a full reload."""
        if base_url == self._api.base_url:
            return False
        logger.info("Controller base URL changed: %s -> %s", self._api.base_url, base_url)
        self._api.base_url = base_url
        await self.fetch_all()
        return True

    # ── Commands ──

    async def fetch_all(self) -> bool:
        """Replace the collection with the server's view. Never raises."""
        self._pending_fetches += 1
        try:
            payload = await self._api.list_schedules()
            schedules = [normalize_schedule(item) for item in extract_items(payload)]
            self._schedules.replace_all(schedules)
            self.error = None
            SCHEDULES_LOADED.set(self._schedules.count())
            logger.info("Schedules loaded: count=%d", len(schedules))
            return True
        except ScheduleSyncError as exc:
            message = str(exc) or "Failed to load schedules"
            self.error = message
            self._notifier.error(f"Failed to load schedules: {message}")
            return False
        finally:
            self._pending_fetches -= 1

    async def create(self, draft: ScheduleDraft) -> Schedule:
        """POST a new schedule and adopt the server's copy. Re-raises on failure."""
        try:
            created = normalize_schedule(await self._api.create_schedule(draft.to_wire()))
        except ScheduleSyncError as exc:
            self._notifier.error(f"Failed to create schedule: {str(exc) or 'Create failed'}")
            raise
        self._schedules.append(created)
        SCHEDULES_LOADED.set(self._schedules.count())
        self._notifier.success("Schedule created")
        logger.info("Schedule created", extra={"schedule_id": created.id})
        return created

    async def update(
        self,
        schedule_id: ScheduleKey,
        updates: Union[ScheduleDraft, Mapping[str, Any]],
    ) -> Schedule:
        """PUT changed fields and swap in the server's copy. Re-raises on failure."""
        try:
            raw = await self._api.update_schedule(schedule_id, to_wire_fields(updates))
            updated = normalize_schedule(raw)
        except ScheduleSyncError as exc:
            self._notifier.error(f"Failed to update schedule: {str(exc) or 'Update failed'}")
            raise
        self._schedules.replace(schedule_id, updated)
        self._notifier.success("Schedule updated")
        logger.info("Schedule updated", extra={"schedule_id": schedule_id})
        return updated

    async def delete(self, schedule_id: ScheduleKey) -> None:
        """DELETE on the server, then drop local matches (if any)."""
        try:
            await self._api.delete_schedule(schedule_id)
        except ScheduleSyncError as exc:
            self._notifier.error(f"Failed to delete schedule: {str(exc) or 'Delete failed'}")
            raise
        removed = self._schedules.remove(schedule_id)
        SCHEDULES_LOADED.set(self._schedules.count())
        self._notifier.success("Schedule deleted")
        logger.info("Schedule deleted: removed=%d", removed, extra={"schedule_id": schedule_id})

    async def toggle_enabled(self, schedule_id: ScheduleKey, enabled: bool) -> Schedule:
        """PATCH the enabled flag; the local entry flips only once confirmed."""
        try:
            updated = normalize_schedule(await self._api.set_enabled(schedule_id, enabled))
        except ScheduleSyncError as exc:
            self._notifier.error(f"Failed to toggle schedule: {str(exc) or 'Toggle failed'}")
            raise
        self._schedules.replace(schedule_id, updated)
        logger.info("Schedule toggled: enabled=%s", updated.enabled, extra={"schedule_id": schedule_id})
        return updated
