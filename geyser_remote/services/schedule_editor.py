# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule editor: list and form orchestration for the panel.

Renders the collection in a fixed order, composes one draft at a time and
maps user actions to ScheduleService calls. It never talks to the network
itself and keeps no copy of the collection beyond the open draft.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from geyser_remote.core.logging import get_logger
from geyser_remote.models.domain import (
    NEW_SCHEDULE_ID,
    WEEKDAY_SHORT,
    Schedule,
    ScheduleKey,
)
from geyser_remote.services.schedule_client import ScheduleSyncError
from geyser_remote.services.schedule_service import ScheduleService

logger = get_logger(__name__)

TIME_PATTERN = re.compile(r"^[0-2]?\d:[0-5]\d$")
DELETE_PROMPT = "Delete this schedule?"
SAVE_FAILED = "Failed to save schedule"


class DraftValidationError(ValueError):
    """Raised for draft edits that do not fit the schedule model."""


def sort_key(schedule: Schedule) -> tuple[str, str]:
    return schedule.start_time, str(schedule.id)


def sort_schedules(schedules: list[Schedule]) -> list[Schedule]:
    """Start time ascending, ties broken by id as text."""
    return sorted(schedules, key=sort_key)


def validate_time(value: str) -> bool:
    return bool(TIME_PATTERN.match(value or ""))


def validate_draft(draft: Schedule) -> Optional[str]:
    """Inline message for the first failed check, or None when submittable."""
    if not draft.name.strip():
        return "Name is required"
    if not validate_time(draft.start_time) or not validate_time(draft.end_time):
        return "Use HH:mm for times"
    if not draft.days:
        return "Pick at least one day"
    return None


def format_days(days: list[int]) -> str:
    return ", ".join(WEEKDAY_SHORT[d] for d in days if 0 <= d < len(WEEKDAY_SHORT))


def format_setpoint(setpoint: float) -> str:
    if isinstance(setpoint, float) and setpoint.is_integer():
        setpoint = int(setpoint)
    return f"{setpoint}°C"


def new_draft() -> Schedule:
    return Schedule(
        id=NEW_SCHEDULE_ID,
        schedule_id=0,
        name="",
        start_time="06:00",
        end_time="07:00",
        days=[1, 2, 3, 4, 5],
        mode="electric",
        setpoint=55,
        enabled=True,
    )


class ScheduleRow(BaseModel):
    """One line of the schedule table."""

    id: ScheduleKey
    name: str
    time_range: str
    days: str
    mode: str
    setpoint: str
    enabled: bool

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleRow":
        return cls(
            id=schedule.id,
            name=schedule.name,
            time_range=f"{schedule.start_time} - {schedule.end_time}",
            days=format_days(schedule.days),
            mode=schedule.mode,
            setpoint=format_setpoint(schedule.setpoint),
            enabled=schedule.enabled,
        )


class ScheduleEditor:
    """Single-user editing session over the shared schedule collection."""

    def __init__(self, schedule_service: ScheduleService) -> None:
        self._service = schedule_service
        self.draft: Optional[Schedule] = None
        self.validation_error: Optional[str] = None
        self.save_error: Optional[str] = None
        self.submitting = False
        self.pending_delete: Optional[ScheduleKey] = None

    # ── List ──

    def sorted_schedules(self) -> list[Schedule]:
        return sort_schedules(self._service.list_schedules())

    def rows(self) -> list[ScheduleRow]:
        return [ScheduleRow.from_schedule(s) for s in self.sorted_schedules()]

    @property
    def empty_message(self) -> str:
        return "Loading schedules..." if self._service.loading else "No schedules yet"

    async def refresh(self) -> bool:
        return await self._service.fetch_all()

    async def toggle(self, schedule_id: ScheduleKey, enabled: bool) -> Schedule:
        return await self._service.toggle_enabled(schedule_id, enabled)

    # ── Draft ──

    @property
    def is_new(self) -> bool:
        return self.draft is not None and self.draft.id == NEW_SCHEDULE_ID

    @property
    def title(self) -> str:
        return "New schedule" if self.is_new else "Edit schedule"

    def start_new(self) -> Schedule:
        return self._open(new_draft())

    def start_edit(self, schedule_id: ScheduleKey) -> Schedule:
        """Seed the draft from the current entity. Raises KeyError if unknown."""
        return self._open(self._service.get_schedule(schedule_id).model_copy(deep=True))

    def update_draft(self, **fields: Any) -> Schedule:
        """Apply form edits to the open draft; the id is not editable."""
        draft = self._require_draft()
        fields.pop("id", None)
        data = draft.model_dump()
        data.update(fields)
        try:
            self.draft = Schedule.model_validate(data)
        except ValidationError as exc:
            raise DraftValidationError(str(exc)) from exc
        return self.draft

    def toggle_day(self, day: int) -> Schedule:
        """Days picker: add or remove a weekday, keeping the list sorted."""
        draft = self._require_draft()
        if not 0 <= day < len(WEEKDAY_SHORT):
            raise DraftValidationError(f"Day must be between 0 and {len(WEEKDAY_SHORT) - 1}")
        if day in draft.days:
            days = [d for d in draft.days if d != day]
        else:
            days = sorted([*draft.days, day])
        draft.days = days
        return draft

    def cancel(self) -> None:
        self._close()

    async def submit(self) -> Optional[Schedule]:
        """Validate, then create or update. Returns the saved schedule or None.

        A validation failure sets validation_error and makes no network call.
        A failed save keeps the draft open and sets save_error.
        """
        draft = self._require_draft()
        self.validation_error = validate_draft(draft)
        if self.validation_error:
            return None

        self.submitting = True
        self.save_error = None
        try:
            if self.is_new:
                saved = await self._service.create(draft.to_draft())
            else:
                saved = await self._service.update(draft.id, draft.to_draft())
        except ScheduleSyncError as exc:
            logger.warning("Schedule save failed: %s", exc)
            self.save_error = SAVE_FAILED
            return None
        finally:
            self.submitting = False

        self._close()
        return saved

    # ── Delete ──

    def request_delete(self, schedule_id: ScheduleKey) -> str:
        """Arm deletion; nothing is sent until confirm_delete()."""
        self.pending_delete = schedule_id
        return DELETE_PROMPT

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> None:
        if self.pending_delete is None:
            raise LookupError("No delete pending confirmation")
        schedule_id, self.pending_delete = self.pending_delete, None
        await self._service.delete(schedule_id)

    # ── Internals ──

    def _open(self, draft: Schedule) -> Schedule:
        self.draft = draft
        self.validation_error = None
        self.save_error = None
        return draft

    def _close(self) -> None:
        self.draft = None
        self.validation_error = None
        self.save_error = None

    def _require_draft(self) -> Schedule:
        if self.draft is None:
            raise LookupError("No schedule is being edited")
        return self.draft
