# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: local schedule collection.
Holds the normalized schedules last confirmed by the controller.
NO network calls and NO coercion here: pure storage.
"""

from typing import Optional

from geyser_remote.models.domain import Schedule, ScheduleKey


def same_key(a: ScheduleKey, b: ScheduleKey) -> bool:
    """Ids match by string form: 7 and "7" are the same schedule."""
    return str(a) == str(b)


class ScheduleRepository:
    """In-memory, ordered schedule storage."""

    def __init__(self) -> None:
        self._items: list[Schedule] = []

    # ── Read ──

    def get_all(self) -> list[Schedule]:
        return list(self._items)

    def get(self, schedule_id: ScheduleKey) -> Optional[Schedule]:
        for item in self._items:
            if same_key(item.id, schedule_id):
                return item
        return None

    def count(self) -> int:
        return len(self._items)

    # ── Write ──

    def replace_all(self, schedules: list[Schedule]) -> None:
        self._items = list(schedules)

    def append(self, schedule: Schedule) -> None:
        self._items.append(schedule)

    def replace(self, schedule_id: ScheduleKey, schedule: Schedule) -> int:
        """Swap every entry matching the id in place; returns how many matched."""
        matched = 0
        for index, item in enumerate(self._items):
            if same_key(item.id, schedule_id):
                self._items[index] = schedule
                matched += 1
        return matched

    def remove(self, schedule_id: ScheduleKey) -> int:
        """Drop every entry matching the id; returns how many were removed."""
        before = len(self._items)
        self._items = [s for s in self._items if not same_key(s.id, schedule_id)]
        return before - len(self._items)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._items.clear()
