# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Schedule normalization: pure functions, no I/O.

The controller's JSON is not contractually typed: legacy field names,
numeric encodings and missing fields all show up in the wild. Every field is
coerced on its own with a fixed fallback, and normalize_schedule() never
raises.
"""

import math
from typing import Any, Iterable, Mapping, Optional, Union

from geyser_remote.models.domain import Schedule, ScheduleMode

Number = Union[int, float]

DEFAULT_NAME = "Untitled"
DEFAULT_START_TIME = "06:00"
DEFAULT_END_TIME = "07:00"
DEFAULT_SETPOINT = 55
DEFAULT_SCHEDULE_ID = 0

ENABLED_KEYS: tuple[str, ...] = ("enabled", "active")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never counts as a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_text(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(value: Any) -> Optional[Number]:
    """Number as-is, numeric string parsed; None for anything else or non-finite."""
    if _is_number(value):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def get_string(obj: Mapping[str, Any], key: str, fallback: str) -> str:
    value = obj.get(key)
    if isinstance(value, str):
        return value
    if _is_number(value):
        return _number_text(value)
    return fallback


def get_number(obj: Mapping[str, Any], key: str, fallback: Number) -> Number:
    number = parse_number(obj.get(key))
    return fallback if number is None else number


def get_boolean(obj: Mapping[str, Any], keys: Iterable[str], fallback: bool = False) -> bool:
    """First key holding a bool, number or string decides; others fall through."""
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            return value
        if _is_number(value):
            return value != 0
        if isinstance(value, str):
            return value.lower() == "true" or value == "1"
    return fallback


def get_days(obj: Mapping[str, Any], key: str = "days") -> list[int]:
    """Weekday indexes 0..6 in first-seen order; repeats and anything else are dropped."""
    value = obj.get(key)
    if not isinstance(value, (list, tuple)):
        return []
    days: list[int] = []
    for item in value:
        number = parse_number(item)
        if number is None or number != int(number):
            continue
        day = int(number)
        if 0 <= day <= 6 and day not in days:
            days.append(day)
    return days


def get_mode(obj: Mapping[str, Any], key: str = "mode") -> ScheduleMode:
    value = obj.get(key)
    if isinstance(value, str):
        return "gas" if value == "gas" else "electric"
    if _is_number(value):
        return "gas" if value == 1 else "electric"
    return "electric"


def _get_key(value: Any) -> Optional[Union[str, int]]:
    if isinstance(value, str):
        return value
    if not _is_number(value):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else _number_text(value)
    return value


def normalize_schedule(raw: Any) -> Schedule:
    """Coerce one untrusted server record into a well-formed Schedule."""
    obj: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    name = get_string(obj, "name", DEFAULT_NAME)
    start_time = get_string(obj, "startTime", DEFAULT_START_TIME)
    schedule_key = _get_key(obj.get("id"))
    if schedule_key is None:
        # Collides when two schedules share name and start time
        schedule_key = f"{name}-{start_time}"

    return Schedule(
        id=schedule_key,
        schedule_id=get_number(obj, "scheduleId", DEFAULT_SCHEDULE_ID),
        name=name,
        start_time=start_time,
        end_time=get_string(obj, "endTime", DEFAULT_END_TIME),
        days=get_days(obj),
        mode=get_mode(obj),
        setpoint=get_number(obj, "setpoint", DEFAULT_SETPOINT),
        enabled=get_boolean(obj, ENABLED_KEYS, False),
    )


def extract_items(payload: Any) -> list[Any]:
    """Collection body is either a bare list or an object wrapping one in 'items'."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        items = payload.get("items")
        if isinstance(items, list):
            return items
    return []
