# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.

Attributes are snake_case; the controller box speaks camelCase, so every
field carries its wire name as an alias.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ScheduleMode = Literal["electric", "gas"]
ScheduleKey = Union[str, int]
# 0=Sunday .. 6=Saturday
Weekday = Annotated[int, Field(ge=0, le=6)]

WEEKDAY_SHORT: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Id carried by a draft that has not been saved on the controller yet
NEW_SCHEDULE_ID = "new"


class ScheduleDraft(BaseModel):
    """Schedule fields without the server-assigned id (create/update payload)."""

    model_config = ConfigDict(populate_by_name=True)

    schedule_id: Union[int, float] = Field(default=0, alias="scheduleId")
    name: str = "Untitled"
    start_time: str = Field(default="06:00", alias="startTime")
    end_time: str = Field(default="07:00", alias="endTime")
    days: list[Weekday] = Field(default_factory=list)
    mode: ScheduleMode = "electric"
    setpoint: Union[int, float] = Field(default=55, description="Target temperature in °C")
    enabled: bool = False

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the controller's camelCase field names."""
        return self.model_dump(by_alias=True)


class Schedule(ScheduleDraft):
    """A recurring heating window as held in the local collection."""

    id: ScheduleKey

    def to_draft(self) -> ScheduleDraft:
        return ScheduleDraft(**self.model_dump(exclude={"id"}))

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        return {"id": data.pop("id"), **data}


class ManualCommand(str, Enum):
    """Direct relay switching, dispatched via GET /manual?cmd=..."""

    ELEC_ON = "ELEC_ON"
    ELEC_OFF = "ELEC_OFF"
    GAS_ON = "GAS_ON"
    GAS_OFF = "GAS_OFF"
    IGN_ON = "IGN_ON"
    IGN_OFF = "IGN_OFF"
    PUMP_ON = "PUMP_ON"
    PUMP_OFF = "PUMP_OFF"


class ModeCommand(str, Enum):
    """Automatic-mode switches, dispatched via GET /mode?cmd=..."""

    AUTO_ON = "AUTO_ON"
    ELEC_AUTO = "ELEC_AUTO"
    GAS_AUTO = "GAS_AUTO"
    AUTO_OFF = "AUTO_OFF"


class DeviceStatus(BaseModel):
    """Snapshot of sensors and relays reported by GET /status."""

    model_config = ConfigDict(populate_by_name=True)

    temp: Optional[Any] = None
    gas: Optional[Any] = None
    electric: bool = False
    gas_relay: bool = Field(default=False, alias="gasRelay")
    ignition: bool = False
    pump: bool = False

    @classmethod
    def from_payload(cls, raw: Any) -> "DeviceStatus":
        """Build a snapshot from an untrusted payload; relays are truthy/falsy."""
        data = raw if isinstance(raw, dict) else {}
        return cls(
            temp=data.get("temp"),
            gas=data.get("gas"),
            electric=bool(data.get("electric")),
            gas_relay=bool(data.get("gasRelay")),
            ignition=bool(data.get("ignition")),
            pump=bool(data.get("pump")),
        )

    def display(self) -> dict[str, str]:
        """Text shown on the status cards."""

        def on_off(flag: bool) -> str:
            return "ON" if flag else "OFF"

        return {
            "temperature": "--" if self.temp is None else str(self.temp),
            "gas_level": "--" if self.gas is None else str(self.gas),
            "electric_relay": on_off(self.electric),
            "gas_valve": on_off(self.gas_relay),
            "ignition": on_off(self.ignition),
            "pump": on_off(self.pump),
        }
