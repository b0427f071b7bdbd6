# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas: control panel API contract.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from geyser_remote.models.domain import ScheduleMode, Weekday
from geyser_remote.services.schedule_editor import ScheduleRow


# ── Schedule Schemas ──

class ScheduleListResponse(BaseModel):
    items: list[ScheduleRow]
    count: int
    loading: bool
    error: Optional[str] = None
    empty_message: Optional[str] = None


class DraftUpdateRequest(BaseModel):
    """Partial form edit; accepts snake_case or the controller's camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    schedule_id: Optional[Union[int, float]] = Field(default=None, alias="scheduleId")
    name: Optional[str] = None
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    days: Optional[list[Weekday]] = None
    mode: Optional[ScheduleMode] = None
    setpoint: Optional[Union[int, float]] = None
    enabled: Optional[bool] = None


class DraftResponse(BaseModel):
    title: str
    draft: dict[str, Any]
    validation_error: Optional[str] = None
    save_error: Optional[str] = None


class ToggleRequest(BaseModel):
    enabled: bool


# ── Settings Schemas ──

class BaseUrlRequest(BaseModel):
    base_url: str = Field(..., min_length=1, pattern=r"^https?://", description="Controller base URL")

    @field_validator("base_url")
    @classmethod
    def check_url(cls, v: str) -> str:
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid controller URL: {exc}") from exc
        if not url.host:
            raise ValueError("controller URL needs a host")
        return v
