# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: schedule list and editor endpoints.
Thin HTTP layer: delegates ALL logic to ScheduleEditor.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from geyser_remote.core.dependencies import get_schedule_editor, get_schedule_service
from geyser_remote.schemas.panel import (
    DraftResponse,
    DraftUpdateRequest,
    ScheduleListResponse,
    ToggleRequest,
)
from geyser_remote.services.schedule_client import ScheduleSyncError
from geyser_remote.services.schedule_editor import DraftValidationError, ScheduleEditor
from geyser_remote.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api/v1", tags=["Schedules"])


def _draft_response(editor: ScheduleEditor) -> DraftResponse:
    return DraftResponse(
        title=editor.title,
        draft=editor.draft.to_wire(),
        validation_error=editor.validation_error,
        save_error=editor.save_error,
    )


# ── Schedule list ──

@router.get("/schedules", response_model=ScheduleListResponse)
def list_schedules(
    editor: ScheduleEditor = Depends(get_schedule_editor),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Schedules sorted by start time, then id."""
    rows = editor.rows()
    return ScheduleListResponse(
        items=rows,
        count=len(rows),
        loading=service.loading,
        error=service.error,
        empty_message=None if rows else editor.empty_message,
    )


@router.post("/schedules/refresh", response_model=ScheduleListResponse)
async def refresh_schedules(
    editor: ScheduleEditor = Depends(get_schedule_editor),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Reload the collection from the controller."""
    await editor.refresh()
    return list_schedules(editor, service)


@router.patch("/schedules/{schedule_id}/enabled")
async def toggle_schedule(
    schedule_id: str,
    payload: ToggleRequest,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    """Enable or disable one schedule."""
    try:
        updated = await editor.toggle(schedule_id, payload.enabled)
    except ScheduleSyncError as e:
        raise HTTPException(status_code=502, detail=f"Failed to toggle schedule: {e}")
    return updated.to_wire()


@router.delete("/schedules/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    confirm: bool = Query(default=False, description="Set once the user confirmed"),
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    """Delete a schedule; the first unconfirmed call only returns the prompt."""
    prompt = editor.request_delete(schedule_id)
    if not confirm:
        return JSONResponse(
            status_code=409,
            content={"detail": prompt, "schedule_id": schedule_id, "confirm_required": True},
        )
    try:
        await editor.confirm_delete()
    except ScheduleSyncError as e:
        raise HTTPException(status_code=502, detail=f"Failed to delete schedule: {e}")
    return {"status": "deleted", "id": schedule_id}


# ── Editor ──

@router.post("/editor/new", response_model=DraftResponse)
def start_new_schedule(editor: ScheduleEditor = Depends(get_schedule_editor)):
    """Open a blank draft with the default window and weekdays."""
    editor.start_new()
    return _draft_response(editor)


@router.post("/editor/edit/{schedule_id}", response_model=DraftResponse)
def start_edit_schedule(
    schedule_id: str,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    """Open a draft seeded from an existing schedule."""
    try:
        editor.start_edit(schedule_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _draft_response(editor)


@router.get("/editor/draft", response_model=DraftResponse)
def get_draft(editor: ScheduleEditor = Depends(get_schedule_editor)):
    if editor.draft is None:
        raise HTTPException(status_code=404, detail="No schedule is being edited")
    return _draft_response(editor)


@router.patch("/editor/draft", response_model=DraftResponse)
def update_draft(
    payload: DraftUpdateRequest,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    """Apply form edits to the open draft."""
    try:
        editor.update_draft(**payload.model_dump(exclude_none=True))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _draft_response(editor)


@router.post("/editor/draft/days/{day}", response_model=DraftResponse)
def toggle_draft_day(
    day: int,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    try:
        editor.toggle_day(day)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _draft_response(editor)


@router.delete("/editor/draft")
def cancel_draft(editor: ScheduleEditor = Depends(get_schedule_editor)):
    editor.cancel()
    return {"status": "cancelled"}


@router.post("/editor/submit")
async def submit_draft(editor: ScheduleEditor = Depends(get_schedule_editor)):
    """Validate and save the draft; it stays open when anything fails."""
    if editor.draft is None:
        raise HTTPException(status_code=404, detail="No schedule is being edited")
    saved = await editor.submit()
    if editor.validation_error:
        raise HTTPException(status_code=422, detail=editor.validation_error)
    if saved is None:
        raise HTTPException(status_code=502, detail=editor.save_error)
    return saved.to_wire()
