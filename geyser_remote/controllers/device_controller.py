# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: live status and manual/mode command buttons.
Pure HTTP layer: commands are fire-and-forget.
"""

from fastapi import APIRouter, Depends

from geyser_remote.core.dependencies import get_device_client, get_status_poller
from geyser_remote.models.domain import DeviceStatus, ManualCommand, ModeCommand
from geyser_remote.services.device_client import DeviceClient
from geyser_remote.services.status_poller import StatusPoller

router = APIRouter(prefix="/api/v1", tags=["Device"])


@router.get("/status")
def current_status(poller: StatusPoller = Depends(get_status_poller)):
    """Last polled sensor and relay readings ("--" until the first poll lands)."""
    status = poller.latest or DeviceStatus()
    return {
        "status": status.display(),
        "raw": poller.latest.model_dump(by_alias=True) if poller.latest else None,
        "last_updated": poller.last_updated,
        "polling": poller.running,
    }


@router.post("/manual/{command}", status_code=202)
async def send_manual_command(
    command: ManualCommand,
    device: DeviceClient = Depends(get_device_client),
):
    """Switch a relay directly."""
    await device.send_manual(command)
    return {"status": "dispatched", "kind": "manual", "command": command.value}


@router.post("/mode/{command}", status_code=202)
async def send_mode_command(
    command: ModeCommand,
    device: DeviceClient = Depends(get_device_client),
):
    """Enable/disable automatic mode or pick its heat source."""
    await device.set_mode(command)
    return {"status": "dispatched", "kind": "mode", "command": command.value}
