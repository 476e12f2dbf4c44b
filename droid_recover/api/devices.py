"""Device API endpoints."""

from fastapi import APIRouter, HTTPException

from ..services.device_service import has_root, list_devices, unlock_screen
from ..utils.adb import adb_client

router = APIRouter(prefix="/devices", tags=["devices"])


async def _require_authorized(device_id: str) -> None:
    state = await adb_client.get_state(device_id)
    if state != "device":
        raise HTTPException(status_code=404, detail=f"Device {device_id} is not connected or not authorized")


@router.get("")
async def get_devices():
    devices = await list_devices(adb_client)
    return {"devices": devices, "count": len(devices)}


@router.get("/{device_id}/root")
async def get_root_status(device_id: str):
    await _require_authorized(device_id)
    return {"device_id": device_id, "has_root": await has_root(adb_client, device_id)}


@router.post("/{device_id}/unlock")
async def unlock_device(device_id: str):
    await _require_authorized(device_id)
    await unlock_screen(adb_client, device_id)
    return {
        "device_id": device_id,
        "detail": "Unlock command sent. A PIN, pattern or password still has to be entered on the device.",
    }
