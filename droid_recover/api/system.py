"""System info API endpoints."""

from fastapi import APIRouter

from ..services.system_inspector import inspect_adb
from ..utils.adb import adb_client

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/info")
async def get_system_info():
    return await inspect_adb(adb_client)


@router.post("/restart-adb")
async def restart_adb():
    await adb_client.restart_server()
    return {
        "restarted": True,
        "detail": "ADB server restarted. Unplug and replug the USB cable, then allow USB debugging on the phone.",
    }
