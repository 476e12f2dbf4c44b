"""Device enumeration and per-device helpers."""

import asyncio
import logging
import re
from datetime import datetime
from typing import Optional

from ..models.device import AuthorizationState, Device
from ..utils.adb import AdbClient

logger = logging.getLogger(__name__)

UNKNOWN_DEVICE = "Unknown Device"
_NOISE = ("List of devices", "daemon", "attached")
_SCREEN_SIZE = re.compile(r"Physical size: (\d+)x(\d+)")


def parse_device_lines(output: str) -> list[tuple[str, str, Optional[str]]]:
    """Parse `adb devices -l` into (serial, state, model) tuples."""
    entries = []
    for line in output.splitlines():
        if not line.strip() or any(noise in line for noise in _NOISE):
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        model = next((p for p in parts if p.startswith("model:")), None)
        if model is not None:
            model = model[len("model:"):].replace("_", " ")
        entries.append((parts[0], parts[1].lower(), model))
    return entries


def _state_from_token(token: str) -> AuthorizationState:
    if token == "device":
        return AuthorizationState.AUTHORIZED
    if token == "unauthorized":
        return AuthorizationState.UNAUTHORIZED
    return AuthorizationState.OTHER


async def get_device_model(client: AdbClient, device_id: str) -> str:
    output = await client.shell(device_id, "getprop ro.product.model")
    name = output.strip()
    if not name or name.startswith("Error:"):
        return UNKNOWN_DEVICE
    return name


async def list_devices(client: AdbClient) -> list[Device]:
    """Fresh device list on every call, in adb's order."""
    rc, out, err = await client.run("devices", "-l")
    if rc != 0:
        logger.warning(f"adb devices failed: {err.strip()}")
        return []

    devices = []
    for serial, token, model in parse_device_lines(out):
        name = model if model else await get_device_model(client, serial)
        devices.append(Device(
            id=serial,
            name=name,
            state=_state_from_token(token),
            raw_state=token,
            connected_at=datetime.now(),
        ))
    return devices


async def has_root(client: AdbClient, device_id: str) -> bool:
    output = await client.shell(device_id, "su -c 'id'")
    return "uid=0" in output


async def unlock_screen(client: AdbClient, device_id: str) -> None:
    """Wake the device and swipe up; a PIN or pattern still needs a human."""
    await client.shell(device_id, "input keyevent KEYCODE_WAKEUP")
    await asyncio.sleep(0.2)
    await client.shell(device_id, "wm dismiss-keyguard")
    await asyncio.sleep(0.2)

    width, height = 1080, 1920
    match = _SCREEN_SIZE.search(await client.shell(device_id, "wm size"))
    if match:
        width, height = int(match.group(1)), int(match.group(2))

    x = width // 2
    await client.shell(
        device_id,
        f"input swipe {x} {int(height * 0.8)} {x} {int(height * 0.2)} 500",
    )
