"""Report whether adb can be found and run."""

import logging

from ..models.system import AdbInfo
from ..utils.adb import AdbClient

logger = logging.getLogger(__name__)

SETUP_HINT = (
    "ADB (Android Debug Bridge) not found. Download platform-tools from "
    "https://developer.android.com/studio/releases/platform-tools and either put adb "
    "on PATH, copy it into ./adb/, or set DROID_ADB_PATH."
)


async def inspect_adb(client: AdbClient) -> AdbInfo:
    version = await client.version()
    if version is None:
        return AdbInfo(path=client.adb_path, available=False, detail=SETUP_HINT)
    return AdbInfo(
        path=client.adb_path,
        available=True,
        version=version,
        detail=f"ADB found at: {client.adb_path}",
    )
