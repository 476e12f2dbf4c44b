"""Wrapper around the adb executable.

Every call spawns one adb process and waits for it. Nothing in here raises:
spawn errors, timeouts and non-zero exits come back as empty output so that
callers can treat each command as best-effort.
"""

import asyncio
import logging
import os
import platform
import shutil
from pathlib import Path
from typing import Optional

from ..config import settings

logger = logging.getLogger(__name__)

ADB_NAME = "adb.exe" if platform.system() == "Windows" else "adb"


def _sdk_roots() -> list[Path]:
    roots = []
    for var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
        value = os.environ.get(var)
        if value:
            roots.append(Path(value))
    home = Path.home()
    system = platform.system()
    if system == "Windows":
        local = os.environ.get("LOCALAPPDATA")
        if local:
            roots.append(Path(local) / "Android" / "Sdk")
        roots.append(home / "AppData" / "Local" / "Android" / "Sdk")
        roots.append(Path("C:/Android"))
    elif system == "Darwin":
        roots.append(home / "Library" / "Android" / "sdk")
    else:
        roots.append(home / "Android" / "Sdk")
    return roots


def candidate_adb_paths() -> list[Path]:
    """Places to look for adb, most specific first."""
    package_root = Path(__file__).resolve().parent.parent
    paths = [
        package_root.parent / "adb" / ADB_NAME,  # bundled next to the package
        Path.cwd() / "adb" / ADB_NAME,  # development tree
    ]
    paths.extend(root / "platform-tools" / ADB_NAME for root in _sdk_roots())
    return paths


def resolve_adb_path(override: Optional[str] = None) -> str:
    if override:
        return override
    for path in candidate_adb_paths():
        if path.is_file():
            return str(path)
    found = shutil.which("adb")
    # Last resort: hope it is on PATH when we actually run it
    return found or "adb"


class AdbClient:
    def __init__(self, adb_path: Optional[str] = None):
        self.adb_path = resolve_adb_path(adb_path or settings.adb_path)

    async def run(
        self,
        *args: str,
        timeout: Optional[float] = None,
    ) -> tuple[int, str, str]:
        """Run adb with args and return (returncode, stdout, stderr)."""
        timeout = settings.command_timeout if timeout is None else timeout
        try:
            proc = await asyncio.create_subprocess_exec(
                self.adb_path, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug(f"Could not start {self.adb_path}: {e}")
            return -1, "", str(e)

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.warning(f"adb {' '.join(args)} timed out after {timeout}s")
            return -1, "", "Command timed out"

        return (
            proc.returncode or 0,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def execute(
        self,
        device_id: str,
        *args: str,
        timeout: Optional[float] = None,
    ) -> str:
        """Run an adb subcommand against one device; stdout or ''."""
        rc, out, _ = await self.run("-s", device_id, *args, timeout=timeout)
        return out if rc == 0 else ""

    async def shell(
        self,
        device_id: str,
        command: str,
        timeout: Optional[float] = None,
    ) -> str:
        """Run a shell command on the device.

        The remote exit status is ignored: listings over partly unreadable
        trees exit non-zero but still carry useful output. A process that
        could not be started yields an "Error: ..." line.
        """
        rc, out, err = await self.run("-s", device_id, "shell", command, timeout=timeout)
        if rc == -1 and not out:
            return "" if err == "Command timed out" else f"Error: {err}"
        return out

    async def pull(self, device_id: str, remote: str, local: str) -> tuple[int, str, str]:
        return await self.run(
            "-s", device_id, "pull", remote, local,
            timeout=settings.pull_timeout,
        )

    async def get_state(self, device_id: str) -> str:
        rc, out, _ = await self.run("-s", device_id, "get-state")
        if rc != 0:
            return "unknown"
        return out.strip().lower()

    async def version(self) -> Optional[str]:
        rc, out, _ = await self.run("version")
        if rc != 0:
            return None
        lines = out.strip().splitlines()
        return lines[0] if lines else ""

    async def is_available(self) -> bool:
        return await self.version() is not None

    async def restart_server(self) -> None:
        await self.run("kill-server")
        await asyncio.sleep(0.5)
        await self.run("start-server")
        await asyncio.sleep(1.0)


adb_client = AdbClient()
