# File: tests/conftest.py

import re
from pathlib import Path
from typing import Callable, Optional

import pytest

from droid_recover.config import settings
from droid_recover.models.scan import ScanConfig
from droid_recover.scanners import ScanContext
from droid_recover.utils.adb import AdbClient

DEVICE = "R58M123ABC"

_LS_R = re.compile(r'^ls -R "(.+)" 2>/dev/null$')
_FIND_F = re.compile(r'^find "(.+)" -type f 2>/dev/null$')
_STAT_C = re.compile(r'^stat -c %s "(.+)" 2>/dev/null$')
_LS_LD = re.compile(r'^ls -ld "(.+)" 2>/dev/null$')
_TEST_F = re.compile(r'^test -f "(.+)" && echo EXISTS$')


class FakeAdbClient(AdbClient):
    """Scripted adb: answers the commands the app issues, records every call."""

    def __init__(self):
        super().__init__(adb_path="adb-fake")
        self.devices_output = "List of devices attached\n"
        self.models: dict[str, str] = {}
        self.root = False
        self.listings: dict[str, str] = {}  # ls -R target -> output
        self.finds: dict[str, str] = {}  # find -type f target -> output
        self.orphan_output = ""
        self.sizes: dict[str, int] = {}  # answered by stat -c %s
        self.long_listings: dict[str, str] = {}  # answered by ls -ld
        self.files: dict[str, bytes] = {}  # what pull can fetch
        self.extra: dict[str, str] = {}
        self.on_shell: Optional[Callable[[str], None]] = None
        self.calls: list[tuple[str, ...]] = []

    @property
    def shell_commands(self) -> list[str]:
        return [c[3] for c in self.calls if len(c) > 3 and c[2] == "shell"]

    async def run(self, *args: str, timeout: Optional[float] = None) -> tuple[int, str, str]:
        self.calls.append(args)
        if args[:1] == ("version",):
            return 0, "Android Debug Bridge version 1.0.41\nVersion 35.0.1\n", ""
        if args[:2] == ("devices", "-l"):
            return 0, self.devices_output, ""
        if args[:1] in (("kill-server",), ("start-server",)):
            return 0, "", ""
        if len(args) >= 3 and args[0] == "-s":
            sub = args[2]
            if sub == "shell":
                command = args[3]
                if self.on_shell:
                    self.on_shell(command)
                return 0, self.respond(args[1], command), ""
            if sub == "pull":
                return self._pull(args[3], args[4])
            if sub == "get-state":
                return 0, "device\n", ""
        return 1, "", "error: unknown command"

    def respond(self, device_id: str, command: str) -> str:
        if command == "su -c 'id'":
            return "uid=0(root) gid=0(root)\n" if self.root else "/system/bin/sh: su: inaccessible or not found\n"
        if command == "getprop ro.product.model":
            return self.models.get(device_id, "")
        if command.startswith("stat -f%z"):
            return ""  # toybox reads -f as filesystem mode
        m = _LS_R.match(command)
        if m:
            return self.listings.get(m.group(1), "")
        m = _FIND_F.match(command)
        if m:
            return self.finds.get(m.group(1), "")
        if command.startswith("find ") and "grep -E" in command:
            return self.orphan_output
        m = _STAT_C.match(command)
        if m:
            size = self.sizes.get(m.group(1))
            return f"{size}\n" if size is not None else ""
        m = _LS_LD.match(command)
        if m:
            return self.long_listings.get(m.group(1), "")
        m = _TEST_F.match(command)
        if m:
            path = m.group(1)
            return "EXISTS\n" if path in self.files or path in self.sizes else ""
        return self.extra.get(command, "")

    def _pull(self, remote: str, local: str) -> tuple[int, str, str]:
        data = self.files.get(remote)
        if data is None:
            return 1, "", f"adb: error: failed to stat remote object '{remote}': No such file or directory"
        Path(local).write_bytes(data)
        return 0, f"{remote}: 1 file pulled, 0 skipped.\n", ""


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "pull_settle_delay", 0.0)
    monkeypatch.setattr(settings, "progress_every", 50)
    monkeypatch.setattr(settings, "default_storage_root", "/sdcard")
    monkeypatch.setattr(settings, "thumbnail_cache_dir", tmp_path / "thumbs")


@pytest.fixture
def fake_adb():
    return FakeAdbClient()


@pytest.fixture
def make_context(fake_adb):
    def _make(**toggles) -> ScanContext:
        config = ScanConfig(device_id=DEVICE, storage_root="/sdcard", **toggles)
        return ScanContext(client=fake_adb, config=config)
    return _make
