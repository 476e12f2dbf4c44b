from droid_recover.config import settings
from droid_recover.models.scan import ScanConfig, ScanStatus
from droid_recover.services.scan_manager import ScanManager

from conftest import DEVICE

TRASH = "/sdcard/.trash"


async def _run(manager: ScanManager, listener, **toggles):
    job = manager.create_job(ScanConfig(device_id=DEVICE, **toggles))
    manager.add_progress_listener(job.id, listener)
    await manager.start_scan(job.id)
    await manager.wait(job.id)
    return manager.get_job(job.id)


async def test_listeners_hear_progress_while_nothing_is_accepted(fake_adb, monkeypatch):
    monkeypatch.setattr(settings, "notify_interval", 0.0)
    # 120 photos that all fail the size query
    fake_adb.listings[TRASH] = "".join(f"IMG_{i}.jpg\n" for i in range(120))
    events = []
    before_last_candidate = []

    async def listener(job, event):
        events.append((event["type"], event.get("count"), job.progress.message))

    def snapshot(command):
        if command == f'ls -ld "{TRASH}/IMG_119.jpg" 2>/dev/null':
            before_last_candidate.extend(events)

    fake_adb.on_shell = snapshot
    job = await _run(ScanManager(client=fake_adb), listener)

    counts = [count for kind, count, _ in before_last_candidate if kind == "files_scanned"]
    assert counts == [50, 100]
    messages = [msg for kind, _, msg in before_last_candidate if kind == "scan_progress"]
    assert f"Scanning deleted files location: {TRASH}..." in messages
    assert "Found 120 potentially deleted files. Analyzing..." in messages
    assert "Scanned 100/120 files... Found 0 matching files." in messages

    assert job.status == ScanStatus.COMPLETED
    assert job.progress.files_scanned == 120
    assert [count for kind, count, _ in events if kind == "files_scanned"] == [50, 100, 120]


async def test_progress_is_throttled(fake_adb, monkeypatch):
    monkeypatch.setattr(settings, "notify_interval", 3600.0)
    fake_adb.listings[TRASH] = "".join(f"IMG_{i}.jpg\n" for i in range(120))
    events = []

    async def listener(job, event):
        events.append(event["type"])

    job = await _run(ScanManager(client=fake_adb), listener)

    assert job.status == ScanStatus.COMPLETED
    # start, the first checkpoint, then the final flush
    assert events.count("scan_progress") == 3
    assert events.count("files_scanned") == 3
