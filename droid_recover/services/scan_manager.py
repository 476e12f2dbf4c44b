"""Scan job lifecycle and async orchestration."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Callable

from ..config import settings
from ..models.files import RecoverableFile
from ..models.scan import ScanConfig, ScanJob, ScanStatus, ScanProgress
from ..scanners import ScanContext
from ..scanners.filetypes import category_for_type
from ..utils.adb import AdbClient, adb_client
from .discovery import discover

logger = logging.getLogger(__name__)


class ScanManager:
    def __init__(self, client: Optional[AdbClient] = None):
        self.client = client or adb_client
        self._jobs: dict[str, ScanJob] = {}
        self._results: dict[str, list[RecoverableFile]] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._cancel_events: dict[str, asyncio.Event] = {}
        self._active_by_device: dict[str, str] = {}
        self._progress_listeners: dict[str, list[Callable]] = {}

    def create_job(self, config: ScanConfig) -> ScanJob:
        job = ScanJob(config=config)
        self._jobs[job.id] = job
        self._results[job.id] = []
        return job

    def get_job(self, job_id: str) -> Optional[ScanJob]:
        return self._jobs.get(job_id)

    def get_results(self, job_id: str) -> list[RecoverableFile]:
        return self._results.get(job_id, [])

    def get_file(self, job_id: str, file_id: str) -> Optional[RecoverableFile]:
        return next((f for f in self.get_results(job_id) if f.id == file_id), None)

    def add_progress_listener(self, job_id: str, callback: Callable) -> None:
        self._progress_listeners.setdefault(job_id, []).append(callback)

    def remove_progress_listener(self, job_id: str, callback: Callable) -> None:
        listeners = self._progress_listeners.get(job_id, [])
        if callback in listeners:
            listeners.remove(callback)

    async def start_scan(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if not job:
            return

        # One scan per device: a new scan replaces the previous token
        previous = self._active_by_device.get(job.config.device_id)
        if previous and previous != job_id:
            await self.cancel_scan(previous)

        self._cancel_events[job_id] = asyncio.Event()
        self._active_by_device[job.config.device_id] = job_id
        task = asyncio.create_task(self._run_scan(job))
        self._tasks[job_id] = task

    async def cancel_scan(self, job_id: str) -> bool:
        event = self._cancel_events.get(job_id)
        job = self._jobs.get(job_id)
        if not event or not job or job.status not in (ScanStatus.PENDING, ScanStatus.RUNNING):
            return False
        event.set()
        job.progress.message = "Scan cancelled."
        await self._notify(job, {"type": "scan_progress"})
        return True

    async def wait(self, job_id: str) -> None:
        task = self._tasks.get(job_id)
        if task:
            await task

    async def _run_scan(self, job: ScanJob) -> None:
        job.status = ScanStatus.RUNNING
        job.progress = ScanProgress()
        await self._notify(job, {"type": "scan_progress"})

        pending: list[dict] = []
        last_notify_time: Optional[float] = None

        async def checkpoint():
            # Throttle progress notifications: at most once per notify_interval
            nonlocal last_notify_time
            now = time.monotonic()
            if last_notify_time is None or now - last_notify_time >= settings.notify_interval:
                last_notify_time = now
                await self._flush(job, pending)

        def progress_cb(msg: str):
            job.progress.message = msg
            logger.info(f"[scan {job.id}] {msg}")

        def scanned_cb(count: int):
            if count <= job.progress.files_scanned:
                return
            job.progress.files_scanned = count
            if job.progress.files_total:
                job.progress.percent = count / job.progress.files_total * 100
            pending.append({"type": "files_scanned", "count": count})

        ctx = ScanContext(
            client=self.client,
            config=job.config,
            cancel=self._cancel_events[job.id],
            progress_callback=progress_cb,
            on_checkpoint=checkpoint,
        )

        try:
            async for file in discover(ctx, scanned_cb, total_callback=self._total_setter(job)):
                self._results[job.id].append(file)
                job.progress.files_found = len(self._results[job.id])
                await self._notify(job, {"type": "file_found", "file": file.model_dump(mode="json")})
                await checkpoint()

            job.has_root = ctx.has_root
            job.completed_at = datetime.now(tz=timezone.utc)
            if ctx.cancelled:
                job.status = ScanStatus.CANCELLED
            else:
                job.status = ScanStatus.COMPLETED
                job.progress.percent = 100.0
            await self._flush(job, pending)

        except asyncio.CancelledError:
            job.status = ScanStatus.CANCELLED
            await self._notify(job, {"type": "scan_progress"})
        except Exception as e:
            logger.exception(f"[scan {job.id}] failed")
            job.status = ScanStatus.FAILED
            job.error = str(e)
            await self._notify(job, {"type": "scan_progress"})
        finally:
            if self._active_by_device.get(job.config.device_id) == job.id:
                del self._active_by_device[job.config.device_id]

    @staticmethod
    def _total_setter(job: ScanJob) -> Callable[[int], None]:
        def set_total(total: int):
            job.progress.files_total = total
        return set_total

    async def _flush(self, job: ScanJob, pending: list[dict]) -> None:
        for event in pending:
            await self._notify(job, event)
        pending.clear()
        await self._notify(job, {"type": "scan_progress"})

    async def _notify(self, job: ScanJob, event: dict) -> None:
        listeners = self._progress_listeners.get(job.id, [])
        for cb in listeners:
            try:
                await cb(job, event)
            except Exception:
                logger.debug("Progress listener failed", exc_info=True)

    def get_result_stats(self, job_id: str) -> dict:
        files = self._results.get(job_id, [])
        total_size = sum(f.size_bytes for f in files)
        by_status: dict[str, int] = {}
        by_category: dict[str, int] = {}
        for f in files:
            by_status[f.status.value] = by_status.get(f.status.value, 0) + 1
            category = category_for_type(f.file_type)
            by_category[category] = by_category.get(category, 0) + 1

        return {
            "total_files": len(files),
            "total_size": total_size,
            "selected": sum(1 for f in files if f.selected),
            "by_status": by_status,
            "by_category": by_category,
        }


# Singleton
scan_manager = ScanManager()
