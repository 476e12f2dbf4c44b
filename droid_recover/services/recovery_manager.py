"""Recovery job lifecycle."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Callable

from ..models.files import RecoverableFile
from ..models.recovery import (
    RecoveryJob,
    RecoveryRequest,
    RecoveryStatus,
    RecoveryProgress,
)
from ..recovery.engine import RecoveryEngine
from ..utils.adb import AdbClient, adb_client
from .scan_manager import ScanManager, scan_manager

logger = logging.getLogger(__name__)


class RecoveryManager:
    def __init__(
        self,
        scans: Optional[ScanManager] = None,
        client: Optional[AdbClient] = None,
    ):
        self.scans = scans or scan_manager
        self.client = client or adb_client
        self._jobs: dict[str, RecoveryJob] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._progress_listeners: dict[str, list[Callable]] = {}

    def create_job(self, request: RecoveryRequest) -> RecoveryJob:
        job = RecoveryJob(request=request)
        scan = self.scans.get_job(request.job_id)
        if scan:
            job.device_id = scan.config.device_id
        self._jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[RecoveryJob]:
        return self._jobs.get(job_id)

    def add_progress_listener(self, job_id: str, callback: Callable) -> None:
        self._progress_listeners.setdefault(job_id, []).append(callback)

    def remove_progress_listener(self, job_id: str, callback: Callable) -> None:
        listeners = self._progress_listeners.get(job_id, [])
        if callback in listeners:
            listeners.remove(callback)

    def files_for(self, request: RecoveryRequest) -> list[RecoverableFile]:
        """Explicit ids win, then all files, then the current selection."""
        scan_files = self.scans.get_results(request.job_id)
        if request.file_ids:
            file_map = {f.id: f for f in scan_files}
            return [file_map[fid] for fid in request.file_ids if fid in file_map]
        if request.all_files:
            return list(scan_files)
        return [f for f in scan_files if f.selected]

    async def start_recovery(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if not job:
            return
        task = asyncio.create_task(self._run_recovery(job))
        self._tasks[job_id] = task

    async def wait(self, job_id: str) -> None:
        task = self._tasks.get(job_id)
        if task:
            await task

    async def _run_recovery(self, job: RecoveryJob) -> None:
        job.status = RecoveryStatus.RUNNING
        await self._notify_progress(job)

        files_to_recover = self.files_for(job.request)
        job.progress = RecoveryProgress(
            files_total=len(files_to_recover),
            message=f"Starting recovery of {len(files_to_recover)} file(s)...",
        )
        await self._notify_progress(job)

        engine = RecoveryEngine(self.client, job.request.destination)

        try:
            async for result in engine.recover_files(job.device_id, files_to_recover):
                job.results.append(result)
                if result.success:
                    job.progress.files_recovered += 1
                else:
                    job.progress.files_failed += 1
                job.progress.current_file = result.device_path
                job.progress.percent = (
                    (job.progress.files_recovered + job.progress.files_failed)
                    / job.progress.files_total * 100
                ) if job.progress.files_total > 0 else 0
                job.progress.message = f"Recovered {job.progress.files_recovered}/{job.progress.files_total}"
                await self._notify_progress(job)

            job.status = RecoveryStatus.COMPLETED
            job.completed_at = datetime.now(tz=timezone.utc)
            job.progress.percent = 100.0
            job.progress.message = (
                f"Recovery complete. {job.progress.files_recovered} recovered, "
                f"{job.progress.files_failed} failed out of {job.progress.files_total} files."
            )
            logger.info(f"[recovery {job.id}] {job.progress.message}")
            await self._notify_progress(job)

        except asyncio.CancelledError:
            job.status = RecoveryStatus.CANCELLED
            await self._notify_progress(job)
        except Exception as e:
            logger.exception(f"[recovery {job.id}] failed")
            job.status = RecoveryStatus.FAILED
            job.error = str(e)
            await self._notify_progress(job)

    async def _notify_progress(self, job: RecoveryJob) -> None:
        listeners = self._progress_listeners.get(job.id, [])
        for cb in listeners:
            try:
                await cb(job)
            except Exception:
                logger.debug("Progress listener failed", exc_info=True)


# Singleton
recovery_manager = RecoveryManager()
