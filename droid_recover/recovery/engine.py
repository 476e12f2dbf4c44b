"""Pull files from the device to a local folder and verify them."""

import asyncio
import hashlib
import logging
import posixpath
import re
import uuid
from pathlib import Path
from typing import AsyncIterator, Optional

from ..config import settings
from ..models.files import FileStatus, RecoverableFile
from ..models.recovery import RecoveryFileResult
from ..utils.adb import AdbClient

logger = logging.getLogger(__name__)

_INVALID_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_THUMBNAIL_MARKERS = (".thumbnails", ".thumbdata", "thumb")


def sanitize_filename(name: str) -> str:
    return _INVALID_NAME_CHARS.sub("_", name)


def guess_original_path(device_path: str) -> str:
    """Strip thumbnail folder markers to guess where the full file lived."""
    guess = device_path
    for marker in _THUMBNAIL_MARKERS:
        guess = guess.replace(marker, "")
    return posixpath.normpath(guess)


class RecoveryEngine:
    def __init__(
        self,
        client: AdbClient,
        destination: str,
        settle_delay: Optional[float] = None,
    ):
        self.client = client
        self.destination = Path(destination).expanduser()
        self.settle_delay = settings.pull_settle_delay if settle_delay is None else settle_delay

    async def recover_files(
        self, device_id: str, files: list[RecoverableFile]
    ) -> AsyncIterator[RecoveryFileResult]:
        """Recover files, yielding results as each completes."""
        self.destination.mkdir(parents=True, exist_ok=True)

        for file in files:
            if file.status == FileStatus.RECOVERED:
                yield RecoveryFileResult(
                    file_id=file.id,
                    device_path=file.device_path,
                    recovered_path=file.device_path,
                    success=True,
                    status_text=file.status_text,
                )
                continue

            if file.status.is_deleted and not await self._exists(device_id, file.device_path):
                file.status = FileStatus.PERMANENTLY_LOST
                yield RecoveryFileResult(
                    file_id=file.id,
                    device_path=file.device_path,
                    status_text=file.status_text,
                )
                continue

            yield await self.recover(device_id, file)

    async def recover(self, device_id: str, file: RecoverableFile) -> RecoveryFileResult:
        """Pull one file. Updates the record in place."""
        self.destination.mkdir(parents=True, exist_ok=True)
        remote = file.device_path
        result = RecoveryFileResult(file_id=file.id, device_path=remote)
        local = self._unique_path(self.destination / self._local_name(remote))

        _, out, err = await self.client.pull(device_id, remote, str(local))
        await asyncio.sleep(self.settle_delay)

        if not self._pulled(local) and file.status.is_deleted and self._is_thumbnail(remote):
            guess = guess_original_path(remote)
            logger.info(f"Pull of {remote} failed, trying original location {guess}")
            if await self._exists(device_id, guess):
                await self.client.pull(device_id, guess, str(local))
                await asyncio.sleep(self.settle_delay)

        if self._pulled(local):
            file.mark_recovered(str(local))
            result.recovered_path = str(local)
            result.success = True
            result.sha256 = self._sha256(local)
            logger.info(f"Recovered {remote} -> {local}")
        else:
            if local.is_file():
                local.unlink()  # empty leftover from a failed pull
            file.mark_failed((err or out).strip())
            logger.info(f"Failed to recover {remote}: {file.failure_reason}")

        result.status_text = file.status_text
        return result

    def _local_name(self, device_path: str) -> str:
        name = posixpath.basename(device_path.rstrip("/")) or f"recovered_{uuid.uuid4().hex}"
        name = sanitize_filename(name)
        if not Path(name).suffix:
            name += posixpath.splitext(device_path)[1]
        return name

    def _unique_path(self, path: Path) -> Path:
        """If path exists, add a numeric suffix."""
        if not path.exists():
            return path
        stem = path.stem
        suffix = path.suffix
        parent = path.parent
        counter = 1
        while True:
            new_path = parent / f"{stem}_{counter}{suffix}"
            if not new_path.exists():
                return new_path
            counter += 1

    async def _exists(self, device_id: str, device_path: str) -> bool:
        output = await self.client.shell(device_id, f'test -f "{device_path}" && echo EXISTS')
        return "EXISTS" in output

    @staticmethod
    def _is_thumbnail(device_path: str) -> bool:
        return ".thumb" in device_path or "thumbnails" in device_path

    @staticmethod
    def _pulled(path: Path) -> bool:
        return path.is_file() and path.stat().st_size > 0

    def _sha256(self, path: Path) -> str:
        h = hashlib.sha256()
        with open(path, "rb") as f:
            while True:
                chunk = f.read(65536)
                if not chunk:
                    break
                h.update(chunk)
        return h.hexdigest()
