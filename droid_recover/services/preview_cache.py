"""Local copies of device files for previews and thumbnails."""

import hashlib
import logging
import posixpath
from pathlib import Path
from typing import Optional

from ..config import settings
from ..models.files import RecoverableFile
from ..scanners.filetypes import category_for_type
from ..utils.adb import AdbClient

logger = logging.getLogger(__name__)


def cache_path_for(device_id: str, file: RecoverableFile, cache_dir: Optional[Path] = None) -> Path:
    """Stable cache location keyed on device, path and size."""
    cache_dir = cache_dir or settings.thumbnail_cache_dir
    key = f"{device_id}|{file.device_path}|{file.size_bytes}"
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
    if category_for_type(file.file_type) == "photo":
        suffix = ".jpg"
    else:
        suffix = posixpath.splitext(file.device_path)[1].lower()
    return cache_dir / f"{digest}{suffix}"


async def fetch_preview(
    client: AdbClient,
    device_id: str,
    file: RecoverableFile,
    cache_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Pull the file into the cache once; later calls reuse the copy."""
    if file.thumbnail_path and Path(file.thumbnail_path).is_file():
        return Path(file.thumbnail_path)

    target = cache_path_for(device_id, file, cache_dir)
    if not (target.is_file() and target.stat().st_size > 0):
        target.parent.mkdir(parents=True, exist_ok=True)
        rc, _, err = await client.pull(device_id, file.device_path, str(target))
        if rc != 0 or not target.is_file() or target.stat().st_size == 0:
            logger.debug(f"Preview pull failed for {file.device_path}: {err.strip()}")
            return None

    file.thumbnail_path = str(target)
    return target
