"""Application settings."""

import tempfile
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8788
    debug: bool = False
    adb_path: Optional[str] = None  # explicit override, skips discovery
    default_storage_root: str = "/sdcard"
    recovery_default_dir: Path = Path.home() / "Documents" / "recovered-android-files"
    thumbnail_cache_dir: Path = Path(tempfile.gettempdir()) / "droid-recover-thumbs"
    command_timeout: float = 30.0
    scan_command_timeout: float = 120.0  # ls -R / find over whole trees
    pull_timeout: float = 300.0
    pull_settle_delay: float = 1.0
    orphan_find_limit: int = 2000
    progress_every: int = 50
    notify_interval: float = 1.0  # min seconds between listener flushes
    max_preview_size_mb: int = 50

    model_config = {"env_prefix": "DROID_"}


settings = Settings()
