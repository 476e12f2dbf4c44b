"""Recoverable file record and its provenance status."""

from enum import Enum
from typing import Optional
import uuid

from pydantic import BaseModel, Field, computed_field


class FileStatus(str, Enum):
    THUMBNAIL_CACHE = "Deleted (Thumbnail Cache)"
    TRASH = "Deleted (In Trash)"
    ORPHANED = "Permanently Deleted (Orphaned)"
    CACHE_REMNANT = "Deleted (Cache Remnant)"
    APP_TRASH = "Deleted (App Trash)"
    POTENTIAL = "Potentially Deleted"
    RECOVERED = "Recovered"
    FAILED = "Recovery failed"
    PERMANENTLY_LOST = "Cannot Recover - File Permanently Deleted"

    @property
    def is_deleted(self) -> bool:
        """True for every provenance state, "Potentially Deleted" included."""
        return self in _DELETED_STATES


_DELETED_STATES = frozenset({
    FileStatus.THUMBNAIL_CACHE,
    FileStatus.TRASH,
    FileStatus.ORPHANED,
    FileStatus.CACHE_REMNANT,
    FileStatus.APP_TRASH,
    FileStatus.POTENTIAL,
})

FAILURE_REASON_LIMIT = 200


class RecoverableFile(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    file_name: str
    file_type: str = ""
    size_bytes: int = 0
    size_text: str = "0 B"
    parent_dir: str = ""
    device_path: str  # becomes the local path once recovered
    status: FileStatus = FileStatus.POTENTIAL
    failure_reason: Optional[str] = None
    selected: bool = False
    thumbnail_path: Optional[str] = None

    @computed_field
    @property
    def status_text(self) -> str:
        if self.status == FileStatus.FAILED:
            return f"{self.status.value}: {self.failure_reason or ''}"
        return self.status.value

    def mark_recovered(self, local_path: str) -> None:
        self.status = FileStatus.RECOVERED
        self.failure_reason = None
        self.device_path = local_path

    def mark_failed(self, reason: str) -> None:
        self.status = FileStatus.FAILED
        self.failure_reason = reason[:FAILURE_REASON_LIMIT]
