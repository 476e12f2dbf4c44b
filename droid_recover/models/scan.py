"""Scan-related models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator
import uuid

from ..config import settings


class ScanStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ScanConfig(BaseModel):
    device_id: str
    storage_root: str = Field(default_factory=lambda: settings.default_storage_root)
    photos: bool = True
    videos: bool = True
    documents: bool = False
    audio: bool = False
    other: bool = False

    @field_validator("storage_root")
    @classmethod
    def _clean_root(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return settings.default_storage_root
        return value.rstrip("/") or "/"

    @model_validator(mode="after")
    def _require_a_type(self) -> "ScanConfig":
        if not (self.photos or self.videos or self.documents or self.audio or self.other):
            raise ValueError("Select at least one file type to recover")
        return self


class ScanProgress(BaseModel):
    stage: str = ""
    files_scanned: int = 0
    files_total: int = 0
    files_found: int = 0
    message: str = ""
    percent: float = 0.0


class ScanJob(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    config: ScanConfig
    status: ScanStatus = ScanStatus.PENDING
    progress: ScanProgress = Field(default_factory=ScanProgress)
    has_root: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    completed_at: Optional[datetime] = None
    error: Optional[str] = None
