"""Data models."""

from .device import AuthorizationState, Device
from .files import FileStatus, RecoverableFile
from .scan import ScanConfig, ScanJob, ScanProgress, ScanStatus
from .recovery import RecoveryRequest, RecoveryJob, RecoveryFileResult
from .system import AdbInfo

__all__ = [
    "AuthorizationState",
    "Device",
    "FileStatus",
    "RecoverableFile",
    "ScanConfig",
    "ScanJob",
    "ScanProgress",
    "ScanStatus",
    "RecoveryRequest",
    "RecoveryJob",
    "RecoveryFileResult",
    "AdbInfo",
]
