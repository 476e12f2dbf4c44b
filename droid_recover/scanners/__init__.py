"""Discovery stages, registered in the order they run."""

from .registry import register_scanner, get_scanner, get_all_scanners
from .base import BaseScanner, ScanContext
from .location_sweep import LocationSweepScanner
from .root_sweep import RootSweepScanner
from .orphan_sweep import OrphanSweepScanner

__all__ = [
    "register_scanner",
    "get_scanner",
    "get_all_scanners",
    "BaseScanner",
    "ScanContext",
    "LocationSweepScanner",
    "RootSweepScanner",
    "OrphanSweepScanner",
]
