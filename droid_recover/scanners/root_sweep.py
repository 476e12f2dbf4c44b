"""Extra find sweeps that only make sense with root access.

This is not carving: it lists files in lost+found and scratch directories
that are already mounted. Partition detection is informational only.
"""

import logging
from typing import AsyncIterator, Optional

from ..config import settings
from .base import BaseScanner, ScanContext
from .locations import LOST_DIR, ROOT_RECOVERY_LOCATIONS
from .parsing import is_usable_output, parse_path_lines
from .registry import register_scanner

logger = logging.getLogger(__name__)

PARTITION_PROBES = ("/dev/block/mmcblk0p", "/dev/block/dm-0")


class RootSweepScanner(BaseScanner):
    source_id = "root_sweep"
    name = "Root recovery locations"
    description = "Sweep Lost.Dir, lost+found and temporary folders (requires root)"

    @property
    def requires_root(self) -> bool:
        return True

    async def scan(self, ctx: ScanContext) -> AsyncIterator[str]:
        ctx.report("Root access detected. Scanning recovery locations for permanently deleted files...")

        lost_dir = LOST_DIR.resolve(ctx.storage_root)
        lost = await self._find_files(ctx, lost_dir)
        if lost is None:
            return
        if lost:
            ctx.report(f"Found {len(lost)} orphaned files in Lost.Dir")
        for path in lost:
            yield path

        partition = await self.find_data_partition(ctx)
        if partition:
            ctx.report(f"Found data partition: {partition}")
        await ctx.checkpoint()

        for location in ROOT_RECOVERY_LOCATIONS:
            if ctx.cancelled:
                break
            found = await self._find_files(ctx, location.resolve(ctx.storage_root))
            if found is None:
                break
            for path in found:
                yield path

    async def _find_files(self, ctx: ScanContext, directory: str) -> Optional[list[str]]:
        """find -type f under directory; None once the scan has been cancelled."""
        if ctx.cancelled:
            return None
        output = await ctx.client.shell(
            ctx.device_id,
            f'find "{directory}" -type f 2>/dev/null',
            timeout=settings.scan_command_timeout,
        )
        if ctx.cancelled:
            return None
        await ctx.checkpoint()
        if not is_usable_output(output):
            return []
        return parse_path_lines(output)

    async def find_data_partition(self, ctx: ScanContext) -> str:
        output = await ctx.client.shell(
            ctx.device_id,
            "ls /dev/block/platform/*/by-name/userdata 2>/dev/null",
        )
        if is_usable_output(output):
            return parse_path_lines(output)[0]

        for probe in PARTITION_PROBES:
            check = await ctx.client.shell(ctx.device_id, f"test -e {probe} && echo exists")
            if "exists" in check:
                return probe
        return ""


register_scanner(RootSweepScanner())
