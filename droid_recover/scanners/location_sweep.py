"""Recursive listing of every catalog location."""

import logging
from typing import AsyncIterator

from ..config import settings
from .base import BaseScanner, ScanContext
from .locations import LOCATION_CATALOG
from .parsing import is_usable_output, parse_ls_recursive
from .registry import register_scanner

logger = logging.getLogger(__name__)


class LocationSweepScanner(BaseScanner):
    source_id = "location_sweep"
    name = "Deleted file locations"
    description = "List trash, thumbnail, cache and lost+found folders under the storage root"

    async def scan(self, ctx: ScanContext) -> AsyncIterator[str]:
        for location in LOCATION_CATALOG:
            if ctx.cancelled:
                break

            path = location.resolve(ctx.storage_root)
            ctx.report(f"Scanning deleted files location: {path}...")
            output = await ctx.client.shell(
                ctx.device_id,
                f'ls -R "{path}" 2>/dev/null',
                timeout=settings.scan_command_timeout,
            )
            # A listing that finished after cancel belongs to no completed sweep
            if ctx.cancelled:
                break
            await ctx.checkpoint()
            if not is_usable_output(output):
                continue

            found = parse_ls_recursive(output, path)
            logger.debug(f"{path}: {len(found)} entries ({location.kind.value})")
            for candidate in found:
                yield candidate


register_scanner(LocationSweepScanner())
