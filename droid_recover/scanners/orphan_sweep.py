"""One broad find across the storage root for files under deletion markers."""

import logging
from typing import AsyncIterator

from ..config import settings
from .base import BaseScanner, ScanContext
from .filetypes import enabled_extensions
from .locations import DELETION_MARKER_PATTERN
from .parsing import is_usable_output, parse_path_lines
from .registry import register_scanner

logger = logging.getLogger(__name__)


def build_orphan_command(storage_root: str, extensions: list[str], limit: int) -> str:
    patterns = " -o ".join(f'-name "*.{ext.lower()}"' for ext in extensions)
    return (
        f'find "{storage_root}" -type f \\( {patterns} \\) 2>/dev/null'
        f" | grep -E '{DELETION_MARKER_PATTERN}'"
        f" | head -{limit}"
    )


class OrphanSweepScanner(BaseScanner):
    source_id = "orphan_sweep"
    name = "Orphaned remnants"
    description = "Find typed files anywhere under the root whose path marks them as deleted"

    async def scan(self, ctx: ScanContext) -> AsyncIterator[str]:
        config = ctx.config
        extensions = enabled_extensions(config.photos, config.videos, config.documents, config.audio)
        if not extensions or ctx.cancelled:
            return

        ctx.report("Scanning for orphaned or permanently deleted file remnants...")
        command = build_orphan_command(ctx.storage_root, extensions, settings.orphan_find_limit)
        output = await ctx.client.shell(
            ctx.device_id, command, timeout=settings.scan_command_timeout,
        )
        if ctx.cancelled or not is_usable_output(output):
            return

        for path in parse_path_lines(output):
            yield path


register_scanner(OrphanSweepScanner())
