"""Deleted-file discovery: gather candidate paths, then classify them.

`discover()` is a finite async generator. Callers iterate it to receive
records as they are accepted; progress text and the running "files scanned"
count go to optional callbacks, and `ctx.checkpoint()` is awaited after each
device command and progress report so the owner can flush them while a
long stage is still running. Cancellation is cooperative: setting the
context's cancel event stops the current loop at its next boundary and
everything already yielded stays valid.
"""

import logging
import posixpath
from typing import AsyncIterator, Callable, Optional

from ..config import settings
from ..models.files import FileStatus, RecoverableFile
from ..scanners import ScanContext, get_all_scanners
from ..scanners.classifier import classify_provenance
from ..scanners.filetypes import (
    enabled_extensions,
    extension_of,
    format_size,
    normalize_type,
)
from ..scanners.parsing import parse_ls_long_size, parse_size
from .device_service import has_root

logger = logging.getLogger(__name__)

_SIZE_FAILURE_MARKERS = ("No such file", "error")


def _size_output_failed(output: str) -> bool:
    return not output.strip() or any(m in output for m in _SIZE_FAILURE_MARKERS)


async def collect_candidates(ctx: ScanContext) -> list[str]:
    """Run every applicable stage scanner; deduplicated, in discovery order."""
    seen: dict[str, None] = {}

    for scanner in get_all_scanners():
        if ctx.cancelled:
            break
        if not scanner.should_run(ctx):
            if scanner.requires_root:
                ctx.report(
                    "Note: No root access. Cannot scan for permanently deleted files. "
                    "Root required for advanced recovery."
                )
                await ctx.checkpoint()
            continue

        before = len(seen)
        logger.info(f"[{scanner.name}] Starting sweep on {ctx.device_id}:{ctx.storage_root}")
        try:
            async for path in scanner.scan(ctx):
                seen.setdefault(path, None)
        except Exception as e:
            logger.exception(f"[{scanner.name}] sweep failed")
            ctx.report(f"Note: {scanner.name} encountered issues: {e}")
        await ctx.checkpoint()
        logger.info(f"[{scanner.name}] Done: {len(seen) - before} new paths, {len(seen)} total")

    return list(seen)


async def query_size(ctx: ScanContext, path: str) -> int:
    """Size in bytes via stat (BSD then GNU flavour), then ls -ld; 0 if unknown."""
    client, device = ctx.client, ctx.device_id

    output = await client.shell(device, f'stat -f%z "{path}" 2>/dev/null')
    if _size_output_failed(output):
        output = await client.shell(device, f'stat -c %s "{path}" 2>/dev/null')
    if _size_output_failed(output):
        listing = await client.shell(device, f'ls -ld "{path}" 2>/dev/null')
        output = ""
        if listing.strip() and "No such file" not in listing:
            output = parse_ls_long_size(listing)

    return parse_size(output)


def build_record(path: str, file_type: str, size: int) -> RecoverableFile:
    parent = posixpath.dirname(path).replace("\\", "/")
    return RecoverableFile(
        file_name=posixpath.basename(path) or "unknown",
        file_type=file_type,
        size_bytes=size,
        size_text=format_size(size),
        parent_dir=parent,
        device_path=path,
        status=classify_provenance(path),
    )


async def classify_path(
    ctx: ScanContext,
    path: str,
    extensions: set[str],
    types: set[str],
) -> Optional[RecoverableFile]:
    """One candidate through the type and size filters; None if rejected."""
    other = ctx.config.other
    extension = extension_of(path)
    if not other and extension and extension not in extensions:
        return None

    size = await query_size(ctx, path)
    if size <= 0 or not extension:
        return None

    file_type = normalize_type(extension)
    if not other and file_type not in types:
        return None

    return build_record(path, file_type, size)


async def classify_candidates(
    ctx: ScanContext,
    candidates: list[str],
    scanned_callback: Optional[Callable[[int], None]] = None,
) -> AsyncIterator[RecoverableFile]:
    config = ctx.config
    extensions = set(enabled_extensions(config.photos, config.videos, config.documents, config.audio))
    types = {normalize_type(ext) for ext in extensions}
    every = max(settings.progress_every, 1)
    total = len(candidates)
    scanned = 0
    found = 0

    for raw in candidates:
        if ctx.cancelled:
            break

        scanned += 1
        record = await classify_path(ctx, raw.strip(), extensions, types)
        if record is not None:
            found += 1
            yield record

        if scanned % every == 0 or scanned == total:
            if scanned_callback:
                scanned_callback(scanned)
            ctx.report(f"Scanned {scanned}/{total} files... Found {found} matching files.")
            await ctx.checkpoint()

    if scanned_callback:
        scanned_callback(scanned)


async def discover(
    ctx: ScanContext,
    scanned_callback: Optional[Callable[[int], None]] = None,
    total_callback: Optional[Callable[[int], None]] = None,
) -> AsyncIterator[RecoverableFile]:
    """Full scan: sweep every stage, then classify and yield accepted files."""
    found: list[RecoverableFile] = []
    try:
        ctx.report("Starting deleted file recovery scan...")
        ctx.has_root = await has_root(ctx.client, ctx.device_id)
        await ctx.checkpoint()

        candidates = await collect_candidates(ctx)
        if not candidates:
            ctx.report(
                "No deleted files found in common locations. Without root access, "
                "permanently deleted files cannot be recovered."
            )
            return

        if total_callback:
            total_callback(len(candidates))
        ctx.report(f"Found {len(candidates)} potentially deleted files. Analyzing...")
        await ctx.checkpoint()
        async for record in classify_candidates(ctx, candidates, scanned_callback):
            found.append(record)
            yield record

        if ctx.cancelled:
            ctx.report(f"Scan cancelled. Kept {len(found)} files found so far.")
            return

        deleted = sum(1 for f in found if f.status.is_deleted)
        permanent = sum(1 for f in found if f.status == FileStatus.ORPHANED)
        ctx.report(
            f"Scan complete! Found {len(found)} deleted files "
            f"({deleted} deleted, {permanent} permanently deleted) ready for recovery."
        )
    except Exception as e:
        logger.exception("Scan aborted")
        ctx.report(f"Error during scan: {e}")
