"""File preview API endpoint."""

import mimetypes
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from ..config import settings
from ..services.preview_cache import fetch_preview
from ..services.scan_manager import scan_manager
from ..utils.adb import adb_client

router = APIRouter(prefix="/preview", tags=["preview"])


@router.get("/{job_id}/{file_id}")
async def preview_file(job_id: str, file_id: str):
    job = scan_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Scan job not found")

    file = scan_manager.get_file(job_id, file_id)
    if not file:
        raise HTTPException(status_code=404, detail="File not found")

    # Size check
    if file.size_bytes > settings.max_preview_size_mb * 1024 * 1024:
        raise HTTPException(status_code=413, detail="File too large for preview")

    path = await fetch_preview(adb_client, job.config.device_id, file)
    if path is None:
        raise HTTPException(status_code=404, detail="Could not read file from device")

    mime_type = mimetypes.guess_type(file.file_name)[0] or "application/octet-stream"

    return FileResponse(
        path,
        media_type=mime_type,
        headers={"Content-Disposition": f'inline; filename="{file.file_name}"'},
    )
