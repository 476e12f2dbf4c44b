"""Results API endpoints."""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..scanners.filetypes import normalize_type
from ..services.scan_manager import scan_manager

router = APIRouter(prefix="/results", tags=["results"])


class SelectionRequest(BaseModel):
    file_ids: list[str] = []
    selected: bool = True
    all_files: bool = False


def _require_job(job_id: str) -> None:
    if not scan_manager.get_job(job_id):
        raise HTTPException(status_code=404, detail="Scan job not found")


@router.get("/{job_id}")
async def get_results(
    job_id: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    search: Optional[str] = None,
    file_type: Optional[str] = None,
    status: Optional[str] = None,
    sort_by: Optional[str] = Query(None, pattern="^(file_name|size|file_type|status|parent_dir)$"),
    sort_order: str = Query("asc", pattern="^(asc|desc)$"),
):
    _require_job(job_id)
    files = scan_manager.get_results(job_id)

    # Filter
    if search:
        search_lower = search.lower()
        files = [f for f in files if search_lower in f.file_name.lower() or search_lower in f.device_path.lower()]
    if file_type:
        wanted = normalize_type(file_type)
        files = [f for f in files if f.file_type == wanted]
    if status:
        files = [f for f in files if f.status.value == status or f.status.name.lower() == status.lower()]

    total = len(files)

    # Discovery order unless a sort is requested
    if sort_by:
        sort_key_map = {
            "file_name": lambda f: f.file_name.lower(),
            "size": lambda f: f.size_bytes,
            "file_type": lambda f: f.file_type,
            "status": lambda f: f.status.value,
            "parent_dir": lambda f: f.parent_dir.lower(),
        }
        files = sorted(files, key=sort_key_map[sort_by], reverse=sort_order == "desc")

    # Paginate
    page = files[offset:offset + limit]

    return {
        "job_id": job_id,
        "total": total,
        "offset": offset,
        "limit": limit,
        "files": page,
    }


@router.get("/{job_id}/stats")
async def get_result_stats(job_id: str):
    _require_job(job_id)
    return scan_manager.get_result_stats(job_id)


@router.post("/{job_id}/select")
async def select_files(job_id: str, request: SelectionRequest):
    _require_job(job_id)
    wanted = set(request.file_ids)
    changed = 0
    for f in scan_manager.get_results(job_id):
        if request.all_files or f.id in wanted:
            f.selected = request.selected
            changed += 1
    return {"changed": changed, **scan_manager.get_result_stats(job_id)}
