"""Recovery API endpoints."""

from fastapi import APIRouter, HTTPException

from ..models.recovery import RecoveryRequest
from ..services.recovery_manager import recovery_manager
from ..services.scan_manager import scan_manager
from ..utils.permissions import check_path_writable

router = APIRouter(prefix="/recovery", tags=["recovery"])


@router.post("/start")
async def start_recovery(request: RecoveryRequest):
    if not scan_manager.get_job(request.job_id):
        raise HTTPException(status_code=404, detail="Scan job not found")
    # Validate destination
    if not check_path_writable(request.destination):
        raise HTTPException(status_code=400, detail="Destination is not writable")
    if not recovery_manager.files_for(request):
        raise HTTPException(status_code=409, detail="No files selected for recovery")

    job = recovery_manager.create_job(request)
    await recovery_manager.start_recovery(job.id)
    return {"job_id": job.id, "status": job.status}


@router.get("/jobs/{job_id}")
async def get_recovery_job(job_id: str):
    job = recovery_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Recovery job not found")
    return job
