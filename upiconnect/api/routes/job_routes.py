"""
Job Routes

GET /jobs - List open jobs (search by title / tag)
POST /jobs - Create job posting (recruiter only)
GET /jobs/mine - Jobs posted by the current recruiter
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (owner only)
PUT /jobs/{job_id}/availability - Set available slots (owner only)
PUT /jobs/{job_id}/status - Open / close job (owner only)
DELETE /jobs/{job_id} - Delete job and its applications (owner only)
POST /jobs/{job_id}/apply - Apply to job (student only)
GET /jobs/{job_id}/applications - Applicants for a job (owner only)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from upiconnect.core.auth import get_current_student, get_current_recruiter
from upiconnect.services import job_service, application_service
from upiconnect.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobAvailabilityUpdate, JobStatusUpdate,
    JobStatusResponse, ApplicationResponse, MessageResponse, CreatedResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _require_owner(job_id: int, recruiter_id: int) -> None:
    """404 rather than 403 so other recruiters cannot discover job ids."""
    if job_service.get_job_owner(job_id) != recruiter_id:
        raise HTTPException(status_code=404, detail="Job not found or access denied")


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    search_title: Optional[str] = Query(None, description="Substring of the job title"),
    search_tag: Optional[str] = Query(None, description="Substring of any job tag"),
):
    """List open jobs, newest first."""
    return job_service.list_open_jobs(search_title=search_title, search_tag=search_tag)


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, recruiter: dict = Depends(get_current_recruiter)):
    """Create a new job posting. Slots default to 1 and status to ABIERTA."""
    payload = job.model_dump()
    payload["status"] = job.status.value
    payload["recruiter_id"] = recruiter["recruiter_id"]
    return job_service.create_job(payload)


@router.get("/mine", response_model=List[JobResponse])
async def list_my_jobs(recruiter: dict = Depends(get_current_recruiter)):
    return job_service.list_recruiter_jobs(recruiter["recruiter_id"])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int):
    job = job_service.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.put("/{job_id}", response_model=MessageResponse)
async def update_job(job_id: int, data: JobUpdate, recruiter: dict = Depends(get_current_recruiter)):
    """Update job. Only provided fields are updated."""
    _require_owner(job_id, recruiter["recruiter_id"])

    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    job_service.update_job(job_id, fields)
    return MessageResponse(message="Job updated successfully")


@router.put("/{job_id}/availability", response_model=MessageResponse)
async def update_availability(job_id: int, data: JobAvailabilityUpdate,
                              recruiter: dict = Depends(get_current_recruiter)):
    _require_owner(job_id, recruiter["recruiter_id"])
    job_service.update_job_availability(job_id, data.available_slots)
    return MessageResponse(message="Availability updated successfully")


@router.put("/{job_id}/status", response_model=JobStatusResponse)
async def update_status(job_id: int, data: JobStatusUpdate,
                        recruiter: dict = Depends(get_current_recruiter)):
    """
    Open or close a job. When closing, delete_applications removes every
    application except keep_application_id.
    """
    _require_owner(job_id, recruiter["recruiter_id"])
    deleted = job_service.set_job_status(
        job_id, data.status.value,
        delete_applications=data.delete_applications,
        keep_application_id=data.keep_application_id,
    )
    return JobStatusResponse(message=f"Job status set to {data.status.value}", deleted_applications=deleted)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: int, recruiter: dict = Depends(get_current_recruiter)):
    """Delete the job and its applications. Conversations are kept."""
    _require_owner(job_id, recruiter["recruiter_id"])
    job_service.delete_job(job_id)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=CreatedResponse, status_code=201)
async def apply_to_job(job_id: int, student: dict = Depends(get_current_student)):
    """Apply to an open job with free slots. Applying twice to the same job fails."""
    job = job_service.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job["status"] != job_service.JOB_OPEN:
        raise HTTPException(status_code=400, detail="Job is not accepting applications")
    if (job["available_slots"] or 0) <= 0:
        raise HTTPException(status_code=400, detail="No slots available")

    application = job_service.apply_to_job(job_id, student["student_id"])
    return CreatedResponse(id=application["id"], message="Application submitted successfully")


@router.get("/{job_id}/applications", response_model=List[ApplicationResponse])
async def list_job_applications(job_id: int, recruiter: dict = Depends(get_current_recruiter)):
    _require_owner(job_id, recruiter["recruiter_id"])
    return application_service.list_job_applications(job_id)
