"""
JobTrack - CRUD API for job applications.

Endpoints for recording applications and moving them through
Applied / Interviewing / Rejected / Offer.
"""
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from typing import List, Optional
from datetime import datetime, timezone
import logging

from ..errors import NotFound, ValidationError
from ..schemas import (
    APIResponse, AIAnalysis, AttachAnalysisRequest,
    JobCreate, JobRecord, JobStats, JobStatus, JobUpdate
)
from ..services.job_analyzer import JobAnalyzer, get_job_analyzer
from ..storage import JobStore, get_job_store
from ..validation import validate_job_create, validate_job_description, validate_job_update

router = APIRouter()
logger = logging.getLogger("jobtrack.jobs")


def get_job_or_404(store: JobStore, job_id: str) -> JobRecord:
    """Fetch a job by id or raise NotFound."""
    job = store.get_by_id(job_id)
    if job is None:
        raise NotFound()
    return job


@router.get("", response_model=APIResponse[List[JobRecord]])
def list_jobs(
    status: Optional[JobStatus] = None,
    store: JobStore = Depends(get_job_store)
):
    """List jobs, newest first, optionally filtered by status."""
    jobs = store.list_all()
    if status:
        jobs = [job for job in jobs if job.status == status]
    jobs.sort(key=lambda job: job.date_added, reverse=True)
    return {"success": True, "data": jobs}


@router.get("/stats", response_model=APIResponse[JobStats])
def get_job_stats(store: JobStore = Depends(get_job_store)):
    """Count jobs per status for the dashboard."""
    jobs = store.list_all()
    by_status = {status.value: 0 for status in JobStatus}
    for job in jobs:
        by_status[job.status.value] += 1
    return {"success": True, "data": JobStats(total=len(jobs), by_status=by_status)}


@router.get("/{job_id}", response_model=APIResponse[JobRecord])
def get_job(job_id: str, store: JobStore = Depends(get_job_store)):
    """Get a specific job."""
    return {"success": True, "data": get_job_or_404(store, job_id)}


@router.post("", response_model=APIResponse[JobRecord], status_code=201)
def create_job(job: JobCreate, store: JobStore = Depends(get_job_store)):
    """Create a new job application."""
    fields = validate_job_create(job.model_dump())
    return {"success": True, "data": store.create(fields)}


@router.put("/{job_id}", response_model=APIResponse[JobRecord])
def update_job(
    job_id: str,
    job: JobUpdate,
    store: JobStore = Depends(get_job_store)
):
    """Update the supplied fields of a job."""
    get_job_or_404(store, job_id)
    fields = validate_job_update(job.model_dump(exclude_unset=True))
    return {"success": True, "data": store.update(job_id, fields)}


@router.delete("/{job_id}")
def delete_job(job_id: str, store: JobStore = Depends(get_job_store)):
    """Delete a job."""
    if not store.delete(job_id):
        raise NotFound()
    return {"success": True, "data": None}


@router.post("/{job_id}/analysis", response_model=APIResponse[JobRecord])
async def analyze_and_attach(
    job_id: str,
    request: Optional[AttachAnalysisRequest] = None,
    store: JobStore = Depends(get_job_store),
    analyzer: JobAnalyzer = Depends(get_job_analyzer)
):
    """
    Analyze a job's description and attach the result to the job.

    Uses the description in the request body when given, otherwise the one
    already stored on the job. A supplied description is saved as well.
    """
    job = await run_in_threadpool(get_job_or_404, store, job_id)
    description = request.job_description if request and request.job_description is not None else job.job_description
    if description is None:
        raise ValidationError("Job has no description to analyze")
    description = validate_job_description(description)

    result = await analyzer.analyze(description)
    analysis = AIAnalysis(
        summary=result.summary,
        suggested_skills=result.suggested_skills,
        analyzed_at=datetime.now(timezone.utc),
    )

    fields = {"ai_analysis": analysis}
    if description.strip() != (job.job_description or ""):
        fields["job_description"] = description.strip()
    logger.info(f"Attaching analysis to job {job_id}")
    updated = await run_in_threadpool(store.update, job_id, fields)
    return {"success": True, "data": updated}
