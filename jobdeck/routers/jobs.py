"""
JobDeck - Saved job description endpoints.

Job descriptions are usually created from the output of
POST /api/parse-job-description after the user reviews it.
"""
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional

from ..dependencies import get_store
from ..rate_limit import limiter, RATE_LIMIT_GENERAL
from ..schemas import JobDescription, JobDescriptionCreate
from ..store import ResumeStore

router = APIRouter()


@router.get("/", response_model=List[JobDescription])
def list_job_descriptions(
    search: Optional[str] = Query(None, max_length=200),
    store: ResumeStore = Depends(get_store)
):
    """List saved job descriptions, newest first, optionally filtered by company or position."""
    jobs = store.job_descriptions
    if search:
        term = search.lower()
        jobs = [
            j for j in jobs
            if term in j.company.lower() or term in j.position.lower()
        ]
    return sorted(jobs, key=lambda j: j.created_at, reverse=True)


@router.get("/{job_id}", response_model=JobDescription)
def get_job_description(job_id: str, store: ResumeStore = Depends(get_store)):
    """Get a saved job description."""
    return store.get_job_description(job_id)


@router.post("/", response_model=JobDescription)
@limiter.limit(RATE_LIMIT_GENERAL)
def create_job_description(
    request: Request,
    job: JobDescriptionCreate,
    store: ResumeStore = Depends(get_store)
):
    """Save a job description."""
    return store.add_job_description(JobDescription(**job.model_dump()))


@router.delete("/{job_id}")
@limiter.limit(RATE_LIMIT_GENERAL)
def delete_job_description(
    request: Request,
    job_id: str,
    store: ResumeStore = Depends(get_store)
):
    """Remove a saved job description."""
    store.remove_job_description(job_id)
    return {"message": "Job description deleted"}
