"""
JobDeck - Master resume endpoints.
"""
from fastapi import APIRouter, Depends, Request

from ..dependencies import get_store
from ..rate_limit import limiter, RATE_LIMIT_GENERAL
from ..schemas import MasterResume
from ..store import ResumeStore

router = APIRouter()


@router.get("/", response_model=MasterResume)
def get_master_resume(store: ResumeStore = Depends(get_store)):
    """Get the master resume."""
    return store.master_resume


@router.get("/status")
def get_resume_status(store: ResumeStore = Depends(get_store)):
    """Report whether the resume is ready to generate applications from."""
    resume = store.master_resume
    return {
        "complete": resume.is_complete,
        "has_name": bool(resume.header.name),
        "experience_count": len(resume.experience),
    }


@router.put("/", response_model=MasterResume)
@limiter.limit(RATE_LIMIT_GENERAL)
def replace_master_resume(
    request: Request,
    resume: MasterResume,
    store: ResumeStore = Depends(get_store)
):
    """Load or replace the master resume."""
    return store.load_master_resume(resume)
