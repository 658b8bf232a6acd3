"""
JobDeck - CRUD API for job applications.

Endpoints for tracking applications and their interview and reminder
schedules. Interviews and reminders belong to one application and are
removed with it.
"""
from fastapi import APIRouter, Depends, Query, Request
from datetime import date
from typing import List, Optional

from ..dependencies import get_store
from ..rate_limit import limiter, RATE_LIMIT_GENERAL
from ..schemas import (
    Application, ApplicationCreate, ApplicationStatus, ApplicationUpdate,
    Interview, InterviewCreate, InterviewUpdate,
    Reminder, ReminderCreate, ReminderUpdate
)
from ..store import ResumeStore

router = APIRouter()

SORT_KEYS = {
    "created_at": lambda a: a.created_at,
    "applied_date": lambda a: a.applied_date or date.min,
    "company": lambda a: a.company.lower(),
    "role": lambda a: a.role.lower(),
    "status": lambda a: a.status.value,
}


@router.get("/", response_model=List[Application])
def list_applications(
    status: Optional[ApplicationStatus] = None,
    search: Optional[str] = Query(None, max_length=200),
    sort_by: Optional[str] = Query(None, pattern="^(created_at|applied_date|company|role|status)$"),
    sort_order: Optional[str] = Query("desc", pattern="^(asc|desc)$"),
    store: ResumeStore = Depends(get_store)
):
    """List applications with optional status filter, search, and sorting."""
    applications = store.applications

    if status:
        applications = [a for a in applications if a.status == status]

    # Search across company, role and location
    if search:
        term = search.lower()
        applications = [
            a for a in applications
            if term in a.company.lower()
            or term in a.role.lower()
            or term in (a.location or "").lower()
        ]

    key = SORT_KEYS[sort_by or "created_at"]
    return sorted(applications, key=key, reverse=(sort_order == "desc"))


@router.get("/{application_id}", response_model=Application)
def get_application(application_id: str, store: ResumeStore = Depends(get_store)):
    """Get a specific application."""
    return store.get_application(application_id)


@router.post("/", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def create_application(
    request: Request,
    application: ApplicationCreate,
    store: ResumeStore = Depends(get_store)
):
    """Create a new application."""
    data = application.model_dump()
    data["interviews"] = [Interview(**i) for i in data["interviews"]]
    data["reminders"] = [Reminder(**r) for r in data["reminders"]]
    return store.add_application(Application(**data))


@router.patch("/{application_id}", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def update_application(
    request: Request,
    application_id: str,
    application: ApplicationUpdate,
    store: ResumeStore = Depends(get_store)
):
    """Update an application."""
    update_data = application.model_dump(exclude_unset=True)
    return store.update_application(application_id, update_data)


@router.delete("/{application_id}")
@limiter.limit(RATE_LIMIT_GENERAL)
def delete_application(
    request: Request,
    application_id: str,
    store: ResumeStore = Depends(get_store)
):
    """Delete an application along with its interviews and reminders."""
    store.remove_application(application_id)
    return {"message": "Application deleted"}


# --- Interviews ---

@router.post("/{application_id}/interviews", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def add_interview(
    request: Request,
    application_id: str,
    interview: InterviewCreate,
    store: ResumeStore = Depends(get_store)
):
    """Schedule an interview for an application."""
    return store.add_interview(application_id, Interview(**interview.model_dump()))


@router.patch("/{application_id}/interviews/{interview_id}", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def update_interview(
    request: Request,
    application_id: str,
    interview_id: str,
    interview: InterviewUpdate,
    store: ResumeStore = Depends(get_store)
):
    """Update an interview, e.g. mark it completed."""
    return store.update_interview(application_id, interview_id, interview.model_dump(exclude_unset=True))


@router.delete("/{application_id}/interviews/{interview_id}", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def delete_interview(
    request: Request,
    application_id: str,
    interview_id: str,
    store: ResumeStore = Depends(get_store)
):
    """Remove an interview from an application."""
    return store.remove_interview(application_id, interview_id)


# --- Reminders ---

@router.post("/{application_id}/reminders", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def add_reminder(
    request: Request,
    application_id: str,
    reminder: ReminderCreate,
    store: ResumeStore = Depends(get_store)
):
    """Add a reminder to an application."""
    return store.add_reminder(application_id, Reminder(**reminder.model_dump()))


@router.patch("/{application_id}/reminders/{reminder_id}", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def update_reminder(
    request: Request,
    application_id: str,
    reminder_id: str,
    reminder: ReminderUpdate,
    store: ResumeStore = Depends(get_store)
):
    """Update a reminder, e.g. mark it completed."""
    return store.update_reminder(application_id, reminder_id, reminder.model_dump(exclude_unset=True))


@router.delete("/{application_id}/reminders/{reminder_id}", response_model=Application)
@limiter.limit(RATE_LIMIT_GENERAL)
def delete_reminder(
    request: Request,
    application_id: str,
    reminder_id: str,
    store: ResumeStore = Depends(get_store)
):
    """Remove a reminder from an application."""
    return store.remove_reminder(application_id, reminder_id)
