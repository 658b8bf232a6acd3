"""
JobDeck - Store persistence.

Keeps the database in step with the in-memory store. ``SqlStorePersistence``
subscribes to the store and writes each change in its own committed session;
``load_store`` rebuilds the store from the tables at startup.
"""
import json
import logging
from typing import List

from sqlalchemy.orm import Session

from .database import SessionLocal, get_resilient_session, with_retry
from .models import (
    ApplicationRecord, InterviewRecord, JobDescriptionRecord,
    MasterResumeRecord, ReminderRecord
)
from .schemas import (
    Application, Interview, JobDescription, MasterResume, Reminder
)
from .store import ResumeStore, StoreChange, StoreEvent

logger = logging.getLogger("jobdeck.persistence")

MASTER_RESUME_ROW_ID = 1


# --- Record conversion ---

def _dump_list(values: List[str]) -> str:
    return json.dumps(list(values or []))


def _load_list(text: str) -> List[str]:
    return json.loads(text) if text else []


def job_to_record(job: JobDescription) -> JobDescriptionRecord:
    return JobDescriptionRecord(
        id=job.id,
        company=job.company,
        position=job.position,
        location=job.location,
        salary_range=job.salary_range,
        required_skills=_dump_list(job.required_skills),
        preferred_skills=_dump_list(job.preferred_skills),
        keywords=_dump_list(job.keywords),
        raw_text=job.raw_text,
        created_at=job.created_at,
    )


def record_to_job(record: JobDescriptionRecord) -> JobDescription:
    return JobDescription(
        id=record.id,
        company=record.company,
        position=record.position,
        location=record.location,
        salary_range=record.salary_range,
        required_skills=_load_list(record.required_skills),
        preferred_skills=_load_list(record.preferred_skills),
        keywords=_load_list(record.keywords),
        raw_text=record.raw_text,
        created_at=record.created_at,
    )


def application_to_record(application: Application) -> ApplicationRecord:
    return ApplicationRecord(
        id=application.id,
        company=application.company,
        role=application.role,
        location=application.location,
        status=application.status.value,
        applied_date=application.applied_date,
        job_description_id=application.job_description_id,
        notes=application.notes,
        created_at=application.created_at,
        interviews=[
            InterviewRecord(
                id=interview.id,
                application_id=application.id,
                position=position,
                date=interview.date,
                time=interview.time,
                type=interview.type.value,
                completed=interview.completed,
                notes=interview.notes,
            )
            for position, interview in enumerate(application.interviews)
        ],
        reminders=[
            ReminderRecord(
                id=reminder.id,
                application_id=application.id,
                position=position,
                date=reminder.date,
                type=reminder.type,
                completed=reminder.completed,
                note=reminder.note,
            )
            for position, reminder in enumerate(application.reminders)
        ],
    )


def record_to_application(record: ApplicationRecord) -> Application:
    return Application(
        id=record.id,
        company=record.company,
        role=record.role,
        location=record.location,
        status=record.status,
        applied_date=record.applied_date,
        job_description_id=record.job_description_id,
        notes=record.notes,
        created_at=record.created_at,
        interviews=[
            Interview(
                id=i.id, date=i.date, time=i.time, type=i.type,
                completed=bool(i.completed), notes=i.notes,
            )
            for i in record.interviews
        ],
        reminders=[
            Reminder(
                id=r.id, date=r.date, type=r.type,
                completed=bool(r.completed), note=r.note,
            )
            for r in record.reminders
        ],
    )


# --- Loading ---

def load_store(session_factory=None) -> ResumeStore:
    """Build a store from the persisted tables."""
    db: Session = (session_factory or SessionLocal)()
    try:
        resume_row = db.get(MasterResumeRecord, MASTER_RESUME_ROW_ID)
        resume = (
            MasterResume.model_validate_json(resume_row.resume_data)
            if resume_row else MasterResume()
        )
        jobs = [
            record_to_job(r)
            for r in db.query(JobDescriptionRecord).order_by(JobDescriptionRecord.created_at.asc()).all()
        ]
        applications = [
            record_to_application(r)
            for r in db.query(ApplicationRecord).order_by(ApplicationRecord.created_at.asc()).all()
        ]
    finally:
        db.close()

    logger.info(f"Loaded store: {len(jobs)} job descriptions, {len(applications)} applications")
    return ResumeStore(master_resume=resume, job_descriptions=jobs, applications=applications)


# --- Writing ---

class SqlStorePersistence:
    """
    Store listener that mirrors every change into the database.

    Usage:
        store.subscribe(SqlStorePersistence())
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or SessionLocal

    def __call__(self, change: StoreChange) -> None:
        handler = {
            StoreEvent.RESUME_REPLACED: self._save_resume,
            StoreEvent.JOB_ADDED: self._save_job,
            StoreEvent.JOB_REMOVED: self._delete_job,
            StoreEvent.APPLICATION_ADDED: self._save_application,
            StoreEvent.APPLICATION_UPDATED: self._save_application,
            StoreEvent.APPLICATION_REMOVED: self._delete_application,
        }[change.event]
        handler(change)

    @with_retry
    def _save_resume(self, change: StoreChange) -> None:
        with get_resilient_session(self.session_factory) as db:
            db.merge(MasterResumeRecord(
                id=MASTER_RESUME_ROW_ID,
                resume_data=change.payload.model_dump_json(),
            ))

    @with_retry
    def _save_job(self, change: StoreChange) -> None:
        with get_resilient_session(self.session_factory) as db:
            db.merge(job_to_record(change.payload))

    @with_retry
    def _delete_job(self, change: StoreChange) -> None:
        with get_resilient_session(self.session_factory) as db:
            record = db.get(JobDescriptionRecord, change.subject_id)
            if record:
                db.delete(record)

    @with_retry
    def _save_application(self, change: StoreChange) -> None:
        # merge reconciles the child collections; dropped children are orphans and get deleted
        with get_resilient_session(self.session_factory) as db:
            db.merge(application_to_record(change.payload))

    @with_retry
    def _delete_application(self, change: StoreChange) -> None:
        with get_resilient_session(self.session_factory) as db:
            record = db.get(ApplicationRecord, change.subject_id)
            if record:
                db.delete(record)
