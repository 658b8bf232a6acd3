"""
JobDeck - Application state container.

The store holds the master resume, saved job descriptions and tracked
applications, and notifies subscribers after every change. It is created
once at startup, attached to ``app.state`` and handed to routes through a
dependency; persistence is just another subscriber.

Routes run in worker threads, so every operation holds a re-entrant lock for
its whole read-modify-write and notification. If a subscriber raises, the
change is rolled back before the error reaches the caller.

Usage:
    store = ResumeStore()
    unsubscribe = store.subscribe(lambda change: print(change.event))
    store.add_application(Application(company="Acme", role="Engineer"))
"""
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional
import logging
import threading

from .schemas import (
    Application, Interview, JobDescription, MasterResume, Reminder
)

logger = logging.getLogger("jobdeck.store")


class StoreError(Exception):
    """Base exception for store operations."""
    pass


class DuplicateIdentityError(StoreError):
    """A record with the same id already exists."""
    pass


class RecordNotFoundError(StoreError):
    """No record exists with the requested id."""
    pass


class StoreEvent(str, Enum):
    RESUME_REPLACED = "resume_replaced"
    JOB_ADDED = "job_added"
    JOB_REMOVED = "job_removed"
    APPLICATION_ADDED = "application_added"
    APPLICATION_UPDATED = "application_updated"
    APPLICATION_REMOVED = "application_removed"


@dataclass(frozen=True)
class StoreChange:
    """
    Notification delivered to subscribers.

    ``payload`` is the record after the change: the new resume, the added job,
    the added or updated application, or the removed record.
    """
    event: StoreEvent
    subject_id: Optional[str]
    payload: Any


Listener = Callable[[StoreChange], None]


class ResumeStore:
    """Mutable, observable state for a single user."""

    def __init__(
        self,
        master_resume: Optional[MasterResume] = None,
        job_descriptions: Iterable[JobDescription] = (),
        applications: Iterable[Application] = ()
    ):
        self._lock = threading.RLock()
        self._master_resume = master_resume or MasterResume()
        self._jobs: Dict[str, JobDescription] = {}
        self._applications: Dict[str, Application] = {}
        self._listeners: List[Listener] = []

        for job in job_descriptions:
            self._check_unique(self._jobs, job.id, "Job description")
            self._jobs[job.id] = job
        for application in applications:
            self._check_unique(self._applications, application.id, "Application")
            self._applications[application.id] = application

    # --- Observer interface ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent, subject_id: Optional[str], payload: Any) -> None:
        change = StoreChange(event=event, subject_id=subject_id, payload=payload)
        logger.debug(f"Store change: {event.value} {subject_id or ''}")
        for listener in list(self._listeners):
            listener(change)

    @contextmanager
    def _mutation(self):
        """
        Hold the lock for one operation and undo it if anything raises.

        Stored records are replaced, never mutated in place, so shallow
        copies of the dicts are enough to restore the previous state.
        """
        with self._lock:
            snapshot = (self._master_resume, dict(self._jobs), dict(self._applications))
            try:
                yield
            except Exception:
                self._master_resume, self._jobs, self._applications = snapshot
                raise

    # --- Read access (copies, so state only changes through operations) ---

    @property
    def master_resume(self) -> MasterResume:
        with self._lock:
            return self._master_resume.model_copy(deep=True)

    @property
    def job_descriptions(self) -> List[JobDescription]:
        with self._lock:
            return [job.model_copy(deep=True) for job in self._jobs.values()]

    @property
    def applications(self) -> List[Application]:
        with self._lock:
            return [app.model_copy(deep=True) for app in self._applications.values()]

    def get_job_description(self, job_id: str) -> JobDescription:
        with self._lock:
            return self._require(self._jobs, job_id, "Job description").model_copy(deep=True)

    def get_application(self, application_id: str) -> Application:
        with self._lock:
            return self._require(self._applications, application_id, "Application").model_copy(deep=True)

    # --- Master resume ---

    def load_master_resume(self, resume: MasterResume) -> MasterResume:
        """Load or replace the master resume."""
        with self._mutation():
            self._master_resume = resume.model_copy(deep=True)
            self._notify(StoreEvent.RESUME_REPLACED, None, self.master_resume)
            return self.master_resume

    # --- Job descriptions ---

    def add_job_description(self, job: JobDescription) -> JobDescription:
        with self._mutation():
            self._check_unique(self._jobs, job.id, "Job description")
            self._jobs[job.id] = job.model_copy(deep=True)
            self._notify(StoreEvent.JOB_ADDED, job.id, self.get_job_description(job.id))
            return self.get_job_description(job.id)

    def remove_job_description(self, job_id: str) -> JobDescription:
        with self._mutation():
            removed = self._require(self._jobs, job_id, "Job description")
            del self._jobs[job_id]
            self._notify(StoreEvent.JOB_REMOVED, job_id, removed)
            return removed

    # --- Applications ---

    def add_application(self, application: Application) -> Application:
        with self._mutation():
            self._check_unique(self._applications, application.id, "Application")
            self._check_children_unique(application)
            self._applications[application.id] = application.model_copy(deep=True)
            self._notify(StoreEvent.APPLICATION_ADDED, application.id, self.get_application(application.id))
            return self.get_application(application.id)

    def update_application(self, application_id: str, changes: Dict[str, Any]) -> Application:
        """
        Apply field changes to an application.

        The merged record is re-validated, so invalid values raise a
        pydantic ValidationError and leave the store untouched. The id and
        creation timestamp cannot be changed.
        """
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            changes = {k: v for k, v in changes.items() if k not in ("id", "created_at")}
            return self._replace_application(
                Application.model_validate({**current.model_dump(), **changes})
            )

    def remove_application(self, application_id: str) -> Application:
        """Remove an application together with its interviews and reminders."""
        with self._mutation():
            removed = self._require(self._applications, application_id, "Application")
            del self._applications[application_id]
            self._notify(StoreEvent.APPLICATION_REMOVED, application_id, removed)
            return removed

    # --- Interviews ---

    def add_interview(self, application_id: str, interview: Interview) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            if any(i.id == interview.id for i in current.interviews):
                raise DuplicateIdentityError(f"Interview {interview.id} already exists")
            return self._replace_application(
                current.model_copy(update={"interviews": current.interviews + [interview]})
            )

    def update_interview(self, application_id: str, interview_id: str, changes: Dict[str, Any]) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            interviews = []
            found = False
            for interview in current.interviews:
                if interview.id == interview_id:
                    interview = Interview.model_validate({**interview.model_dump(), **changes, "id": interview_id})
                    found = True
                interviews.append(interview)
            if not found:
                raise RecordNotFoundError(f"Interview {interview_id} not found")
            return self._replace_application(current.model_copy(update={"interviews": interviews}))

    def remove_interview(self, application_id: str, interview_id: str) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            interviews = [i for i in current.interviews if i.id != interview_id]
            if len(interviews) == len(current.interviews):
                raise RecordNotFoundError(f"Interview {interview_id} not found")
            return self._replace_application(current.model_copy(update={"interviews": interviews}))

    # --- Reminders ---

    def add_reminder(self, application_id: str, reminder: Reminder) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            if any(r.id == reminder.id for r in current.reminders):
                raise DuplicateIdentityError(f"Reminder {reminder.id} already exists")
            return self._replace_application(
                current.model_copy(update={"reminders": current.reminders + [reminder]})
            )

    def update_reminder(self, application_id: str, reminder_id: str, changes: Dict[str, Any]) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            reminders = []
            found = False
            for reminder in current.reminders:
                if reminder.id == reminder_id:
                    reminder = Reminder.model_validate({**reminder.model_dump(), **changes, "id": reminder_id})
                    found = True
                reminders.append(reminder)
            if not found:
                raise RecordNotFoundError(f"Reminder {reminder_id} not found")
            return self._replace_application(current.model_copy(update={"reminders": reminders}))

    def remove_reminder(self, application_id: str, reminder_id: str) -> Application:
        with self._mutation():
            current = self._require(self._applications, application_id, "Application")
            reminders = [r for r in current.reminders if r.id != reminder_id]
            if len(reminders) == len(current.reminders):
                raise RecordNotFoundError(f"Reminder {reminder_id} not found")
            return self._replace_application(current.model_copy(update={"reminders": reminders}))

    # --- Internals ---

    def _replace_application(self, application: Application) -> Application:
        self._applications[application.id] = application.model_copy(deep=True)
        self._notify(StoreEvent.APPLICATION_UPDATED, application.id, self.get_application(application.id))
        return self.get_application(application.id)

    @staticmethod
    def _require(records: Dict[str, Any], record_id: str, label: str):
        record = records.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{label} {record_id} not found")
        return record

    @staticmethod
    def _check_unique(records: Dict[str, Any], record_id: str, label: str) -> None:
        if record_id in records:
            raise DuplicateIdentityError(f"{label} {record_id} already exists")

    @staticmethod
    def _check_children_unique(application: Application) -> None:
        for label, children in (("Interview", application.interviews), ("Reminder", application.reminders)):
            seen = set()
            for child in children:
                if child.id in seen:
                    raise DuplicateIdentityError(f"{label} {child.id} already exists")
                seen.add(child.id)
