"""
Tests for mirroring store changes into the database (jobdeck/persistence.py).

Uses an in-memory SQLite engine per test; the persistence listener writes
through its own sessions exactly as it does in the running app.
"""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from jobdeck.database import create_app_engine, init_db
from jobdeck.models import ApplicationRecord, InterviewRecord, ReminderRecord
from jobdeck.persistence import SqlStorePersistence, load_store
from jobdeck.schemas import ApplicationStatus, Interview, Reminder
from jobdeck.store import ResumeStore


@pytest.fixture
def session_factory():
    engine = create_app_engine("sqlite:///:memory:")
    init_db(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def persisted_store(session_factory):
    store = ResumeStore()
    store.subscribe(SqlStorePersistence(session_factory))
    return store


def _count(session_factory, model):
    db = session_factory()
    try:
        return db.query(model).count()
    finally:
        db.close()


class TestLoadStore:
    def test_empty_database_gives_empty_store(self, session_factory):
        store = load_store(session_factory)
        assert store.applications == []
        assert store.job_descriptions == []
        assert store.master_resume.is_complete is False


class TestRoundTrip:
    def test_resume_survives_reload(self, session_factory, persisted_store, complete_resume):
        persisted_store.load_master_resume(complete_resume)
        persisted_store.load_master_resume(complete_resume.model_copy(update={"skills": {"cloud": ["GCP"]}}))

        reloaded = load_store(session_factory).master_resume
        assert reloaded.header.name == "Jordan Lee"
        assert reloaded.skills == {"cloud": ["GCP"]}

    def test_job_descriptions(self, session_factory, persisted_store, sample_job):
        persisted_store.add_job_description(sample_job)
        reloaded = load_store(session_factory).job_descriptions
        assert len(reloaded) == 1
        assert reloaded[0].id == sample_job.id
        assert reloaded[0].required_skills == ["Python", "Kubernetes"]

        persisted_store.remove_job_description(sample_job.id)
        assert load_store(session_factory).job_descriptions == []

    def test_application_with_children(self, session_factory, persisted_store, make_application):
        app = make_application(
            status=ApplicationStatus.INTERVIEW,
            interviews=[
                Interview(date=date(2026, 10, 22), time="13:00"),
                Interview(date=date(2026, 10, 20), time="09:00"),
            ],
            reminders=[Reminder(date=date(2026, 10, 18), type="follow-up")],
        )
        persisted_store.add_application(app)

        reloaded = load_store(session_factory).get_application(app.id)
        assert reloaded.status == ApplicationStatus.INTERVIEW
        assert reloaded.created_at == app.created_at
        assert [i.id for i in reloaded.interviews] == [i.id for i in app.interviews]
        assert reloaded.interviews[0].time == "13:00"
        assert reloaded.reminders[0].type == "follow-up"


class TestUpdates:
    def test_nested_changes_are_reconciled(self, session_factory, persisted_store, make_application):
        app = persisted_store.add_application(make_application())
        keep = Interview(date=date(2026, 10, 20))
        drop = Interview(date=date(2026, 10, 21))
        persisted_store.add_interview(app.id, keep)
        persisted_store.add_interview(app.id, drop)
        persisted_store.update_interview(app.id, keep.id, {"completed": True})
        persisted_store.remove_interview(app.id, drop.id)

        reloaded = load_store(session_factory).get_application(app.id)
        assert [i.id for i in reloaded.interviews] == [keep.id]
        assert reloaded.interviews[0].completed is True
        assert _count(session_factory, InterviewRecord) == 1

    def test_field_update(self, session_factory, persisted_store, make_application):
        app = persisted_store.add_application(make_application())
        persisted_store.update_application(app.id, {"status": ApplicationStatus.OFFER})
        assert load_store(session_factory).get_application(app.id).status == ApplicationStatus.OFFER

    def test_removing_application_removes_children(self, session_factory, persisted_store, make_application):
        app = persisted_store.add_application(make_application(
            interviews=[Interview(date=date(2026, 10, 20))],
            reminders=[Reminder(date=date(2026, 10, 19)), Reminder(date=date(2026, 10, 25))],
        ))
        assert _count(session_factory, ReminderRecord) == 2

        persisted_store.remove_application(app.id)
        assert _count(session_factory, ApplicationRecord) == 0
        assert _count(session_factory, InterviewRecord) == 0
        assert _count(session_factory, ReminderRecord) == 0


class TestFailedWrites:
    def test_store_unchanged_when_database_rejects_write(self, session_factory, make_application):
        def rejecting_factory():
            raise IntegrityError("INSERT INTO applications", {}, Exception("constraint failed"))

        store = ResumeStore()
        store.subscribe(SqlStorePersistence(rejecting_factory))

        with pytest.raises(IntegrityError):
            store.add_application(make_application())
        assert store.applications == []
        assert _count(session_factory, ApplicationRecord) == 0

