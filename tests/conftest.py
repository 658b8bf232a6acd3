"""
Shared test fixtures for JobDeck tests.

Points the app at an in-memory database and disables rate limiting before any
jobdeck module is imported, since settings are read at import time.
"""

import os

os.environ.setdefault("JOBDECK_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JOBDECK_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JOBDECK_GEMINI_API_KEY", "")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from jobdeck.dependencies import get_store
from jobdeck.main import app
from jobdeck.rate_limit import limiter
from jobdeck.schemas import (
    Application, ApplicationStatus, ExperienceEntry, Interview,
    InterviewType, JobDescription, MasterResume, PersonalInfo, Reminder
)
from jobdeck.services.ai_service import AIService, get_ai_service
from jobdeck.store import ResumeStore


# ============================================================
# Fake AI service: real prompt/parse path, canned model reply
# ============================================================


class FakeAIService(AIService):
    """Returns a preset reply (or raises) instead of calling Gemini."""

    def __init__(self, reply="{}", error=None):
        super().__init__(api_key="test-key")
        self.reply = reply
        self.error = error
        self.prompts = []

    async def _generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


# ============================================================
# Time fixtures
# ============================================================


@pytest.fixture
def now():
    """Fixed evaluation instant: Friday 2026-10-16 at noon."""
    return datetime(2026, 10, 16, 12, 0)


# ============================================================
# Domain fixtures
# ============================================================


@pytest.fixture
def complete_resume():
    return MasterResume(
        header=PersonalInfo(name="Jordan Lee", email="jordan@example.com"),
        experience=[
            ExperienceEntry(
                company="Initech",
                title="Backend Engineer",
                start_date="2022-01",
                current=True,
                bullets=["Built billing APIs in FastAPI"],
            )
        ],
        skills={"languages": ["Python", "SQL"]},
    )


@pytest.fixture
def make_application():
    """Factory for applications with sensible defaults."""

    def _make(company="Acme", role="Engineer", status=ApplicationStatus.APPLIED,
              created_at=None, interviews=(), reminders=(), **kwargs):
        return Application(
            company=company,
            role=role,
            status=status,
            created_at=created_at or datetime(2026, 10, 1, 9, 0),
            interviews=list(interviews),
            reminders=list(reminders),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_job():
    return JobDescription(
        company="Globex",
        position="Platform Engineer",
        location="Remote",
        required_skills=["Python", "Kubernetes"],
        keywords=["platform", "reliability"],
    )


@pytest.fixture
def store():
    return ResumeStore()


@pytest.fixture
def interview_on():
    def _make(day, at="10:00", completed=False, kind=InterviewType.PHONE):
        return Interview(date=day, time=at, type=kind, completed=completed)
    return _make


@pytest.fixture
def reminder_on():
    def _make(day, kind="follow-up", completed=False):
        return Reminder(date=day, type=kind, completed=completed)
    return _make


# ============================================================
# HTTP fixtures
# ============================================================


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def client(store, fake_ai):
    """TestClient wired to a fresh store and the fake AI service.

    The lifespan is not entered, so no database setup runs.
    """
    limiter.enabled = False
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def tomorrow(today):
    return today + timedelta(days=1)
