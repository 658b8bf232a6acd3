"""
JobDeck - Pydantic schemas for domain records and request/response validation.

Defines the master resume, job description and application records held by
the store, plus the request bodies and derived views exposed by the API.
"""
from pydantic import BaseModel, Field, field_validator
import datetime as dt
from typing import Optional, List, Dict, Literal
from enum import Enum
from uuid import uuid4

from .dates import parse_time


def new_id() -> str:
    return uuid4().hex


# --- Enums for validated fields ---

class ApplicationStatus(str, Enum):
    SAVED = "saved"
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    WITHDRAWN = "withdrawn"


class InterviewType(str, Enum):
    PHONE = "phone"
    VIDEO = "video"
    ONSITE = "onsite"
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    FINAL = "final"


# --- Helper validators ---

def normalize_time(value: Optional[str]) -> Optional[str]:
    """Normalize a time of day to zero-padded 24-hour "HH:MM"."""
    if value is None:
        return None
    try:
        return parse_time(value).strftime("%H:%M")
    except ValueError:
        raise ValueError("Time must be in 24-hour HH:MM format")


# --- Master Resume Schemas ---

class PersonalInfo(BaseModel):
    name: str = Field("", max_length=200)
    email: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=200)
    linkedin: Optional[str] = Field(None, max_length=500)
    github: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=500)
    summary: Optional[str] = Field(None, max_length=5000)


class ExperienceEntry(BaseModel):
    company: str = ""
    title: str = ""
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: bool = False
    bullets: List[str] = []


class EducationEntry(BaseModel):
    school: str = ""
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    gpa: Optional[str] = None


class ProjectEntry(BaseModel):
    name: str = ""
    description: Optional[str] = None
    technologies: List[str] = []
    url: Optional[str] = None


class MasterResume(BaseModel):
    """
    The user's canonical resume, used as generation input.

    Skills are grouped by category:
        {"languages": ["Python", "Go"], "cloud": ["AWS"]}
    """
    header: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = []
    education: List[EducationEntry] = []
    projects: List[ProjectEntry] = []
    skills: Dict[str, List[str]] = {}

    @property
    def is_complete(self) -> bool:
        """A resume is ready for generation once it has a name and any experience."""
        return bool(self.header.name) and len(self.experience) > 0


# --- Job Description Schemas ---

class JobDescriptionBase(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    salary_range: Optional[str] = Field(None, max_length=100)
    required_skills: List[str] = []
    preferred_skills: List[str] = []
    keywords: List[str] = []
    raw_text: Optional[str] = Field(None, max_length=50000)


class JobDescriptionCreate(JobDescriptionBase):
    pass


class JobDescription(JobDescriptionBase):
    id: str = Field(default_factory=new_id)
    created_at: dt.datetime = Field(default_factory=dt.datetime.now)


# --- Interview Schemas ---

class InterviewBase(BaseModel):
    date: dt.date
    time: str = "09:00"
    type: InterviewType = InterviewType.PHONE
    completed: bool = False
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator('time')
    @classmethod
    def validate_time(cls, v):
        return normalize_time(v)


class InterviewCreate(InterviewBase):
    pass


class InterviewUpdate(BaseModel):
    date: Optional[dt.date] = None
    time: Optional[str] = None
    type: Optional[InterviewType] = None
    completed: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator('time')
    @classmethod
    def validate_time(cls, v):
        return normalize_time(v)


class Interview(InterviewBase):
    id: str = Field(default_factory=new_id)


# --- Reminder Schemas ---

class ReminderBase(BaseModel):
    date: dt.date
    type: str = Field("follow-up", min_length=1, max_length=100)
    completed: bool = False
    note: Optional[str] = Field(None, max_length=5000)


class ReminderCreate(ReminderBase):
    pass


class ReminderUpdate(BaseModel):
    date: Optional[dt.date] = None
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    completed: Optional[bool] = None
    note: Optional[str] = Field(None, max_length=5000)


class Reminder(ReminderBase):
    id: str = Field(default_factory=new_id)


# --- Application Schemas ---

class ApplicationBase(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    status: ApplicationStatus = ApplicationStatus.APPLIED
    applied_date: Optional[dt.date] = None
    job_description_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=5000)


class ApplicationCreate(ApplicationBase):
    interviews: List[InterviewCreate] = []
    reminders: List[ReminderCreate] = []


class ApplicationUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    status: Optional[ApplicationStatus] = None
    applied_date: Optional[dt.date] = None
    job_description_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=5000)


class Application(ApplicationBase):
    id: str = Field(default_factory=new_id)
    created_at: dt.datetime = Field(default_factory=dt.datetime.now)
    interviews: List[Interview] = []
    reminders: List[Reminder] = []


# --- Dashboard Schemas ---

class DashboardStats(BaseModel):
    total_applications: int
    active_applications: int
    job_descriptions: int
    resume_complete: bool


class UpcomingItem(BaseModel):
    type: Literal["interview", "reminder"]
    date: dt.datetime
    application_id: str
    company: str
    role: str
    details: str
    due_label: str


class DashboardView(BaseModel):
    stats: DashboardStats
    recent_applications: List[Application]
    status_counts: Dict[str, int]
    upcoming_items: List[UpcomingItem]


# --- AI Request Schemas ---

class ParseJobDescriptionRequest(BaseModel):
    job_description: str = Field(..., alias="jobDescription", min_length=1, max_length=50000)

    class Config:
        populate_by_name = True


class JobDescriptionBrief(BaseModel):
    """The parts of a parsed job description the generation prompt uses."""
    company: str = ""
    position: str = ""
    required_skills: Optional[List[str]] = None
    keywords: Optional[List[str]] = None

    class Config:
        extra = "allow"


class GenerateApplicationRequest(BaseModel):
    master_resume: MasterResume = Field(..., alias="masterResume")
    job_description: JobDescriptionBrief = Field(..., alias="jobDescription")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    error: str
    details: str
