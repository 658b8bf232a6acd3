"""
JobDeck - SQLAlchemy ORM models

Tables backing the store: the master resume, saved job descriptions, and
applications with their interviews and reminders.

List-valued fields (skills, keywords) and the structured resume are stored as
JSON text so the same schema works on SQLite and PostgreSQL.
"""
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base


class MasterResumeRecord(Base):
    """
    Single-row table holding the master resume.

    The resume_data column stores the structured resume as JSON:
    {
        "header": {"name": "", "email": "", "phone": "", "location": "", ...},
        "experience": [
            {"company": "", "title": "", "start_date": "", "end_date": "", "bullets": []}
        ],
        "education": [{"school": "", "degree": "", "field_of_study": "", ...}],
        "projects": [{"name": "", "description": "", "technologies": [], "url": ""}],
        "skills": {"category": ["skill1", "skill2"]}
    }
    """
    __tablename__ = "master_resume"

    id = Column(Integer, primary_key=True)
    resume_data = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class JobDescriptionRecord(Base):
    __tablename__ = "job_descriptions"

    id = Column(String(32), primary_key=True)
    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    location = Column(String)
    salary_range = Column(String)
    required_skills = Column(Text)  # JSON array
    preferred_skills = Column(Text)  # JSON array
    keywords = Column(Text)  # JSON array
    raw_text = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class ApplicationRecord(Base):
    __tablename__ = "applications"

    id = Column(String(32), primary_key=True)
    company = Column(String, nullable=False)
    role = Column(String, nullable=False)
    location = Column(String)
    status = Column(String, default="applied", index=True)
    applied_date = Column(Date)
    job_description_id = Column(String(32))  # saved job may be removed later
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now)

    # Relationships
    interviews = relationship(
        "InterviewRecord",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="InterviewRecord.position",
    )
    reminders = relationship(
        "ReminderRecord",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="ReminderRecord.position",
    )


class InterviewRecord(Base):
    __tablename__ = "interviews"

    id = Column(String(32), primary_key=True)
    application_id = Column(String(32), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    type = Column(String, nullable=False)  # phone, video, onsite, technical, behavioral, final
    completed = Column(Boolean, default=False)
    notes = Column(Text)

    # Relationships
    application = relationship("ApplicationRecord", back_populates="interviews")


class ReminderRecord(Base):
    __tablename__ = "reminders"

    id = Column(String(32), primary_key=True)
    application_id = Column(String(32), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)  # follow-up, thank-you-note, ...
    completed = Column(Boolean, default=False)
    note = Column(Text)

    # Relationships
    application = relationship("ApplicationRecord", back_populates="reminders")
