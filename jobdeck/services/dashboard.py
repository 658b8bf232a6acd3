"""
JobDeck - Dashboard aggregation.

Derives the dashboard views from the store on every call:

- stats: totals, active applications, saved job descriptions, resume readiness
- recent applications: newest five by creation time
- status counts: applications per status
- upcoming items: pending interviews and reminders, soonest first

Nothing is cached; pass ``now`` to evaluate the feed at a fixed instant.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import re

from ..dates import format_month_day, is_future, is_past, is_today, parse_date, parse_datetime
from ..schemas import (
    Application, ApplicationStatus, DashboardStats, DashboardView,
    Interview, Reminder, UpcomingItem
)
from ..store import ResumeStore

ACTIVE_STATUSES = (ApplicationStatus.APPLIED, ApplicationStatus.INTERVIEW)
RECENT_LIMIT = 5
UPCOMING_LIMIT = 5


# --- Stats ---

def compute_stats(store: ResumeStore) -> DashboardStats:
    applications = store.applications
    return DashboardStats(
        total_applications=len(applications),
        active_applications=sum(1 for a in applications if a.status in ACTIVE_STATUSES),
        job_descriptions=len(store.job_descriptions),
        resume_complete=store.master_resume.is_complete,
    )


def recent_applications(applications: Iterable[Application], limit: int = RECENT_LIMIT) -> List[Application]:
    """Newest applications first. The input is not reordered."""
    return sorted(
        applications,
        key=lambda a: parse_date(a.created_at),
        reverse=True,
    )[:limit]


def status_counts(applications: Iterable[Application]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for application in applications:
        status = ApplicationStatus(application.status).value
        counts[status] = counts.get(status, 0) + 1
    return counts


# --- Display text ---

def interview_details(interview: Interview) -> str:
    kind = interview.type.value
    return f"{kind[:1].upper() + kind[1:]} interview at {interview.time}"


def reminder_details(reminder: Reminder) -> str:
    label = reminder.type.replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group().upper(), label)


def due_label(when: datetime, now: Optional[datetime] = None) -> str:
    """Label an item as Overdue, Today, or with its month and day (Oct 3)."""
    now = now or datetime.now()
    if is_today(when, now):
        return "Today"
    if is_past(when, now):
        return "Overdue"
    return format_month_day(when)


# --- Upcoming feed ---

def upcoming_items(
    applications: Iterable[Application],
    now: Optional[datetime] = None,
    limit: int = UPCOMING_LIMIT
) -> List[UpcomingItem]:
    """
    Merge pending interviews and reminders into one feed, soonest first.

    Interviews must be incomplete and scheduled today or later. Reminders only
    have to be incomplete: overdue ones stay in the feed until they are done.
    """
    now = now or datetime.now()
    items: List[UpcomingItem] = []

    for application in applications:
        for interview in application.interviews:
            when = parse_datetime(interview.date, interview.time)
            if not interview.completed and (is_today(when, now) or is_future(when, now)):
                items.append(_item("interview", when, application, interview_details(interview), now))

        for reminder in application.reminders:
            when = parse_date(reminder.date)
            if not reminder.completed:
                items.append(_item("reminder", when, application, reminder_details(reminder), now))

    items.sort(key=lambda item: item.date)
    return items[:limit]


def _item(kind: str, when: datetime, application: Application, details: str, now: datetime) -> UpcomingItem:
    return UpcomingItem(
        type=kind,
        date=when,
        application_id=application.id,
        company=application.company,
        role=application.role,
        details=details,
        due_label=due_label(when, now),
    )


def build_dashboard(store: ResumeStore, now: Optional[datetime] = None) -> DashboardView:
    """Compute every dashboard view from the current store contents."""
    applications = store.applications
    return DashboardView(
        stats=compute_stats(store),
        recent_applications=recent_applications(applications),
        status_counts=status_counts(applications),
        upcoming_items=upcoming_items(applications, now=now),
    )
