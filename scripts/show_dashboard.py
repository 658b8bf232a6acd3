#!/usr/bin/env python3
"""
JobDeck - Dashboard CLI

Print the dashboard summary from the local database.

Usage:
    python scripts/show_dashboard.py             # stats, status counts, upcoming
    python scripts/show_dashboard.py --recent    # also list recent applications
"""
import sys
import os

# Add project root to path so we can import jobdeck modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobdeck.database import init_db
from jobdeck.persistence import load_store
from jobdeck.services.dashboard import build_dashboard


def show_dashboard(show_recent: bool = False):
    os.makedirs("data", exist_ok=True)
    init_db()
    view = build_dashboard(load_store())

    stats = view.stats
    print(f"Total applications:  {stats.total_applications}")
    print(f"Active applications: {stats.active_applications}")
    print(f"Job descriptions:    {stats.job_descriptions}")
    print(f"Resume:              {'Complete' if stats.resume_complete else 'Incomplete'}")

    if view.status_counts:
        print("\nStatus overview:")
        for status, count in view.status_counts.items():
            print(f"  {status:<12} {count}")

    if view.upcoming_items:
        print("\nUpcoming:")
        for item in view.upcoming_items:
            kind = "Interview" if item.type == "interview" else "Reminder"
            print(f"  [{kind}] {item.due_label:<8} {item.company} - {item.role}: {item.details}")

    if show_recent:
        print("\nRecent applications:")
        if not view.recent_applications:
            print("  (none)")
        for app in view.recent_applications:
            print(f"  {app.created_at:%Y-%m-%d}  {app.company} - {app.role} ({app.status.value})")


if __name__ == "__main__":
    if len(sys.argv) > 2 or (len(sys.argv) == 2 and sys.argv[1] != "--recent"):
        print("Usage: python scripts/show_dashboard.py [--recent]")
        sys.exit(1)

    show_dashboard(show_recent="--recent" in sys.argv)
