"""
JobDeck - Dashboard API endpoint.
"""
from fastapi import APIRouter, Depends, Request

from ..dependencies import get_store
from ..rate_limit import limiter, RATE_LIMIT_READ
from ..schemas import DashboardView
from ..services.dashboard import build_dashboard
from ..store import ResumeStore

router = APIRouter()


@router.get("/", response_model=DashboardView)
@limiter.limit(RATE_LIMIT_READ)
def get_dashboard(request: Request, store: ResumeStore = Depends(get_store)):
    """Stats, recent applications, status counts and the upcoming feed."""
    return build_dashboard(store)
