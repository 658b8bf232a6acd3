"""
JobDeck - FastAPI dependencies.

Routes receive the store through `get_store`, so tests can swap in their own
instance with `app.dependency_overrides[get_store]`.
"""
from fastapi import Request

from .store import ResumeStore


def get_store(request: Request) -> ResumeStore:
    """Return the store attached to the application at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store is not initialized; the application lifespan has not run")
    return store
