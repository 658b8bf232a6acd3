"""
JobDeck - Centralized rate limiting configuration.

Routers import `limiter` and one of the limit strings below.
The limiter keys on the client address of the connection.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# --- Rate limit constants ---

# AI-powered endpoints (each call is billed by the model provider), strictest
RATE_LIMIT_AI = "10/minute"

# Store write operations (create, update, delete), moderate
RATE_LIMIT_GENERAL = "30/minute"

# Read-heavy endpoints (lists, dashboard), generous (1/sec sustained)
RATE_LIMIT_READ = "60/minute"
