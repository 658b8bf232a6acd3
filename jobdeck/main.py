"""
JobDeck - FastAPI application entry point.

A job application tracking dashboard: master resume, saved job descriptions,
tracked applications with interviews and reminders, and AI-generated
tailored applications.
"""
from fastapi import FastAPI, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.templating import Jinja2Templates
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import inspect as sa_inspect
from datetime import datetime, timezone
from pathlib import Path
import logging
import os

from slowapi.errors import RateLimitExceeded

from . import __version__
from .config import settings
from .database import engine, init_db
from .dependencies import get_store
from .errors import JobDeckError, MethodNotAllowed
from .persistence import SqlStorePersistence, load_store
from .rate_limit import limiter
from .routers import ai, applications, dashboard, jobs, resume
from .services.ai_service import ai_service
from .services.dashboard import build_dashboard
from .store import DuplicateIdentityError, RecordNotFoundError, ResumeStore

# --- Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("jobdeck")

PACKAGE_DIR = Path(__file__).resolve().parent
ALEMBIC_INI = PACKAGE_DIR.parent / "alembic.ini"


def _alembic_config():
    from alembic.config import Config

    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
    config.set_main_option("sqlalchemy.url", settings.database_url)
    config.attributes["configure_logger"] = False
    return config


def setup_database():
    """Create tables if fresh DB, run migrations if existing."""
    from alembic import command

    existing = sa_inspect(engine).get_table_names()
    has_migrations = ALEMBIC_INI.exists()

    if "applications" not in existing:
        logger.info("Fresh database: creating all tables...")
        init_db()
        if has_migrations:
            command.stamp(_alembic_config(), "head")
        logger.info("Tables created.")
    elif has_migrations:
        logger.info("Existing database: running migrations...")
        command.upgrade(_alembic_config(), "head")
        logger.info("Migrations complete.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and load the store on startup."""
    logger.info("Starting JobDeck application...")
    if settings.database_url.startswith("sqlite:///./data/"):
        os.makedirs("data", exist_ok=True)
    setup_database()

    store = load_store()
    store.subscribe(SqlStorePersistence())
    app.state.store = store

    if not ai_service.is_configured:
        logger.warning("GEMINI_API_KEY not set: AI endpoints will return errors")
    logger.info("JobDeck ready!")
    yield
    logger.info("Shutting down JobDeck...")


app = FastAPI(
    title="JobDeck",
    description="Job application dashboard - track applications, interviews and reminders, and generate tailored resumes and cover letters",
    version=__version__,
    lifespan=lifespan
)

# --- Rate Limiting ---
app.state.limiter = limiter


# --- Error envelopes ---

def _error_response(status_code: int, error: str, details: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": details},
        headers=headers,
    )


@app.exception_handler(JobDeckError)
async def jobdeck_error_handler(request: Request, exc: JobDeckError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return _error_response(404, "Not found", str(exc))


@app.exception_handler(DuplicateIdentityError)
async def duplicate_handler(request: Request, exc: DuplicateIdentityError):
    return _error_response(409, "Duplicate record", str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        error = MethodNotAllowed(details=f"{request.method} is not supported for {request.url.path}")
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
            headers=getattr(exc, "headers", None),
        )
    return _error_response(exc.status_code, str(exc.detail), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(400, "Invalid request", str(exc.errors()))


@app.exception_handler(PydanticValidationError)
async def model_validation_handler(request: Request, exc: PydanticValidationError):
    return _error_response(400, "Invalid request", str(exc))


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return _error_response(429, "Rate limit exceeded", str(exc.detail))


# --- Security Headers Middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self'"
        )
        return response


# --- CORS Headers Middleware ---
class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds CORS headers to every response, errors included.

    Browser preflights (OPTIONS with Access-Control-Request-Method) are
    answered here with an empty 200.
    """
    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = settings.allowed_origins
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CORSHeadersMiddleware)

# Templates
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

# Include routers
app.include_router(ai.router, prefix="/api", tags=["ai"])
app.include_router(resume.router, prefix="/api/resume", tags=["resume"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


# --- API Endpoints ---

@app.get("/api/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "version": __version__,
        "ai_configured": ai_service.is_configured,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# --- Page Routes ---

@app.get("/")
async def dashboard_page(request: Request, store: ResumeStore = Depends(get_store)):
    """Main dashboard page."""
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"view": build_dashboard(store)},
    )
