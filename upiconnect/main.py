"""
UPICONNECT - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy) for every record
- JWT authentication for students and recruiters
- Resend for transactional email

Run: uvicorn upiconnect.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upiconnect import __version__
from upiconnect.api.routes import api_router
from upiconnect.core.config import get_settings
from upiconnect.core.errors import register_error_handlers
from upiconnect.db.postgres import engine, test_postgres_connection
from upiconnect.db.schema import init_schema

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="UPICONNECT",
    description="""
    Job board connecting students and recruiters.

    ## Features
    - **Authentication**: JWT-based auth for students and recruiters, password reset by email
    - **Students**: Profile, academic paths, skills, applications, settings
    - **Recruiters**: Profile, interests, applicant review, analytics, settings
    - **Jobs**: Post, search, apply, manage availability and status
    - **Messages**: Per-job conversations between recruiter and student
    - **Notifications**: Email to students whose application was accepted
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup."""
    init_schema(engine)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "UPICONNECT", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    connected = test_postgres_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "disconnected",
    }
