"""
Internship Placement Portal - Main Application

FastAPI backend with:
- In-process placement engine (eligibility, slots, applications, withdrawals)
- SQLAlchemy persistence (SQLite by default, PostgreSQL via DATABASE_URL)
- MongoDB notification inbox (NOTIFICATION_BACKEND=mongo)

Run: uvicorn internship_portal.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from internship_portal.api.routes import api_router
from internship_portal.core.config import get_settings
from internship_portal.core.errors import PlacementError, RuleViolation
from internship_portal.db.mongodb import init_mongo_indexes
from internship_portal.services.engine import get_placement_engine

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Internship Placement Portal",
    description="""
    Students apply to internships posted by company representatives;
    career center staff approve postings, accounts and withdrawals.

    ## Features
    - **Students**: Eligible listings, applications, offer acceptance, withdrawal requests
    - **Companies**: Internship postings, visibility, application decisions
    - **Career Center**: Reviews, withdrawals, representative accounts, reminders
    - **Notifications**: Per-user inbox

    Callers identify themselves with the `X-User-ID` header.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PlacementError)
async def placement_error_handler(request: Request, exc: PlacementError):
    """Rule violations carry their reason; everything else is a generic refusal."""
    if isinstance(exc, RuleViolation):
        content = {"detail": exc.reason}
    else:
        detail = f"Operation not permitted: {exc.message}" if exc.message else "Operation not permitted."
        content = {"detail": detail, "error": type(exc).__name__}
    logger.info("%s %s refused: %s %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create persistence tables and MongoDB indexes."""
    engine = get_placement_engine()
    if engine.persistence is not None:
        engine.persistence.init_schema()
        logger.info("Persistence schema ready")

    if settings.notification_backend == "mongo":
        try:
            init_mongo_indexes()
        except Exception:
            logger.exception("MongoDB index initialization failed")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from internship_portal.db.database import test_database_connection
    from internship_portal.db.mongodb import test_mongo_connection

    health = {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected",
    }
    if settings.notification_backend == "mongo":
        health["mongodb"] = "connected" if test_mongo_connection() else "disconnected"
    return health
