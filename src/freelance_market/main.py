"""Main FastAPI application for the Freelance Market backend."""

import time

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from .api import admin, balances, contracts, jobs
from .api.middleware import install_problem_details
from .config import get_config
from .db.database import get_db, init_db
from .utils.logging_config import get_logger

logger = get_logger('main')
config = get_config()

# Create FastAPI app
app = FastAPI(
    title=config.app.app_name,
    description=config.app.description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

install_problem_details(app)

if config.app.enable_cors:
    allowed_origins = config.app.cors_origins or [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", config.market.profile_header],
    )

# Register API routers
app.include_router(contracts.router)
app.include_router(jobs.router)
app.include_router(balances.router)
app.include_router(admin.router)


@app.on_event("startup")
async def startup_event():
    """Create missing tables."""
    init_db()
    logger.info(f"{config.app.app_name} {__version__} started")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "freelance-market", "version": __version__}


@app.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Readiness check endpoint that validates database connectivity."""
    start_time = time.time()
    checks = {"database": False}
    errors = []

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.warning(f"Readiness database check failed: {e}")
        errors.append(f"Database check failed: {str(e)}")

    response = {
        "status": "ready" if all(checks.values()) else "not_ready",
        "service": "freelance-market",
        "version": __version__,
        "checks": checks,
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
    }
    if errors:
        response["errors"] = errors

    return JSONResponse(content=response, status_code=200 if all(checks.values()) else 503)
