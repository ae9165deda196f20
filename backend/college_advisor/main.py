"""
College Advisor - FastAPI Application

Main entry point for the backend API.
Serves the profile submission action and the sat-advice, sat-data and
college-data endpoints.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from college_advisor.config.settings import settings
from college_advisor.infrastructure.db.database import init_db, close_db
from college_advisor.infrastructure.exceptions import (
    AdvisorError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"College Advisor starting in {settings.environment} mode...")

    try:
        await init_db()
        logger.info("Lookup store connection pool initialized")
    except Exception as e:
        logger.warning(f"Lookup store not reachable at startup: {e}")

    yield

    # Shutdown
    await close_db()
    logger.info("Lookup store connection pool closed")
    logger.info("College Advisor shutting down...")


app = FastAPI(
    title="College Advisor",
    description="SAT-aware college recommendations from a counselor model",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS configuration from Settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================
# Routes translate errors into their own bodies; these cover anything
# raised outside a route body, such as dependency resolution.

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content=exc.to_dict(),
    )


@app.exception_handler(AdvisorError)
async def general_error_handler(request: Request, exc: AdvisorError):
    """Handle all other application errors."""
    logger.error(f"Unhandled application error: {exc.message}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict(),
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "college-advisor"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "College Advisor API",
        "version": "1.0.0",
        "docs": "/docs",
    }


# ============================================================================
# Import and register routers
# ============================================================================

from college_advisor.api.routes import advice, lookups  # noqa: E402

app.include_router(advice.router, tags=["Advice"])
app.include_router(lookups.router, tags=["Lookups"])
