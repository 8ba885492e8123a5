"""
Navy Method Body Fat Check — Main Application Entry Point
===========================================================
This is the FastAPI application. It:
  1. Creates the FastAPI app instance with metadata
  2. Registers all API routers
  3. Loads the standards catalog once on startup (fatal if it fails)
  4. Configures CORS middleware for frontend integration
  5. Provides a health check endpoint

To run locally:
  uvicorn navyfat.main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from navyfat.core.config import settings
from navyfat.core.errors import ConfigError
from navyfat.core.standards import load_catalog

# Import all routers
from navyfat.routers import calculator, standards, units

# Configure logging so we can see what's happening in the console
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================
# APPLICATION LIFESPAN (Startup / Shutdown)
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.

    On STARTUP:
      - Loads the standards document into an immutable catalog on app.state.
      - Every preset in settings.PRESET_IDS must exist, otherwise startup
        fails: serving calculations against a broken catalog is worse than
        not serving at all.
    """
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}...")

    catalog = load_catalog(settings.STANDARDS_PATH)
    for preset_id in settings.PRESET_IDS:
        catalog.get_preset(preset_id)
    app.state.catalog = catalog
    logger.info(f"Standards ready: judging against {settings.PRESET_IDS}")

    yield  # Application is running — handle requests

    logger.info(f"Shutting down {settings.APP_NAME}...")


# ============================================================
# CREATE THE FASTAPI APPLICATION
# ============================================================
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Estimates body fat percentage with the U.S. Navy circumference method "
        "and judges it against branch-of-service body composition standards."
    ),
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# CORS MIDDLEWARE
# ============================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLERS
# ============================================================
@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    """A configuration defect — the calculation cannot be offered."""
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ============================================================
# REGISTER ROUTERS
# ============================================================
app.include_router(calculator.router)   # /calculate/*
app.include_router(standards.router)    # /standards/*
app.include_router(units.router)        # /units/*


# ============================================================
# ROOT / HEALTH CHECK ENDPOINT
# ============================================================
@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint — serves as a health check.
    Returns basic app info to confirm the API is running.
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for Docker/Kubernetes health probes.
    Returns 200 if the application is running.
    """
    return {"status": "ok"}
