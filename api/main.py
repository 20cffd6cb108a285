"""
ShowtimeScout API - FastAPI Application

Extracts movie showtimes from crawled cinema pages and returns them grouped
by location and screen type.

Run with:
    uvicorn api.main:app --reload --port 8000

API Documentation:
    - Swagger UI: http://localhost:8000/api/v1/docs
    - OpenAPI JSON: http://localhost:8000/api/v1/openapi.json
"""

import sys
import logging
from pathlib import Path
from datetime import datetime, timezone

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

# Add repo root to path so `showtime_scout` is importable when running `uvicorn api.main:app`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.routers import showtimes

from api.errors import (
    problem_response,
    ProblemType,
    validation_error,
    internal_error,
    no_showtimes_error,
    scrape_failed_error,
)

from showtime_scout.config import (
    APP_NAME,
    APP_VERSION,
    DEBUG,
    get_config_summary,
    is_production,
    validate_configuration,
)
from showtime_scout.service import NoShowtimesFoundError, ScrapeFailedError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI(
    title=f"{APP_NAME} API",
    version=APP_VERSION,
    description="""
## ShowtimeScout API

Extracts showtimes (location, time, booking link, screen format) from cinema
pages fetched through the Firecrawl crawling service.

### Features
- **Scrape**: crawl a showtimes URL and extract its showtimes
- **Extract**: run the extractor over page text you already have
- **Parse text**: read showtimes pasted by hand

### Error Responses
All errors follow RFC 7807 Problem Details format.
    """,
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if DEBUG else ["http://localhost:3000", "http://localhost:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# GLOBAL EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors with RFC 7807 format.
    """
    errors = {}
    for error in exc.errors():
        loc = ".".join(str(l) for l in error["loc"])
        errors.setdefault(loc, []).append(error["msg"])

    return validation_error(
        detail="Request validation failed",
        errors=errors,
        instance=str(request.url.path)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Convert HTTPException to RFC 7807 format.
    """
    problem_type_map = {
        400: ProblemType.BAD_REQUEST,
        404: ProblemType.NOT_FOUND,
        422: ProblemType.NO_SHOWTIMES,
        500: ProblemType.INTERNAL_ERROR,
        502: ProblemType.SCRAPE_FAILED,
        503: ProblemType.SERVICE_UNAVAILABLE,
    }

    problem_type = problem_type_map.get(exc.status_code, ProblemType.INTERNAL_ERROR)

    return problem_response(
        problem_type=problem_type,
        title=exc.detail if isinstance(exc.detail, str) else "Error",
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path)
    )


@app.exception_handler(NoShowtimesFoundError)
async def no_showtimes_handler(request: Request, exc: NoShowtimesFoundError):
    logger.info(f"No showtimes on {request.url.path}: {exc}")
    return no_showtimes_error(detail=str(exc), instance=str(request.url.path))


@app.exception_handler(ScrapeFailedError)
async def scrape_failed_handler(request: Request, exc: ScrapeFailedError):
    logger.warning(f"Scrape failed on {request.url.path}: {exc}")
    return scrape_failed_error(detail=str(exc), instance=str(request.url.path), url=exc.url)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    Logs the error and returns a safe RFC 7807 response.
    """
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")

    # Don't expose internal details in production
    detail = str(exc) if DEBUG else "An unexpected error occurred. Please try again."

    return internal_error(
        detail=detail,
        instance=str(request.url.path)
    )


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(showtimes.router, prefix="/api/v1", tags=["Showtimes"])


# ============================================================================
# ROOT ENDPOINTS
# ============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    API root - returns basic information and links.
    """
    return {
        "name": f"{APP_NAME} API",
        "version": APP_VERSION,
        "status": "operational",
        "docs": "/api/v1/docs",
        "openapi": "/api/v1/openapi.json",
        "health": "/api/v1/health"
    }


@app.get("/api/v1/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for load balancers and monitoring.
    """
    summary = get_config_summary()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": APP_VERSION,
        "environment": "production" if is_production() else "development",
        "crawl_service": "configured" if summary["crawl_api_key"] != "not set" else "not_configured",
    }


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {APP_NAME} API v{APP_VERSION}")
    logger.info(f"Environment: {'production' if is_production() else 'development'}")
    logger.info(f"Debug mode: {DEBUG}")

    try:
        validate_configuration()
    except ValueError as e:
        logger.warning(f"Configuration warning: {e}")
