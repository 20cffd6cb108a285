"""
RFC 7807 Problem Details Implementation for ShowtimeScout API

This module provides standardized error responses following RFC 7807
(Problem Details for HTTP APIs).

Usage:
    from api.errors import problem_response, ProblemType, validation_error

    return problem_response(
        problem_type=ProblemType.SCRAPE_FAILED,
        title="Scraping Failed",
        status=502,
        detail="Timeout waiting for results",
        instance=request.url.path,
    )

RFC 7807 Format:
{
    "type": "https://api.showtimescout.io/errors/no-showtimes",
    "title": "No Showtimes Found",
    "status": 422,
    "detail": "No showtimes found in the scraped content",
    "instance": "/api/v1/showtimes/scrape",
    "timestamp": "2025-11-28T12:00:00Z"
}
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse


class ProblemType(str, Enum):
    """Problem type URIs for the ShowtimeScout API."""
    # Client Errors (4xx)
    VALIDATION_ERROR = "https://api.showtimescout.io/errors/validation"
    NOT_FOUND = "https://api.showtimescout.io/errors/not-found"
    BAD_REQUEST = "https://api.showtimescout.io/errors/bad-request"

    # Server Errors (5xx)
    INTERNAL_ERROR = "https://api.showtimescout.io/errors/internal"
    SERVICE_UNAVAILABLE = "https://api.showtimescout.io/errors/service-unavailable"

    # Domain-Specific Errors
    NO_SHOWTIMES = "https://api.showtimescout.io/errors/no-showtimes"
    SCRAPE_FAILED = "https://api.showtimescout.io/errors/scrape-failed"


def problem_response(
    problem_type: ProblemType,
    title: str,
    status: int,
    detail: str,
    instance: Optional[str] = None,
    errors: Optional[Dict[str, Any]] = None,
    **extra_fields
) -> JSONResponse:
    """
    Create an RFC 7807 Problem Details response.

    Args:
        problem_type: URI identifying the problem type
        title: Short human-readable summary (should not change between occurrences)
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence (usually request path)
        errors: Optional field-level errors (for validation)
        **extra_fields: Additional problem-specific fields

    Returns:
        JSONResponse with application/problem+json Content-Type
    """
    content = {
        "type": problem_type.value,
        "title": title,
        "status": status,
        "detail": detail,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

    if instance:
        content["instance"] = instance

    if errors:
        content["errors"] = errors

    content.update(extra_fields)

    return JSONResponse(
        status_code=status,
        content=content,
        headers={"Content-Type": "application/problem+json"}
    )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def validation_error(
    detail: str,
    errors: Dict[str, list],
    instance: Optional[str] = None
) -> JSONResponse:
    """
    Create a validation error response (400 Bad Request).

    Args:
        detail: Description of what validation failed
        errors: Dict mapping field names to lists of error messages
        instance: Request path
    """
    return problem_response(
        problem_type=ProblemType.VALIDATION_ERROR,
        title="Validation Error",
        status=400,
        detail=detail,
        instance=instance,
        errors=errors
    )


def no_showtimes_error(
    detail: str = "No showtimes found in the scraped content",
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a response for a page with no recognizable showtimes (422)."""
    return problem_response(
        problem_type=ProblemType.NO_SHOWTIMES,
        title="No Showtimes Found",
        status=422,
        detail=detail,
        instance=instance
    )


def scrape_failed_error(
    detail: str,
    instance: Optional[str] = None,
    url: Optional[str] = None
) -> JSONResponse:
    """
    Create a response for a failed crawl (502 Bad Gateway).

    Args:
        detail: Message reported by the crawl service or client
        instance: Request path
        url: The page that was being scraped
    """
    extra = {}
    if url:
        extra["url"] = url

    return problem_response(
        problem_type=ProblemType.SCRAPE_FAILED,
        title="Scraping Failed",
        status=502,
        detail=detail,
        instance=instance,
        **extra
    )


def internal_error(
    detail: str = "An unexpected error occurred",
    instance: Optional[str] = None
) -> JSONResponse:
    """Create an internal server error response (500)."""
    return problem_response(
        problem_type=ProblemType.INTERNAL_ERROR,
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=instance
    )
