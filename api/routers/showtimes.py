import logging

from fastapi import APIRouter, Depends, HTTPException

from api.schemas import ExtractRequest, PastedTextRequest, ScrapeRequest, ShowtimesResponse
from showtime_scout.config import CrawlConfig
from showtime_scout.dialects import parse_pasted_text
from showtime_scout.firecrawl_client import FirecrawlClient
from showtime_scout.service import (
    NoShowtimesFoundError,
    build_outcome,
    extract_outcome,
    scrape_showtimes,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_crawl_client() -> FirecrawlClient:
    """Builds the crawl client from environment configuration for each request."""
    try:
        return FirecrawlClient(CrawlConfig.from_env())
    except ValueError as e:
        logger.warning(f"Crawl client unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/showtimes/extract", response_model=ShowtimesResponse, tags=["Showtimes"])
async def extract_from_document(request: ExtractRequest):
    """
    Extracts showtimes from crawled page text that the caller already has.
    """
    return extract_outcome(request.document).to_dict()


@router.post("/showtimes/parse-text", response_model=ShowtimesResponse, tags=["Showtimes"])
async def parse_text(request: PastedTextRequest):
    """
    Parses showtimes pasted by hand. Booking links are always '#'.
    """
    showtimes = parse_pasted_text(request.text)
    if not showtimes:
        raise NoShowtimesFoundError("No showtimes found in the pasted text")
    return build_outcome(showtimes, strategy="pasted_text").to_dict()


@router.post("/showtimes/scrape", response_model=ShowtimesResponse, tags=["Showtimes"])
def scrape(request: ScrapeRequest, client: FirecrawlClient = Depends(get_crawl_client)):
    """
    Crawls a showtimes page and returns its showtimes grouped by location
    and screen type.
    """
    try:
        outcome = scrape_showtimes(request.url, client)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return outcome.to_dict()
