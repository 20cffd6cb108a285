"""
Client for the Firecrawl crawling service.

Starts a crawl job for a URL and polls the job until it completes or returns
data. Failures are reported in the returned CrawlResult rather than raised,
so callers decide how to show them to the user.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from showtime_scout.config import CrawlConfig

logger = logging.getLogger(__name__)


class CrawlError(Exception):
    """Raised internally when a crawl request cannot be completed."""


@dataclass
class CrawlDocument:
    markdown: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict):
        return cls(markdown=data.get("markdown") or "", metadata=data.get("metadata") or {})


@dataclass
class CrawlResult:
    success: bool
    data: List[CrawlDocument] = field(default_factory=list)
    error: Optional[str] = None
    id: Optional[str] = None
    status: Optional[str] = None
    completed: Optional[int] = None
    total: Optional[int] = None

    @classmethod
    def failure(cls, error: str):
        return cls(success=False, error=error)

    @classmethod
    def from_response(cls, payload: dict):
        return cls(
            success=bool(payload.get("success", True)),
            data=[CrawlDocument.from_dict(doc) for doc in payload.get("data") or []],
            error=payload.get("error"),
            id=payload.get("id"),
            status=payload.get("status"),
            completed=payload.get("completed"),
            total=payload.get("total"),
        )

    @property
    def first_markdown(self) -> Optional[str]:
        return self.data[0].markdown if self.data else None


def _error_message(response, default: str) -> str:
    try:
        return response.json().get("message") or default
    except ValueError:
        return default


class FirecrawlClient:
    """
    A client for the Firecrawl v1 crawl API.

    All settings come from the CrawlConfig passed in; nothing is read from
    the environment here.
    """

    def __init__(self, config: CrawlConfig):
        if not config.api_key:
            raise ValueError("Firecrawl API key not found. Set FIRECRAWL_API_KEY or pass it in CrawlConfig.")
        self.config = config

    def _headers(self, json_body=False) -> dict:
        headers = {"Authorization": f"Bearer {self.config.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def start_crawl(self, url: str) -> str:
        """
        Starts a crawl job and returns its id.

        Raises:
            CrawlError: if the service refuses the job or returns no id.
        """
        payload = {
            "url": url,
            "limit": self.config.page_limit,
            "scrapeOptions": {"formats": ["markdown"], "metadata": True},
        }
        response = requests.post(
            f"{self.config.base_url}/v1/crawl",
            headers=self._headers(json_body=True),
            json=payload,
            timeout=self.config.request_timeout,
        )
        if not response.ok:
            message = _error_message(response, "Failed to start crawl")
            logger.error(f"Crawl request failed ({response.status_code}): {message}")
            raise CrawlError(message)

        body = response.json()
        crawl_id = body.get("id")
        if not body.get("success") or not crawl_id:
            raise CrawlError("Failed to initiate crawl")

        logger.info(f"Crawl initiated successfully, ID: {crawl_id}")
        return crawl_id

    def poll_for_results(self, crawl_id: str) -> CrawlResult:
        """Polls a crawl job until it completes, returns data, or runs out of attempts."""
        result_url = f"{self.config.base_url}/v1/crawl/{crawl_id}"
        max_attempts = self.config.max_attempts

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Polling for results, attempt {attempt}/{max_attempts}")
            response = requests.get(result_url, headers=self._headers(), timeout=self.config.request_timeout)
            if not response.ok:
                message = _error_message(response, "Failed to fetch results")
                logger.error(f"Error fetching results ({response.status_code}): {message}")
                raise CrawlError(message)

            result = CrawlResult.from_response(response.json())
            logger.debug(f"Poll response: {result.status} Completed: {result.completed} Total: {result.total}")
            if result.status == "completed" or result.data:
                logger.info("Crawl completed successfully")
                return result

            if attempt < max_attempts:
                time.sleep(self.config.poll_interval)

        logger.warning(f"Crawl {crawl_id} did not finish after {max_attempts} attempts")
        raise CrawlError("Timeout waiting for results")

    def crawl(self, url: str) -> CrawlResult:
        """Crawls a URL. Never raises for network or service errors."""
        logger.info(f"Starting crawl for URL: {url}")
        try:
            crawl_id = self.start_crawl(url)
            return self.poll_for_results(crawl_id)
        except CrawlError as e:
            return CrawlResult.failure(str(e))
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error during crawl of {url}: {e}")
            return CrawlResult.failure(str(e) or "An unknown error occurred")
        except ValueError as e:
            # invalid JSON in a 2xx response
            logger.warning(f"Unreadable crawl response for {url}: {e}")
            return CrawlResult.failure("Invalid response from crawl service")
