"""
Scrape flow: crawl a cinema page, extract its showtimes and group them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from showtime_scout.extractor import extract_with_tag
from showtime_scout.grouping import format_summary, group_showtimes
from showtime_scout.models import GroupedIndex, ShowtimeRecord, normalize_screen_type

logger = logging.getLogger(__name__)

DEFAULT_MOVIE_TITLE = "Movie"


class ShowtimeScoutError(Exception):
    """Base class for errors shown to the user."""


class ScrapeFailedError(ShowtimeScoutError):
    """The crawl service failed or returned nothing to parse."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NoShowtimesFoundError(ShowtimeScoutError):
    """The page was fetched but no recognizer found any showtimes."""


@dataclass
class ScrapeOutcome:
    showtimes: List[ShowtimeRecord]
    grouped: GroupedIndex
    summary: str
    movie_title: Optional[str] = None
    strategy: Optional[str] = None
    locations: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.showtimes)

    def to_dict(self) -> dict:
        return {
            "movie_title": self.movie_title,
            "strategy": self.strategy,
            "total": self.total,
            "locations": self.locations,
            "summary": self.summary,
            "showtimes": [_record_dict(s) for s in self.showtimes],
            "grouped": {
                place: {screen: [_record_dict(s) for s in items] for screen, items in screens.items()}
                for place, screens in self.grouped.items()
            },
        }


def _record_dict(showtime: ShowtimeRecord) -> dict:
    data = showtime.to_dict()
    data["screenType"] = normalize_screen_type(showtime.screen_type)
    return data


def extract_movie_name(url: str) -> str:
    """
    Turns the slug after a 'movies' path segment into a title.
    e.g. 'https://x.com/movies/the-dark-knight' -> 'The Dark Knight'
    """
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError, AttributeError):
        return DEFAULT_MOVIE_TITLE
    if not parsed.scheme or not parsed.netloc:
        return DEFAULT_MOVIE_TITLE

    parts = parsed.path.split("/")
    if "movies" not in parts:
        return DEFAULT_MOVIE_TITLE
    index = parts.index("movies")
    if index >= len(parts) - 1 or not parts[index + 1]:
        return DEFAULT_MOVIE_TITLE

    slug = parts[index + 1].split("#")[0]
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def build_outcome(showtimes: List[ShowtimeRecord], movie_title=None, strategy=None) -> ScrapeOutcome:
    grouped = group_showtimes(showtimes)
    return ScrapeOutcome(
        showtimes=showtimes,
        grouped=grouped,
        summary=format_summary(showtimes, grouped),
        movie_title=movie_title,
        strategy=strategy,
        locations=list(grouped),
    )


def extract_outcome(document: str, movie_title=None) -> ScrapeOutcome:
    """
    Runs the extraction cascade over already-fetched text.

    Raises:
        NoShowtimesFoundError: if no recognizer matched.
    """
    strategy, showtimes = extract_with_tag(document)
    if not showtimes:
        raise NoShowtimesFoundError("No showtimes found in the scraped content")
    return build_outcome(showtimes, movie_title=movie_title, strategy=strategy)


def scrape_showtimes(url: str, client) -> ScrapeOutcome:
    """
    Crawls a showtimes page and returns its grouped showtimes.

    Args:
        url: Cinema or movie showtimes page.
        client: Object with a crawl(url) method returning a CrawlResult.

    Raises:
        ValueError: if the URL is blank.
        ScrapeFailedError: if the crawl failed or returned no documents.
        NoShowtimesFoundError: if the page had no recognizable showtimes.
    """
    if not url or not url.strip():
        raise ValueError("Please enter a valid movie showtimes URL")
    url = url.strip()

    movie_title = extract_movie_name(url)
    logger.info(f"Getting showtimes for \"{movie_title}\" from {url}")

    result = client.crawl(url)
    if not result.success:
        raise ScrapeFailedError(result.error or "Failed to scrape website", url=url)
    if not result.data:
        raise ScrapeFailedError("No data returned from scraping", url=url)

    outcome = extract_outcome(result.data[0].markdown, movie_title=movie_title)
    logger.info(outcome.summary)
    return outcome
