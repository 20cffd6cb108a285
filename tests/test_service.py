import pytest
from unittest.mock import MagicMock

from showtime_scout.firecrawl_client import CrawlDocument, CrawlResult
from showtime_scout.models import ShowtimeRecord
from showtime_scout.service import (
    NoShowtimesFoundError,
    ScrapeFailedError,
    build_outcome,
    extract_movie_name,
    extract_outcome,
    scrape_showtimes,
)


def fake_client(result):
    client = MagicMock()
    client.crawl.return_value = result
    return client


@pytest.mark.parametrize("url, expected", [
    ("https://novocinemas.com/movies/the-dark-knight", "The Dark Knight"),
    ("https://novocinemas.com/en/movies/dune-part-two/showtimes", "Dune Part Two"),
    ("https://novocinemas.com/movies/inception#times", "Inception"),
    ("https://novocinemas.com/cinemas/dubai-festival-city", "Movie"),
    ("https://novocinemas.com/movies/", "Movie"),
    ("not a url", "Movie"),
    ("", "Movie"),
])
def test_extract_movie_name(url, expected):
    assert extract_movie_name(url) == expected


def test_scrape_showtimes_success(heading_page):
    client = fake_client(CrawlResult(success=True, status="completed", data=[CrawlDocument(heading_page)]))

    outcome = scrape_showtimes("https://reelcinemas.ae/movies/dune-part-two", client)

    client.crawl.assert_called_once_with("https://reelcinemas.ae/movies/dune-part-two")
    assert outcome.movie_title == "Dune Part Two"
    assert outcome.strategy == "heading_sections"
    assert outcome.total == 5
    assert outcome.locations == ["Reel Cinemas Dubai Mall", "Roxy Cinemas Box Park"]
    assert outcome.summary == "Found 5 showtimes across 2 locations"
    assert list(outcome.grouped["Reel Cinemas Dubai Mall"]) == ["IMAX", "Dolby Cinema"]


def test_scrape_showtimes_reads_only_first_document(novo_page, heading_page):
    client = fake_client(CrawlResult(success=True, data=[CrawlDocument(novo_page), CrawlDocument(heading_page)]))
    assert scrape_showtimes("https://novocinemas.com/movies/x", client).strategy == "novo"


def test_scrape_showtimes_crawl_failure():
    client = fake_client(CrawlResult.failure("Timeout waiting for results"))
    with pytest.raises(ScrapeFailedError, match="Timeout waiting for results"):
        scrape_showtimes("https://novocinemas.com/movies/x", client)


def test_scrape_showtimes_no_documents():
    client = fake_client(CrawlResult(success=True, status="completed", data=[]))
    with pytest.raises(ScrapeFailedError, match="No data returned from scraping"):
        scrape_showtimes("https://novocinemas.com/movies/x", client)


def test_scrape_showtimes_no_showtimes():
    client = fake_client(CrawlResult(success=True, data=[CrawlDocument("Coming soon")]))
    with pytest.raises(NoShowtimesFoundError):
        scrape_showtimes("https://novocinemas.com/movies/x", client)


@pytest.mark.parametrize("url", ["", "   ", None])
def test_scrape_showtimes_requires_url(url):
    client = MagicMock()
    with pytest.raises(ValueError):
        scrape_showtimes(url, client)
    client.crawl.assert_not_called()


def test_extract_outcome_to_dict(vox_page):
    data = extract_outcome(vox_page).to_dict()
    assert data["strategy"] == "vox"
    assert data["total"] == 4
    assert data["movie_title"] is None
    assert data["grouped"]["Mall of the Emirates"]["GOLD"] == [{
        "place": "Mall of the Emirates",
        "showtime": "7:45 PM",
        "bookingLink": "https://uae.voxcinemas.com/booking/dune",
        "screenType": "GOLD",
    }]


def test_build_outcome_empty():
    outcome = build_outcome([])
    assert outcome.total == 0
    assert outcome.grouped == {}
    assert outcome.summary == "Found 0 showtimes across 0 locations"


def test_scrape_failure_carries_url():
    client = fake_client(CrawlResult.failure("Failed to start crawl"))
    with pytest.raises(ScrapeFailedError) as excinfo:
        scrape_showtimes("  https://novocinemas.com/movies/x  ", client)
    assert excinfo.value.url == "https://novocinemas.com/movies/x"


def test_outcome_dict_fills_missing_screen_type():
    outcome = build_outcome([ShowtimeRecord("Cinema Z", "9:00 PM"), ShowtimeRecord("Cinema Z", "11:00 PM", "#", "4DX")])
    data = outcome.to_dict()
    assert [s["screenType"] for s in data["showtimes"]] == ["Standard", "4DX"]
    assert data["grouped"]["Cinema Z"]["Standard"] == [data["showtimes"][0]]
