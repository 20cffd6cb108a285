# Tests for showtime_scout/firecrawl_client.py - Firecrawl crawl/poll client.

import pytest
from unittest.mock import MagicMock, patch
import requests

from showtime_scout.config import CrawlConfig
from showtime_scout.firecrawl_client import CrawlResult, FirecrawlClient


def make_response(payload, ok=True, status_code=200):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def crawl_config():
    return CrawlConfig(api_key="fc-test-key", base_url="https://crawl.test", page_limit=5, max_attempts=3, poll_interval=0.5)


@pytest.fixture
def client(crawl_config):
    return FirecrawlClient(crawl_config)


class TestFirecrawlClientInit:

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            FirecrawlClient(CrawlConfig(api_key=""))

    def test_keeps_config(self, client, crawl_config):
        assert client.config is crawl_config


class TestCrawl:

    @patch("showtime_scout.firecrawl_client.time.sleep")
    @patch("showtime_scout.firecrawl_client.requests.get")
    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_crawl_success_after_polling(self, mock_post, mock_get, mock_sleep, client):
        mock_post.return_value = make_response({"success": True, "id": "job-1"})
        mock_get.side_effect = [
            make_response({"success": True, "status": "scraping", "completed": 0, "total": 1, "data": []}),
            make_response({
                "success": True,
                "status": "completed",
                "completed": 1,
                "total": 1,
                "data": [{"markdown": "### Cinema X", "metadata": {"url": "https://cinema.test/movies/x"}}],
            }),
        ]

        result = client.crawl("https://cinema.test/movies/x")

        assert result.success is True
        assert result.status == "completed"
        assert result.first_markdown == "### Cinema X"
        assert result.data[0].metadata["url"] == "https://cinema.test/movies/x"
        assert mock_get.call_count == 2
        mock_sleep.assert_called_once_with(0.5)

        _, kwargs = mock_post.call_args
        assert mock_post.call_args[0][0] == "https://crawl.test/v1/crawl"
        assert kwargs["json"]["url"] == "https://cinema.test/movies/x"
        assert kwargs["json"]["limit"] == 5
        assert kwargs["json"]["scrapeOptions"]["formats"] == ["markdown"]
        assert kwargs["headers"]["Authorization"] == "Bearer fc-test-key"
        assert mock_get.call_args[0][0] == "https://crawl.test/v1/crawl/job-1"

    @patch("showtime_scout.firecrawl_client.requests.get")
    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_data_before_completion_is_returned(self, mock_post, mock_get, client):
        mock_post.return_value = make_response({"success": True, "id": "job-1"})
        mock_get.return_value = make_response({"status": "scraping", "data": [{"markdown": "partial"}]})

        result = client.crawl("https://cinema.test")

        assert result.success is True
        assert result.first_markdown == "partial"

    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_start_failure_uses_service_message(self, mock_post, client):
        mock_post.return_value = make_response({"message": "Unauthorized: Invalid token"}, ok=False, status_code=401)
        result = client.crawl("https://cinema.test")
        assert result.success is False
        assert result.error == "Unauthorized: Invalid token"

    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_start_failure_without_message(self, mock_post, client):
        mock_post.return_value = make_response({}, ok=False, status_code=500)
        assert client.crawl("https://cinema.test").error == "Failed to start crawl"

    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_missing_job_id(self, mock_post, client):
        mock_post.return_value = make_response({"success": True})
        assert client.crawl("https://cinema.test").error == "Failed to initiate crawl"

    @patch("showtime_scout.firecrawl_client.requests.get")
    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_poll_failure(self, mock_post, mock_get, client):
        mock_post.return_value = make_response({"success": True, "id": "job-1"})
        mock_get.return_value = make_response({}, ok=False, status_code=404)
        result = client.crawl("https://cinema.test")
        assert result.success is False
        assert result.error == "Failed to fetch results"

    @patch("showtime_scout.firecrawl_client.time.sleep")
    @patch("showtime_scout.firecrawl_client.requests.get")
    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_timeout_after_max_attempts(self, mock_post, mock_get, mock_sleep, client):
        mock_post.return_value = make_response({"success": True, "id": "job-1"})
        mock_get.return_value = make_response({"status": "scraping", "data": []})

        result = client.crawl("https://cinema.test")

        assert result.success is False
        assert result.error == "Timeout waiting for results"
        assert mock_get.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("showtime_scout.firecrawl_client.requests.post")
    def test_network_error(self, mock_post, client):
        mock_post.side_effect = requests.exceptions.ConnectionError("Connection refused")
        result = client.crawl("https://cinema.test")
        assert result.success is False
        assert result.error == "Connection refused"


class TestCrawlResult:

    def test_from_response_defaults(self):
        result = CrawlResult.from_response({"status": "completed"})
        assert result.success is True
        assert result.data == []
        assert result.first_markdown is None

    def test_failure(self):
        result = CrawlResult.failure("nope")
        assert result.success is False
        assert result.error == "nope"
