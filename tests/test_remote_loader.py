"""
Tests for AsyncCSVFetcher

Tests the async dataset fetcher implementation with aiohttp.
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from socialcharts.loaders.remote_loader import AsyncCSVFetcher, fetch_records_sync
from socialcharts.models.errors import DataLoadError, ParseError
from socialcharts.models.records import PostRecord
from socialcharts.utils.config import OperationalConfig


CSV_TEXT = (
    "Platform,Date,PostType,Likes\n"
    "Instagram,03/01/2024,Video,120\n"
    "Twitter,03/02/2024,Image,80\n"
)


def _mock_response(text: str = "", error: Exception = None) -> MagicMock:
    """Build an async context manager that behaves like an aiohttp response."""
    response = MagicMock()
    response.text = AsyncMock(return_value=text)
    response.raise_for_status = MagicMock(side_effect=error)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


class TestAsyncCSVFetcher:
    """Tests for AsyncCSVFetcher class."""

    @pytest.fixture
    def ops_config(self):
        """Create a fast-retry operational config."""
        return OperationalConfig(
            fetch_timeout=5.0,
            max_retries=3,
            retry_delay=0.0
        )

    @pytest.fixture
    def fetcher(self, ops_config):
        """Create a fetcher with a mocked session."""
        fetcher = AsyncCSVFetcher(ops_config)
        fetcher.session = MagicMock()
        fetcher.session.closed = False
        return fetcher

    @pytest.mark.asyncio
    async def test_fetch_records_parses_body(self, fetcher):
        """Test a successful fetch returns parsed records."""
        fetcher.session.get = MagicMock(return_value=_mock_response(CSV_TEXT))

        records = await fetcher.fetch_records("https://example.com/socialMedia.csv")

        assert records == [
            PostRecord("Instagram", date(2024, 3, 1), "Video", 120),
            PostRecord("Twitter", date(2024, 3, 2), "Image", 80),
        ]
        fetcher.session.get.assert_called_once_with("https://example.com/socialMedia.csv")

    @pytest.mark.asyncio
    async def test_fetch_records_accepts_bom_body(self, fetcher):
        """Test a body starting with a UTF-8 BOM parses like a local file."""
        fetcher.session.get = MagicMock(return_value=_mock_response("\ufeff" + CSV_TEXT))

        records = await fetcher.fetch_records("https://example.com/socialMedia.csv")

        assert [record.platform for record in records] == ["Instagram", "Twitter"]

    @pytest.mark.asyncio
    async def test_fetch_text_retries_then_succeeds(self, fetcher):
        """Test transient client errors are retried."""
        fetcher.session.get = MagicMock(side_effect=[
            _mock_response(error=aiohttp.ClientError("connection reset")),
            _mock_response(CSV_TEXT)
        ])

        text = await fetcher.fetch_text("https://example.com/data.csv")

        assert text == CSV_TEXT
        assert fetcher.session.get.call_count == 2

    @pytest.mark.asyncio
    async def test_fetch_text_raises_after_max_retries(self, fetcher):
        """Test DataLoadError after every attempt fails."""
        fetcher.session.get = MagicMock(side_effect=[
            _mock_response(error=asyncio.TimeoutError()) for _ in range(3)
        ])

        with pytest.raises(DataLoadError) as exc_info:
            await fetcher.fetch_text("https://example.com/data.csv")

        assert exc_info.value.source == "https://example.com/data.csv"
        assert fetcher.session.get.call_count == 3

    @pytest.mark.asyncio
    async def test_client_error_status_is_not_retried(self, fetcher):
        """Test a 404 fails on the first attempt with the status in the message."""
        not_found = aiohttp.ClientResponseError(MagicMock(), (), status=404, message="Not Found")
        fetcher.session.get = MagicMock(return_value=_mock_response(error=not_found))

        with pytest.raises(DataLoadError, match="HTTP 404") as exc_info:
            await fetcher.fetch_text("https://example.com/missing.csv")

        assert exc_info.value.__cause__ is not_found
        assert fetcher.session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_server_error_status_is_retried(self, fetcher):
        """Test a 503 is retried like other transient failures."""
        unavailable = aiohttp.ClientResponseError(MagicMock(), (), status=503, message="Unavailable")
        fetcher.session.get = MagicMock(side_effect=[
            _mock_response(error=unavailable),
            _mock_response(CSV_TEXT)
        ])

        text = await fetcher.fetch_text("https://example.com/data.csv")

        assert text == CSV_TEXT
        assert fetcher.session.get.call_count == 2

    @pytest.mark.asyncio
    async def test_malformed_body_raises_parse_error(self, fetcher):
        """Test parse failures are not retried and propagate."""
        body = "Platform,Date,PostType,Likes\nInstagram,03/01/2024,Video,many\n"
        fetcher.session.get = MagicMock(return_value=_mock_response(body))

        with pytest.raises(ParseError):
            await fetcher.fetch_records("https://example.com/data.csv")

        assert fetcher.session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_close_handles_no_session(self, ops_config):
        """Test that close() handles no session gracefully."""
        fetcher = AsyncCSVFetcher(ops_config)
        await fetcher.close()  # Should not raise
        assert fetcher.session is None

    @pytest.mark.asyncio
    async def test_close_closes_open_session(self, fetcher):
        """Test that close() closes an open session."""
        session = fetcher.session
        session.close = AsyncMock()

        await fetcher.close()

        session.close.assert_awaited_once()
        assert fetcher.session is None


class TestFetchRecordsSync:
    """Tests for the synchronous fetch wrapper."""

    def test_fetch_records_sync_runs_fetcher(self):
        """Test the wrapper returns the fetcher's records."""
        expected = [PostRecord("Instagram", date(2024, 3, 1), "Video", 120)]

        with patch.object(
            AsyncCSVFetcher,
            "fetch_records",
            new_callable=AsyncMock
        ) as mock_fetch:
            mock_fetch.return_value = expected
            records = fetch_records_sync("https://example.com/data.csv", OperationalConfig())

        assert records == expected
        mock_fetch.assert_awaited_once_with("https://example.com/data.csv")
