"""
SocialMediaCharts - Async Remote Loader

Fetches the posts CSV over HTTP using aiohttp and parses it with the same
fail-fast parser as local files.
"""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from socialcharts.loaders.csv_loader import load_records_from_text
from socialcharts.models.errors import DataLoadError
from socialcharts.models.records import DATE_FORMAT, PostRecord
from socialcharts.utils.config import OperationalConfig


logger = logging.getLogger(__name__)


class AsyncCSVFetcher:
    """
    Manages async HTTP fetches of the posts dataset.

    Responsibilities:
    - Initialize and maintain an aiohttp ClientSession
    - Retry transient failures with linear backoff
    - Parse the downloaded CSV into PostRecords
    """

    def __init__(
        self,
        operational_config: Optional[OperationalConfig] = None,
        date_format: str = DATE_FORMAT
    ):
        """
        Initialize the fetcher.

        Args:
            operational_config: Timeout and retry settings (defaults if None)
            date_format: strptime format of the Date column
        """
        self.ops_config = operational_config or OperationalConfig()
        self.date_format = date_format
        self.session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists, creating if needed."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.ops_config.fetch_timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            logger.debug("Created new aiohttp session")
        return self.session

    async def fetch_text(self, url: str) -> str:
        """
        Download the CSV body with retry logic.

        Args:
            url: Dataset URL

        Returns:
            Response body text

        Raises:
            DataLoadError: If every attempt fails
        """
        session = await self._ensure_session()
        last_error: Optional[Exception] = None

        for attempt in range(1, self.ops_config.max_retries + 1):
            try:
                async with session.get(url) as response:
                    response.raise_for_status()
                    return await response.text()

            except aiohttp.ClientResponseError as error:
                if error.status < 500:
                    # Don't retry 4xx errors, the request itself is wrong
                    logger.error(f"[ERROR] Fetch {url} rejected with HTTP {error.status}")
                    raise DataLoadError(
                        f"Cannot fetch posts CSV from {url}: HTTP {error.status} {error.message}",
                        source=url
                    ) from error
                last_error = error
                logger.warning(
                    f"[WARN] Fetch {url} failed (attempt {attempt}/{self.ops_config.max_retries}): {error}"
                )
                if attempt < self.ops_config.max_retries:
                    await asyncio.sleep(self.ops_config.retry_delay * attempt)

            except (aiohttp.ClientError, asyncio.TimeoutError) as error:
                last_error = error
                logger.warning(
                    f"[WARN] Fetch {url} failed (attempt {attempt}/{self.ops_config.max_retries}): {error}"
                )
                if attempt < self.ops_config.max_retries:
                    await asyncio.sleep(self.ops_config.retry_delay * attempt)

        logger.error(f"[ERROR] Fetch {url} failed after {self.ops_config.max_retries} attempts")
        raise DataLoadError(
            f"Cannot fetch posts CSV from {url}: {last_error}",
            source=url
        ) from last_error

    async def fetch_records(self, url: str) -> List[PostRecord]:
        """
        Fetch and parse the posts dataset.

        Raises:
            DataLoadError: If the download fails
            ParseError: If the CSV content is malformed
        """
        logger.info(f"[...] Fetching posts from {url}")
        text = await self.fetch_text(url)
        records = load_records_from_text(text, self.date_format)
        logger.info(f"[OK] Fetched {len(records)} posts from {url}")
        return records

    async def close(self) -> None:
        """Close the aiohttp session and clean up resources."""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.debug("Closed aiohttp session")
        self.session = None

    async def __aenter__(self) -> "AsyncCSVFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def fetch_records_sync(
    url: str,
    operational_config: Optional[OperationalConfig] = None,
    date_format: str = DATE_FORMAT
) -> List[PostRecord]:
    """
    Fetch the posts dataset from synchronous code (CLI, dashboard refresh).

    Runs a private event loop for the duration of the fetch.
    """
    async def _run() -> List[PostRecord]:
        async with AsyncCSVFetcher(operational_config, date_format) as fetcher:
            return await fetcher.fetch_records(url)

    return asyncio.run(_run())
