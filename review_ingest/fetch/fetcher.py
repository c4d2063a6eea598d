"""Page fetcher interface and httpx implementation."""

import time
from abc import ABC, abstractmethod

import httpx
from bs4 import BeautifulSoup

from review_ingest.config import FetchSettings, get_settings
from review_ingest.exceptions import ErrorCode, FetchError
from review_ingest.fetch.headers import build_browser_headers
from review_ingest.fetch.models import Page
from review_ingest.logging_config import get_logger
from review_ingest.observability.metrics import track_page_fetch

logger = get_logger(__name__)


class PageFetcher(ABC):
    """Abstract base class for page fetchers."""

    @abstractmethod
    async def fetch(self, url: str) -> Page:
        """Navigate to ``url`` and return the page once content is present.

        Raises:
            FetchError: On navigation failure or timeout, or when the
                content element is missing.
        """
        ...

    async def close(self) -> None:
        """Release the underlying session."""
        return None


def select_content(html: str, selector: str) -> str | None:
    """Return the text of the first element matching ``selector``.

    Paragraph breaks are kept as newlines. Returns None when nothing
    matches or the element is empty.
    """
    soup = BeautifulSoup(html, "html.parser")
    element = soup.select_one(selector)
    if element is None:
        return None
    text = element.get_text("\n", strip=True)
    return text or None


class HTTPPageFetcher(PageFetcher):
    """Fetches pages over HTTP with browser-like headers.

    One client session is reused for every page in a run and must be
    released with ``close()``.
    """

    def __init__(
        self,
        settings: FetchSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            settings: Fetch configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().fetch
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=build_browser_headers(self._settings),
                timeout=self._settings.navigation_timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> Page:
        """Fetch ``url`` and locate the content element."""
        client = await self._get_client()
        start = time.perf_counter()

        try:
            response = await client.get(url)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            track_page_fetch(time.perf_counter() - start, success=False)
            raise FetchError(
                f"Navigation timed out after {self._settings.navigation_timeout}s",
                code=ErrorCode.NAVIGATION_TIMEOUT,
                details={"url": url, "timeout": self._settings.navigation_timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            track_page_fetch(time.perf_counter() - start, success=False)
            raise FetchError(
                f"Page returned {e.response.status_code}",
                code=ErrorCode.NAVIGATION_FAILED,
                details={"url": url, "status_code": e.response.status_code},
            ) from e

        except httpx.RequestError as e:
            track_page_fetch(time.perf_counter() - start, success=False)
            raise FetchError(
                f"Failed to load page: {e}",
                code=ErrorCode.NAVIGATION_FAILED,
                details={"url": url},
            ) from e

        html = response.text
        content_text = select_content(html, self._settings.content_selector)
        if content_text is None:
            track_page_fetch(time.perf_counter() - start, success=False)
            raise FetchError(
                f"No '{self._settings.content_selector}' element on page",
                code=ErrorCode.CONTENT_NOT_FOUND,
                details={"url": url, "selector": self._settings.content_selector},
            )

        track_page_fetch(time.perf_counter() - start)
        logger.debug(
            "Fetched page",
            extra={"url": url, "status": response.status_code, "chars": len(content_text)},
        )

        return Page(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            html=html,
            content_text=content_text,
        )
