"""Review page fetching."""

from review_ingest.fetch.fetcher import HTTPPageFetcher, PageFetcher
from review_ingest.fetch.headers import build_browser_headers
from review_ingest.fetch.models import Page

__all__ = [
    "HTTPPageFetcher",
    "Page",
    "PageFetcher",
    "build_browser_headers",
]
