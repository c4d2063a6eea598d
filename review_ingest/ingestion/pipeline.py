"""Sequential review ingestion pipeline."""

import asyncio
import time
from collections.abc import Callable, Sequence

from review_ingest.embeddings.service import EmbeddingService
from review_ingest.exceptions import ErrorCode, ReviewIngestError
from review_ingest.extraction.extractor import ReviewExtractor
from review_ingest.fetch.fetcher import PageFetcher
from review_ingest.ingestion.models import IngestionReport, ItemResult, ItemStatus
from review_ingest.logging_config import get_logger
from review_ingest.observability.metrics import track_ingest_item
from review_ingest.reviews.models import Review
from review_ingest.reviews.store import ReviewStore

logger = get_logger(__name__)

ItemCallback = Callable[[ItemResult], None]


class IngestionPipeline:
    """Fetches, extracts, embeds and stores review pages one at a time.

    Only collection setup is fatal. Any error while processing a URL is
    logged and recorded in the report, and the run moves on to the next
    URL. There are no retries. The upsert is the final step and writes
    record and vector together, so a failed item leaves nothing in the
    store.

    The pipeline does not own its collaborators; closing them is up to
    the caller.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: ReviewExtractor,
        embedding_service: EmbeddingService,
        store: ReviewStore,
        delay_seconds: float = 2.0,
        on_item: ItemCallback | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            fetcher: Page fetcher.
            extractor: Structured review extractor.
            embedding_service: Embeds the review text.
            store: Review store.
            delay_seconds: Courtesy delay before each item.
            on_item: Called with each item's result as soon as it is known.
        """
        self._fetcher = fetcher
        self._extractor = extractor
        self._embedding_service = embedding_service
        self._store = store
        self._delay_seconds = delay_seconds
        self._on_item = on_item

    async def run(self, urls: Sequence[str]) -> IngestionReport:
        """Ingest ``urls`` in order.

        Returns:
            Report with one result per URL.

        Raises:
            VectorStoreError: If the collection cannot be initialized. No
                URL is processed in that case.
        """
        await self._store.ensure_collection()

        report = IngestionReport(collection=self._store.collection)
        logger.info(
            f"Processing {len(urls)} album reviews",
            extra={"collection": self._store.collection},
        )

        for url in urls:
            result = await self._process(url)
            report.results.append(result)
            if self._on_item is not None:
                self._on_item(result)

        logger.info(
            "Ingestion finished",
            extra={
                "attempted": report.attempted,
                "succeeded": report.succeeded,
                "failed": report.failed,
            },
        )
        return report

    async def ingest_one(self, url: str) -> Review:
        """Fetch, extract, embed and store a single review page.

        Raises:
            ReviewIngestError: From whichever step failed.
        """
        page = await self._fetcher.fetch(url)
        extracted = await self._extractor.extract(page)
        review = Review.from_extracted(extracted)

        # Embed the body only; title, artist and metadata stay out of the vector.
        embedding = await self._embedding_service.embed(review.review_text)

        await self._store.upsert_record(review, embedding.vector)
        return review

    async def _process(self, url: str) -> ItemResult:
        logger.info(f"Processing review: {url}")
        await asyncio.sleep(self._delay_seconds)

        start = time.perf_counter()
        try:
            review = await self.ingest_one(url)

        except ReviewIngestError as e:
            track_ingest_item(time.perf_counter() - start, success=False)
            logger.error(
                f"Failed to process review at {url}: {e.message}",
                extra={"url": url, "error_code": e.code.value},
            )
            return ItemResult(
                url=url,
                status=ItemStatus.FAILED,
                error_code=e.code.value,
                error=e.message,
            )

        except Exception as e:
            track_ingest_item(time.perf_counter() - start, success=False)
            logger.exception(
                f"Failed to process review at {url}: {e}",
                extra={"url": url, "error_code": ErrorCode.INTERNAL_ERROR.value},
            )
            return ItemResult(
                url=url,
                status=ItemStatus.FAILED,
                error_code=ErrorCode.INTERNAL_ERROR.value,
                error=str(e),
            )

        track_ingest_item(time.perf_counter() - start, success=True)
        return ItemResult(
            url=url,
            status=ItemStatus.SUCCEEDED,
            review_id=review.id,
            title=review.title,
            artist=review.artist,
            score=review.score,
        )
