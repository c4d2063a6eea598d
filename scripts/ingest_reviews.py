#!/usr/bin/env python
"""Ingest album reviews into the vector store.

Usage:
    python -m scripts.ingest_reviews
    python -m scripts.ingest_reviews --url https://pitchfork.com/reviews/albums/charli-xcx-brat/

Without ``--url`` the review list from settings (INGEST_REVIEW_URLS) is used.
Exits 1 only when the collection cannot be initialized.
"""

import argparse
import asyncio
import sys

from review_ingest.config import Settings, get_settings
from review_ingest.console import print_item_result, print_summary, print_welcome
from review_ingest.embeddings.service import HTTPEmbeddingService
from review_ingest.exceptions import VectorStoreError
from review_ingest.extraction.extractor import LLMReviewExtractor
from review_ingest.extraction.prompts import ExtractionPromptTemplate
from review_ingest.fetch.fetcher import HTTPPageFetcher
from review_ingest.ingestion.models import IngestionReport
from review_ingest.ingestion.pipeline import IngestionPipeline
from review_ingest.llm.client import OpenAICompatibleClient
from review_ingest.logging_config import get_logger, setup_logging
from review_ingest.reviews.store import ReviewStore
from review_ingest.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


async def run_ingestion(
    settings: Settings,
    urls: list[str],
    delay_seconds: float,
) -> IngestionReport:
    """Build the pipeline from settings and run it over ``urls``.

    Every client is closed afterwards, whether or not items failed.

    Raises:
        VectorStoreError: If the collection cannot be initialized.
    """
    fetcher = HTTPPageFetcher(settings=settings.fetch)
    llm_client = OpenAICompatibleClient(settings=settings.llm)
    embedding_service = HTTPEmbeddingService(settings=settings.embedding)
    vector_store = QdrantVectorStore(settings=settings.qdrant)

    store = ReviewStore(
        vector_store,
        collection=settings.qdrant.collection_name,
        dimensions=settings.embedding.dimensions,
    )
    extractor = LLMReviewExtractor(
        llm_client,
        prompt_template=ExtractionPromptTemplate(
            max_content_chars=settings.ingest.max_content_chars,
        ),
    )
    pipeline = IngestionPipeline(
        fetcher=fetcher,
        extractor=extractor,
        embedding_service=embedding_service,
        store=store,
        delay_seconds=delay_seconds,
        on_item=print_item_result,
    )

    try:
        return await pipeline.run(urls)
    finally:
        await fetcher.close()
        await llm_client.close()
        await embedding_service.close()
        await vector_store.close()


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Ingest album reviews into the vector store",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--url",
        dest="urls",
        action="append",
        default=None,
        help="Review URL to ingest (repeatable; defaults to the configured list)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=settings.ingest.delay_seconds,
        help="Seconds to wait before each item",
    )
    args = parser.parse_args()

    setup_logging(level=settings.log_level)
    urls = args.urls or list(settings.ingest.review_urls)

    print_welcome(urls, settings.qdrant.collection_name)

    try:
        report = asyncio.run(run_ingestion(settings, urls, args.delay))
    except VectorStoreError as e:
        logger.error(
            f"Aborting: {e.message}",
            extra={"error_code": e.code.value},
        )
        sys.exit(1)

    print_summary(report)


if __name__ == "__main__":
    main()
