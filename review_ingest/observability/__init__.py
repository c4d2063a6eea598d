"""Observability module for metrics and monitoring."""

from review_ingest.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    track_embedding_request,
    track_ingest_item,
    track_llm_request,
    track_page_fetch,
    track_vectorstore_operation,
)

__all__ = [
    "MetricsMiddleware",
    "get_metrics",
    "track_embedding_request",
    "track_ingest_item",
    "track_llm_request",
    "track_page_fetch",
    "track_vectorstore_operation",
]
