"""Embedding service module."""

from review_ingest.embeddings.models import EmbeddingResult
from review_ingest.embeddings.service import EmbeddingService, HTTPEmbeddingService

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "HTTPEmbeddingService",
]
