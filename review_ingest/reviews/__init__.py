"""Review schema and storage."""

from review_ingest.reviews.models import (
    COLLECTION_NAME,
    EMBEDDING_DIMENSIONS,
    ExtractedReview,
    Review,
    ReviewMatch,
)
from review_ingest.reviews.search import ReviewSearcher
from review_ingest.reviews.store import ReviewStore

__all__ = [
    "COLLECTION_NAME",
    "EMBEDDING_DIMENSIONS",
    "ExtractedReview",
    "Review",
    "ReviewMatch",
    "ReviewSearcher",
    "ReviewStore",
]
