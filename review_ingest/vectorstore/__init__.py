"""Vector store module."""

from review_ingest.vectorstore.models import SearchResult, VectorRecord
from review_ingest.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "QdrantVectorStore",
    "SearchResult",
    "VectorRecord",
    "VectorStore",
]
