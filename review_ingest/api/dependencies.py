"""FastAPI dependencies."""

from collections.abc import AsyncGenerator

from review_ingest.config import get_settings
from review_ingest.embeddings.service import HTTPEmbeddingService
from review_ingest.reviews.search import ReviewSearcher
from review_ingest.reviews.store import ReviewStore
from review_ingest.vectorstore.service import QdrantVectorStore


async def get_review_searcher() -> AsyncGenerator[ReviewSearcher, None]:
    """Provide a searcher for one request and close its clients afterwards."""
    settings = get_settings()
    embedding_service = HTTPEmbeddingService(settings=settings.embedding)
    vector_store = QdrantVectorStore(settings=settings.qdrant)
    store = ReviewStore(
        vector_store,
        collection=settings.qdrant.collection_name,
        dimensions=settings.embedding.dimensions,
    )
    try:
        yield ReviewSearcher(embedding_service, store)
    finally:
        await embedding_service.close()
        await vector_store.close()
