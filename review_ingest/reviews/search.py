"""Semantic search over stored reviews."""

from review_ingest.embeddings.service import EmbeddingService
from review_ingest.exceptions import ErrorCode, ReviewIngestError, SearchError
from review_ingest.logging_config import get_logger
from review_ingest.reviews.models import ReviewMatch
from review_ingest.reviews.store import ReviewStore

logger = get_logger(__name__)


class ReviewSearcher:
    """Embeds a free-text query and finds the nearest reviews."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        store: ReviewStore,
    ) -> None:
        self._embedding_service = embedding_service
        self._store = store

    async def search(self, query: str, limit: int = 5) -> list[ReviewMatch]:
        """Return up to ``limit`` reviews most similar to ``query``.

        Raises:
            EmbeddingError: If the query cannot be embedded.
            VectorStoreError: If the vector search fails.
            SearchError: On any other failure.
        """
        if not query.strip():
            return []

        try:
            embedding = await self._embedding_service.embed(query)
            matches = await self._store.search(embedding.vector, limit=limit)
        except ReviewIngestError:
            raise
        except Exception as e:
            logger.error(f"Review search failed: {e}")
            raise SearchError(
                f"Failed to search reviews: {e}",
                code=ErrorCode.SEARCH_ERROR,
                details={"query": query[:100], "error": str(e)},
            ) from e

        logger.debug(
            f"Found {len(matches)} reviews for query",
            extra={"query_length": len(query), "limit": limit},
        )
        return matches
