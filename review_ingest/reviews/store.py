"""Review storage on top of a vector store."""

from pydantic import ValidationError as PydanticValidationError

from review_ingest.exceptions import ErrorCode, VectorStoreError
from review_ingest.logging_config import get_logger
from review_ingest.reviews.models import (
    COLLECTION_NAME,
    EMBEDDING_DIMENSIONS,
    Review,
    ReviewMatch,
)
from review_ingest.vectorstore.models import VectorRecord
from review_ingest.vectorstore.service import VectorStore

logger = get_logger(__name__)


class ReviewStore:
    """Stores reviews as points keyed by review id.

    The vector store handle is passed in explicitly; this class never
    creates a client of its own.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        collection: str = COLLECTION_NAME,
        dimensions: int = EMBEDDING_DIMENSIONS,
    ) -> None:
        """Initialize the review store.

        Args:
            vector_store: Vector database handle.
            collection: Name of the review collection.
            dimensions: Vector length every stored point must have.
        """
        self._vector_store = vector_store
        self._collection = collection
        self._dimensions = dimensions

    @property
    def collection(self) -> str:
        """Name of the review collection."""
        return self._collection

    @property
    def dimensions(self) -> int:
        """Vector length enforced on every point."""
        return self._dimensions

    async def ensure_collection(self) -> bool:
        """Create the review collection if it does not exist yet.

        An existing collection is reused as-is; its configuration is
        neither checked nor changed.

        Returns:
            True if the collection was created by this call.

        Raises:
            VectorStoreError: With code COLLECTION_INIT_FAILED if the
                existence check or creation fails.
        """
        try:
            if await self._vector_store.collection_exists(self._collection):
                logger.info(f"Collection {self._collection} already exists")
                return False

            await self._vector_store.create_collection(
                self._collection,
                dimensions=self._dimensions,
            )
        except VectorStoreError as e:
            logger.error(
                f"Error initializing collection: {e.message}",
                extra={"collection": self._collection},
            )
            raise VectorStoreError(
                f"Failed to initialize collection {self._collection}: {e.message}",
                code=ErrorCode.COLLECTION_INIT_FAILED,
                details={"collection": self._collection, **e.details},
            ) from e

        logger.info(f"Created collection: {self._collection}")
        return True

    def _check_vector(self, vector: list[float]) -> None:
        if len(vector) != self._dimensions:
            raise VectorStoreError(
                f"Vector has {len(vector)} dimensions, collection "
                f"{self._collection} requires {self._dimensions}",
                code=ErrorCode.VECTOR_DIMENSION_MISMATCH,
                details={
                    "collection": self._collection,
                    "expected": self._dimensions,
                    "actual": len(vector),
                },
            )

    async def upsert_record(self, review: Review, vector: list[float]) -> None:
        """Insert or replace the point for ``review.id``.

        The whole review, id included, becomes the point payload.

        Raises:
            VectorStoreError: If the vector has the wrong length (nothing
                is written) or the upsert fails.
        """
        self._check_vector(vector)

        await self._vector_store.upsert(
            self._collection,
            [
                VectorRecord(
                    id=review.id,
                    vector=vector,
                    payload=review.model_dump(),
                )
            ],
        )
        logger.info(
            f"Added review: {review.title} by {review.artist}",
            extra={"review_id": review.id},
        )

    async def search(
        self,
        query_vector: list[float],
        limit: int = 5,
    ) -> list[ReviewMatch]:
        """Return up to ``limit`` reviews nearest to ``query_vector``.

        Points whose payload no longer matches the review schema are
        skipped with a warning.

        Raises:
            VectorStoreError: If the query vector has the wrong length or
                the search fails.
        """
        self._check_vector(query_vector)

        results = await self._vector_store.search(
            self._collection,
            vector=query_vector,
            limit=limit,
        )

        matches: list[ReviewMatch] = []
        for result in results:
            payload = {"id": result.id, **result.payload}
            try:
                review = Review.model_validate(payload)
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping point with invalid review payload: {result.id}",
                    extra={"error_count": e.error_count()},
                )
                continue
            matches.append(ReviewMatch(id=result.id, score=result.score, review=review))

        return matches
