"""Tests for review models, store and search."""

from unittest.mock import AsyncMock

import pytest

from review_ingest.embeddings.models import EmbeddingResult
from review_ingest.exceptions import ErrorCode, SearchError, VectorStoreError
from review_ingest.reviews.models import EMBEDDING_DIMENSIONS, ExtractedReview, Review
from review_ingest.reviews.search import ReviewSearcher
from review_ingest.reviews.store import ReviewStore

COLLECTION = "music_reviews"

EXTRACTED = ExtractedReview(
    title="Flora",
    artist="Hiroshi Yoshimura",
    score=8.5,
    review_text="A quiet record.",
    url="https://pitchfork.com/reviews/albums/hiroshi-yoshimura-flora/",
    date="2024-01-01",
)


def _vector(value: float = 0.01) -> list[float]:
    return [value] * EMBEDDING_DIMENSIONS


class TestReview:
    """Tests for review models."""

    def test_from_extracted_assigns_uuid(self) -> None:
        """A fresh id is generated for each review."""
        first = Review.from_extracted(EXTRACTED)
        second = Review.from_extracted(EXTRACTED)

        assert first.id != second.id
        assert len(first.id) == 36
        assert first.title == "Flora"

    def test_from_extracted_with_id(self) -> None:
        """An explicit id is kept."""
        review = Review.from_extracted(EXTRACTED, review_id="fixed")
        assert review.id == "fixed"

    def test_dimensions_constant(self) -> None:
        assert EMBEDDING_DIMENSIONS == 1536


class TestReviewStore:
    """Tests for ReviewStore."""

    @pytest.mark.asyncio
    async def test_ensure_collection_creates(self, memory_store) -> None:
        """Missing collection is created with 1536 dimensions."""
        store = ReviewStore(memory_store, collection=COLLECTION)

        created = await store.ensure_collection()

        assert created is True
        assert memory_store.collections[COLLECTION]["dimensions"] == 1536

    @pytest.mark.asyncio
    async def test_ensure_collection_idempotent(self, memory_store) -> None:
        """A second call neither raises nor recreates the collection."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()
        await store.upsert_record(Review.from_extracted(EXTRACTED), _vector())

        created = await store.ensure_collection()

        assert created is False
        assert memory_store.create_calls == 1
        assert memory_store.collections[COLLECTION]["dimensions"] == 1536
        assert len(memory_store.points(COLLECTION)) == 1

    @pytest.mark.asyncio
    async def test_ensure_collection_failure(self) -> None:
        """Setup errors surface as COLLECTION_INIT_FAILED."""
        vector_store = AsyncMock()
        vector_store.collection_exists = AsyncMock(
            side_effect=VectorStoreError("Failed to check collection")
        )
        store = ReviewStore(vector_store, collection=COLLECTION)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.ensure_collection()

        assert exc_info.value.code == ErrorCode.COLLECTION_INIT_FAILED

    @pytest.mark.asyncio
    async def test_upsert_stores_full_record(self, memory_store) -> None:
        """Point id is the review id and payload is the whole review."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()
        review = Review.from_extracted(EXTRACTED)

        await store.upsert_record(review, _vector())

        point = memory_store.points(COLLECTION)[review.id]
        assert point.payload == review.model_dump()
        assert len(point.vector) == 1536

    @pytest.mark.asyncio
    async def test_upsert_same_id_overwrites(self, memory_store) -> None:
        """Two upserts with one id leave a single point with the second payload."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()
        first = Review.from_extracted(EXTRACTED, review_id="a3c1d1e4-0000-4000-8000-000000000001")
        second = first.model_copy(update={"score": 9.1})

        await store.upsert_record(first, _vector())
        await store.upsert_record(second, _vector(0.02))

        points = memory_store.points(COLLECTION)
        assert len(points) == 1
        assert points[first.id].payload["score"] == 9.1

    @pytest.mark.asyncio
    async def test_upsert_wrong_dimension_rejected(self, memory_store) -> None:
        """Vectors that are not 1536 long are rejected before storage."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()

        with pytest.raises(VectorStoreError) as exc_info:
            await store.upsert_record(Review.from_extracted(EXTRACTED), [0.1] * 1535)

        assert exc_info.value.code == ErrorCode.VECTOR_DIMENSION_MISMATCH
        assert memory_store.points(COLLECTION) == {}

    @pytest.mark.asyncio
    async def test_search_returns_reviews(self, memory_store) -> None:
        """Search maps payloads back to reviews, nearest first."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()
        near = Review.from_extracted(EXTRACTED)
        far = Review.from_extracted(EXTRACTED.model_copy(update={"title": "Wet Land"}))
        await store.upsert_record(near, _vector(0.02))
        await store.upsert_record(far, _vector(0.01))

        matches = await store.search(_vector(1.0), limit=1)

        assert len(matches) == 1
        assert matches[0].id == near.id
        assert matches[0].review.title == "Flora"

    @pytest.mark.asyncio
    async def test_search_skips_invalid_payload(self) -> None:
        """Points whose payload is not a review are skipped."""
        from review_ingest.vectorstore.models import SearchResult

        vector_store = AsyncMock()
        vector_store.search = AsyncMock(
            return_value=[SearchResult(id="x", score=0.9, payload={"title": "only"})]
        )
        store = ReviewStore(vector_store, collection=COLLECTION)

        assert await store.search(_vector()) == []

    @pytest.mark.asyncio
    async def test_search_default_limit(self) -> None:
        """Search asks for five results by default."""
        vector_store = AsyncMock()
        vector_store.search = AsyncMock(return_value=[])
        store = ReviewStore(vector_store, collection=COLLECTION)

        await store.search(_vector())

        assert vector_store.search.call_args.kwargs["limit"] == 5


class TestReviewSearcher:
    """Tests for ReviewSearcher."""

    def _embedding_service(self) -> AsyncMock:
        service = AsyncMock()
        service.embed = AsyncMock(
            return_value=EmbeddingResult(
                text="ambient",
                vector=_vector(1.0),
                model="test",
                dimensions=EMBEDDING_DIMENSIONS,
            )
        )
        return service

    @pytest.mark.asyncio
    async def test_search(self, memory_store) -> None:
        """Query text is embedded and matched against stored reviews."""
        store = ReviewStore(memory_store, collection=COLLECTION)
        await store.ensure_collection()
        review = Review.from_extracted(EXTRACTED)
        await store.upsert_record(review, _vector())
        service = self._embedding_service()

        matches = await ReviewSearcher(service, store).search("ambient", limit=3)

        assert [m.id for m in matches] == [review.id]
        service.embed.assert_called_once_with("ambient")

    @pytest.mark.asyncio
    async def test_blank_query(self, memory_store) -> None:
        """Blank queries return nothing without calling the embedder."""
        service = self._embedding_service()
        store = ReviewStore(memory_store, collection=COLLECTION)

        assert await ReviewSearcher(service, store).search("  ") == []
        service.embed.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_wrapped(self, memory_store) -> None:
        """Underlying failures raise SearchError."""
        service = self._embedding_service()
        service.embed = AsyncMock(side_effect=RuntimeError("down"))
        store = ReviewStore(memory_store, collection=COLLECTION)

        with pytest.raises(SearchError):
            await ReviewSearcher(service, store).search("ambient")

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self) -> None:
        """Errors with their own code keep it instead of becoming SearchError."""
        service = self._embedding_service()
        service.embed = AsyncMock(
            return_value=EmbeddingResult(
                text="ambient",
                vector=[0.1] * 768,
                model="test",
                dimensions=768,
            )
        )
        store = ReviewStore(AsyncMock(), collection=COLLECTION)

        with pytest.raises(VectorStoreError) as exc_info:
            await ReviewSearcher(service, store).search("ambient")

        assert exc_info.value.code == ErrorCode.VECTOR_DIMENSION_MISMATCH
