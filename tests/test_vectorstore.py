"""Tests for vector store module."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from qdrant_client.models import Distance

from review_ingest.config import QdrantSettings
from review_ingest.exceptions import ErrorCode, VectorStoreError
from review_ingest.vectorstore.models import VectorRecord
from review_ingest.vectorstore.service import QdrantVectorStore


def _create_mock_client() -> AsyncMock:
    """Create a mock Qdrant client."""
    client = AsyncMock()
    client.collection_exists = AsyncMock(return_value=False)
    client.create_collection = AsyncMock()
    client.upsert = AsyncMock()
    mock_response = MagicMock()
    mock_response.points = []
    client.query_points = AsyncMock(return_value=mock_response)
    client.close = AsyncMock()
    return client


def _store(client: AsyncMock) -> QdrantVectorStore:
    return QdrantVectorStore(
        settings=QdrantSettings(url="http://localhost:6333"),
        client=client,
    )


class TestQdrantVectorStore:
    """Tests for QdrantVectorStore."""

    @pytest.mark.asyncio
    async def test_create_collection_uses_cosine(self) -> None:
        """Collection is created with the given size and cosine distance."""
        mock_client = _create_mock_client()

        await _store(mock_client).create_collection("music_reviews", dimensions=1536)

        call_kwargs = mock_client.create_collection.call_args.kwargs
        assert call_kwargs["collection_name"] == "music_reviews"
        assert call_kwargs["vectors_config"].size == 1536
        assert call_kwargs["vectors_config"].distance == Distance.COSINE

    @pytest.mark.asyncio
    async def test_create_collection_already_exists(self) -> None:
        """Creating an existing collection raises without touching it."""
        mock_client = _create_mock_client()
        mock_client.collection_exists = AsyncMock(return_value=True)

        with pytest.raises(VectorStoreError) as exc_info:
            await _store(mock_client).create_collection("test", dimensions=1536)

        assert exc_info.value.code == ErrorCode.COLLECTION_EXISTS
        mock_client.create_collection.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_collection_client_error(self) -> None:
        """Client failures are wrapped in VectorStoreError."""
        mock_client = _create_mock_client()
        mock_client.create_collection = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(VectorStoreError) as exc_info:
            await _store(mock_client).create_collection("test", dimensions=1536)

        assert exc_info.value.code == ErrorCode.VECTOR_STORE_ERROR
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_collection_exists(self) -> None:
        """Can check if collection exists."""
        mock_client = _create_mock_client()
        mock_client.collection_exists = AsyncMock(return_value=True)

        assert await _store(mock_client).collection_exists("test") is True

    @pytest.mark.asyncio
    async def test_collection_exists_error(self) -> None:
        """Connection failures during the check raise VectorStoreError."""
        mock_client = _create_mock_client()
        mock_client.collection_exists = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(VectorStoreError):
            await _store(mock_client).collection_exists("test")

    @pytest.mark.asyncio
    async def test_upsert_records(self) -> None:
        """Records are sent as points with id, vector and payload."""
        mock_client = _create_mock_client()
        record_id = "6f1c1f0e-1d1b-4c43-9a57-3f3a4c5b2d10"
        records = [VectorRecord(id=record_id, vector=[0.1, 0.2], payload={"title": "Flora"})]

        count = await _store(mock_client).upsert("test", records)

        assert count == 1
        points = mock_client.upsert.call_args.kwargs["points"]
        assert str(points[0].id) == record_id
        assert points[0].payload == {"title": "Flora"}

    @pytest.mark.asyncio
    async def test_upsert_empty_list(self) -> None:
        """Upserting empty list returns 0."""
        mock_client = _create_mock_client()

        assert await _store(mock_client).upsert("test", []) == 0
        mock_client.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upsert_error(self) -> None:
        """Upsert failures raise VectorStoreError."""
        mock_client = _create_mock_client()
        mock_client.upsert = AsyncMock(side_effect=RuntimeError("bad dimension"))
        records = [VectorRecord(id="6f1c1f0e-1d1b-4c43-9a57-3f3a4c5b2d10", vector=[0.1])]

        with pytest.raises(VectorStoreError):
            await _store(mock_client).upsert("test", records)

    @pytest.mark.asyncio
    async def test_search(self) -> None:
        """Search returns results with payload."""
        mock_client = _create_mock_client()
        mock_point = MagicMock()
        mock_point.id = "1"
        mock_point.score = 0.95
        mock_point.payload = {"title": "Flora"}
        mock_response = MagicMock()
        mock_response.points = [mock_point]
        mock_client.query_points = AsyncMock(return_value=mock_response)

        results = await _store(mock_client).search("test", vector=[0.1, 0.2], limit=5)

        assert len(results) == 1
        assert results[0].id == "1"
        assert results[0].score == 0.95
        assert results[0].payload["title"] == "Flora"
        call_kwargs = mock_client.query_points.call_args.kwargs
        assert call_kwargs["limit"] == 5
        assert call_kwargs["with_payload"] is True
        assert "query_filter" not in call_kwargs

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """Store closes client it owns."""
        mock_client = _create_mock_client()
        store = _store(mock_client)
        store._owns_client = True

        await store.close()

        mock_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client(self) -> None:
        """Injected clients are left open."""
        mock_client = _create_mock_client()

        await _store(mock_client).close()

        mock_client.close.assert_not_called()
