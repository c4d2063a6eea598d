"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from review_ingest.api.app import app
from review_ingest.exceptions import ErrorCode, VectorStoreError
from review_ingest.vectorstore.models import SearchResult, VectorRecord
from review_ingest.vectorstore.service import VectorStore


class InMemoryVectorStore(VectorStore):
    """Vector store double that keeps points in a dict per collection.

    Like Qdrant, it rejects points whose vector length differs from the
    collection's configured size.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Any]] = {}
        self.create_calls = 0

    async def create_collection(self, name: str, dimensions: int) -> None:
        if name in self.collections:
            raise VectorStoreError(
                f"Collection already exists: {name}",
                code=ErrorCode.COLLECTION_EXISTS,
            )
        self.create_calls += 1
        self.collections[name] = {"dimensions": dimensions, "points": {}}

    async def collection_exists(self, name: str) -> bool:
        return name in self.collections

    async def upsert(self, collection: str, records: list[VectorRecord]) -> int:
        target = self.collections[collection]
        for record in records:
            if len(record.vector) != target["dimensions"]:
                raise VectorStoreError("Wrong vector dimension")
        for record in records:
            target["points"][record.id] = record
        return len(records)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[SearchResult]:
        points = list(self.collections[collection]["points"].values())
        scored = [
            SearchResult(
                id=p.id,
                score=sum(a * b for a, b in zip(vector, p.vector, strict=True)),
                payload=p.payload,
            )
            for p in points
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]

    def points(self, collection: str) -> dict[str, VectorRecord]:
        return self.collections[collection]["points"]


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Empty in-memory vector store."""
    return InMemoryVectorStore()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI app.

    Yields:
        AsyncClient configured for testing.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
