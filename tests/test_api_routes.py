"""Tests for review search API routes."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from review_ingest.api.app import app
from review_ingest.api.dependencies import get_review_searcher
from review_ingest.api.routes import SearchRequest, match_to_hit
from review_ingest.exceptions import ErrorCode, SearchError, VectorStoreError
from review_ingest.reviews.models import Review, ReviewMatch

FLORA = Review(
    id="9b6c1d4e-2f3a-4b5c-8d7e-1f2a3b4c5d6e",
    title="Flora",
    artist="Hiroshi Yoshimura",
    score=8.5,
    review_text="A quiet record.",
    url="https://pitchfork.com/reviews/albums/hiroshi-yoshimura-flora/",
    date="2024-01-01",
)


@pytest.fixture
def searcher() -> Generator[AsyncMock, None, None]:
    """Searcher double installed as the route dependency."""
    mock = AsyncMock()
    mock.search = AsyncMock(return_value=[ReviewMatch(id=FLORA.id, score=0.82, review=FLORA)])
    app.dependency_overrides[get_review_searcher] = lambda: mock
    yield mock
    app.dependency_overrides.clear()


class TestSearchRequest:
    """Tests for SearchRequest model."""

    def test_defaults(self) -> None:
        req = SearchRequest(query="ambient piano")
        assert req.limit == 5


class TestConverters:
    """Tests for response converters."""

    def test_match_to_hit(self) -> None:
        """Reviewer score and similarity score stay separate."""
        hit = match_to_hit(ReviewMatch(id=FLORA.id, score=0.82, review=FLORA))

        assert hit.id == FLORA.id
        assert hit.score == 0.82
        assert hit.review_score == 8.5
        assert hit.title == "Flora"


class TestSearchEndpoint:
    """Tests for /api/v1/search endpoint."""

    async def test_search_returns_hits(self, client: AsyncClient, searcher: AsyncMock) -> None:
        """Search returns matching reviews."""
        response = await client.post(
            "/api/v1/search",
            json={"query": "ambient piano", "limit": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "ambient piano"
        assert data["results"][0]["title"] == "Flora"
        assert data["results"][0]["review_score"] == 8.5
        searcher.search.assert_called_once_with("ambient piano", limit=3)

    async def test_search_validates_request(
        self,
        client: AsyncClient,
        searcher: AsyncMock,
    ) -> None:
        """Empty query and out-of-range limit are rejected."""
        missing = await client.post("/api/v1/search", json={})
        empty = await client.post("/api/v1/search", json={"query": ""})
        too_many = await client.post("/api/v1/search", json={"query": "x", "limit": 100})

        assert missing.status_code == 422
        assert empty.status_code == 422
        assert too_many.status_code == 422
        searcher.search.assert_not_called()

    async def test_search_error_mapped(self, client: AsyncClient, searcher: AsyncMock) -> None:
        """SearchError becomes a structured 502 response."""
        searcher.search.side_effect = SearchError("Failed to search reviews: down")

        response = await client.post("/api/v1/search", json={"query": "ambient"})

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == ErrorCode.SEARCH_ERROR.value
        assert "down" in error["message"]

    async def test_dimension_mismatch_is_client_error(
        self,
        client: AsyncClient,
        searcher: AsyncMock,
    ) -> None:
        """Vector length errors keep their code and map to 400."""
        searcher.search.side_effect = VectorStoreError(
            "Vector has 768 dimensions",
            code=ErrorCode.VECTOR_DIMENSION_MISMATCH,
        )

        response = await client.post("/api/v1/search", json={"query": "ambient"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == ErrorCode.VECTOR_DIMENSION_MISMATCH.value
