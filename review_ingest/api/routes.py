"""API routes for review search."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from review_ingest.api.dependencies import get_review_searcher
from review_ingest.logging_config import get_logger
from review_ingest.reviews.models import ReviewMatch
from review_ingest.reviews.search import ReviewSearcher

logger = get_logger(__name__)


router = APIRouter(prefix="/api/v1", tags=["Reviews"])


class SearchRequest(BaseModel):
    """Request body for review search."""

    query: str = Field(min_length=1, description="Free-text query")
    limit: int = Field(default=5, ge=1, le=20, description="Maximum results")


class SearchHit(BaseModel):
    """One review in a search response."""

    id: str = Field(description="Review id")
    score: float = Field(description="Similarity score")
    title: str = Field(description="Album title")
    artist: str = Field(description="Album artist")
    review_score: float = Field(description="Score given by the reviewer")
    url: str = Field(description="Review URL")
    date: str = Field(description="Publication date")


class SearchResponse(BaseModel):
    """Response from review search."""

    query: str = Field(description="Query as received")
    results: list[SearchHit] = Field(description="Matching reviews, best first")


def match_to_hit(match: ReviewMatch) -> SearchHit:
    """Convert a store match to an API hit."""
    review = match.review
    return SearchHit(
        id=match.id,
        score=match.score,
        title=review.title,
        artist=review.artist,
        review_score=review.score,
        url=review.url,
        date=review.date,
    )


@router.post("/search", response_model=SearchResponse)
async def search_endpoint(
    request: SearchRequest,
    searcher: ReviewSearcher = Depends(get_review_searcher),
) -> SearchResponse:
    """Find stored reviews similar to a free-text query."""
    matches = await searcher.search(request.query, limit=request.limit)
    logger.info(
        "Review search",
        extra={"query_length": len(request.query), "results_count": len(matches)},
    )
    return SearchResponse(
        query=request.query,
        results=[match_to_hit(m) for m in matches],
    )
