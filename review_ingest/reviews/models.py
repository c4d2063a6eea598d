"""Review record schema."""

from uuid import uuid4

from pydantic import BaseModel, Field

EMBEDDING_DIMENSIONS = 1536
COLLECTION_NAME = "music_reviews"


class ExtractedReview(BaseModel):
    """Fields the extraction call must return for one review page.

    The JSON schema of this model is sent to the extraction model
    verbatim, so field descriptions double as extraction guidance.
    """

    title: str = Field(description="Album title")
    artist: str = Field(description="Album artist")
    score: float = Field(description="Numeric rating as printed on the page")
    review_text: str = Field(
        description="Complete review body, every paragraph, not a summary",
    )
    url: str = Field(description="Canonical URL of the review page")
    date: str = Field(description="Publication date as printed on the page")


class Review(ExtractedReview):
    """A stored review: extracted fields plus the point identifier."""

    id: str = Field(description="Point identifier (UUID4)")

    @classmethod
    def from_extracted(
        cls,
        extracted: ExtractedReview,
        review_id: str | None = None,
    ) -> "Review":
        """Attach an identifier to extracted fields.

        A fresh UUID4 is generated unless ``review_id`` is given.
        """
        return cls(id=review_id or str(uuid4()), **extracted.model_dump())


class ReviewMatch(BaseModel):
    """A review returned by similarity search."""

    id: str = Field(description="Point identifier")
    score: float = Field(description="Cosine similarity")
    review: Review = Field(description="Stored review payload")
