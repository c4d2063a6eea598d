"""Review extractor interface and LLM implementation."""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from review_ingest.exceptions import ErrorCode, ExtractionError, LLMError
from review_ingest.extraction.prompts import ExtractionPromptTemplate
from review_ingest.fetch.models import Page
from review_ingest.llm.client import LLMClient
from review_ingest.llm.models import ResponseFormat
from review_ingest.logging_config import get_logger
from review_ingest.reviews.models import ExtractedReview

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ReviewExtractor(ABC):
    """Abstract base class for review extractors."""

    @abstractmethod
    async def extract(self, page: Page) -> ExtractedReview:
        """Extract review fields from a fetched page.

        Raises:
            ExtractionError: If extraction fails or the result does not
                match the review schema.
        """
        ...


def parse_json_object(content: str) -> dict[str, Any]:
    """Parse a JSON object from model output.

    Accepts output wrapped in a Markdown code fence.

    Raises:
        ValueError: If the content is not a JSON object.
    """
    text = content.strip()
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


class LLMReviewExtractor(ReviewExtractor):
    """Extracts reviews by prompting an LLM in JSON mode."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: ExtractionPromptTemplate | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            llm_client: Chat completions client.
            prompt_template: Extraction prompt template.
        """
        self._llm_client = llm_client
        self._prompt_template = prompt_template or ExtractionPromptTemplate()

    async def extract(self, page: Page) -> ExtractedReview:
        """Extract review fields from ``page.content_text``."""
        system_prompt, user_prompt = self._prompt_template.build_prompt(
            url=page.final_url,
            content=page.content_text,
        )

        try:
            result = await self._llm_client.generate_text(
                prompt=user_prompt,
                system_prompt=system_prompt,
                response_format=ResponseFormat.JSON_OBJECT,
            )
        except LLMError as e:
            raise ExtractionError(
                f"Extraction call failed: {e.message}",
                code=ErrorCode.EXTRACTION_FAILED,
                details={"url": page.url, "llm_code": e.code.value},
            ) from e

        # A cut-off completion would silently store a truncated review.
        if result.truncated:
            raise ExtractionError(
                "Extraction output hit the token limit",
                code=ErrorCode.EXTRACTION_INVALID,
                details={"url": page.url, "completion_tokens": result.completion_tokens},
            )

        try:
            data = parse_json_object(result.content)
        except ValueError as e:
            raise ExtractionError(
                f"Extraction output is not a JSON object: {e}",
                code=ErrorCode.EXTRACTION_INVALID,
                details={"url": page.url},
            ) from e

        if not data.get("url"):
            data["url"] = page.final_url

        try:
            review = ExtractedReview.model_validate(data)
        except PydanticValidationError as e:
            raise ExtractionError(
                "Extraction output does not match the review schema",
                code=ErrorCode.EXTRACTION_INVALID,
                details={
                    "url": page.url,
                    "fields": sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
                },
            ) from e

        logger.debug(
            "Extracted review",
            extra={"url": page.url, "review_chars": len(review.review_text)},
        )
        return review
