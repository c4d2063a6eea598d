"""Prompt template for structured review extraction."""

import json
from typing import Any

from review_ingest.reviews.models import ExtractedReview

EXTRACTION_INSTRUCTION = (
    "Extract the album review details including title, artist, score, "
    "full review text (including all paragraphs), and date. Make sure to "
    "get the complete review text, not just a summary."
)


class ExtractionPromptTemplate:
    """Builds the system and user prompts for one review page.

    The instruction is the contract with the extraction model: without
    the explicit "complete text, not a summary" wording models tend to
    return a shortened ``review_text`` without any error.
    """

    DEFAULT_SYSTEM_PROMPT = """You extract structured data from web pages.

Rules:
- Reply with a single JSON object and nothing else
- The object must match the JSON schema you are given
- Copy text from the page; do not paraphrase or shorten it
- "score" must be a number"""

    DEFAULT_USER_TEMPLATE = """{instruction}

JSON schema:
{schema}

Page URL: {url}

Page content:
{content}"""

    def __init__(
        self,
        instruction: str = EXTRACTION_INSTRUCTION,
        max_content_chars: int = 60000,
        system_prompt: str | None = None,
        user_template: str | None = None,
    ) -> None:
        self.instruction = instruction
        self.max_content_chars = max_content_chars
        self.system_prompt = system_prompt or self.DEFAULT_SYSTEM_PROMPT
        self.user_template = user_template or self.DEFAULT_USER_TEMPLATE

    @staticmethod
    def schema() -> dict[str, Any]:
        """JSON schema of the extracted review."""
        return ExtractedReview.model_json_schema()

    def format(self, url: str, content: str) -> str:
        """Format the user prompt for a page.

        Page content longer than ``max_content_chars`` is cut off.
        """
        return self.user_template.format(
            instruction=self.instruction,
            schema=json.dumps(self.schema(), indent=2),
            url=url,
            content=content[: self.max_content_chars],
        )

    def build_prompt(self, url: str, content: str) -> tuple[str, str]:
        """Return ``(system_prompt, user_prompt)`` for a page."""
        return self.system_prompt, self.format(url=url, content=content)
