"""LLM client module."""

from review_ingest.llm.client import LLMClient, OpenAICompatibleClient
from review_ingest.llm.models import GenerationResult, Message, ResponseFormat, Role

__all__ = [
    "GenerationResult",
    "LLMClient",
    "Message",
    "OpenAICompatibleClient",
    "ResponseFormat",
    "Role",
]
