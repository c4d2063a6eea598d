"""LLM data models."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ResponseFormat(str, Enum):
    """Output format requested from the chat completions API."""

    TEXT = "text"
    JSON_OBJECT = "json_object"


class Message(BaseModel):
    """A chat message."""

    role: Role = Field(description="Message role")
    content: str = Field(description="Message content")


class GenerationResult(BaseModel):
    """Result from LLM generation.

    Attributes:
        content: The generated text.
        model: Model used for generation.
        finish_reason: Why generation stopped ("stop", "length", ...).
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
        total_tokens: Total tokens used.
    """

    content: str = Field(description="Generated text")
    model: str = Field(description="Model used")
    finish_reason: str | None = Field(default=None, description="Stop reason")
    prompt_tokens: int = Field(default=0, description="Prompt token count")
    completion_tokens: int = Field(default=0, description="Completion token count")
    total_tokens: int = Field(default=0, description="Total token count")

    @property
    def truncated(self) -> bool:
        """True when the output hit the token limit."""
        return self.finish_reason == "length"
