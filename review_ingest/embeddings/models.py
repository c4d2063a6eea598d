"""Embedding data models."""

from pydantic import BaseModel, Field, model_validator


class EmbeddingResult(BaseModel):
    """Vector computed for one piece of review text.

    Attributes:
        text: Text that was embedded.
        vector: The embedding.
        model: Embedding model that produced the vector.
        dimensions: Declared vector length; must equal ``len(vector)``.
        prompt_tokens: Tokens billed for the input, when reported.
    """

    text: str = Field(description="Embedded text")
    vector: list[float] = Field(description="Embedding vector")
    model: str = Field(description="Embedding model")
    dimensions: int = Field(description="Vector length")
    prompt_tokens: int = Field(default=0, description="Input tokens, if reported")

    @model_validator(mode="after")
    def _check_dimensions(self) -> "EmbeddingResult":
        if self.dimensions != len(self.vector):
            raise ValueError(
                f"dimensions ({self.dimensions}) does not match "
                f"vector length ({len(self.vector)})"
            )
        return self
