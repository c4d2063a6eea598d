"""Ingestion run data models."""

from enum import Enum

from pydantic import BaseModel, Field


class ItemStatus(str, Enum):
    """Outcome of one ingestion item."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ItemResult(BaseModel):
    """Outcome of processing one review URL.

    Successful items carry the stored review's id and headline fields;
    failed items carry the error code and message.
    """

    url: str = Field(description="Source URL")
    status: ItemStatus = Field(description="Item outcome")
    review_id: str | None = Field(default=None, description="Stored point id")
    title: str | None = Field(default=None, description="Album title")
    artist: str | None = Field(default=None, description="Album artist")
    score: float | None = Field(default=None, description="Review score")
    error_code: str | None = Field(default=None, description="Error code on failure")
    error: str | None = Field(default=None, description="Error message on failure")

    @property
    def succeeded(self) -> bool:
        return self.status == ItemStatus.SUCCEEDED


class IngestionReport(BaseModel):
    """Summary of an ingestion run, one result per attempted URL."""

    collection: str = Field(description="Target collection")
    results: list[ItemResult] = Field(default_factory=list, description="Per-item results")

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def failures(self) -> list[ItemResult]:
        return [r for r in self.results if not r.succeeded]
