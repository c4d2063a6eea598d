"""Embedding service interface and OpenAI-style HTTP implementation."""

import time
from abc import ABC, abstractmethod

import httpx

from review_ingest.config import EmbeddingSettings, get_settings
from review_ingest.embeddings.models import EmbeddingResult
from review_ingest.exceptions import EmbeddingError, ErrorCode
from review_ingest.logging_config import get_logger
from review_ingest.observability.metrics import track_embedding_request

logger = get_logger(__name__)


class EmbeddingService(ABC):
    """Abstract base class for embedding services."""

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails or has the wrong length.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the expected embedding dimensions."""
        ...

    async def close(self) -> None:
        """Release any underlying connection."""
        return None


class HTTPEmbeddingService(EmbeddingService):
    """Embedding service for OpenAI-compatible ``/embeddings`` endpoints.

    Every returned vector is checked against the configured dimensions;
    a mismatch is an error rather than something passed on to storage.
    """

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP embedding service.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            client: HTTP client. Creates new one if not provided.
        """
        self._settings = settings or get_settings().embedding
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get expected embedding dimensions."""
        return self._settings.dimensions

    def _headers(self) -> dict[str, str]:
        if self._settings.api_key is None:
            return {}
        return {"Authorization": f"Bearer {self._settings.api_key.get_secret_value()}"}

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If the request fails, the response is malformed,
                or the vector has the wrong number of dimensions.
        """
        if not text.strip():
            raise EmbeddingError(
                "Cannot embed empty text",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"model": self.model_name},
            )

        client = await self._get_client()
        url = f"{self._settings.base_url.rstrip('/')}/embeddings"
        payload = {
            "input": text,
            "model": self._settings.model,
        }

        start = time.perf_counter()
        try:
            response = await client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            track_embedding_request(self.model_name, time.perf_counter() - start, success=False)
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={"url": url, "status": e.response.status_code},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.response.status_code}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            track_embedding_request(self.model_name, time.perf_counter() - start, success=False)
            logger.error(
                f"Embedding request error: {e}",
                extra={"url": url},
            )
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"url": url},
            ) from e

        try:
            data = response.json()
            vector = data["data"][0]["embedding"]
            usage = data.get("usage") or {}
        except (KeyError, IndexError, TypeError, ValueError) as e:
            track_embedding_request(self.model_name, time.perf_counter() - start, success=False)
            raise EmbeddingError(
                f"Invalid response from embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e

        if len(vector) != self.dimensions:
            track_embedding_request(self.model_name, time.perf_counter() - start, success=False)
            raise EmbeddingError(
                f"Expected {self.dimensions} dimensions, got {len(vector)}",
                code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
                details={
                    "model": self.model_name,
                    "expected": self.dimensions,
                    "actual": len(vector),
                },
            )

        track_embedding_request(self.model_name, time.perf_counter() - start)
        return EmbeddingResult(
            text=text,
            vector=vector,
            model=data.get("model", self._settings.model),
            dimensions=len(vector),
            prompt_tokens=usage.get("prompt_tokens", 0),
        )
