"""LLM client interface and implementations."""

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from review_ingest.config import LLMSettings, get_settings
from review_ingest.exceptions import ErrorCode, LLMError
from review_ingest.llm.models import GenerationResult, Message, ResponseFormat, Role
from review_ingest.logging_config import get_logger
from review_ingest.observability.metrics import track_llm_request

logger = get_logger(__name__)


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: ResponseFormat = ResponseFormat.TEXT,
    ) -> GenerationResult:
        """Generate text from messages.

        Args:
            messages: Conversation messages.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens override.
            response_format: Requested output format.

        Returns:
            GenerationResult with generated text.

        Raises:
            LLMError: If generation fails.
        """
        ...

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: ResponseFormat = ResponseFormat.TEXT,
    ) -> GenerationResult:
        """Generate text from a single prompt and optional system prompt."""
        messages: list[Message] = []

        if system_prompt:
            messages.append(Message(role=Role.SYSTEM, content=system_prompt))

        messages.append(Message(role=Role.USER, content=prompt))

        return await self.generate(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format=response_format,
        )

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        ...

    async def close(self) -> None:
        """Release any underlying connection."""
        return None


class OpenAICompatibleClient(LLMClient):
    """LLM client for OpenAI-compatible chat completions APIs.

    Works with the OpenAI API, vLLM, Ollama, or any endpoint exposing
    ``/chat/completions``.
    """

    def __init__(
        self,
        settings: LLMSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenAI-compatible client.

        Args:
            settings: LLM configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().llm
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.api_key.get_secret_value()
        if not api_key or api_key == "not-required":
            return {}
        return {"Authorization": f"Bearer {api_key}"}

    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: ResponseFormat = ResponseFormat.TEXT,
    ) -> GenerationResult:
        """Generate text using chat completions API."""
        client = await self._get_client()
        url = f"{self._settings.base_url.rstrip('/')}/chat/completions"

        payload: dict[str, Any] = {
            "model": self._settings.model,
            "messages": [
                {"role": msg.role.value, "content": msg.content} for msg in messages
            ],
            "temperature": (
                self._settings.temperature if temperature is None else temperature
            ),
            "max_tokens": max_tokens or self._settings.max_tokens,
        }
        if response_format is not ResponseFormat.TEXT:
            payload["response_format"] = {"type": response_format.value}

        start = time.perf_counter()
        try:
            response = await client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()

        except httpx.TimeoutException as e:
            track_llm_request(self.model_name, time.perf_counter() - start, 0, 0, success=False)
            logger.error(f"LLM request timed out: {e}")
            raise LLMError(
                "LLM request timed out",
                code=ErrorCode.LLM_TIMEOUT,
                details={"timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            track_llm_request(self.model_name, time.perf_counter() - start, 0, 0, success=False)
            status = e.response.status_code
            logger.error(f"LLM request failed: {status}")

            if status == 429:
                raise LLMError(
                    "Rate limit exceeded",
                    code=ErrorCode.LLM_RATE_LIMIT,
                    details={"status_code": status},
                ) from e

            raise LLMError(
                f"LLM service returned {status}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"status_code": status},
            ) from e

        except httpx.RequestError as e:
            track_llm_request(self.model_name, time.perf_counter() - start, 0, 0, success=False)
            logger.error(f"LLM connection error: {e}")
            raise LLMError(
                f"Failed to connect to LLM service: {e}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"url": url},
            ) from e

        try:
            data = response.json()
            choice = data["choices"][0]
            content = choice["message"]["content"]
            usage = data.get("usage") or {}
        except (KeyError, IndexError, TypeError, ValueError) as e:
            track_llm_request(self.model_name, time.perf_counter() - start, 0, 0, success=False)
            raise LLMError(
                f"Invalid response from LLM: {e}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e

        result = GenerationResult(
            content=content or "",
            model=data.get("model", self._settings.model),
            finish_reason=choice.get("finish_reason"),
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
        )
        track_llm_request(
            self.model_name,
            time.perf_counter() - start,
            result.prompt_tokens,
            result.completion_tokens,
        )
        return result
