"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REVIEW_URLS = [
    "https://pitchfork.com/reviews/albums/hiroshi-yoshimura-flora/",
    "https://pitchfork.com/reviews/albums/tyler-the-creator-call-me-if-you-get-lost-the-estate-sale/",
    "https://pitchfork.com/reviews/albums/charli-xcx-brat/",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LLMSettings(BaseSettings):
    """Extraction LLM configuration.

    Any OpenAI-compatible chat completions endpoint that supports
    JSON-mode responses.
    """

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="LLM API base URL",
    )
    model: str = Field(
        default="gpt-4o-mini",
        description="Model name used for structured extraction",
    )
    api_key: SecretStr = Field(
        default=SecretStr("not-required"),
        description="API key (not required for local endpoints)",
    )
    timeout: float = Field(
        default=120.0,
        description="Request timeout in seconds",
    )
    max_tokens: int = Field(
        default=4096,
        description="Maximum tokens in response (full review text is long)",
    )
    temperature: float = Field(
        default=0.0,
        description="Sampling temperature",
    )


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Embedding service base URL",
    )
    model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Embedding API key",
    )
    dimensions: int = Field(
        default=1536,
        description="Expected embedding dimensions",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QDRANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str = Field(
        default="music_reviews",
        description="Collection holding review points",
    )


class FetchSettings(BaseSettings):
    """Page fetching configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    navigation_timeout: float = Field(
        default=30.0,
        description="Page navigation timeout in seconds",
    )
    content_selector: str = Field(
        default="article",
        description="CSS selector of the element holding the review",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request",
    )
    referer: str = Field(
        default="https://pitchfork.com/",
        description="Referer header sent with every request",
    )


class IngestSettings(BaseSettings):
    """Ingestion run configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    review_urls: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REVIEW_URLS),
        description="Review pages to ingest, in order",
    )
    delay_seconds: float = Field(
        default=2.0,
        description="Fixed delay before each item",
    )
    max_content_chars: int = Field(
        default=60000,
        description="Page text passed to the extraction model",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Nested settings
    llm: LLMSettings = Field(default_factory=LLMSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    ingest: IngestSettings = Field(default_factory=IngestSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
