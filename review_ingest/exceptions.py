"""Application exception hierarchy.

All custom exceptions inherit from ReviewIngestError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "ING-1000"
    CONFIGURATION_ERROR = "ING-1001"
    VALIDATION_ERROR = "ING-1002"

    # Page fetching errors (2xxx)
    NAVIGATION_FAILED = "ING-2000"
    NAVIGATION_TIMEOUT = "ING-2001"
    CONTENT_NOT_FOUND = "ING-2002"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "ING-3000"
    EMBEDDING_DIMENSION_MISMATCH = "ING-3001"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "ING-4000"
    COLLECTION_NOT_FOUND = "ING-4001"
    COLLECTION_EXISTS = "ING-4002"
    COLLECTION_INIT_FAILED = "ING-4003"
    VECTOR_DIMENSION_MISMATCH = "ING-4004"

    # LLM errors (5xxx)
    LLM_SERVICE_ERROR = "ING-5000"
    LLM_TIMEOUT = "ING-5001"
    LLM_RATE_LIMIT = "ING-5002"

    # Extraction errors (6xxx)
    EXTRACTION_FAILED = "ING-6000"
    EXTRACTION_INVALID = "ING-6001"

    # Search errors (7xxx)
    SEARCH_ERROR = "ING-7000"


class ReviewIngestError(Exception):
    """Base exception for all review ingestion errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(ReviewIngestError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(ReviewIngestError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class FetchError(ReviewIngestError):
    """Page navigation or content lookup error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.NAVIGATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ExtractionError(ReviewIngestError):
    """Structured extraction error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EXTRACTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbeddingError(ReviewIngestError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(ReviewIngestError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class LLMError(ReviewIngestError):
    """LLM service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.LLM_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class SearchError(ReviewIngestError):
    """Review search error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SEARCH_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
