"""Vector store interface and Qdrant implementation."""

import time
from abc import ABC, abstractmethod

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    PointStruct,
    VectorParams,
)

from review_ingest.config import QdrantSettings, get_settings
from review_ingest.exceptions import ErrorCode, VectorStoreError
from review_ingest.logging_config import get_logger
from review_ingest.observability.metrics import track_vectorstore_operation
from review_ingest.vectorstore.models import SearchResult, VectorRecord

logger = get_logger(__name__)


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Defines the interface for storing and searching vectors.
    """

    @abstractmethod
    async def create_collection(
        self,
        name: str,
        dimensions: int,
    ) -> None:
        """Create a new collection with cosine distance.

        Args:
            name: Collection name.
            dimensions: Vector dimensions.

        Raises:
            VectorStoreError: If creation fails or the collection exists.
        """
        ...

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists.

        Args:
            name: Collection name.

        Returns:
            True if collection exists.

        Raises:
            VectorStoreError: If the check fails.
        """
        ...

    @abstractmethod
    async def upsert(
        self,
        collection: str,
        records: list[VectorRecord],
    ) -> int:
        """Insert or replace records by id.

        Args:
            collection: Collection name.
            records: Records to upsert.

        Returns:
            Number of records upserted.

        Raises:
            VectorStoreError: If upsert fails.
        """
        ...

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[SearchResult]:
        """Search for similar vectors.

        Args:
            collection: Collection name.
            vector: Query vector.
            limit: Maximum results to return.

        Returns:
            List of search results with payloads.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    async def close(self) -> None:
        """Release any underlying connection."""
        return None


class QdrantVectorStore(VectorStore):
    """Qdrant vector store implementation."""

    def __init__(
        self,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings or get_settings().qdrant
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            api_key = None
            if self._settings.api_key:
                api_key = self._settings.api_key.get_secret_value()

            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=api_key,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def create_collection(
        self,
        name: str,
        dimensions: int,
    ) -> None:
        """Create a new Qdrant collection."""
        client = await self._get_client()
        start = time.perf_counter()

        try:
            exists = await client.collection_exists(name)
            if exists:
                raise VectorStoreError(
                    f"Collection already exists: {name}",
                    code=ErrorCode.COLLECTION_EXISTS,
                    details={"collection": name},
                )

            await client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(
                    size=dimensions,
                    distance=Distance.COSINE,
                ),
            )
            track_vectorstore_operation("create_collection", time.perf_counter() - start)
            logger.info(f"Created collection: {name}", extra={"dimensions": dimensions})

        except VectorStoreError:
            raise
        except Exception as e:
            track_vectorstore_operation(
                "create_collection", time.perf_counter() - start, success=False
            )
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def upsert(
        self,
        collection: str,
        records: list[VectorRecord],
    ) -> int:
        """Upsert records into collection."""
        if not records:
            return 0

        client = await self._get_client()
        start = time.perf_counter()

        try:
            points = [
                PointStruct(
                    id=record.id,
                    vector=record.vector,
                    payload=record.payload,
                )
                for record in records
            ]

            await client.upsert(
                collection_name=collection,
                points=points,
                wait=True,
            )

        except Exception as e:
            track_vectorstore_operation("upsert", time.perf_counter() - start, success=False)
            raise VectorStoreError(
                f"Failed to upsert records: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("upsert", time.perf_counter() - start)
        logger.debug(
            f"Upserted {len(points)} records",
            extra={"collection": collection},
        )
        return len(points)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[SearchResult]:
        """Search for similar vectors."""
        client = await self._get_client()
        start = time.perf_counter()

        try:
            results = await client.query_points(
                collection_name=collection,
                query=vector,
                limit=limit,
                with_payload=True,
            )

        except Exception as e:
            track_vectorstore_operation("search", time.perf_counter() - start, success=False)
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("search", time.perf_counter() - start)
        return [
            SearchResult(
                id=str(point.id),
                score=point.score if point.score is not None else 0.0,
                payload=dict(point.payload) if point.payload else {},
            )
            for point in results.points
        ]
