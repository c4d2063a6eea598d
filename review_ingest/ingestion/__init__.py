"""Review ingestion pipeline."""

from review_ingest.ingestion.models import IngestionReport, ItemResult, ItemStatus
from review_ingest.ingestion.pipeline import IngestionPipeline

__all__ = [
    "IngestionPipeline",
    "IngestionReport",
    "ItemResult",
    "ItemStatus",
]
