"""Album review ingestion into a Qdrant vector store."""

__version__ = "0.1.0"
