"""Structured review extraction."""

from review_ingest.extraction.extractor import LLMReviewExtractor, ReviewExtractor
from review_ingest.extraction.prompts import EXTRACTION_INSTRUCTION, ExtractionPromptTemplate

__all__ = [
    "EXTRACTION_INSTRUCTION",
    "ExtractionPromptTemplate",
    "LLMReviewExtractor",
    "ReviewExtractor",
]
