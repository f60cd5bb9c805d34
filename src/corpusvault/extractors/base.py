# src/corpusvault/extractors/base.py
"""Extractor abstract base class."""

from abc import ABC, abstractmethod


class Extractor(ABC):
    """Abstract base class for turning raw upload bytes into text."""

    MEDIA_TYPES: frozenset[str] = frozenset()

    def supports(self, media_type: str) -> bool:
        """Check if this extractor handles the given (normalized) media type."""
        return media_type in self.MEDIA_TYPES

    @abstractmethod
    def extract(self, data: bytes, file_name: str) -> str:
        """Extract text from raw bytes.

        Args:
            data: Raw upload content
            file_name: Original file name (for error messages)

        Returns:
            Extracted text, not yet normalized

        Raises:
            ExtractionError: If the content cannot be parsed
        """
        ...
