# src/corpusvault/extractors/registry.py
"""Extractor registry: upload validation, extractor selection and normalization."""

import importlib.util
from collections.abc import Iterable

from loguru import logger

from corpusvault.exceptions import ValidationError
from corpusvault.extractors.base import Extractor
from corpusvault.extractors.pypdf_extractor import PyPDFExtractor
from corpusvault.extractors.text import JSONExtractor, TextExtractor, decode_utf8
from corpusvault.models import Document

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

DEFAULT_ALLOWED_MEDIA_TYPES = frozenset(
    {
        "text/plain",
        "text/markdown",
        "text/csv",
        "text/html",
        "application/json",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


def normalize_media_type(media_type: str) -> str:
    """Lower-case a media type and drop parameters such as ``charset``."""
    return media_type.split(";", 1)[0].strip().lower()


def normalize_text(text: str) -> str:
    """Unify line endings to ``\\n`` and trim surrounding whitespace."""
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


class ExtractorRegistry:
    """Registry for document extractors.

    Validates uploads against a size ceiling and a media type allow-list, then
    picks the first registered extractor that supports the media type. Allowed
    types with no extractor are decoded as UTF-8 with a logged warning.
    """

    def __init__(
        self,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_media_types: Iterable[str] | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            max_upload_bytes: Largest accepted upload, in bytes
            allowed_media_types: Accepted media types (default: DEFAULT_ALLOWED_MEDIA_TYPES)
        """
        self._extractors: list[Extractor] = []
        self.max_upload_bytes = max_upload_bytes
        self.allowed_media_types = frozenset(
            normalize_media_type(t)
            for t in (
                allowed_media_types
                if allowed_media_types is not None
                else DEFAULT_ALLOWED_MEDIA_TYPES
            )
        )

    def register(self, extractor: Extractor) -> None:
        """Register an extractor."""
        self._extractors.append(extractor)

    def find_extractor(self, media_type: str) -> Extractor | None:
        """Find an extractor that supports the given media type."""
        normalized = normalize_media_type(media_type)
        for extractor in self._extractors:
            if extractor.supports(normalized):
                return extractor
        return None

    def validate(self, document: Document) -> None:
        """Check an upload before any work is done on it.

        Raises:
            ValidationError: If the upload is empty, too large, unnamed,
                or of a media type outside the allow-list
        """
        if not document.file_name.strip():
            raise ValidationError("File name must not be empty")
        if document.size == 0:
            raise ValidationError(f"Upload {document.file_name} is empty")
        if document.size > self.max_upload_bytes:
            raise ValidationError(
                f"Upload {document.file_name} is {document.size} bytes, "
                f"exceeding the {self.max_upload_bytes} byte limit"
            )
        media_type = normalize_media_type(document.media_type)
        if media_type not in self.allowed_media_types:
            raise ValidationError(
                f"Unsupported media type '{document.media_type}'. "
                f"Allowed: {', '.join(sorted(self.allowed_media_types))}"
            )

    def extract(self, document: Document) -> str:
        """Validate an upload and return its normalized text.

        Raises:
            ValidationError: If the upload fails validation
            ExtractionError: If a structured format cannot be parsed
        """
        self.validate(document)

        extractor = self.find_extractor(document.media_type)
        if extractor is None:
            logger.warning(
                f"No extractor for '{document.media_type}' ({document.file_name}), "
                "decoding as UTF-8"
            )
            text = decode_utf8(document.data)
        else:
            text = extractor.extract(document.data, document.file_name)

        return normalize_text(text)

    @classmethod
    def default(
        cls,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_media_types: Iterable[str] | None = None,
    ) -> "ExtractorRegistry":
        """Create a registry with all default extractors registered.

        Text, JSON and PDF extractors are always registered. The HTML
        extractor is registered when beautifulsoup4 and markdownify are
        installed; without them HTML takes the UTF-8 fallback.
        """
        registry = cls(max_upload_bytes=max_upload_bytes, allowed_media_types=allowed_media_types)
        registry.register(TextExtractor())
        registry.register(JSONExtractor())
        registry.register(PyPDFExtractor())

        if importlib.util.find_spec("bs4") and importlib.util.find_spec("markdownify"):
            from corpusvault.extractors.html import HTMLExtractor

            registry.register(HTMLExtractor())

        return registry
