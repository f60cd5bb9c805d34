# src/corpusvault/extractors/__init__.py
"""Document extraction for corpusvault."""

from corpusvault.extractors.base import Extractor
from corpusvault.extractors.html import HTMLExtractor
from corpusvault.extractors.pypdf_extractor import PyPDFExtractor
from corpusvault.extractors.registry import (
    DEFAULT_ALLOWED_MEDIA_TYPES,
    DEFAULT_MAX_UPLOAD_BYTES,
    ExtractorRegistry,
    normalize_media_type,
    normalize_text,
)
from corpusvault.extractors.text import JSONExtractor, TextExtractor

__all__ = [
    "Extractor",
    "ExtractorRegistry",
    "TextExtractor",
    "JSONExtractor",
    "HTMLExtractor",
    "PyPDFExtractor",
    "DEFAULT_ALLOWED_MEDIA_TYPES",
    "DEFAULT_MAX_UPLOAD_BYTES",
    "normalize_media_type",
    "normalize_text",
]
