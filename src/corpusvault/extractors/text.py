# src/corpusvault/extractors/text.py
"""Plain text, Markdown, CSV and JSON extractors."""

import json

from corpusvault.exceptions import ExtractionError
from corpusvault.extractors.base import Extractor


def decode_utf8(data: bytes) -> str:
    """Decode bytes as UTF-8, dropping a BOM and replacing invalid sequences."""
    return data.decode("utf-8-sig", errors="replace")


class TextExtractor(Extractor):
    """Decode textual uploads as UTF-8."""

    MEDIA_TYPES = frozenset({"text/plain", "text/markdown", "text/x-markdown", "text/csv"})

    def extract(self, data: bytes, file_name: str) -> str:
        return decode_utf8(data)


class JSONExtractor(Extractor):
    """Validate JSON uploads and re-indent them for readable chunks."""

    MEDIA_TYPES = frozenset({"application/json"})

    def extract(self, data: bytes, file_name: str) -> str:
        try:
            parsed = json.loads(decode_utf8(data))
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Invalid JSON in {file_name}: {e}") from e
        return json.dumps(parsed, indent=2, ensure_ascii=False)
