# src/corpusvault/extractors/pypdf_extractor.py
"""PDF extractor using pypdf - lightweight, pure Python."""

import io

from corpusvault.exceptions import ExtractionError
from corpusvault.extractors.base import Extractor


class PyPDFExtractor(Extractor):
    """Extract text from PDF uploads page by page.

    A PDF that cannot be read, or that yields no text at all, raises
    ExtractionError instead of producing a partial result.

    Requires: pip install corpusvault[pdf]
    """

    MEDIA_TYPES = frozenset({"application/pdf"})

    def extract(self, data: bytes, file_name: str) -> str:
        try:
            from pypdf import PdfReader
        except ImportError:
            raise ImportError(
                "pypdf is required for PDF text extraction. "
                "Install with: pip install corpusvault[pdf]"
            ) from None

        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF {file_name}: {e}") from e

        text = "\n\n".join(page.strip() for page in pages if page.strip())
        if not text:
            raise ExtractionError(f"No extractable text found in PDF {file_name}")
        return text
