# src/corpusvault/extractors/html.py
"""HTML extractor - converts HTML to markdown for LLM consumption."""

from corpusvault.extractors.base import Extractor
from corpusvault.extractors.text import decode_utf8


class HTMLExtractor(Extractor):
    """Extract HTML uploads as markdown.

    Removes scripts, styles and navigation elements before conversion so
    chunks carry page content rather than boilerplate.

    Requires: pip install corpusvault[html]
    """

    MEDIA_TYPES = frozenset({"text/html", "application/xhtml+xml"})

    # Tags to remove entirely (including their content)
    REMOVE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "noscript"]

    def extract(self, data: bytes, file_name: str) -> str:
        """Convert an HTML document to markdown.

        Raises:
            ImportError: If beautifulsoup4 or markdownify is not installed
        """
        try:
            from bs4 import BeautifulSoup
        except ImportError:
            raise ImportError(
                "beautifulsoup4 is required for HTML support. "
                "Install with: pip install corpusvault[html]"
            ) from None

        try:
            from markdownify import markdownify
        except ImportError:
            raise ImportError(
                "markdownify is required for HTML support. "
                "Install with: pip install corpusvault[html]"
            ) from None

        soup = BeautifulSoup(decode_utf8(data), "html.parser")
        for tag in soup(self.REMOVE_TAGS):
            tag.decompose()

        return self._collapse_blank_lines(markdownify(str(soup), heading_style="ATX"))

    def _collapse_blank_lines(self, text: str) -> str:
        lines = text.split("\n")
        cleaned = []
        prev_blank = False

        for line in lines:
            is_blank = not line.strip()
            if is_blank and prev_blank:
                continue
            cleaned.append(line.rstrip())
            prev_blank = is_blank

        return "\n".join(cleaned)
