# src/corpusvault/chunker.py
"""Sentence-aware fixed-window text chunking."""

from corpusvault.models import Chunk

SENTENCE_TERMINATORS = frozenset(".?!")


class TextChunker:
    """Split normalized text into overlapping, bounded-size chunks.

    Windows are ``chunk_size`` characters long and consecutive windows overlap
    by ``chunk_overlap`` characters. When a window would end mid-text, its end
    is pulled back to just after the last sentence terminator found in the
    final ``sentence_search_ratio`` share of the window, if there is one.

    Example:
        chunker = TextChunker(chunk_size=1000, chunk_overlap=200)
        chunks = chunker.chunk(text, source_file_name="notes.txt", corpus_id="c1")
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        sentence_search_ratio: float = 0.3,
    ) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Maximum characters per chunk window
            chunk_overlap: Characters shared by consecutive windows
            sentence_search_ratio: Tail share of the window searched for a
                sentence end (0.0 disables sentence snapping)

        Raises:
            ValueError: If chunk_overlap >= chunk_size or the ratio is outside [0, 1)
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be less than chunk_size ({chunk_size})"
            )
        if not 0.0 <= sentence_search_ratio < 1.0:
            raise ValueError("sentence_search_ratio must be in [0.0, 1.0)")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.sentence_search_ratio = sentence_search_ratio

    def chunk(self, text: str, source_file_name: str, corpus_id: str) -> list[Chunk]:
        """Split text into Chunks, indexed in order with total_chunks filled in."""
        spans = self.split(text)
        total = len(spans)
        return [
            Chunk(
                content=content,
                start_index=start,
                end_index=end,
                source_file_name=source_file_name,
                chunk_index=index,
                total_chunks=total,
                corpus_id=corpus_id,
            )
            for index, (start, end, content) in enumerate(spans)
        ]

    def split(self, text: str) -> list[tuple[int, int, str]]:
        """Compute chunk windows as (start, end, trimmed content) triples.

        Whitespace-only windows are dropped.
        """
        spans: list[tuple[int, int, str]] = []
        length = len(text)
        start = 0

        while start < length:
            end = min(start + self.chunk_size, length)
            if end < length:
                end = self._snap_to_sentence_end(text, start, end)

            content = text[start:end].strip()
            if content:
                spans.append((start, end, content))

            if end >= length:
                break

            # Never move backwards, even when overlap swallows the whole window
            next_start = end - self.chunk_overlap
            start = next_start if next_start > start else end

        return spans

    def _snap_to_sentence_end(self, text: str, start: int, end: int) -> int:
        floor = start + int(self.chunk_size * (1.0 - self.sentence_search_ratio))
        for pos in range(end - 1, floor - 1, -1):
            if text[pos] in SENTENCE_TERMINATORS:
                return pos + 1
        return end
