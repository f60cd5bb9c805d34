# src/corpusvault/ingestor.py
"""Ingestion pipeline for corpusvault."""

import asyncio
from collections.abc import Callable

from corpusvault.chunker import TextChunker
from corpusvault.embedder import Embedder
from corpusvault.exceptions import ExtractionError, ValidationError
from corpusvault.extractors import ExtractorRegistry
from corpusvault.guard import RelevanceGuard
from corpusvault.models import IngestionRequest, IngestionResult, VectorRecord
from corpusvault.stores import VectorStore

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type - "extracting", "chunking", "embedding",
           "checking", or "persisting"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""


class Ingestor:
    """Orchestrates the ingestion pipeline for one upload.

    Pipeline:
    1. Extract normalized text from the upload
    2. Split the text into overlapping chunks
    3. Embed every chunk
    4. Check the vector dimension against the corpus
    5. Run the relevance guard against the existing corpus
    6. Append the records, persisting a new snapshot

    Note: Serialization of ingestions is the IngestionQueue's job. Calling
    aingest() concurrently for the same corpus is not supported.
    """

    def __init__(
        self,
        extractor_registry: ExtractorRegistry,
        chunker: TextChunker,
        embedder: Embedder,
        guard: RelevanceGuard,
        vector_store: VectorStore,
    ) -> None:
        """Initialize the ingestor with all required components.

        Args:
            extractor_registry: Validates uploads and extracts their text
            chunker: Splits text into chunks
            embedder: Embeds chunk content
            guard: Decides whether the new records fit the corpus
            vector_store: Cache and persistence for corpus records
        """
        self.extractor_registry = extractor_registry
        self.chunker = chunker
        self.embedder = embedder
        self.guard = guard
        self.vector_store = vector_store

    def validate(self, request: IngestionRequest) -> None:
        """Reject a request before any backend work is done.

        Raises:
            ValidationError: If the corpus id is blank or the upload is invalid
        """
        if not request.corpus_id.strip():
            raise ValidationError("Corpus id must not be empty")
        self.extractor_registry.validate(request.document)

    async def aingest(
        self,
        request: IngestionRequest,
        on_progress: ProgressCallback | None = None,
    ) -> IngestionResult:
        """Run one upload through the full pipeline.

        Args:
            request: The upload and its target corpus
            on_progress: Optional callback(event, current, total, message)

        Returns:
            IngestionResult describing the new snapshot

        Raises:
            ValidationError: Invalid upload or vector dimension mismatch
            ExtractionError: The document yielded no usable text
            BackendUnavailableError: The embedding backend failed
            RelevanceRejection: The content does not fit the corpus
            StorageError: The new snapshot could not be persisted
        """

        def progress(event: str, current: int, total: int, message: str = "") -> None:
            if on_progress:
                on_progress(event, current, total, message)

        self.validate(request)
        corpus_id = request.corpus_id
        document = request.document

        # Step 1: Extract
        progress("extracting", 0, 1, f"Extracting text from {document.file_name}...")
        text = await asyncio.to_thread(self.extractor_registry.extract, document)
        if not text:
            raise ExtractionError(f"No text content found in {document.file_name}")
        progress("extracting", 1, 1, f"Extracted {len(text)} characters")

        # Step 2: Chunk
        chunks = self.chunker.chunk(text, source_file_name=document.file_name, corpus_id=corpus_id)
        progress("chunking", 1, 1, f"Created {len(chunks)} chunks")

        # Step 3: Embed
        progress("embedding", 0, len(chunks), f"Embedding {len(chunks)} chunks...")
        vectors = await self.embedder.aembed_texts([chunk.content for chunk in chunks])
        records = [
            VectorRecord(vector=vector, chunk=chunk)
            for chunk, vector in zip(chunks, vectors, strict=True)
        ]
        progress("embedding", len(chunks), len(chunks), "Embedding complete")

        # Steps 4-5: Dimension and relevance checks
        progress("checking", 0, 1, "Checking relevance...")
        existing = await self.vector_store.get_records(corpus_id)
        if existing and existing[0].dimension != records[0].dimension:
            raise ValidationError(
                f"Embedding dimension {records[0].dimension} does not match "
                f"corpus {corpus_id} dimension {existing[0].dimension}"
            )
        decision = self.guard.enforce(records, existing)
        progress("checking", 1, 1, "Relevance check passed")

        # Step 6: Persist
        progress("persisting", 0, 1, f"Persisting {len(existing) + len(records)} records...")
        cid = await self.vector_store.append(corpus_id, records)
        progress("persisting", 1, 1, f"Snapshot {cid}")

        return IngestionResult(
            corpus_id=corpus_id,
            snapshot_cid=cid,
            file_name=document.file_name,
            chunks_created=len(chunks),
            records_added=len(records),
            total_records=len(existing) + len(records),
            vector_dimension=records[0].dimension,
            relevance=decision,
        )
