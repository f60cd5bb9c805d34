# src/corpusvault/stores/vector_store.py
"""Per-corpus vector cache with write-through snapshot persistence."""

import asyncio
import sys

import numpy as np
from loguru import logger

from corpusvault.exceptions import CorruptSnapshotError, StorageError, ValidationError
from corpusvault.models import CorpusStats, SearchResult, StorageStats, VectorRecord
from corpusvault.similarity import cosine_similarities
from corpusvault.stores.base import CorpusRegistry
from corpusvault.stores.snapshot import SnapshotCodec


class VectorStore:
    """In-memory cache of vector records keyed by corpus id.

    Corpora are loaded lazily from their current snapshot on first use.
    Every append persists the full merged record list and moves the corpus
    pointer only once that persist has succeeded. Search is brute-force
    cosine similarity over the cached records.

    All mutation of a corpus goes through append() and clear(). Loads and
    appends of one corpus are serialized by a per-corpus lock, so a lazy load
    started by a reader can never replace records an append has already
    cached. Readers of a loaded corpus only see whole lists.
    """

    def __init__(self, codec: SnapshotCodec, registry: CorpusRegistry) -> None:
        self.codec = codec
        self.registry = registry
        self._records: dict[str, list[VectorRecord]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def is_loaded(self, corpus_id: str) -> bool:
        return corpus_id in self._records

    async def ensure_loaded(self, corpus_id: str) -> list[VectorRecord]:
        """Load a corpus into the cache if it isn't there yet.

        A missing, unreadable or corrupt snapshot leaves the corpus empty
        instead of raising.
        """
        if corpus_id in self._records:
            return self._records[corpus_id]

        async with self._lock(corpus_id):
            return await self._load_locked(corpus_id)

    def _lock(self, corpus_id: str) -> asyncio.Lock:
        return self._locks.setdefault(corpus_id, asyncio.Lock())

    async def _load_locked(self, corpus_id: str) -> list[VectorRecord]:
        # Caller holds the corpus lock; another task may have loaded it meanwhile
        if corpus_id in self._records:
            return self._records[corpus_id]

        records: list[VectorRecord] = []
        cid = self.registry.get_pointer(corpus_id)
        if cid is not None:
            try:
                records = await self.codec.aload(cid)
                logger.info(f"Loaded {len(records)} records for corpus {corpus_id} from {cid}")
            except (StorageError, CorruptSnapshotError) as e:
                logger.warning(f"Could not load snapshot {cid} for corpus {corpus_id}: {e}")

        self._records[corpus_id] = records
        return records

    async def get_records(self, corpus_id: str) -> list[VectorRecord]:
        """Return a copy of a corpus's records, loading it if needed."""
        return list(await self.ensure_loaded(corpus_id))

    def dimension(self, corpus_id: str) -> int | None:
        """Vector dimension of a cached corpus, or None if it is empty or not loaded."""
        records = self._records.get(corpus_id)
        return records[0].dimension if records else None

    async def append(self, corpus_id: str, new_records: list[VectorRecord]) -> str:
        """Append records to a corpus and persist the merged corpus.

        Returns:
            The CID of the new snapshot

        Raises:
            ValidationError: If new_records is empty or a vector dimension
                does not match the corpus
            StorageError: If the snapshot could not be persisted (the cache
                and pointer are left unchanged)
        """
        if not new_records:
            raise ValidationError("Cannot append an empty list of records")

        async with self._lock(corpus_id):
            existing = await self._load_locked(corpus_id)
            expected = existing[0].dimension if existing else new_records[0].dimension
            for record in new_records:
                if record.dimension != expected:
                    raise ValidationError(
                        f"Vector dimension {record.dimension} does not match "
                        f"corpus {corpus_id} dimension {expected}"
                    )
                if record.chunk.corpus_id != corpus_id:
                    raise ValidationError(
                        f"Record {record.id} belongs to corpus {record.chunk.corpus_id}, "
                        f"not {corpus_id}"
                    )

            merged = existing + list(new_records)
            cid = await self.codec.apersist(merged, corpus_id)

            self._records[corpus_id] = merged
            self.registry.set_pointer(corpus_id, cid)
        logger.info(
            f"Corpus {corpus_id}: appended {len(new_records)} records "
            f"({len(merged)} total), snapshot {cid}"
        )
        return cid

    async def search(
        self,
        corpus_id: str,
        query_vector: list[float],
        top_k: int = 5,
        min_similarity: float = 0.1,
    ) -> list[SearchResult]:
        """Find the records most similar to a query vector.

        Results are sorted by descending similarity, ties keep insertion
        order, and only records scoring at least ``min_similarity`` are
        returned. An empty corpus yields an empty list.

        Raises:
            ValidationError: If top_k < 1 or the query dimension does not
                match the corpus
        """
        if top_k < 1:
            raise ValidationError(f"top_k must be at least 1, got {top_k}")

        records = await self.ensure_loaded(corpus_id)
        if not records:
            return []

        if len(query_vector) != records[0].dimension:
            raise ValidationError(
                f"Query dimension {len(query_vector)} does not match "
                f"corpus {corpus_id} dimension {records[0].dimension}"
            )

        scores = cosine_similarities(query_vector, [r.vector for r in records])
        # Stable sort on negated scores keeps insertion order for ties
        order = np.argsort(-scores, kind="stable")

        results: list[SearchResult] = []
        for index in order:
            score = float(scores[index])
            if score < min_similarity:
                break
            results.append(SearchResult(record=records[index], similarity=score))
            if len(results) == top_k:
                break
        return results

    async def corpus_stats(self, corpus_id: str) -> CorpusStats:
        records = await self.ensure_loaded(corpus_id)
        files = sorted({r.chunk.source_file_name for r in records})
        return CorpusStats(
            corpus_id=corpus_id,
            total_records=len(records),
            files=files,
            vector_dimension=records[0].dimension if records else None,
            snapshot_cid=self.registry.get_pointer(corpus_id),
        )

    def storage_stats(self) -> StorageStats:
        """Summarize what is currently cached in memory."""
        total = sum(len(records) for records in self._records.values())
        estimated = sum(
            r.dimension * 8 + sys.getsizeof(r.chunk.content)
            for records in self._records.values()
            for r in records
        )
        return StorageStats(
            corpora_loaded=len(self._records),
            total_records=total,
            estimated_memory_bytes=estimated,
        )

    def clear(self, corpus_id: str) -> None:
        """Drop a corpus from the cache and forget its snapshot pointer."""
        self._records.pop(corpus_id, None)
        self.registry.delete(corpus_id)
        logger.info(f"Cleared corpus {corpus_id}")
