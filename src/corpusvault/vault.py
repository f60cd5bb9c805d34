# src/corpusvault/vault.py
"""Central composition root for corpusvault."""

from __future__ import annotations

from datetime import timedelta
from types import TracebackType
from typing import TYPE_CHECKING, cast

from corpusvault.chunker import TextChunker
from corpusvault.crypto import FieldCipher
from corpusvault.extractors import ExtractorRegistry
from corpusvault.guard import RelevanceGuard
from corpusvault.ingestor import Ingestor
from corpusvault.job_queue import IngestionQueue
from corpusvault.models import (
    CorpusStats,
    Document,
    IngestionRequest,
    JobSummary,
    QueryResult,
    QueueStats,
    SnapshotMetadata,
    SubmissionReceipt,
)
from corpusvault.query_service import QueryService, UsageRecorder
from corpusvault.settings import Settings
from corpusvault.stores import SnapshotCodec, VectorStore

if TYPE_CHECKING:
    from corpusvault.configuration import ProviderConfig, StorageConfig
    from corpusvault.stores import ContentStore, CorpusRegistry


class CorpusVault:
    """Bundles every component behind one object.

    A vault owns the ingestion queue, the vector store and the query service
    for any number of corpora. Ingestion goes through the queue; queries read
    the shared vector store.

    There are two ways to create a CorpusVault:

    1. With a storage bundle:

        from corpusvault import CorpusVault, LiteLLMProvider, LocalStorage

        vault = CorpusVault(
            provider=LiteLLMProvider(
                llm="gemini/gemini-1.5-flash",
                embedding="gemini/text-embedding-004",
            ),
            storage=LocalStorage("./data"),
            secret="change-me",
        )

    2. With explicit stores:

        vault = CorpusVault.from_stores(
            provider=LiteLLMProvider(...),
            content_store=IPFSContentStore("http://127.0.0.1:5001"),
            corpus_registry=SQLiteCorpusRegistry("./data/corpora.db"),
            secret="change-me",
        )

    Run it as an async context manager so the queue's background tasks stop:

        async with vault:
            receipt = vault.submit("medicine", Document(...))
            await vault.join()
            result = await vault.query("medicine", "What is X?", caller="alice")
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        secret: str,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        content_store: ContentStore | None = None,
        corpus_registry: CorpusRegistry | None = None,
        # Common
        settings: Settings | None = None,
        extractor_registry: ExtractorRegistry | None = None,
        usage_recorder: UsageRecorder | None = None,
    ) -> None:
        """Create a CorpusVault.

        Args:
            provider: Provider configuration (builds embedder and generation client).
            secret: Secret the snapshot encryption key is derived from.
            storage: Storage bundle. Mutually exclusive with explicit stores.
            content_store: Explicit content-addressed store for snapshots.
            corpus_registry: Explicit durable corpus pointer registry.
            settings: Behavioral settings.
            extractor_registry: Custom extractor registry. If None, uses default.
            usage_recorder: Optional sink for per-query usage events.

        Raises:
            ValueError: If neither a storage bundle nor both explicit stores are
                provided, if both are provided, or if the secret is empty.
        """
        self._settings = settings if settings is not None else Settings()

        # Path 1: Storage bundle
        if storage is not None:
            if content_store is not None or corpus_registry is not None:
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            content_store, corpus_registry = storage.build_stores()

        # Path 2: Explicit stores
        elif content_store is None or corpus_registry is None:
            raise ValueError(
                "Must provide either 'storage' bundle or both explicit stores "
                "(content_store, corpus_registry)"
            )

        self.content_store = cast("ContentStore", content_store)
        self.corpus_registry = cast("CorpusRegistry", corpus_registry)

        s = self._settings
        self.codec = SnapshotCodec(self.content_store, FieldCipher.from_secret(secret))
        self.vector_store = VectorStore(self.codec, self.corpus_registry)

        # Build provider components
        self.embedder = provider.build_embedder(s)
        self._llm_client = provider.build_llm_client(s)

        self.extractor_registry = (
            extractor_registry
            if extractor_registry is not None
            else ExtractorRegistry.default(
                max_upload_bytes=s.max_upload_bytes,
                allowed_media_types=s.allowed_media_types,
            )
        )
        self.ingestor = Ingestor(
            extractor_registry=self.extractor_registry,
            chunker=TextChunker(
                chunk_size=s.chunk_size,
                chunk_overlap=s.chunk_overlap,
                sentence_search_ratio=s.sentence_search_ratio,
            ),
            embedder=self.embedder,
            guard=RelevanceGuard(
                threshold=s.relevance_threshold,
                sample_size=s.relevance_sample_size,
                max_comparisons=s.relevance_max_comparisons,
                on_error=s.on_guard_error,
            ),
            vector_store=self.vector_store,
        )
        self.queue = IngestionQueue(
            self.ingestor,
            poll_interval=s.queue_poll_interval,
            next_job_delay=s.queue_next_job_delay,
            cleanup_interval=s.cleanup_interval,
            retention=timedelta(hours=s.job_retention_hours),
        )
        self.query_service = QueryService(
            embedder=self.embedder,
            vector_store=self.vector_store,
            llm_client=self._llm_client,
            default_top_k=s.default_top_k,
            default_min_similarity=s.default_min_similarity,
            chars_per_token=s.chars_per_token,
            synthesis_temperature=s.synthesis_temperature,
            system_prompt=s.synthesis_prompt,
            usage_recorder=usage_recorder,
        )

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        secret: str,
        content_store: ContentStore,
        corpus_registry: CorpusRegistry,
        settings: Settings | None = None,
        extractor_registry: ExtractorRegistry | None = None,
        usage_recorder: UsageRecorder | None = None,
    ) -> CorpusVault:
        """Create a CorpusVault with explicit stores."""
        return cls(
            provider=provider,
            secret=secret,
            content_store=content_store,
            corpus_registry=corpus_registry,
            settings=settings,
            extractor_registry=extractor_registry,
            usage_recorder=usage_recorder,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    # Lifecycle

    async def start(self) -> None:
        await self.queue.start()

    async def stop(self) -> None:
        await self.queue.stop()

    async def __aenter__(self) -> CorpusVault:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    # Ingestion

    def submit(
        self,
        corpus_id: str,
        document: Document,
        contributor: str | None = None,
    ) -> SubmissionReceipt:
        """Validate an upload and queue it for ingestion into a corpus.

        Raises:
            ValidationError: If the upload is rejected up front
        """
        request = IngestionRequest(corpus_id=corpus_id, document=document, contributor=contributor)
        return self.queue.submit(request)

    async def join(self) -> None:
        """Wait for every queued job to finish."""
        await self.queue.join()

    def get_job(self, job_id: str) -> JobSummary | None:
        return self.queue.get_job(job_id)

    def get_jobs_for_target(self, corpus_id: str) -> list[JobSummary]:
        return self.queue.get_jobs_for_target(corpus_id)

    def get_queue_stats(self) -> QueueStats:
        return self.queue.get_queue_stats()

    # Query

    async def query(
        self,
        corpus_id: str,
        question: str,
        caller: str,
        top_k: int | None = None,
        min_similarity: float | None = None,
    ) -> QueryResult:
        """Answer a question from one corpus. See QueryService.aquery."""
        return await self.query_service.aquery(
            question,
            corpus_id,
            caller,
            top_k=top_k,
            min_similarity=min_similarity,
        )

    async def ais_ready(self) -> bool:
        return await self.query_service.ais_ready()

    # Inspection

    async def corpus_stats(self, corpus_id: str) -> CorpusStats:
        return await self.vector_store.corpus_stats(corpus_id)

    async def snapshot_metadata(self, corpus_id: str) -> SnapshotMetadata | None:
        """Metadata of a corpus's current snapshot, or None if it has none."""
        cid = self.corpus_registry.get_pointer(corpus_id)
        if cid is None:
            return None
        return await self.codec.aread_metadata(cid)

    def list_corpora(self) -> list[str]:
        return self.corpus_registry.list_corpora()
