"""corpusvault - Encrypted, relevance-guarded knowledge corpora.

Contributors upload documents into named corpora. Each upload is queued,
chunked, embedded, checked for topical fit and appended to an encrypted
snapshot in content-addressed storage. Callers then ask questions and get
answers grounded only in the retrieved chunks.

Quick Start (LiteLLM + Local Storage):
    from corpusvault import CorpusVault, Document, LiteLLMProvider, LocalStorage

    vault = CorpusVault(
        provider=LiteLLMProvider(
            llm="ollama/llama3.1:8b",
            embedding="ollama/nomic-embed-text",
        ),
        storage=LocalStorage("./data"),
        secret="change-me",
    )

    async with vault:
        vault.submit("medicine", Document(data=b"...", media_type="text/plain", file_name="a.txt"))
        await vault.join()
        result = await vault.query("medicine", "What is...?", caller="alice")

Explicit Stores:
    from corpusvault import CorpusVault, LiteLLMProvider
    from corpusvault.stores import IPFSContentStore, SQLiteCorpusRegistry

    vault = CorpusVault.from_stores(
        provider=LiteLLMProvider(llm="gemini/gemini-1.5-flash", embedding="gemini/text-embedding-004"),
        content_store=IPFSContentStore("http://127.0.0.1:5001"),
        corpus_registry=SQLiteCorpusRegistry("./data/corpora.db"),
        secret="change-me",
    )
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("corpusvault")
except PackageNotFoundError:
    # Source-tree fallback (e.g. running tests without installing the wheel)
    import tomllib
    from pathlib import Path

    def _read_version_from_pyproject() -> str | None:
        for parent in Path(__file__).resolve().parents:
            pyproject = parent / "pyproject.toml"
            if pyproject.exists():
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                found = data.get("project", {}).get("version")
                return str(found) if found is not None else None
        return None

    __version__ = _read_version_from_pyproject() or "unknown"

# Configuration objects
from corpusvault.configuration import (
    InMemoryStorage,
    IPFSStorage,
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)

# Embedding ABC
from corpusvault.embedder import ClientEmbedder, Embedder

# Errors
from corpusvault.exceptions import (
    BackendUnavailableError,
    CorpusVaultError,
    CorruptSnapshotError,
    ExtractionError,
    RelevanceRejection,
    StorageError,
    ValidationError,
)

# Document extraction
from corpusvault.extractors import Extractor, ExtractorRegistry

# Pipelines
from corpusvault.guard import RelevanceGuard
from corpusvault.ingestor import Ingestor
from corpusvault.job_queue import IngestionQueue

# Models
from corpusvault.models import (
    Chunk,
    CorpusStats,
    Document,
    IngestionRequest,
    IngestionResult,
    JobStatus,
    JobSummary,
    QueryResult,
    QueueStats,
    SearchResult,
    SubmissionReceipt,
    VectorRecord,
)

# Provider ABCs
from corpusvault.providers import EmbeddingClient, LLMClient
from corpusvault.query_service import QueryService, UsageEvent, UsageRecorder

# Configuration
from corpusvault.settings import Settings

# Storage ABCs
from corpusvault.stores import ContentStore, CorpusRegistry, VectorStore

# Central composition root
from corpusvault.vault import CorpusVault

__all__ = [
    # Version
    "__version__",
    # Models
    "Chunk",
    "CorpusStats",
    "Document",
    "IngestionRequest",
    "IngestionResult",
    "JobStatus",
    "JobSummary",
    "QueryResult",
    "QueueStats",
    "SearchResult",
    "SubmissionReceipt",
    "VectorRecord",
    # Errors
    "CorpusVaultError",
    "ValidationError",
    "ExtractionError",
    "BackendUnavailableError",
    "StorageError",
    "CorruptSnapshotError",
    "RelevanceRejection",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "IPFSStorage",
    "InMemoryStorage",
    # Storage
    "ContentStore",
    "CorpusRegistry",
    "VectorStore",
    # Extraction
    "Extractor",
    "ExtractorRegistry",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "RelevanceGuard",
    "Ingestor",
    "IngestionQueue",
    "QueryService",
    "UsageEvent",
    "UsageRecorder",
    # Central composition root
    "CorpusVault",
]
