# src/corpusvault/configuration/base.py
"""Protocol definitions for configuration objects.

Provider and storage configurations are structural: any frozen dataclass
with the right build methods satisfies them without inheritance. The
components they build (stores, clients) are ABCs instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from corpusvault.embedder import Embedder
    from corpusvault.providers import LLMClient
    from corpusvault.settings import Settings
    from corpusvault.stores import ContentStore, CorpusRegistry


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the backend components:
    - Embedder: Turns chunk text and questions into vectors
    - LLMClient: Synthesizes answers from retrieved context

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            llm: str
            embedding: str

            def build_embedder(self, settings: Settings) -> Embedder: ...
            def build_llm_client(self, settings: Settings) -> LLMClient: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder.

        Args:
            settings: Settings containing embedding batch size, delay and retries.
        """
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a generation client for answer synthesis.

        Args:
            settings: Settings containing num_retries.
        """
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build:
    - ContentStore: Content-addressed blob storage for snapshots
    - CorpusRegistry: Durable corpus id -> current snapshot CID pointers
    """

    def build_stores(self) -> tuple[ContentStore, CorpusRegistry]:
        """Build both storage components.

        Returns:
            Tuple of (content_store, corpus_registry)
        """
        ...
