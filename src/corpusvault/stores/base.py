# src/corpusvault/stores/base.py
"""Abstract base classes for storage."""

import asyncio
from abc import ABC, abstractmethod


class ContentStore(ABC):
    """Content-addressed blob storage.

    ``put`` returns an opaque, immutable content identifier (CID) that
    changes whenever the stored bytes change. Implementations raise
    StorageError for any put/get failure, including unknown CIDs.
    """

    @abstractmethod
    def put(self, data: bytes) -> str:
        """Store bytes and return their content identifier."""
        ...

    @abstractmethod
    def get(self, cid: str) -> bytes:
        """Fetch the bytes stored under a content identifier."""
        ...

    async def aput(self, data: bytes) -> str:
        """Store bytes (async). Default runs put() in a worker thread."""
        return await asyncio.to_thread(self.put, data)

    async def aget(self, cid: str) -> bytes:
        """Fetch bytes (async). Default runs get() in a worker thread."""
        return await asyncio.to_thread(self.get, cid)


class CorpusRegistry(ABC):
    """Durable pointer from each corpus to its current snapshot CID.

    Kept separate from the content store: snapshots are immutable, the
    pointer is the only thing that moves on each ingestion.
    """

    @abstractmethod
    def get_pointer(self, corpus_id: str) -> str | None:
        """Get the current snapshot CID for a corpus, or None if never persisted."""

    @abstractmethod
    def set_pointer(self, corpus_id: str, cid: str) -> None:
        """Point a corpus at a new snapshot after a successful persist."""

    @abstractmethod
    def delete(self, corpus_id: str) -> None:
        """Forget a corpus."""

    @abstractmethod
    def list_corpora(self) -> list[str]:
        """List all tracked corpus ids."""
