# src/corpusvault/stores/memory.py
"""In-memory content store and corpus registry."""

import hashlib

from corpusvault.exceptions import StorageError
from corpusvault.stores.base import ContentStore, CorpusRegistry


def content_id(data: bytes) -> str:
    """Content identifier used by the local stores: hex SHA-256 of the bytes."""
    return hashlib.sha256(data).hexdigest()


class InMemoryContentStore(ContentStore):
    """Process-local content store, for tests and ephemeral deployments."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def put(self, data: bytes) -> str:
        cid = content_id(data)
        self._blobs[cid] = bytes(data)
        return cid

    def get(self, cid: str) -> bytes:
        try:
            return self._blobs[cid]
        except KeyError:
            raise StorageError(f"Content not found: {cid}") from None

    async def aput(self, data: bytes) -> str:
        return self.put(data)

    async def aget(self, cid: str) -> bytes:
        return self.get(cid)

    def __len__(self) -> int:
        return len(self._blobs)


class InMemoryCorpusRegistry(CorpusRegistry):
    def __init__(self) -> None:
        self._pointers: dict[str, str] = {}

    def get_pointer(self, corpus_id: str) -> str | None:
        return self._pointers.get(corpus_id)

    def set_pointer(self, corpus_id: str, cid: str) -> None:
        self._pointers[corpus_id] = cid

    def delete(self, corpus_id: str) -> None:
        self._pointers.pop(corpus_id, None)

    def list_corpora(self) -> list[str]:
        return list(self._pointers)
