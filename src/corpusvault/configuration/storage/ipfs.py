# src/corpusvault/configuration/storage/ipfs.py
"""IPFS storage configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from corpusvault.stores.ipfs import DEFAULT_IPFS_API_URL

if TYPE_CHECKING:
    from corpusvault.stores import ContentStore, CorpusRegistry


@dataclass(frozen=True)
class IPFSStorage:
    """Snapshots on an IPFS node, corpus pointers in a local SQLite file.

    Args:
        registry_path: Path of the SQLite corpus pointer database.
        api_url: Base URL of a Kubo-compatible HTTP RPC API.
        timeout: Request timeout in seconds.
        pin: Pin added snapshots on the node.

    Example:
        storage = IPFSStorage("./data/corpora.db", api_url="http://127.0.0.1:5001")
    """

    registry_path: str
    api_url: str = DEFAULT_IPFS_API_URL
    timeout: float = 30.0
    pin: bool = True

    def build_stores(self) -> tuple[ContentStore, CorpusRegistry]:
        from corpusvault.stores import IPFSContentStore, SQLiteCorpusRegistry

        content_store = IPFSContentStore(api_url=self.api_url, timeout=self.timeout, pin=self.pin)
        return content_store, SQLiteCorpusRegistry(self.registry_path)
