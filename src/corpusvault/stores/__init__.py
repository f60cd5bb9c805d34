# src/corpusvault/stores/__init__.py
"""Storage layer for corpusvault."""

from corpusvault.stores.base import ContentStore, CorpusRegistry
from corpusvault.stores.corpus_registry import SQLiteCorpusRegistry
from corpusvault.stores.ipfs import IPFSContentStore
from corpusvault.stores.local import LocalContentStore
from corpusvault.stores.memory import InMemoryContentStore, InMemoryCorpusRegistry
from corpusvault.stores.snapshot import SnapshotCodec
from corpusvault.stores.vector_store import VectorStore

__all__ = [
    "ContentStore",
    "CorpusRegistry",
    "InMemoryContentStore",
    "InMemoryCorpusRegistry",
    "LocalContentStore",
    "IPFSContentStore",
    "SQLiteCorpusRegistry",
    "SnapshotCodec",
    "VectorStore",
]
