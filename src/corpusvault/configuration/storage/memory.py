# src/corpusvault/configuration/storage/memory.py
"""In-memory storage configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corpusvault.stores import ContentStore, CorpusRegistry


@dataclass(frozen=True)
class InMemoryStorage:
    """Keeps snapshots and corpus pointers in process memory only."""

    def build_stores(self) -> tuple[ContentStore, CorpusRegistry]:
        from corpusvault.stores import InMemoryContentStore, InMemoryCorpusRegistry

        return InMemoryContentStore(), InMemoryCorpusRegistry()
