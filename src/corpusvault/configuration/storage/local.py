# src/corpusvault/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corpusvault.stores import ContentStore, CorpusRegistry


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage.

    All data is persisted to the specified directory:
    - content/: Encrypted snapshots, addressed by content hash
    - corpora.db: Corpus id -> current snapshot CID (SQLite)

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.

    Example:
        storage = LocalStorage("./my_data")
    """

    data_dir: str

    def build_stores(self) -> tuple[ContentStore, CorpusRegistry]:
        """Build the content store and corpus registry.

        Creates the data directory if it doesn't exist.
        """
        from corpusvault.stores import LocalContentStore, SQLiteCorpusRegistry

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        content_store = LocalContentStore(os.path.join(self.data_dir, "content"))
        corpus_registry = SQLiteCorpusRegistry(os.path.join(self.data_dir, "corpora.db"))
        return content_store, corpus_registry
