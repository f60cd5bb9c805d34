# src/corpusvault/stores/corpus_registry.py
"""SQLite implementation of the corpus pointer registry."""

import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from corpusvault.stores.base import CorpusRegistry


class SQLiteCorpusRegistry(CorpusRegistry):
    """SQLite-backed corpus registry."""

    def __init__(self, db_path: str) -> None:
        """Initialize the registry.

        Args:
            db_path: Path to SQLite database file
        """
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db_path = db_path
        self._init_db()

    def _init_db(self) -> None:
        with sqlite3.connect(self._db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS corpora (
                    corpus_id TEXT PRIMARY KEY,
                    snapshot_cid TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def get_pointer(self, corpus_id: str) -> str | None:
        with sqlite3.connect(self._db_path) as conn:
            row = conn.execute(
                "SELECT snapshot_cid FROM corpora WHERE corpus_id = ?",
                (corpus_id,),
            ).fetchone()
            return row[0] if row else None

    def set_pointer(self, corpus_id: str, cid: str) -> None:
        now = datetime.now(UTC).isoformat()
        with sqlite3.connect(self._db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO corpora (corpus_id, snapshot_cid, updated_at)
                VALUES (?, ?, ?)
                """,
                (corpus_id, cid, now),
            )

    def delete(self, corpus_id: str) -> None:
        with sqlite3.connect(self._db_path) as conn:
            conn.execute("DELETE FROM corpora WHERE corpus_id = ?", (corpus_id,))

    def list_corpora(self) -> list[str]:
        with sqlite3.connect(self._db_path) as conn:
            cursor = conn.execute("SELECT corpus_id FROM corpora ORDER BY corpus_id")
            return [row[0] for row in cursor.fetchall()]
