# src/corpusvault/stores/local.py
"""Local filesystem content store."""

import os
import tempfile
from pathlib import Path

from corpusvault.exceptions import StorageError
from corpusvault.stores.base import ContentStore
from corpusvault.stores.memory import content_id


class LocalContentStore(ContentStore):
    """Content-addressed store backed by a directory of files.

    Each blob is written once to ``<root>/<cid[:2]>/<cid>``. Writes go to a
    temporary file first and are moved into place atomically.
    """

    def __init__(self, root_dir: str) -> None:
        """Initialize the store.

        Args:
            root_dir: Directory holding the blobs. Created if it doesn't exist.
        """
        self._root = Path(root_dir)
        self._root.mkdir(parents=True, exist_ok=True)

    def _path(self, cid: str) -> Path:
        if len(cid) < 3 or not all(c in "0123456789abcdef" for c in cid):
            raise StorageError(f"Invalid content identifier: {cid!r}")
        return self._root / cid[:2] / cid

    def put(self, data: bytes) -> str:
        cid = content_id(data)
        path = self._path(cid)
        if path.exists():
            return cid
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError as e:
            raise StorageError(f"Failed to write content {cid}: {e}") from e
        return cid

    def get(self, cid: str) -> bytes:
        path = self._path(cid)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise StorageError(f"Content not found: {cid}") from None
        except OSError as e:
            raise StorageError(f"Failed to read content {cid}: {e}") from e
