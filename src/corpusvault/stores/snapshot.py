# src/corpusvault/stores/snapshot.py
"""Encrypted snapshot codec for persisting a corpus to a content store."""

from collections.abc import Sequence
from datetime import UTC, datetime
from pydantic import ValidationError as PydanticValidationError

from corpusvault.crypto import FieldCipher
from corpusvault.exceptions import CorruptSnapshotError, StorageError
from corpusvault.models import Chunk, SnapshotMetadata, VectorRecord
from corpusvault.models.snapshot import (
    Snapshot,
    SnapshotChunk,
    SnapshotChunkMetadata,
    SnapshotVector,
)
from corpusvault.stores.base import ContentStore


class SnapshotCodec:
    """Serialize, encrypt and persist whole corpora, and the inverse.

    Chunk content and original file names are encrypted field by field;
    vectors, positions and counters are stored in plaintext. Every persist
    writes the full record list, producing a new CID.

    Example:
        codec = SnapshotCodec(InMemoryContentStore(), FieldCipher.from_secret("s3cret"))
        cid = await codec.apersist(records, "medicine")
        restored = await codec.aload(cid)
    """

    def __init__(self, content_store: ContentStore, cipher: FieldCipher) -> None:
        self.content_store = content_store
        self._cipher = cipher

    def encode(self, records: Sequence[VectorRecord], corpus_id: str) -> bytes:
        """Encrypt sensitive fields and serialize records to snapshot JSON.

        The snapshot header carries the owning corpus id in its ``uuid`` field.
        """
        snapshot = Snapshot(
            uuid=corpus_id,
            vector_count=len(records),
            last_updated=datetime.now(UTC),
            vectors=[self._encode_record(r) for r in records],
        )
        return snapshot.model_dump_json(by_alias=True).encode("utf-8")

    def decode(self, data: bytes) -> list[VectorRecord]:
        """Parse snapshot JSON and decrypt it back into records.

        Raises:
            CorruptSnapshotError: If the JSON is invalid, has the wrong shape,
                or any field fails to decrypt
        """
        snapshot = self._parse(data)
        return [self._decode_vector(v) for v in snapshot.vectors]

    def read_metadata(self, data: bytes) -> SnapshotMetadata:
        """Read snapshot header fields without decrypting anything."""
        snapshot = self._parse(data)
        return SnapshotMetadata(
            uuid=snapshot.uuid,
            vector_count=snapshot.vector_count,
            last_updated=snapshot.last_updated,
        )

    async def apersist(self, records: Sequence[VectorRecord], corpus_id: str) -> str:
        """Encode a corpus's records and store them, returning the new CID.

        Raises:
            StorageError: If the content store rejects the upload
        """
        data = self.encode(records, corpus_id)
        try:
            return await self.content_store.aput(data)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Snapshot upload failed: {e}") from e

    async def aload(self, cid: str) -> list[VectorRecord]:
        """Fetch and decode the snapshot stored under ``cid``.

        Raises:
            StorageError: If the snapshot cannot be fetched
            CorruptSnapshotError: If it cannot be decoded
        """
        return self.decode(await self._fetch(cid))

    async def aread_metadata(self, cid: str) -> SnapshotMetadata:
        return self.read_metadata(await self._fetch(cid))

    async def _fetch(self, cid: str) -> bytes:
        try:
            return await self.content_store.aget(cid)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Snapshot download of {cid} failed: {e}") from e

    @staticmethod
    def _parse(data: bytes) -> Snapshot:
        try:
            return Snapshot.model_validate_json(data)
        except PydanticValidationError as e:
            raise CorruptSnapshotError(
                f"Invalid snapshot ({e.error_count()} validation errors)"
            ) from e

    def _encode_record(self, record: VectorRecord) -> SnapshotVector:
        chunk = record.chunk
        return SnapshotVector(
            id=record.id,
            vector=record.vector,
            chunk=SnapshotChunk(
                id=chunk.id,
                content=self._cipher.encrypt(chunk.content),
                start_index=chunk.start_index,
                end_index=chunk.end_index,
                metadata=SnapshotChunkMetadata(
                    original_file_name=self._cipher.encrypt(chunk.source_file_name),
                    chunk_index=chunk.chunk_index,
                    total_chunks=chunk.total_chunks,
                    corpus_id=chunk.corpus_id,
                ),
            ),
            timestamp=record.created_at,
        )

    def _decode_vector(self, vector: SnapshotVector) -> VectorRecord:
        stored = vector.chunk
        try:
            chunk = Chunk(
                id=stored.id,
                content=self._cipher.decrypt(stored.content),
                start_index=stored.start_index,
                end_index=stored.end_index,
                source_file_name=self._cipher.decrypt(stored.metadata.original_file_name),
                chunk_index=stored.metadata.chunk_index,
                total_chunks=stored.metadata.total_chunks,
                corpus_id=stored.metadata.corpus_id,
            )
            return VectorRecord(
                id=vector.id,
                vector=vector.vector,
                chunk=chunk,
                created_at=vector.timestamp,
            )
        except PydanticValidationError as e:
            raise CorruptSnapshotError(f"Invalid record {vector.id} in snapshot") from e
