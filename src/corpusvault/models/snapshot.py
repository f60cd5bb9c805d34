# src/corpusvault/models/snapshot.py
"""Wire format of an encrypted corpus snapshot.

Field names serialize in camelCase. Sensitive text travels as
``EncryptedBlob``; vectors and positional metadata stay in plaintext.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EncryptedBlob(BaseModel):
    """One AEAD-encrypted field. All byte fields are base64 encoded."""

    v: int = 1
    iv: str
    ct: str
    tag: str


class SnapshotChunkMetadata(BaseModel):
    model_config = _WIRE_CONFIG

    original_file_name: EncryptedBlob
    chunk_index: int
    total_chunks: int
    corpus_id: str


class SnapshotChunk(BaseModel):
    model_config = _WIRE_CONFIG

    id: str
    content: EncryptedBlob
    start_index: int
    end_index: int
    metadata: SnapshotChunkMetadata


class SnapshotVector(BaseModel):
    model_config = _WIRE_CONFIG

    id: str
    vector: list[float]
    chunk: SnapshotChunk
    timestamp: datetime


class Snapshot(BaseModel):
    model_config = _WIRE_CONFIG

    uuid: str
    vector_count: int
    last_updated: datetime
    vectors: list[SnapshotVector] = Field(default_factory=list)
