# src/corpusvault/models/chunk.py
"""Chunk and vector record data models."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """A bounded slice of a document's normalized text.

    ``start_index`` and ``end_index`` are positions in the normalized text the
    chunk was cut from. ``content`` is that window with surrounding whitespace
    trimmed.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    content: str
    start_index: int = Field(ge=0)
    end_index: int = Field(gt=0)
    source_file_name: str
    chunk_index: int = Field(ge=0)
    total_chunks: int = Field(ge=1)
    corpus_id: str


class VectorRecord(BaseModel):
    """An embedded chunk owned by exactly one corpus."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    vector: list[float]
    chunk: Chunk
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def dimension(self) -> int:
        return len(self.vector)
