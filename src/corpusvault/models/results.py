# src/corpusvault/models/results.py
"""Result data models for searches, queries and ingestion.

Models that leave the process (query results, ingestion results, stats) use
camelCase aliases so ``model_dump(by_alias=True)`` yields the wire shape.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from corpusvault.models.chunk import VectorRecord

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResult(BaseModel):
    """A single record matched by a vector search."""

    record: VectorRecord
    similarity: float


class SourceReference(BaseModel):
    """A retrieved chunk as reported back to the caller."""

    model_config = _WIRE_CONFIG

    chunk_id: str
    source_file_name: str
    chunk_index: int
    similarity: float
    content: str


class TokenUsage(BaseModel):
    model_config = _WIRE_CONFIG

    input_tokens: int
    output_tokens: int


class QueryMetadata(BaseModel):
    model_config = _WIRE_CONFIG

    corpus_id: str
    total_sources_found: int
    processing_time_ms: int
    model_used: str
    token_usage: TokenUsage


class QueryResult(BaseModel):
    """Answer to a question plus accounting metadata."""

    model_config = _WIRE_CONFIG

    answer: str
    metadata: QueryMetadata
    sources: list[SourceReference] = Field(default_factory=list)


class RelevanceDecision(BaseModel):
    """Outcome of a relevance guard evaluation.

    ``average_similarity`` is None only when the similarity computation failed
    and ``error`` describes the failure.
    """

    model_config = _WIRE_CONFIG

    accepted: bool
    average_similarity: float | None
    threshold: float
    comparisons: int = 0
    cold_start: bool = False
    error: str | None = None


class IngestionResult(BaseModel):
    """Result payload attached to a completed ingestion job."""

    model_config = _WIRE_CONFIG

    corpus_id: str
    snapshot_cid: str
    file_name: str
    chunks_created: int
    records_added: int
    total_records: int
    vector_dimension: int
    relevance: RelevanceDecision


class CorpusStats(BaseModel):
    model_config = _WIRE_CONFIG

    corpus_id: str
    total_records: int
    files: list[str]
    vector_dimension: int | None = None
    snapshot_cid: str | None = None


class StorageStats(BaseModel):
    model_config = _WIRE_CONFIG

    corpora_loaded: int
    total_records: int
    estimated_memory_bytes: int


class SnapshotMetadata(BaseModel):
    """Header fields of a stored snapshot, readable without the secret."""

    model_config = _WIRE_CONFIG

    uuid: str
    vector_count: int
    last_updated: datetime
