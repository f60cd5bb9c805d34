# src/corpusvault/models/__init__.py
"""Data models for corpusvault."""

from corpusvault.models.chunk import Chunk, VectorRecord
from corpusvault.models.document import Document, IngestionRequest
from corpusvault.models.job import Job, JobStatus, JobSummary, QueueStats, SubmissionReceipt
from corpusvault.models.results import (
    CorpusStats,
    IngestionResult,
    QueryMetadata,
    QueryResult,
    RelevanceDecision,
    SearchResult,
    SnapshotMetadata,
    SourceReference,
    StorageStats,
    TokenUsage,
)
from corpusvault.models.snapshot import EncryptedBlob, Snapshot

__all__ = [
    "Chunk",
    "VectorRecord",
    "Document",
    "IngestionRequest",
    "Job",
    "JobStatus",
    "JobSummary",
    "QueueStats",
    "SubmissionReceipt",
    "CorpusStats",
    "IngestionResult",
    "QueryMetadata",
    "QueryResult",
    "RelevanceDecision",
    "SearchResult",
    "SnapshotMetadata",
    "SourceReference",
    "StorageStats",
    "TokenUsage",
    "EncryptedBlob",
    "Snapshot",
]
