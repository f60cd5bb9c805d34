# src/corpusvault/commands/base.py
"""Base types for the commands layer.

Commands return these plain dataclasses so any UI can render them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class JobInfo:
    """Outcome of one submitted file."""

    file_name: str
    job_id: str | None = None
    status: str = "rejected"  # queued, processing, completed, failed, rejected
    progress: int = 0
    error: str | None = None
    records_added: int = 0
    total_records: int = 0
    snapshot_cid: str | None = None


# Called once per file when its job reaches a final state
JobCallback = Callable[[JobInfo], None]


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        corpus_id: Target corpus
        jobs: Per-file outcome, in submission order
    """

    corpus_id: str = ""
    jobs: list[JobInfo] = field(default_factory=list)

    @property
    def completed(self) -> int:
        return sum(1 for job in self.jobs if job.status == "completed")

    @property
    def failed(self) -> int:
        return sum(1 for job in self.jobs if job.status in ("failed", "rejected"))


@dataclass
class SourceInfo:
    """A retrieved chunk backing an answer."""

    source_file_name: str
    chunk_index: int
    similarity: float
    content: str


@dataclass
class QueryResult(CommandResult):
    """Result of the query command.

    Attributes:
        question: The original question
        answer: Synthesized or insufficient-information answer
        sources: Chunks the answer was built from
        model_used: Generation model name
        input_tokens: Estimated question tokens
        output_tokens: Estimated answer tokens
        processing_time_ms: Wall time of the query
    """

    question: str = ""
    answer: str | None = None
    sources: list[SourceInfo] = field(default_factory=list)
    model_used: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    processing_time_ms: int = 0


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        corpus_id: Inspected corpus
        total_records: Records currently in the corpus
        files: Distinct source file names
        vector_dimension: Vector dimension of the corpus (None when empty)
        snapshot_cid: CID of the current snapshot
        snapshot_uuid: Corpus id recorded in the current snapshot header
        last_updated: Time the current snapshot was written
    """

    corpus_id: str = ""
    total_records: int = 0
    files: list[str] = field(default_factory=list)
    vector_dimension: int | None = None
    snapshot_cid: str | None = None
    snapshot_uuid: str | None = None
    last_updated: datetime | None = None
