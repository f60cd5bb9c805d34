# src/corpusvault/models/job.py
"""Ingestion job models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from corpusvault.models.document import IngestionRequest
from corpusvault.models.results import IngestionResult

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class Job(BaseModel):
    """One unit of ingestion work.

    Mutated only by the queue worker that owns it.
    """

    id: str
    corpus_target: str
    payload: IngestionRequest
    status: JobStatus = JobStatus.QUEUED
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    started_at: datetime | None = None
    completed_at: datetime | None = None
    progress: int = Field(default=0, ge=0, le=100)
    error: str | None = None
    result: IngestionResult | None = None

    def summary(self) -> "JobSummary":
        return JobSummary(
            id=self.id,
            status=self.status,
            created_at=self.created_at,
            started_at=self.started_at,
            completed_at=self.completed_at,
            error=self.error,
            progress=self.progress,
            corpus_target=self.corpus_target,
            file_name=self.payload.document.file_name,
            result=self.result,
        )


class JobSummary(BaseModel):
    """Read-only view of a job returned by status queries."""

    model_config = _WIRE_CONFIG

    id: str
    status: JobStatus
    created_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None
    progress: int
    corpus_target: str
    file_name: str
    result: IngestionResult | None = None


class SubmissionReceipt(BaseModel):
    """Acknowledgment that an upload was accepted for processing."""

    model_config = _WIRE_CONFIG

    job_id: str
    status: JobStatus = JobStatus.QUEUED
    message: str = "Document accepted for processing"


class QueueStats(BaseModel):
    model_config = _WIRE_CONFIG

    queued: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0
    total_jobs: int = 0
