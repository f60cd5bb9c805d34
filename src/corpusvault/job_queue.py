# src/corpusvault/job_queue.py
"""Single-worker ingestion job queue."""

from __future__ import annotations

import asyncio
import contextlib
import re
import time
from collections import deque
from datetime import UTC, datetime, timedelta
from types import TracebackType
from uuid import uuid4

from loguru import logger

from corpusvault.ingestor import Ingestor
from corpusvault.models import (
    IngestionRequest,
    Job,
    JobStatus,
    JobSummary,
    QueueStats,
    SubmissionReceipt,
)

# Job progress reached when the pipeline starts each stage
STAGE_PROGRESS: dict[str, int] = {
    "embedding": 40,
    "checking": 70,
    "persisting": 85,
}


def make_job_id(corpus_id: str) -> str:
    """Build a job id from the target, a millisecond timestamp and a random suffix."""
    target = re.sub(r"[^A-Za-z0-9_-]", "-", corpus_id)[:32]
    return f"job_{target}_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class IngestionQueue:
    """FIFO queue that runs at most one ingestion job at a time.

    The worker is started eagerly on every submission and again by a polling
    task as a safety net. A failed job is terminal and never blocks the jobs
    behind it. Terminal jobs are purged after ``retention``.

    Use as an async context manager so background tasks always stop:

        async with IngestionQueue(ingestor) as queue:
            receipt = queue.submit(request)
            await queue.join()
            print(queue.get_job(receipt.job_id))
    """

    def __init__(
        self,
        ingestor: Ingestor,
        poll_interval: float = 5.0,
        next_job_delay: float = 0.1,
        cleanup_interval: float = 3600.0,
        retention: timedelta = timedelta(hours=24),
    ) -> None:
        """Initialize the queue.

        Args:
            ingestor: Pipeline that processes each job
            poll_interval: Seconds between safety-net worker triggers
            next_job_delay: Seconds to wait between consecutive jobs
            cleanup_interval: Seconds between retention sweeps
            retention: Age after which terminal jobs are purged
        """
        self.ingestor = ingestor
        self.poll_interval = poll_interval
        self.next_job_delay = next_job_delay
        self.cleanup_interval = cleanup_interval
        self.retention = retention

        self._jobs: dict[str, Job] = {}
        self._pending: deque[str] = deque()
        self._processing = False
        self._stopping = False
        self._worker: asyncio.Task[None] | None = None
        self._background: list[asyncio.Task[None]] = []

    # Lifecycle

    async def start(self) -> None:
        """Start the polling and cleanup tasks."""
        if self._background:
            return
        self._background = [
            asyncio.create_task(self._poll_loop(), name="ingestion-queue-poll"),
            asyncio.create_task(self._cleanup_loop(), name="ingestion-queue-cleanup"),
        ]
        logger.info("Ingestion queue started")

    async def stop(self) -> None:
        """Stop background tasks and let the active job finish.

        Jobs still queued stay queued; they are reported in the log.
        """
        for task in self._background:
            task.cancel()
        for task in self._background:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._background = []

        if self._worker is not None and not self._worker.done():
            # Finish the current job but don't start another one
            self._stopping = True
            await self._worker
        self._stopping = False

        if self._pending:
            logger.warning(f"Ingestion queue stopped with {len(self._pending)} jobs still queued")
        else:
            logger.info("Ingestion queue stopped")

    async def __aenter__(self) -> IngestionQueue:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    # Submission

    def submit(self, request: IngestionRequest) -> SubmissionReceipt:
        """Validate a request and enqueue it.

        Must be called from within a running event loop.

        Raises:
            ValidationError: If the request is rejected up front
        """
        self.ingestor.validate(request)

        job = Job(
            id=make_job_id(request.corpus_id),
            corpus_target=request.corpus_id,
            payload=request,
        )
        self._jobs[job.id] = job
        self._pending.append(job.id)
        logger.info(
            f"Queued job {job.id} for corpus {job.corpus_target} "
            f"({request.document.file_name}, position {len(self._pending)})"
        )

        self._kick()
        return SubmissionReceipt(job_id=job.id)

    async def join(self, poll: float = 0.01) -> None:
        """Wait until no job is queued or processing."""
        while self._pending or self._processing:
            self._kick()
            await asyncio.sleep(poll)

    # Read-only queries

    def get_job(self, job_id: str) -> JobSummary | None:
        job = self._jobs.get(job_id)
        return job.summary() if job else None

    def get_jobs_for_target(self, corpus_id: str) -> list[JobSummary]:
        """All jobs for a corpus, newest first."""
        jobs = [job for job in reversed(self._jobs.values()) if job.corpus_target == corpus_id]
        jobs.sort(key=lambda job: job.created_at, reverse=True)
        return [job.summary() for job in jobs]

    def get_queue_stats(self) -> QueueStats:
        counts = {status: 0 for status in JobStatus}
        for job in self._jobs.values():
            counts[job.status] += 1
        return QueueStats(
            queued=counts[JobStatus.QUEUED],
            processing=counts[JobStatus.PROCESSING],
            completed=counts[JobStatus.COMPLETED],
            failed=counts[JobStatus.FAILED],
            total_jobs=len(self._jobs),
        )

    # Retention

    def purge_expired(self, now: datetime | None = None) -> int:
        """Remove terminal jobs older than the retention window.

        Age is measured from completion, or creation if the job never completed.

        Returns:
            Number of jobs removed
        """
        cutoff = (now or datetime.now(UTC)) - self.retention
        expired = [
            job_id
            for job_id, job in self._jobs.items()
            if job.status.is_terminal and (job.completed_at or job.created_at) < cutoff
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.debug(f"Purged {len(expired)} expired jobs")
        return len(expired)

    # Worker

    def _kick(self) -> None:
        if self._processing or self._stopping or not self._pending:
            return
        self._processing = True
        self._worker = asyncio.create_task(self._drain(), name="ingestion-queue-worker")

    async def _drain(self) -> None:
        try:
            while self._pending and not self._stopping:
                await self._run(self._pending.popleft())
                if self._pending and self.next_job_delay:
                    await asyncio.sleep(self.next_job_delay)
        finally:
            self._processing = False

    async def _run(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if job is None or job.status is not JobStatus.QUEUED:
            return

        job.status = JobStatus.PROCESSING
        job.started_at = datetime.now(UTC)
        job.progress = 10
        logger.info(f"Processing job {job.id} for corpus {job.corpus_target}")

        def on_progress(event: str, current: int, total: int, message: str) -> None:
            stage_progress = STAGE_PROGRESS.get(event)
            if stage_progress is not None and current == 0:
                job.progress = max(job.progress, stage_progress)

        try:
            job.progress = 30
            result = await self.ingestor.aingest(job.payload, on_progress=on_progress)
        except Exception as e:
            job.status = JobStatus.FAILED
            job.error = str(e) or type(e).__name__
            job.progress = 0
            job.completed_at = datetime.now(UTC)
            logger.error(f"Job {job.id} failed: {job.error}")
            return

        job.status = JobStatus.COMPLETED
        job.result = result
        job.progress = 100
        job.completed_at = datetime.now(UTC)
        logger.info(
            f"Job {job.id} completed: {result.records_added} records added "
            f"to corpus {job.corpus_target}"
        )

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            self._kick()

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            self.purge_expired()
