# src/corpusvault/commands/ingest.py
"""Ingest command - submit files to a corpus through the ingestion queue.

This module provides the core ingest logic that UIs call.
"""

from __future__ import annotations

import asyncio
import mimetypes
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from corpusvault.commands.base import IngestResult, JobCallback, JobInfo
from corpusvault.config import ConfigError, create_vault, get_vault_config
from corpusvault.exceptions import ValidationError
from corpusvault.models import Document, JobSummary

if TYPE_CHECKING:
    from corpusvault.vault import CorpusVault

# Extensions whose media type the platform registry may not know
EXTENSION_MEDIA_TYPES = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".json": "application/json",
    ".html": "text/html",
    ".htm": "text/html",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def guess_media_type(path: str | Path) -> str:
    """Guess a file's media type from its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in EXTENSION_MEDIA_TYPES:
        return EXTENSION_MEDIA_TYPES[suffix]
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type or "application/octet-stream"


def load_document(path: str | Path) -> Document:
    """Read a file from disk into a Document."""
    path = Path(path)
    return Document(data=path.read_bytes(), media_type=guess_media_type(path), file_name=path.name)


def _job_info(summary: JobSummary) -> JobInfo:
    info = JobInfo(
        file_name=summary.file_name,
        job_id=summary.id,
        status=summary.status.value,
        progress=summary.progress,
        error=summary.error,
    )
    if summary.result is not None:
        info.records_added = summary.result.records_added
        info.total_records = summary.result.total_records
        info.snapshot_cid = summary.result.snapshot_cid
    return info


async def ingest_with_vault(
    vault: CorpusVault,
    corpus_id: str,
    paths: Sequence[str | Path],
    contributor: str | None = None,
    on_job_complete: JobCallback | None = None,
) -> IngestResult:
    """Submit files to a corpus using an existing, started CorpusVault.

    Every file is validated and queued; the call returns once the queue
    has processed all of them.

    Args:
        vault: Running CorpusVault instance
        corpus_id: Target corpus
        paths: Files to ingest
        contributor: Optional contributor identity recorded on the request
        on_job_complete: Callback with each file's final JobInfo

    Returns:
        IngestResult with one JobInfo per file
    """
    result = IngestResult(success=True, corpus_id=corpus_id)
    submitted: list[int] = []

    for path in paths:
        path = Path(path)
        if not path.is_file():
            info = JobInfo(file_name=path.name, error=f"File not found: {path}")
            result.jobs.append(info)
            if on_job_complete:
                on_job_complete(info)
            continue

        try:
            receipt = vault.submit(corpus_id, load_document(path), contributor=contributor)
        except (OSError, ValidationError) as e:
            info = JobInfo(file_name=path.name, error=str(e))
            result.jobs.append(info)
            if on_job_complete:
                on_job_complete(info)
            continue

        submitted.append(len(result.jobs))
        result.jobs.append(
            JobInfo(file_name=path.name, job_id=receipt.job_id, status=receipt.status.value)
        )

    await vault.join()

    for index in submitted:
        job_id = result.jobs[index].job_id
        summary = vault.get_job(job_id) if job_id else None
        if summary is not None:
            result.jobs[index] = _job_info(summary)
        if on_job_complete:
            on_job_complete(result.jobs[index])

    if result.jobs and result.completed == 0:
        result.success = False
        result.error = "No files were ingested"
    return result


def ingest(
    corpus_id: str,
    paths: Sequence[str | Path],
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    contributor: str | None = None,
    on_job_complete: JobCallback | None = None,
) -> IngestResult:
    """Ingest files into a corpus using the configured vault.

    Args:
        corpus_id: Target corpus
        paths: Files to ingest
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        contributor: Optional contributor identity
        on_job_complete: Callback with each file's final JobInfo

    Returns:
        IngestResult with per-file outcomes
    """
    if not paths:
        return IngestResult(success=False, corpus_id=corpus_id, error="No files given")

    config = get_vault_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return IngestResult(success=False, corpus_id=corpus_id, error=config.message)

    try:
        vault = create_vault(config)
    except Exception as e:
        return IngestResult(
            success=False,
            corpus_id=corpus_id,
            error=f"Failed to create vault: {e}",
        )

    async def run() -> IngestResult:
        async with vault:
            return await ingest_with_vault(
                vault,
                corpus_id,
                paths,
                contributor=contributor,
                on_job_complete=on_job_complete,
            )

    return asyncio.run(run())
