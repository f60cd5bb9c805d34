# src/corpusvault/commands/status.py
"""Status command - show corpus statistics.

This module provides the status logic that UIs call.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from corpusvault.commands.base import StatusResult
from corpusvault.config import ConfigError, create_vault, get_vault_config
from corpusvault.exceptions import CorpusVaultError

if TYPE_CHECKING:
    from corpusvault.vault import CorpusVault


async def status_with_vault(vault: CorpusVault, corpus_id: str) -> StatusResult:
    """Get corpus statistics using an existing CorpusVault instance."""
    stats = await vault.corpus_stats(corpus_id)
    result = StatusResult(
        success=True,
        corpus_id=corpus_id,
        total_records=stats.total_records,
        files=stats.files,
        vector_dimension=stats.vector_dimension,
        snapshot_cid=stats.snapshot_cid,
    )

    try:
        metadata = await vault.snapshot_metadata(corpus_id)
    except CorpusVaultError as e:
        result.error = f"Snapshot metadata unavailable: {e}"
        return result

    if metadata is not None:
        result.snapshot_uuid = metadata.uuid
        result.last_updated = metadata.last_updated
    return result


def status(
    corpus_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """Get statistics for a corpus.

    Args:
        corpus_id: Corpus to inspect
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        StatusResult with corpus statistics
    """
    config = get_vault_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return StatusResult(success=False, corpus_id=corpus_id, error=config.message)

    try:
        vault = create_vault(config)
    except Exception as e:
        return StatusResult(
            success=False,
            corpus_id=corpus_id,
            error=f"Failed to create vault: {e}",
        )

    return asyncio.run(status_with_vault(vault, corpus_id))
