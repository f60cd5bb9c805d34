# src/corpusvault/commands/query.py
"""Query command - answer a question from a corpus.

This module provides the core query logic that UIs call.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from corpusvault.commands.base import QueryResult, SourceInfo
from corpusvault.config import ConfigError, create_vault, get_vault_config
from corpusvault.exceptions import CorpusVaultError

if TYPE_CHECKING:
    from corpusvault.vault import CorpusVault


async def query_with_vault(
    vault: CorpusVault,
    corpus_id: str,
    question: str,
    caller: str,
    top_k: int | None = None,
    min_similarity: float | None = None,
) -> QueryResult:
    """Query using an existing CorpusVault instance.

    Args:
        vault: Existing CorpusVault instance
        corpus_id: Corpus to search
        question: The question to ask
        caller: Identity the usage is accounted to
        top_k: Number of chunks to retrieve (None for default)
        min_similarity: Similarity floor (None for default)

    Returns:
        QueryResult with answer and sources
    """
    try:
        response = await vault.query(
            corpus_id,
            question,
            caller,
            top_k=top_k,
            min_similarity=min_similarity,
        )
    except CorpusVaultError as e:
        return QueryResult(success=False, question=question, error=f"Query failed: {e}")

    metadata = response.metadata
    return QueryResult(
        success=True,
        question=question,
        answer=response.answer,
        sources=[
            SourceInfo(
                source_file_name=s.source_file_name,
                chunk_index=s.chunk_index,
                similarity=s.similarity,
                content=s.content,
            )
            for s in response.sources
        ],
        model_used=metadata.model_used,
        input_tokens=metadata.token_usage.input_tokens,
        output_tokens=metadata.token_usage.output_tokens,
        processing_time_ms=metadata.processing_time_ms,
    )


def query(
    corpus_id: str,
    question: str,
    caller: str = "cli",
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    top_k: int | None = None,
    min_similarity: float | None = None,
) -> QueryResult:
    """Answer a question from a corpus using the configured vault.

    Args:
        corpus_id: Corpus to search
        question: The question to ask
        caller: Identity the usage is accounted to
        data_dir: Override data directory
        config_path: Override config file path
        top_k: Number of chunks to retrieve (None for default)
        min_similarity: Similarity floor (None for default)

    Returns:
        QueryResult with answer and sources
    """
    config = get_vault_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return QueryResult(success=False, question=question, error=config.message)

    try:
        vault = create_vault(config)
    except Exception as e:
        return QueryResult(success=False, question=question, error=f"Failed to create vault: {e}")

    return asyncio.run(
        query_with_vault(
            vault,
            corpus_id,
            question,
            caller,
            top_k=top_k,
            min_similarity=min_similarity,
        )
    )
