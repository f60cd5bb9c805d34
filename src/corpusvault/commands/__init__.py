# src/corpusvault/commands/__init__.py
"""UI-agnostic command layer for corpusvault.

Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from corpusvault.commands import ingest, query, status

    result = ingest.ingest("medicine", ["./notes.md"])
    result = query.query("medicine", "What is X?", caller="alice")
    result = status.status("medicine")
"""

from corpusvault.commands import ingest, query, status
from corpusvault.commands.base import (
    CommandResult,
    IngestResult,
    JobCallback,
    JobInfo,
    QueryResult,
    SourceInfo,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandResult",
    "JobCallback",
    # Result types
    "IngestResult",
    "JobInfo",
    "QueryResult",
    "SourceInfo",
    "StatusResult",
    # Command modules
    "ingest",
    "query",
    "status",
]
