"""Public model exports for schedcopy."""

from __future__ import annotations

from .file_entry import FileEntry
from .results import (
    CopyFailure,
    ExecutionOutcome,
    OutcomeStatus,
    TaskResult,
    TaskStatus,
    summarize_results,
)

__all__ = [
    "FileEntry",
    "TaskStatus",
    "OutcomeStatus",
    "CopyFailure",
    "TaskResult",
    "ExecutionOutcome",
    "summarize_results",
]
