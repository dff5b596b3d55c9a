"""Result models for copy execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal, Optional

from schedcopy.errors import CopyTaskError

TaskStatus = Literal["copied", "skipped", "failed", "abandoned"]
OutcomeStatus = Literal["success", "failed"]


@dataclass(slots=True)
class CopyFailure:
    """The hard failure of one copy task."""

    source: Path
    destination: Path
    error_type: str
    error_message: str
    error_details: dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None


@dataclass(slots=True)
class TaskResult:
    """Result for a single CopyTask."""

    source: Path
    destination: Path
    status: TaskStatus

    bytes_copied: int = 0
    note: Optional[str] = None
    failure: Optional[CopyFailure] = None


@dataclass(slots=True)
class ExecutionOutcome:
    """Aggregate result of executing a copy plan."""

    status: OutcomeStatus
    failure: Optional[CopyFailure]
    results: list[TaskResult]

    summary: dict[str, int] = field(default_factory=dict)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def copied(self) -> list[TaskResult]:
        return [r for r in self.results if r.status == "copied"]

    @property
    def skipped(self) -> list[TaskResult]:
        return [r for r in self.results if r.status == "skipped"]

    def raise_for_failure(self) -> None:
        """Raise CopyTaskError if this outcome carries a failure."""
        if self.failure is None:
            return
        f = self.failure
        raise CopyTaskError(
            f.error_message,
            details={
                "source": str(f.source),
                "destination": str(f.destination),
                "error_type": f.error_type,
                **f.error_details,
            },
            cause=f.cause,
        )


def summarize_results(results: list[TaskResult]) -> dict[str, int]:
    summary: dict[str, int] = {
        "copied": 0,
        "skipped": 0,
        "failed": 0,
        "abandoned": 0,
        "bytes_copied": 0,
    }
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
        summary["bytes_copied"] += r.bytes_copied
    return summary
