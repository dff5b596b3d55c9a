"""CopyPlan model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .copy_task import CopyTask


@dataclass(slots=True)
class CopyPlan:
    """A deduplicated set of copies that can be reviewed and then applied."""

    plan_id: str
    source_roots: tuple[Path, ...]
    destination_root: Path
    created_at: datetime
    tasks: list[CopyTask]

    discovered: int = 0
    already_present: int = 0
    collisions: int = 0
    warnings: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    def destinations(self) -> set[Path]:
        return {t.destination for t in self.tasks}

    def planned_bytes(self) -> int:
        """Total size of the sources; unreadable files count as 0."""
        return sum(t.source.size() or 0 for t in self.tasks)
