"""Engine and job configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from croniter import croniter

from schedcopy.errors import ConfigError


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Explicit worker-pool configuration for one SyncEngine.

    Attributes:
        workers: Copy pool size. None lets concurrent.futures pick a default.
        walk_workers: Directory-scan pool size. None means the same default.
    """

    workers: Optional[int] = None
    walk_workers: Optional[int] = None

    def __post_init__(self) -> None:
        _require_positive(self.workers, "workers")
        _require_positive(self.walk_workers, "walk_workers")


@dataclass(frozen=True, slots=True)
class SyncJob:
    """What to sync and when, as requested by the caller."""

    sources: tuple[Path, ...]
    destination: Path
    cron: Optional[str] = None
    dry_run: bool = False
    engine: EngineConfig = field(default_factory=EngineConfig)

    def validate(self) -> None:
        """Raises ConfigError for jobs that cannot run."""
        if not self.sources:
            raise ConfigError("at least one source path is required")
        if self.cron is not None and not croniter.is_valid(self.cron):
            raise ConfigError(
                f"invalid cron expression: {self.cron!r}",
                details={"cron": self.cron},
            )
        if self.dry_run and self.cron is not None:
            raise ConfigError(
                "a dry run cannot be scheduled; drop the cron expression or the dry-run flag",
                details={"cron": self.cron, "dry_run": True},
            )


def _require_positive(value: Optional[int], name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"{name} must be a positive integer",
            details={name: value},
        )
