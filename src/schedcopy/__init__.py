"""schedcopy public API."""

from __future__ import annotations

from schedcopy.config import EngineConfig, SyncJob
from schedcopy.engine import SyncEngine
from schedcopy.errors import (
    ConfigError,
    CopyTaskError,
    DuplicateInputError,
    InputError,
    InvalidDestinationError,
    MissingSourceError,
    PathMappingError,
    SchedCopyError,
    TraversalError,
)
from schedcopy.executor import CopyExecutor
from schedcopy.fs import ResolvedRoots, WalkResult, resolve_roots, walk_files
from schedcopy.models import CopyFailure, ExecutionOutcome, FileEntry, TaskResult
from schedcopy.plan import CopyPlan, CopyTask, build_copy_plan
from schedcopy.report import LoggingReporter, ProgressReporter, SyncReporter
from schedcopy.scheduler import CronScheduler

__all__ = [
    # High-level
    "SyncEngine",
    "CronScheduler",
    "EngineConfig",
    "SyncJob",
    # Pipeline
    "resolve_roots",
    "walk_files",
    "build_copy_plan",
    "CopyExecutor",
    # Plan / Models
    "ResolvedRoots",
    "WalkResult",
    "FileEntry",
    "CopyTask",
    "CopyPlan",
    "TaskResult",
    "CopyFailure",
    "ExecutionOutcome",
    # Reporting
    "SyncReporter",
    "LoggingReporter",
    "ProgressReporter",
    # Errors
    "SchedCopyError",
    "InputError",
    "DuplicateInputError",
    "MissingSourceError",
    "InvalidDestinationError",
    "TraversalError",
    "PathMappingError",
    "CopyTaskError",
    "ConfigError",
]
