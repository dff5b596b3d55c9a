"""Concurrent recursive enumeration of regular files under a root."""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from schedcopy.errors import TraversalError, map_os_error
from schedcopy.models import FileEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WalkWarning:
    """An entry that could not be examined and was left out of the walk."""

    path: Path
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class WalkResult:
    """All regular files found under `root`, plus per-entry warnings."""

    root: Path
    files: frozenset[FileEntry]
    warnings: list[WalkWarning] = field(default_factory=list)

    def paths(self) -> set[Path]:
        return {entry.path for entry in self.files}


@dataclass(slots=True)
class _ScanPartition:
    files: list[FileEntry] = field(default_factory=list)
    subdirs: list[Path] = field(default_factory=list)
    warnings: list[WalkWarning] = field(default_factory=list)


def walk_files(root: Path | str, *, max_workers: Optional[int] = None) -> WalkResult:
    """
    Recursively list every regular file under root.

    Behavior:
        - Symlinks to files count as files; symlinked directories are not
          descended into.
        - Unreadable entries/subdirectories become WalkWarnings and are skipped.
        - Each directory is scanned by one pool task returning its own
          partition; partitions are merged here, on the calling thread.

    Raises:
        TraversalError: if root itself cannot be read.
    """
    root = Path(root)
    try:
        first = _scan_dir(root)
    except OSError as exc:
        message, details = map_os_error(exc, path=root, operation="walk path")
        raise TraversalError(message, details=details, cause=exc) from exc

    files: set[FileEntry] = set(first.files)
    warnings: list[WalkWarning] = list(first.warnings)

    if first.subdirs:
        with ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="schedcopy-walk",
        ) as pool:
            pending: dict[Future[_ScanPartition], Path] = {
                pool.submit(_scan_dir, d): d for d in first.subdirs
            }
            while pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for fut in done:
                    directory = pending.pop(fut)
                    try:
                        part = fut.result()
                    except OSError as exc:
                        warnings.append(_warn(directory, exc, "read directory"))
                        continue
                    files.update(part.files)
                    warnings.extend(part.warnings)
                    for sub in part.subdirs:
                        pending[pool.submit(_scan_dir, sub)] = sub

    return WalkResult(root=root, files=frozenset(files), warnings=warnings)


def _scan_dir(directory: Path) -> _ScanPartition:
    """Scan one directory level. Raises OSError if it cannot be opened."""
    part = _ScanPartition()
    with os.scandir(directory) as it:
        try:
            for entry in it:
                _classify(entry, part)
        except OSError as exc:
            # Entries read before the error are kept.
            part.warnings.append(_warn(directory, exc, "read directory"))
    return part


def _classify(entry: os.DirEntry[str], part: _ScanPartition) -> None:
    path = Path(entry.path)
    try:
        if entry.is_dir(follow_symlinks=False):
            part.subdirs.append(path)
            return
        if entry.is_file():
            part.files.append(FileEntry(path))
            return
        if entry.is_symlink():
            if not os.path.exists(path):
                part.warnings.append(_warn_message(path, "dangling symlink"))
            else:
                logger.debug("not descending into symlinked directory %s", path)
            return
        logger.debug("ignoring special file %s", path)
    except OSError as exc:
        part.warnings.append(_warn(path, exc, "stat"))


def _warn(path: Path, exc: OSError, operation: str) -> WalkWarning:
    message, details = map_os_error(exc, path=path, operation=operation)
    logger.warning("%s", message)
    return WalkWarning(path=path, message=message, details=details)


def _warn_message(path: Path, reason: str) -> WalkWarning:
    message = f"skipped `{path}`: {reason}"
    logger.warning("%s", message)
    return WalkWarning(path=path, message=message, details={"path": str(path)})
