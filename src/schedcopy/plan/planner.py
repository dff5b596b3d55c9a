"""Diff planning: which source files are missing at the destination."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from schedcopy.errors import PathMappingError
from schedcopy.models import FileEntry
from schedcopy.util.ids import new_plan_id
from schedcopy.util.log import TRACE
from schedcopy.util.time import now_utc

from .copy_plan import CopyPlan
from .copy_task import CopyTask

logger = logging.getLogger(__name__)


def build_copy_plan(
    source_files: Mapping[Path, Iterable[FileEntry]],
    destination_root: Path,
    destination_files: Iterable[FileEntry | Path],
) -> CopyPlan:
    """
    Build a CopyPlan from walked source and destination file sets.

    Rules:
        - Join key: a file's path relative to the source root it was found in.
        - A candidate whose destination path is already present is dropped
          (content is never compared).
        - When several roots map to the same missing destination, the first
          candidate met in iteration order is kept. Iteration order of the
          walked sets is arbitrary, so callers must not rely on which source
          wins.

    Raises:
        PathMappingError: a file is not inside the root it is attributed to.
    """
    present: set[Path] = {
        f.path if isinstance(f, FileEntry) else Path(f) for f in destination_files
    }

    by_destination: dict[Path, CopyTask] = {}
    discovered = 0
    already_present = 0
    collisions = 0

    for source_root, entries in source_files.items():
        for entry in entries:
            discovered += 1
            try:
                relative = entry.relative_to(source_root)
            except ValueError as exc:
                raise PathMappingError(
                    f"file `{entry.path}` is not inside source root `{source_root}`",
                    details={"path": str(entry.path), "root": str(source_root)},
                    cause=exc,
                ) from exc

            target = destination_root / relative
            if target in present:
                already_present += 1
                continue

            if target in by_destination:
                collisions += 1
                logger.debug(
                    "collision at %s: keeping %s, dropping %s",
                    target,
                    by_destination[target].source.path,
                    entry.path,
                )
                continue

            logger.log(TRACE, "planned %s -> %s", entry.path, target)
            by_destination[target] = CopyTask(
                source=entry,
                destination=target,
                source_root=source_root,
            )

    return CopyPlan(
        plan_id=new_plan_id(),
        source_roots=tuple(source_files.keys()),
        destination_root=destination_root,
        created_at=now_utc(),
        tasks=list(by_destination.values()),
        discovered=discovered,
        already_present=already_present,
        collisions=collisions,
    )
