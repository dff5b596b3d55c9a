"""Parallel copy executor with first-failure aggregation."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Sequence

from schedcopy.errors import ConfigError, map_os_error
from schedcopy.models import (
    CopyFailure,
    ExecutionOutcome,
    TaskResult,
    summarize_results,
)
from schedcopy.plan import CopyTask
from schedcopy.report import SyncReporter, notify
from schedcopy.util.log import TRACE
from schedcopy.util.time import now_utc

logger = logging.getLogger(__name__)

_COPY_BUFSIZE: int = 1024 * 1024


class _FirstFailure:
    """Set-once cell: only the first recorded failure is kept."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._failure: Optional[CopyFailure] = None

    def set(self, failure: CopyFailure) -> bool:
        with self._lock:
            if self._failure is not None:
                return False
            self._failure = failure
            return True

    @property
    def is_set(self) -> bool:
        return self._failure is not None

    def get(self) -> Optional[CopyFailure]:
        return self._failure


class CopyExecutor:
    """
    Copy a list of CopyTasks on a thread pool.

    Policy:
        - An existing destination (re-checked at execution time) is skipped.
        - Missing parent directories are created; concurrent creation is fine.
        - The destination is opened with exclusive create, so an existing
          file is never overwritten. Losing that race is a skip.
        - The first hard failure becomes the outcome. Tasks already running
          finish; tasks not yet started are abandoned.
    """

    def __init__(self, workers: Optional[int] = None) -> None:
        if workers is not None and workers < 1:
            raise ConfigError("workers must be a positive integer", details={"workers": workers})
        self._workers = workers

    @property
    def workers(self) -> Optional[int]:
        return self._workers

    def execute(
        self,
        tasks: Sequence[CopyTask],
        reporter: Optional[SyncReporter] = None,
    ) -> ExecutionOutcome:
        started_at = now_utc()
        first_failure = _FirstFailure()
        results: list[TaskResult] = []

        if tasks:
            with ThreadPoolExecutor(
                max_workers=self._workers,
                thread_name_prefix="schedcopy-copy",
            ) as pool:
                futures = [pool.submit(self._run_task, t, first_failure) for t in tasks]
                for fut in as_completed(futures):
                    result = fut.result()
                    results.append(result)
                    if reporter is not None:
                        notify(reporter.on_task_done, result)

        failure = first_failure.get()
        return ExecutionOutcome(
            status="failed" if failure is not None else "success",
            failure=failure,
            results=results,
            summary=summarize_results(results),
            started_at=started_at,
            finished_at=now_utc(),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _run_task(self, task: CopyTask, first_failure: _FirstFailure) -> TaskResult:
        source = task.source.path
        dest = task.destination

        if first_failure.is_set:
            return TaskResult(source=source, destination=dest, status="abandoned")

        if os.path.lexists(dest):
            logger.warning("skipped existing file %s", dest)
            return TaskResult(
                source=source,
                destination=dest,
                status="skipped",
                note="destination exists",
            )

        parent = dest.parent
        try:
            if not parent.is_dir():
                logger.debug("creating directories %s for %s", parent, dest)
                parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return _failed(task, exc, parent, "create directory", first_failure)

        logger.log(TRACE, "copying from `%s` to `%s`", source, dest)
        try:
            copied = _copy_exclusive(source, dest)
        except FileExistsError:
            logger.warning("skipped existing file %s (created concurrently)", dest)
            return TaskResult(
                source=source,
                destination=dest,
                status="skipped",
                note="destination created concurrently",
            )
        except OSError as exc:
            return _failed(task, exc, exc.filename or source, "copy", first_failure)

        return TaskResult(
            source=source,
            destination=dest,
            status="copied",
            bytes_copied=copied,
        )


def _copy_exclusive(source: Path, dest: Path) -> int:
    """
    Copy bytes and permission bits without ever replacing an existing file.

    Raises:
        FileExistsError: dest appeared before it could be created.
        OSError: any other I/O failure. A partial dest created here is removed.
    """
    with open(source, "rb") as fsrc:
        fdst = open(dest, "xb")
        try:
            with fdst:
                shutil.copyfileobj(fsrc, fdst, _COPY_BUFSIZE)
                copied = fdst.tell()
            shutil.copymode(source, dest)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(dest)
            raise
    return copied


def _failed(
    task: CopyTask,
    exc: OSError,
    path: Path | str,
    operation: str,
    first_failure: _FirstFailure,
) -> TaskResult:
    message, details = map_os_error(exc, path=path, operation=operation)
    failure = CopyFailure(
        source=task.source.path,
        destination=task.destination,
        error_type=exc.__class__.__name__,
        error_message=message,
        error_details=details,
        cause=exc,
    )
    if first_failure.set(failure):
        logger.error("%s (copying %s -> %s)", message, task.source.path, task.destination)
    else:
        logger.warning("additional failure not reported as outcome: %s", message)
    return TaskResult(
        source=task.source.path,
        destination=task.destination,
        status="failed",
        failure=failure,
    )
