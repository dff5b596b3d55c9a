"""Reporting sinks: observational only, never affect control flow."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from tqdm import tqdm

from schedcopy.fs import WalkResult
from schedcopy.models import ExecutionOutcome, TaskResult
from schedcopy.plan import CopyPlan
from schedcopy.util.size import format_mb, total_size
from schedcopy.util.time import format_duration

logger = logging.getLogger(__name__)


def notify(hook: Callable[..., None], *args: Any, **kwargs: Any) -> None:
    """Call a reporter hook; an exception there is logged, never raised."""
    try:
        hook(*args, **kwargs)
    except Exception:
        logger.exception("reporter hook %s failed", getattr(hook, "__qualname__", hook))


class SyncReporter:
    """Base reporting sink. Every hook is a no-op."""

    def on_discovered(self, result: WalkResult, *, destination: bool = False) -> None:
        pass

    def on_plan(self, plan: CopyPlan) -> None:
        pass

    def on_start(self, plan: CopyPlan, started_at: datetime) -> None:
        pass

    def on_task_done(self, result: TaskResult) -> None:
        pass

    def on_finish(self, outcome: ExecutionOutcome) -> None:
        pass


class LoggingReporter(SyncReporter):
    """Logs discovery, plan and completion summaries."""

    def on_discovered(self, result: WalkResult, *, destination: bool = False) -> None:
        if destination:
            logger.debug("found %d items in to: %s", len(result.files), result.root)
            return
        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "found %d items in from: %s. size: %s",
                len(result.files),
                result.root,
                format_mb(total_size(result.files)),
            )

    def on_plan(self, plan: CopyPlan) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        logger.info(
            "trying parallel copy %d items %s from %s to %s",
            len(plan),
            format_mb(plan.planned_bytes()),
            _join(plan.source_roots),
            plan.destination_root,
        )
        if plan.collisions:
            logger.info(
                "%d colliding source files dropped (same destination path)",
                plan.collisions,
            )

    def on_start(self, plan: CopyPlan, started_at: datetime) -> None:
        logger.debug("copy of plan %s started at %s", plan.plan_id, started_at.isoformat())

    def on_finish(self, outcome: ExecutionOutcome) -> None:
        s = outcome.summary
        elapsed = ""
        if outcome.started_at and outcome.finished_at:
            elapsed = format_duration(outcome.finished_at - outcome.started_at)
        logger.info(
            "copy %s: copied %d (%s), skipped %d, failed %d, abandoned %d in %s",
            outcome.status,
            s.get("copied", 0),
            format_mb(s.get("bytes_copied", 0)),
            s.get("skipped", 0),
            s.get("failed", 0),
            s.get("abandoned", 0),
            elapsed or "n/a",
        )


class ProgressReporter(LoggingReporter):
    """LoggingReporter plus a tqdm progress bar over the copy phase."""

    def __init__(self, *, disable: Optional[bool] = None) -> None:
        # disable=None lets tqdm turn itself off when stderr is not a tty.
        self._disable = disable
        self._bar: Optional[tqdm] = None

    def on_start(self, plan: CopyPlan, started_at: datetime) -> None:
        super().on_start(plan, started_at)
        self._close()
        self._bar = tqdm(
            total=len(plan),
            desc="Copying",
            unit="file",
            disable=self._disable,
            leave=False,
        )

    def on_task_done(self, result: TaskResult) -> None:
        if self._bar is None:
            return
        self._bar.update(1)
        if result.status == "skipped":
            self._bar.set_postfix_str("skipped existing", refresh=False)

    def on_finish(self, outcome: ExecutionOutcome) -> None:
        self._close()
        super().on_finish(outcome)

    def _close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def _join(paths: tuple[Path, ...]) -> str:
    return ",".join(str(p) for p in paths)
