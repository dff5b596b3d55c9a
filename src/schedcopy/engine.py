"""SyncEngine: orchestrates root resolution, walking, planning and copying."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from schedcopy.config import EngineConfig
from schedcopy.errors import TraversalError
from schedcopy.executor import CopyExecutor
from schedcopy.fs import ResolvedRoots, WalkResult, resolve_roots, walk_files
from schedcopy.models import ExecutionOutcome, FileEntry
from schedcopy.plan import CopyPlan, build_copy_plan
from schedcopy.report import LoggingReporter, SyncReporter, notify
from schedcopy.util.log import TRACE
from schedcopy.util.time import now_utc

logger = logging.getLogger(__name__)


class SyncEngine:
    """
    One-shot incremental copy: Resolve -> Walk -> Plan -> Apply.

    Each call is independent; no state is kept between invocations, so the
    same engine can be reused by a scheduler or by several tests at once.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        reporter: Optional[SyncReporter] = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._reporter = reporter if reporter is not None else LoggingReporter()
        self._executor = CopyExecutor(self._config.workers)

    @property
    def config(self) -> EngineConfig:
        return self._config

    def resolve(
        self,
        sources: Sequence[Path | str],
        destination: Path | str,
    ) -> ResolvedRoots:
        """Validate and canonicalize roots. Raises InputError subclasses."""
        return resolve_roots(sources, destination)

    def build_plan(self, roots: ResolvedRoots) -> CopyPlan:
        """
        Walk every root and compute the copy plan.

        Policy:
            - A source root that cannot be read is logged and left out of the
              pass; the other roots still sync.
            - A destination root that cannot be read raises TraversalError.
        """
        logger.log(TRACE, "try copy from %s to %s", roots.sources, roots.destination)

        source_results, dest_result = self._walk_all(roots)

        source_files: dict[Path, frozenset[FileEntry]] = {}
        warnings: list[str] = []
        # Distinct inputs may resolve to the same canonical root.
        for root in dict.fromkeys(roots.sources):
            result = source_results.get(root)
            if result is None:
                continue
            source_files[root] = result.files
            warnings.extend(w.message for w in result.warnings)
            notify(self._reporter.on_discovered, result)

        warnings.extend(w.message for w in dest_result.warnings)
        notify(self._reporter.on_discovered, dest_result, destination=True)

        plan = build_copy_plan(source_files, roots.destination, dest_result.files)
        plan.warnings.extend(warnings)
        notify(self._reporter.on_plan, plan)
        return plan

    def apply_plan(self, plan: CopyPlan) -> ExecutionOutcome:
        """
        Execute a CopyPlan.

        Task failures are returned as ExecutionOutcome(status="failed"); they
        do not raise. Copies already made are kept.
        """
        notify(self._reporter.on_start, plan, now_utc())
        outcome = self._executor.execute(plan.tasks, self._reporter)
        notify(self._reporter.on_finish, outcome)
        return outcome

    def sync(
        self,
        sources: Sequence[Path | str],
        destination: Path | str,
        *,
        execute: bool = True,
    ) -> CopyPlan | ExecutionOutcome:
        """
        Convenience API.

        - execute=True: resolve, plan, apply, and return ExecutionOutcome
        - execute=False: resolve and return the CopyPlan (dry run)
        """
        roots = self.resolve(sources, destination)
        plan = self.build_plan(roots)
        if not execute:
            return plan
        return self.apply_plan(plan)

    # ----------------------------
    # Internals
    # ----------------------------
    def _walk_all(
        self,
        roots: ResolvedRoots,
    ) -> tuple[dict[Path, WalkResult], WalkResult]:
        walk_workers = self._config.walk_workers
        all_roots = list(dict.fromkeys(roots.sources + (roots.destination,)))

        with ThreadPoolExecutor(
            max_workers=len(all_roots),
            thread_name_prefix="schedcopy-root",
        ) as pool:
            futures = {
                root: pool.submit(walk_files, root, max_workers=walk_workers)
                for root in all_roots
            }

            source_results: dict[Path, WalkResult] = {}
            for root in dict.fromkeys(roots.sources):
                try:
                    source_results[root] = futures[root].result()
                except TraversalError as exc:
                    logger.warning("failed to walk path `%s`: %s", root, exc)

            dest_result = futures[roots.destination].result()

        return source_results, dest_result
