"""Command line entry point: schedcopy -f SRC [-f SRC ...] -t DEST."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from schedcopy.config import EngineConfig, SyncJob
from schedcopy.engine import SyncEngine
from schedcopy.errors import SchedCopyError
from schedcopy.models import ExecutionOutcome
from schedcopy.plan import CopyPlan
from schedcopy.report import LoggingReporter, ProgressReporter
from schedcopy.scheduler import CronScheduler
from schedcopy.util.log import configure_logging
from schedcopy.util.size import format_mb


def _positive_int(value: str) -> int:
    try:
        num = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from exc
    if num < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return num


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="schedcopy",
        description=(
            "Copy files that are missing in the destination from one or more "
            "source directories, in parallel, once or on a cron schedule."
        ),
    )
    p.add_argument("-f", "--from", dest="sources", action="append", type=Path,
                   required=True, metavar="PATH", help="Source directory (repeatable)")
    p.add_argument("-t", "--to", dest="destination", type=Path, required=True,
                   metavar="PATH", help="Destination directory (created if missing)")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Increase log verbosity (up to -vvvv)")
    p.add_argument("-p", "--parallel-threads", type=_positive_int, default=None,
                   metavar="N", help="Number of copy threads")
    p.add_argument("-c", "--cron-expr", default=None, metavar="EXPR",
                   help="Repeat on this cron schedule, e.g. '0 3 * * *'")
    p.add_argument("-n", "--dry-run", action="store_true",
                   help="Only print what would be copied")
    p.add_argument("--no-progress", action="store_true",
                   help="Disable the progress bar")
    return p


def job_from_args(args: argparse.Namespace) -> SyncJob:
    return SyncJob(
        sources=tuple(args.sources),
        destination=args.destination,
        cron=args.cron_expr,
        dry_run=args.dry_run,
        engine=EngineConfig(workers=args.parallel_threads),
    )


def run(job: SyncJob, *, show_progress: bool = True) -> int:
    """Run a validated job once or on its schedule. Returns an exit code."""
    reporter = ProgressReporter(disable=None) if show_progress else LoggingReporter()
    engine = SyncEngine(job.engine, reporter=reporter)

    if job.dry_run:
        plan = engine.build_plan(engine.resolve(job.sources, job.destination))
        _print_plan(plan)
        return 0

    def once() -> ExecutionOutcome:
        roots = engine.resolve(job.sources, job.destination)
        return engine.apply_plan(engine.build_plan(roots))

    if job.cron is None:
        outcome = once()
    else:
        label = f"{', '.join(str(s) for s in job.sources)} to {job.destination}"
        outcome = CronScheduler(job.cron).run(once, label=label)
        if outcome is None:
            return 0

    outcome.raise_for_failure()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.verbose)
        job = job_from_args(args)
        job.validate()
        return run(job, show_progress=not args.no_progress)
    except SchedCopyError as exc:
        print(f"failed to run: {exc}", file=sys.stderr)
        return 1


def _print_plan(plan: CopyPlan) -> None:
    for task in sorted(plan.tasks, key=lambda t: t.destination):
        print(f"{task.source.path} -> {task.destination}")
    print(
        f"{len(plan)} file(s), {format_mb(plan.planned_bytes())} to copy; "
        f"{plan.already_present} already present, {plan.collisions} collision(s)"
    )


if __name__ == "__main__":
    sys.exit(main())
