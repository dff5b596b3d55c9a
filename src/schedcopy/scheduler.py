"""Cron-driven repetition of a one-shot sync job."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Iterator, Optional

from croniter import croniter

from schedcopy.errors import ConfigError
from schedcopy.models import ExecutionOutcome
from schedcopy.util.time import format_duration, now_local

logger = logging.getLogger(__name__)


class CronScheduler:
    """
    Run a job at every upcoming fire time of a cron expression.

    Notes:
        - Fire times are computed in local time, starting from "now" at the
          moment run() is called.
        - A fire time already in the past when reached (the previous run
          overran it) is executed immediately, without sleeping.
        - `now` and `sleep` are injectable for tests.
    """

    def __init__(
        self,
        expression: str,
        *,
        now: Callable[[], datetime] = now_local,
        sleep: Callable[[float], None] = time.sleep,
        echo: Callable[[str], None] = print,
    ) -> None:
        if not croniter.is_valid(expression):
            raise ConfigError(
                f"invalid cron expression: {expression!r}",
                details={"cron": expression},
            )
        self.expression = expression
        self._now = now
        self._sleep = sleep
        self._echo = echo

    def upcoming(self, start: Optional[datetime] = None) -> Iterator[datetime]:
        """Yield fire times strictly after start (default: now)."""
        it = croniter(self.expression, start or self._now())
        while True:
            yield it.get_next(datetime)

    def run(
        self,
        job: Callable[[], ExecutionOutcome],
        *,
        max_runs: Optional[int] = None,
        label: Optional[str] = None,
    ) -> Optional[ExecutionOutcome]:
        """
        Invoke job at each fire time.

        label names the copied paths in the per-run banner.

        Returns:
            The outcome of the last run (None if max_runs == 0). The loop
            stops early on the first failed outcome. Exceptions raised by
            job propagate.
        """
        outcome: Optional[ExecutionOutcome] = None
        runs = 0
        logger.debug("parsing cron expression: %s", self.expression)

        for fire_at in self.upcoming():
            if max_runs is not None and runs >= max_runs:
                break

            now = self._now()
            if fire_at > now:
                wait = fire_at - now
                logger.info("waiting %s for next date time: %s", format_duration(wait), fire_at)
                self._echo(f"waiting {int(wait.total_seconds())}s until {fire_at.isoformat()}")
                self._sleep(wait.total_seconds())

            start = self._now()
            if label:
                self._echo(f"sync of {label} started at {start.isoformat()}")
            else:
                self._echo(f"sync started at {start.isoformat()}")
            outcome = job()
            runs += 1
            self._echo(f"sync finished in {format_duration(self._now() - start)}")

            if not outcome.ok:
                logger.error("scheduled run failed; stopping schedule")
                break

        return outcome
