import unittest
from pathlib import Path

from schedcopy.errors import CopyTaskError
from schedcopy.models import (
    CopyFailure,
    ExecutionOutcome,
    TaskResult,
    summarize_results,
)


class TestResults(unittest.TestCase):
    def test_task_result_defaults(self) -> None:
        r = TaskResult(source=Path("/s/a"), destination=Path("/d/a"), status="copied")
        self.assertEqual(r.bytes_copied, 0)
        self.assertIsNone(r.failure)
        self.assertIsNone(r.note)

    def test_summarize_results_counts_statuses_and_bytes(self) -> None:
        results = [
            TaskResult(Path("/s/a"), Path("/d/a"), "copied", bytes_copied=3),
            TaskResult(Path("/s/b"), Path("/d/b"), "copied", bytes_copied=4),
            TaskResult(Path("/s/c"), Path("/d/c"), "skipped"),
            TaskResult(Path("/s/e"), Path("/d/e"), "abandoned"),
        ]
        summary = summarize_results(results)
        self.assertEqual(summary["copied"], 2)
        self.assertEqual(summary["skipped"], 1)
        self.assertEqual(summary["failed"], 0)
        self.assertEqual(summary["abandoned"], 1)
        self.assertEqual(summary["bytes_copied"], 7)

    def test_success_outcome_does_not_raise(self) -> None:
        outcome = ExecutionOutcome(status="success", failure=None, results=[])
        self.assertTrue(outcome.ok)
        outcome.raise_for_failure()
        self.assertEqual(outcome.summary, {})

    def test_failed_outcome_raises_copy_task_error(self) -> None:
        cause = OSError("disk")
        failure = CopyFailure(
            source=Path("/s/a"),
            destination=Path("/d/a"),
            error_type="OSError",
            error_message="failed to copy `/s/a`: disk",
            error_details={"errno": None},
            cause=cause,
        )
        outcome = ExecutionOutcome(status="failed", failure=failure, results=[])
        self.assertFalse(outcome.ok)
        with self.assertRaises(CopyTaskError) as ctx:
            outcome.raise_for_failure()
        self.assertIs(ctx.exception.cause, cause)
        self.assertEqual(ctx.exception.details["destination"], "/d/a")

    def test_copied_and_skipped_views(self) -> None:
        results = [
            TaskResult(Path("/s/a"), Path("/d/a"), "copied"),
            TaskResult(Path("/s/b"), Path("/d/b"), "skipped"),
        ]
        outcome = ExecutionOutcome(status="success", failure=None, results=results)
        self.assertEqual([r.source for r in outcome.copied], [Path("/s/a")])
        self.assertEqual([r.source for r in outcome.skipped], [Path("/s/b")])


if __name__ == "__main__":
    unittest.main()
