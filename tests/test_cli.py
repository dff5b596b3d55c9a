import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from schedcopy import cli
from schedcopy.models import CopyFailure, ExecutionOutcome


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name).resolve()
        self.src = self.base / "src"
        (self.src / "x").mkdir(parents=True)
        (self.src / "x" / "1.txt").write_text("one")
        self.dst = self.base / "dst"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_single_run_copies(self) -> None:
        code, _, _ = self._main("-f", str(self.src), "-t", str(self.dst), "--no-progress")
        self.assertEqual(code, 0)
        self.assertEqual((self.dst / "x" / "1.txt").read_text(), "one")

    def test_missing_source_exit_code(self) -> None:
        code, _, err = self._main(
            "-f", str(self.base / "nope"), "-t", str(self.dst), "--no-progress"
        )
        self.assertEqual(code, 1)
        self.assertIn("failed to run:", err)
        self.assertFalse(self.dst.exists())

    def test_overlong_source_name_exit_code(self) -> None:
        code, _, err = self._main(
            "-f", str(self.base / ("a" * 300)), "-t", str(self.dst), "--no-progress"
        )
        self.assertEqual(code, 1)
        self.assertIn("failed to run:", err)
        self.assertFalse(self.dst.exists())

    def test_dry_run_with_cron_is_rejected(self) -> None:
        with mock.patch.object(cli.CronScheduler, "run") as run:
            code, out, err = self._main(
                "-f", str(self.src), "-t", str(self.dst),
                "-c", "0 3 * * *", "--dry-run", "--no-progress",
            )
        self.assertEqual(code, 1)
        self.assertIn("dry run cannot be scheduled", err)
        self.assertEqual(out, "")
        run.assert_not_called()

    def test_duplicate_source_exit_code(self) -> None:
        code, _, err = self._main(
            "-f", str(self.src), "-f", str(self.src) + "/", "-t", str(self.dst), "--no-progress"
        )
        self.assertEqual(code, 1)
        self.assertIn("duplicated paths", err)

    def test_too_verbose_is_rejected(self) -> None:
        code, _, err = self._main("-f", str(self.src), "-t", str(self.dst), "-vvvvv")
        self.assertEqual(code, 1)
        self.assertIn("number of verbose", err)

    def test_invalid_cron_is_rejected(self) -> None:
        code, _, err = self._main(
            "-f", str(self.src), "-t", str(self.dst), "-c", "every day", "--no-progress"
        )
        self.assertEqual(code, 1)
        self.assertIn("invalid cron expression", err)

    def test_non_positive_threads_is_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._main("-f", str(self.src), "-t", str(self.dst), "-p", "0")
        self.assertEqual(ctx.exception.code, 2)

    def test_dry_run_prints_plan_only(self) -> None:
        code, out, _ = self._main(
            "-f", str(self.src), "-t", str(self.dst), "--dry-run", "--no-progress"
        )
        self.assertEqual(code, 0)
        self.assertIn("1 file(s)", out)
        self.assertFalse((self.dst / "x" / "1.txt").exists())

    def test_failed_copy_exit_code(self) -> None:
        failed = ExecutionOutcome(
            status="failed",
            failure=CopyFailure(
                source=self.src / "x" / "1.txt",
                destination=self.dst / "x" / "1.txt",
                error_type="PermissionError",
                error_message="failed to copy: permission denied",
            ),
            results=[],
        )
        with mock.patch.object(cli.SyncEngine, "apply_plan", return_value=failed):
            code, _, err = self._main("-f", str(self.src), "-t", str(self.dst), "--no-progress")
        self.assertEqual(code, 1)
        self.assertIn("permission denied", err)

    def test_cron_run_uses_scheduler(self) -> None:
        ok = ExecutionOutcome(status="success", failure=None, results=[])
        with mock.patch.object(cli.CronScheduler, "run", return_value=ok) as run:
            code, _, _ = self._main(
                "-f", str(self.src), "-t", str(self.dst), "-c", "0 3 * * *", "--no-progress"
            )
        self.assertEqual(code, 0)
        run.assert_called_once()
        label = run.call_args.kwargs["label"]
        self.assertIn(str(self.src), label)
        self.assertIn(str(self.dst), label)


if __name__ == "__main__":
    unittest.main()
