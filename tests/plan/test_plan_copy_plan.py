import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from schedcopy.models import FileEntry
from schedcopy.plan import CopyPlan, CopyTask


class TestCopyPlan(unittest.TestCase):
    def test_fields_and_defaults(self) -> None:
        created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        task = CopyTask(
            source=FileEntry(Path("/A/a.txt")),
            destination=Path("/D/a.txt"),
            source_root=Path("/A"),
        )
        plan = CopyPlan(
            plan_id="p1",
            source_roots=(Path("/A"),),
            destination_root=Path("/D"),
            created_at=created_at,
            tasks=[task],
        )
        self.assertEqual(len(plan), 1)
        self.assertEqual(plan.destinations(), {Path("/D/a.txt")})
        self.assertEqual(plan.collisions, 0)
        self.assertEqual(plan.warnings, [])

    def test_planned_bytes_counts_unreadable_as_zero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.bin").write_bytes(b"12345")
            tasks = [
                CopyTask(FileEntry(root / "a.bin"), Path("/D/a.bin"), root),
                CopyTask(FileEntry(root / "gone.bin"), Path("/D/gone.bin"), root),
            ]
            plan = CopyPlan(
                plan_id="p",
                source_roots=(root,),
                destination_root=Path("/D"),
                created_at=datetime.now(timezone.utc),
                tasks=tasks,
            )
            self.assertEqual(plan.planned_bytes(), 5)


if __name__ == "__main__":
    unittest.main()
