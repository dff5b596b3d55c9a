import os
import tempfile
import unittest
from pathlib import Path

from schedcopy.errors import (
    DuplicateInputError,
    InvalidDestinationError,
    MissingSourceError,
    SchedCopyError,
)
from schedcopy.fs import normalize_path, resolve_roots


class TestResolveRoots(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name).resolve()
        (self.base / "a").mkdir()
        (self.base / "b").mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_resolves_and_creates_destination(self) -> None:
        dest = self.base / "out" / "nested"
        roots = resolve_roots([self.base / "a", self.base / "b"], dest)

        self.assertTrue(dest.is_dir())
        self.assertEqual(roots.sources, (self.base / "a", self.base / "b"))
        self.assertEqual(roots.destination, dest)

    def test_duplicate_after_normalization_rejected(self) -> None:
        a = self.base / "a"
        with self.assertRaises(DuplicateInputError):
            resolve_roots([str(a), str(a) + os.sep, str(a / "." / "x" / "..")], self.base / "d")

    def test_missing_source_rejected_without_creating_destination(self) -> None:
        dest = self.base / "never"
        with self.assertRaises(MissingSourceError):
            resolve_roots([self.base / "a", self.base / "missing"], dest)
        self.assertFalse(dest.exists())

    def test_destination_file_rejected(self) -> None:
        dest = self.base / "file.txt"
        dest.write_text("x")
        with self.assertRaises(InvalidDestinationError):
            resolve_roots([self.base / "a"], dest)

    def test_unexaminable_source_is_input_error(self) -> None:
        dest = self.base / "never"
        with self.assertRaises(MissingSourceError) as ctx:
            resolve_roots([self.base / ("a" * 300)], dest)
        self.assertIn("file name too long", str(ctx.exception))
        self.assertIsInstance(ctx.exception.cause, OSError)
        self.assertFalse(dest.exists())

    def test_unexaminable_destination_is_input_error(self) -> None:
        with self.assertRaises(InvalidDestinationError) as ctx:
            resolve_roots([self.base / "a"], self.base / ("b" * 300))
        self.assertIsInstance(ctx.exception, SchedCopyError)
        self.assertEqual(ctx.exception.details["operation"], "access destination")

    def test_symlinked_source_is_canonicalized(self) -> None:
        link = self.base / "link"
        try:
            link.symlink_to(self.base / "a", target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")
        roots = resolve_roots([link], self.base / "d")
        self.assertEqual(roots.sources, (self.base / "a",))

    def test_relative_paths_become_absolute(self) -> None:
        cwd = os.getcwd()
        os.chdir(self.base)
        try:
            roots = resolve_roots(["a"], "d")
        finally:
            os.chdir(cwd)
        self.assertTrue(roots.sources[0].is_absolute())
        self.assertEqual(roots.destination, self.base / "d")

    def test_normalize_path_does_not_resolve_symlinks(self) -> None:
        p = normalize_path("/x/y/../z/")
        self.assertEqual(p, Path("/x/z"))


if __name__ == "__main__":
    unittest.main()
