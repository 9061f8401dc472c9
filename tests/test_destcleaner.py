'''
Tests for emptying destination folders before a job.
'''
from pathlib import Path
from unittest import mock
import tempfile
import unittest

from destcleaner import clean_destination, clean_destinations, remove_entry
from scerrors import CleanupError


class DestinationCleanerTester(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory(prefix='splitcopy_clean_')
        root = Path(self.tmp_dir.name)

        self.dest1 = root / "a"
        self.dest2 = root / "b"
        self.dest1.mkdir()
        self.dest2.mkdir()

    def tearDown(self):
        self.tmp_dir.cleanup()

    # -------------- Tests ---------------

    def test_removes_files(self):
        (self.dest1 / "old1.txt").write_text("x")
        (self.dest1 / "old2.txt").write_text("x")
        (self.dest2 / "old3.txt").write_text("x")

        removed = clean_destinations([self.dest1, self.dest2])

        self.assertEqual(removed, 3)
        self.assertEqual(list(self.dest1.iterdir()), [])
        self.assertEqual(list(self.dest2.iterdir()), [])

    def test_removes_empty_subdirectory(self):
        (self.dest1 / "empty").mkdir()

        self.assertEqual(clean_destination(self.dest1), 1)
        self.assertFalse((self.dest1 / "empty").exists())

    def test_keeps_non_empty_subdirectory(self):
        nested = self.dest1 / "keep"
        nested.mkdir()
        (nested / "inner.txt").write_text("inner")
        (self.dest1 / "old.txt").write_text("x")

        with self.assertLogs("splitcopy", level="WARNING"):
            removed = clean_destination(self.dest1)

        self.assertEqual(removed, 1)
        self.assertTrue((nested / "inner.txt").is_file())
        self.assertFalse((self.dest1 / "old.txt").exists())

    def test_failed_delete_does_not_stop_cleaning(self):
        (self.dest1 / "stuck.txt").write_text("x")
        (self.dest2 / "old.txt").write_text("x")
        real_unlink = Path.unlink

        def unlink(path, *args, **kwargs):
            if path.name == "stuck.txt":
                raise PermissionError(13, "Permission denied")
            return real_unlink(path, *args, **kwargs)

        with mock.patch.object(Path, "unlink", unlink):
            with self.assertLogs("splitcopy", level="WARNING") as logs:
                removed = clean_destinations([self.dest1, self.dest2])

        self.assertEqual(removed, 1)
        self.assertTrue((self.dest1 / "stuck.txt").exists())
        self.assertFalse((self.dest2 / "old.txt").exists())
        self.assertIn("stuck.txt", logs.output[0])

    def test_remove_entry_raises_cleanup_error(self):
        missing = self.dest1 / "missing.txt"

        with self.assertRaises(CleanupError) as cm:
            remove_entry(missing)

        self.assertEqual(cm.exception.path, missing)
        self.assertIsInstance(cm.exception.__cause__, FileNotFoundError)

    def test_unlistable_destination_is_skipped(self):
        (self.dest2 / "old.txt").write_text("x")
        missing = Path(self.tmp_dir.name) / "gone"

        with self.assertLogs("splitcopy", level="ERROR"):
            removed = clean_destinations([missing, self.dest2])

        self.assertEqual(removed, 1)


# ----------------- Main -------------------

if __name__ == '__main__':
    unittest.main()
