"""Tests for the path, memory and virtual-filesystem archive accessors."""
import io
import tempfile
import unittest
import zipfile
from pathlib import Path

from docx_replace.parser.archive import FSArchive, MemoryArchive, PathArchive
from docx_replace.tests.fixtures import build_docx, default_entries


class ArchiveAccessorTest(unittest.TestCase):
    """Every accessor lists entries in order and opens them independently."""

    def setUp(self) -> None:
        self.entries = default_entries()
        self.data = build_docx(self.entries)
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        (self.root / "TestDocument.docx").write_bytes(self.data)

    def _check_accessor(self, accessor) -> None:
        self.assertEqual(accessor.names(), [name for name, _ in self.entries])
        for name, payload in self.entries:
            self.assertEqual(accessor.read(name), payload)
        with accessor.open("word/document.xml") as first, accessor.open("word/styles.xml") as second:
            self.assertTrue(first.read(5))
            self.assertTrue(second.read(5))

    def test_path_archive(self) -> None:
        with PathArchive(self.root / "TestDocument.docx") as accessor:
            self._check_accessor(accessor)
        self.assertTrue(accessor.closed)

    def test_memory_archive_from_bytes(self) -> None:
        accessor = MemoryArchive(self.data)
        self._check_accessor(accessor)
        accessor.close()
        self.assertTrue(accessor.closed)

    def test_memory_archive_leaves_caller_stream_open(self) -> None:
        stream = io.BytesIO(self.data)
        accessor = MemoryArchive(stream)
        self._check_accessor(accessor)
        accessor.close()
        self.assertFalse(stream.closed)

    def test_fs_archive_from_directory(self) -> None:
        accessor = FSArchive("TestDocument.docx", self.root)
        self._check_accessor(accessor)
        accessor.close()
        self.assertTrue(accessor.closed)

    def test_fs_archive_from_zip_path(self) -> None:
        bundle = io.BytesIO()
        with zipfile.ZipFile(bundle, "w") as outer:
            outer.writestr("docs/TestDocument.docx", self.data)
        bundle.seek(0)
        with zipfile.ZipFile(bundle) as outer:
            with FSArchive("docs/TestDocument.docx", zipfile.Path(outer)) as accessor:
                self._check_accessor(accessor)

    def test_closed_accessor_refuses_reads(self) -> None:
        accessor = MemoryArchive(self.data)
        accessor.close()
        accessor.close()
        with self.assertRaises(ValueError):
            accessor.open("word/document.xml")

    def test_not_a_zip(self) -> None:
        with self.assertRaises(zipfile.BadZipFile):
            MemoryArchive(b"not a zip archive")
        (self.root / "broken.docx").write_bytes(b"garbage")
        with self.assertRaises(zipfile.BadZipFile):
            FSArchive("broken.docx", self.root)

    def test_missing_path(self) -> None:
        with self.assertRaises(FileNotFoundError):
            PathArchive(self.root / "missing.docx")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
