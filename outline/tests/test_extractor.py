"""
Integration tests for extractor.py

Tests file discovery, file reading and the orchestration functions.
"""

import os
import tempfile
import unittest
from pathlib import Path

from core.outline_config import OutlineConfig
from outline.extractor import (
    ExtractionStats,
    discover_source_files,
    extract_file,
    extract_files,
    iter_file_outlines,
    iter_source_lines,
    outline_project,
)
from outline.models import OutlineEntry, SourceLine


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestExtractionStats(unittest.TestCase):
    """Test ExtractionStats class."""

    def test_creation(self):
        stats = ExtractionStats()
        self.assertEqual(stats.to_dict(), {
            "files_processed": 0,
            "files_failed": 0,
            "entries_extracted": 0,
        })

    def test_str_representation(self):
        stats = ExtractionStats()
        stats.files_processed = 3
        self.assertIn("processed=3", str(stats))


class TestReadingFiles(unittest.TestCase):
    """Test line iteration and single-file extraction."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_iter_source_lines_strips_terminators(self):
        path = self.root / "crlf.rs"
        path.write_bytes(b"fn a() {}\r\n\r\nfn b() {}")
        self.assertEqual(
            list(iter_source_lines(str(path))),
            [SourceLine(1, "fn a() {}"), SourceLine(2, ""), SourceLine(3, "fn b() {}")],
        )

    def test_invalid_utf8_is_replaced(self):
        path = self.root / "bad.rs"
        path.write_bytes(b"static S: &str = \"\xff\";\n")
        entries = extract_file(str(path))
        self.assertEqual(len(entries), 1)
        self.assertTrue(entries[0].summary.startswith("static S"))

    def test_extract_fixture(self):
        fixture = Path(__file__).parent / "fixtures" / "sample.rs"
        entries = extract_file(str(fixture))
        self.assertEqual(len(entries), 8)
        self.assertEqual(entries[0], OutlineEntry(5, 5, "const MAX_RETRIES: u32 = 3;"))

    def test_extract_nonexistent_file(self):
        with self.assertRaises(FileNotFoundError):
            extract_file("/nonexistent/file.rs")

    def test_empty_file_yields_no_entries(self):
        path = _write(self.root / "empty.rs", "")
        self.assertEqual(extract_file(str(path)), [])


class TestDiscoverSourceFiles(unittest.TestCase):
    """Test workspace and src discovery."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_src_fallback_is_not_recursive(self):
        _write(self.root / "src" / "main.rs", "fn main() {}\n")
        _write(self.root / "src" / "lib.rs", "pub mod x;\n")
        _write(self.root / "src" / "nested" / "deep.rs", "fn deep() {}\n")
        _write(self.root / "src" / "notes.txt", "fn nope() {}\n")

        result = discover_source_files(str(self.root))

        self.assertFalse(result.is_workspace)
        self.assertEqual(
            [os.path.basename(f) for f in result.files], ["lib.rs", "main.rs"]
        )
        for f in result.files:
            self.assertTrue(os.path.isabs(f))

    def test_workspace_members_are_recursive(self):
        _write(
            self.root / "Cargo.toml",
            '[workspace]\nmembers = [\n    "crates/a",\n    "crates/b",\n]\n',
        )
        _write(self.root / "crates" / "a" / "src" / "lib.rs", "fn a() {}\n")
        _write(self.root / "crates" / "a" / "src" / "util" / "mod.rs", "fn u() {}\n")
        _write(self.root / "crates" / "b" / "src" / "lib.rs", "fn b() {}\n")
        _write(self.root / "crates" / "b" / "target" / "gen.rs", "fn g() {}\n")
        _write(self.root / "crates" / "b" / ".hidden" / "h.rs", "fn h() {}\n")
        _write(self.root / "src" / "ignored.rs", "fn i() {}\n")

        result = discover_source_files(str(self.root))

        self.assertTrue(result.is_workspace)
        rel = [os.path.relpath(f, self.root).replace(os.sep, "/") for f in result.files]
        self.assertEqual(
            rel,
            ["crates/a/src/lib.rs", "crates/a/src/util/mod.rs", "crates/b/src/lib.rs"],
        )

    def test_missing_member_is_skipped(self):
        _write(self.root / "Cargo.toml", '[workspace]\nmembers = ["gone", "here"]\n')
        _write(self.root / "here" / "src" / "lib.rs", "fn here() {}\n")

        result = discover_source_files(str(self.root))

        self.assertEqual(len(result.files), 1)

    def test_custom_extensions_and_excludes(self):
        _write(self.root / "Cargo.toml", '[workspace]\nmembers = ["m"]\n')
        _write(self.root / "m" / "vendor" / "v.rs", "fn v() {}\n")
        _write(self.root / "m" / "lib.rs.in", "fn x() {}\n")
        config = OutlineConfig(
            extensions=frozenset({".rs", ".in"}),
            exclude_dirs=frozenset({"vendor"}),
        )

        result = discover_source_files(str(self.root), config)

        self.assertEqual([os.path.basename(f) for f in result.files], ["lib.rs.in"])

    def test_no_sources(self):
        result = discover_source_files(str(self.root))
        self.assertEqual(result.files, [])
        self.assertFalse(result.is_workspace)

    def test_nonexistent_root(self):
        with self.assertRaises(FileNotFoundError):
            discover_source_files("/nonexistent/project")


class TestExtractFiles(unittest.TestCase):
    """Test multi-file extraction, errors and parallelism."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.paths = [
            str(_write(self.root / f"f{i}.rs", f"fn f{i}() {{}}\nstruct S{i};\n"))
            for i in range(6)
        ]

    def tearDown(self):
        self.tmp.cleanup()

    def test_sequential(self):
        outlines, stats = extract_files(self.paths)
        self.assertEqual([o.path for o in outlines], self.paths)
        self.assertEqual(stats.files_processed, 6)
        self.assertEqual(stats.entries_extracted, 12)
        self.assertEqual(outlines[2].entries[0].summary, "fn f2()")

    def test_parallel_matches_sequential(self):
        sequential, _ = extract_files(self.paths, workers=1)
        parallel, stats = extract_files(self.paths, workers=4)
        self.assertEqual(
            [o.to_dict() for o in parallel], [o.to_dict() for o in sequential]
        )
        self.assertEqual(stats.files_processed, 6)

    def test_missing_file_is_counted_and_skipped(self):
        paths = self.paths[:2] + [str(self.root / "missing.rs")]
        for workers in (1, 3):
            with self.subTest(workers=workers):
                outlines, stats = extract_files(paths, workers=workers)
                self.assertEqual(len(outlines), 2)
                self.assertEqual(stats.files_failed, 1)

    def test_missing_file_raises_without_continue(self):
        paths = [str(self.root / "missing.rs")] + self.paths
        with self.assertRaises(FileNotFoundError):
            extract_files(paths, continue_on_error=False)

    def test_iter_file_outlines_is_lazy(self):
        stats = ExtractionStats()
        iterator = iter_file_outlines(self.paths, stats=stats)
        first = next(iterator)
        self.assertEqual(first.path, self.paths[0])
        self.assertEqual(stats.files_processed, 1)


class TestOutlineProject(unittest.TestCase):
    """Test discovery plus extraction end to end."""

    def test_outline_project(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root / "src" / "lib.rs", "/// Docs\npub fn run() {\n}\n")
            discovery, outlines, stats = outline_project(str(root))

            self.assertFalse(discovery.is_workspace)
            self.assertEqual(len(outlines), 1)
            self.assertEqual(outlines[0].entries, [OutlineEntry(1, 3, "fn run()")])
            self.assertEqual(stats.entries_extracted, 1)


if __name__ == "__main__":
    unittest.main()
