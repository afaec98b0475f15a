"""Unit tests for PathScanner.

Tests filtering, ordering, symlink handling, cycle protection and
error reporting of the candidate scan.
"""

# pyright: reportPrivateUsage=false

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pickview.errors import ScanError, ScanErrorReason
from pickview.filesystem.models import ScanFilter, SortOrder
from pickview.filesystem.resolver import resolve
from pickview.filesystem.scanner import PathScanner


def _scan(root: Path, pattern: str = ".", *, dirs: bool = False, files: bool = True) -> list[str]:
    scan_filter = ScanFilter.create(pattern, include_directories=dirs, include_files=files)
    return list(PathScanner(scan_filter).scan(root))


class TestFiltering:
    """Tests for type and name filtering."""

    def test_only_matching_file(self, tmp_path: Path) -> None:
        """Only the file whose name matches is returned, relative to the root."""
        root = tmp_path / "T"
        (root / "sub").mkdir(parents=True)
        (root / "x.txt").write_text("x")
        (root / "sub" / "y.txt").write_text("y")

        assert _scan(root, r"y\.txt") == ["sub/y.txt"]

    def test_pattern_is_case_insensitive(self, sample_tree: Path) -> None:
        """Lowercase pattern matches uppercase file names."""
        assert _scan(sample_tree, r"z\.txt") == ["sub/deep/Z.TXT"]

    def test_pattern_matches_anywhere_in_name(self, sample_tree: Path) -> None:
        """The pattern is searched, not anchored."""
        assert _scan(sample_tree, "md") == ["a.md"]

    def test_pattern_applies_to_base_name_only(self, sample_tree: Path) -> None:
        """Directory components of the path are not matched."""
        assert _scan(sample_tree, "sub") == []

    def test_files_only(self, sample_tree: Path) -> None:
        """Directories are omitted without include_directories."""
        assert _scan(sample_tree, r"\.txt$") == [
            "a/c.txt",
            "b.txt",
            "sub/deep/Z.TXT",
            "sub/y.txt",
            "x.txt",
        ]

    def test_directories_only(self, sample_tree: Path) -> None:
        """With only directories enabled, no files are returned."""
        assert _scan(sample_tree, "nomatch", dirs=True, files=False) == [
            "a",
            "empty",
            "sub",
            "sub/deep",
        ]

    def test_directories_ignore_pattern(self, sample_tree: Path) -> None:
        """Directories are emitted regardless of the name pattern."""
        result = _scan(sample_tree, r"y\.txt", dirs=True)

        assert result == ["a", "empty", "sub", "sub/deep", "sub/y.txt"]

    def test_root_not_emitted(self, sample_tree: Path) -> None:
        """The scan root itself is never a candidate."""
        result = _scan(sample_tree, ".", dirs=True)

        assert "" not in result
        assert "." not in result
        assert sample_tree.name not in result

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty root yields no candidates."""
        assert _scan(tmp_path, ".", dirs=True) == []


class TestOrdering:
    """Tests for deterministic ordering."""

    def test_name_order_is_depth_first(self, sample_tree: Path) -> None:
        """Siblings are sorted by name and children follow their directory."""
        assert _scan(sample_tree, ".", dirs=True) == [
            "a",
            "a/c.txt",
            "a.md",
            "b.txt",
            "empty",
            "sub",
            "sub/deep",
            "sub/deep/Z.TXT",
            "sub/y.txt",
            "x.txt",
        ]

    def test_order_is_per_component(self, tmp_path: Path) -> None:
        """A directory's contents come before a sibling that sorts after it by name."""
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "b").write_text("b")
        (tmp_path / "a-c").write_text("c")

        assert _scan(tmp_path, ".", dirs=True) == ["a", "a/b", "a-c"]

    def test_repeated_scans_are_identical(self, sample_tree: Path) -> None:
        """Scanning an unchanged tree twice gives the same sequence."""
        first = _scan(sample_tree, ".", dirs=True)
        second = _scan(sample_tree, ".", dirs=True)

        assert first == second

    def test_each_entry_once(self, sample_tree: Path) -> None:
        """No candidate is emitted twice."""
        result = _scan(sample_tree, ".", dirs=True)

        assert len(result) == len(set(result))

    def test_candidates_exist_on_disk(self, sample_tree: Path) -> None:
        """Every candidate resolves to an existing path."""
        for candidate in _scan(sample_tree, ".", dirs=True):
            assert os.path.lexists(resolve(str(sample_tree), candidate))

    def test_ctime_order_newest_first(self) -> None:
        """CTIME ordering puts the most recently changed entry first."""
        ctimes = {"/r/old": 100.0, "/r/new": 300.0, "/r/mid": 200.0}

        with patch(
            "pickview.filesystem.scanner.os.stat",
            side_effect=lambda p: MagicMock(st_ctime=ctimes[p]),
        ):
            result = PathScanner._by_ctime("/r/", iter(["old", "new", "mid"]))

        assert result == ["new", "mid", "old"]

    def test_ctime_ties_broken_by_path(self) -> None:
        """Entries with equal change times are ordered by path."""
        with patch(
            "pickview.filesystem.scanner.os.stat",
            return_value=MagicMock(st_ctime=1.0),
        ):
            result = PathScanner._by_ctime("/r/", iter(["b", "c", "a"]))

        assert result == ["a", "b", "c"]

    def test_ctime_scan_returns_same_set(self, sample_tree: Path) -> None:
        """CTIME ordering changes order, not content."""
        scan_filter = ScanFilter.create(".", include_directories=True)
        by_ctime = list(PathScanner(scan_filter, sort=SortOrder.CTIME).scan(sample_tree))

        assert sorted(by_ctime) == sorted(_scan(sample_tree, ".", dirs=True))


class TestSymlinks:
    """Tests for link following and cycle protection."""

    def test_symlinked_directory_is_followed(self, tmp_path: Path) -> None:
        """A link to a directory outside the root is descended."""
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "f.txt").write_text("f")
        (root / "link").symlink_to(outside)

        assert _scan(root, ".", dirs=True) == ["link", "link/f.txt"]

    def test_cycle_terminates(self, tmp_path: Path) -> None:
        """A link back to an ancestor is not followed or emitted."""
        root = tmp_path / "root"
        (root / "d").mkdir(parents=True)
        (root / "d" / "f.txt").write_text("f")
        (root / "d" / "loop").symlink_to(root)

        assert _scan(root, ".", dirs=True) == ["d", "d/f.txt"]

    def test_alias_after_target(self, tmp_path: Path) -> None:
        """A sibling link to a directory is walked as well as the directory."""
        root = tmp_path / "root"
        (root / "real").mkdir(parents=True)
        (root / "real" / "f.txt").write_text("f")
        (root / "zlink").symlink_to(root / "real")

        assert _scan(root, ".", dirs=True) == ["real", "real/f.txt", "zlink", "zlink/f.txt"]

    def test_alias_before_target(self, tmp_path: Path) -> None:
        """A link sorted before its target does not hide the target."""
        root = tmp_path / "root"
        (root / "zdir").mkdir(parents=True)
        (root / "zdir" / "f.txt").write_text("f")
        (root / "alias").symlink_to(root / "zdir")

        assert _scan(root, "txt", dirs=True) == ["alias", "alias/f.txt", "zdir", "zdir/f.txt"]

    def test_cycle_through_alias(self, tmp_path: Path) -> None:
        """A cycle reached through an alias still terminates."""
        root = tmp_path / "root"
        (root / "real").mkdir(parents=True)
        (root / "real" / "up").symlink_to(root / "real")
        (root / "alias").symlink_to(root / "real")

        assert _scan(root, ".", dirs=True) == ["alias", "real"]

    def test_dangling_link_treated_as_file(self, tmp_path: Path) -> None:
        """A broken link is filtered like a file."""
        (tmp_path / "dead").symlink_to(tmp_path / "missing")

        assert _scan(tmp_path, "dead") == ["dead"]
        assert _scan(tmp_path, "dead", dirs=True, files=False) == []


class TestErrors:
    """Tests for scan error reporting."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root fails immediately with ROOT_UNREADABLE."""
        scanner = PathScanner(ScanFilter.create("."))

        with pytest.raises(ScanError) as exc_info:
            scanner.scan(tmp_path / "missing")

        assert exc_info.value.reason == ScanErrorReason.ROOT_UNREADABLE

    def test_root_is_file(self, tmp_path: Path) -> None:
        """A root that is not a directory fails with ROOT_UNREADABLE."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        scanner = PathScanner(ScanFilter.create("."))

        with pytest.raises(ScanError) as exc_info:
            scanner.scan(target)

        assert exc_info.value.reason == ScanErrorReason.ROOT_UNREADABLE
        assert exc_info.value.path == str(target)

    def test_traversal_failure_raised_during_iteration(self, sample_tree: Path) -> None:
        """A failing subdirectory read surfaces mid-stream, after earlier candidates."""
        import pickview.filesystem.scanner as scanner_module

        real = scanner_module._sorted_entries

        def failing(path: str) -> list[os.DirEntry[str]]:
            if path.endswith("sub"):
                raise PermissionError(13, "Permission denied")
            return real(path)

        scanner = PathScanner(ScanFilter.create(".", include_directories=True))
        with patch("pickview.filesystem.scanner._sorted_entries", side_effect=failing):
            candidates: Iterator[str] = scanner.scan(sample_tree)
            seen = []
            with pytest.raises(ScanError) as exc_info:
                for candidate in candidates:
                    seen.append(candidate)

        assert exc_info.value.reason == ScanErrorReason.TRAVERSAL_FAILED
        assert "Permission denied" in str(exc_info.value)
        # Everything before the failing directory was delivered, including "sub"
        assert seen == ["a", "a/c.txt", "a.md", "b.txt", "empty", "sub"]

    def test_scan_is_lazy(self, sample_tree: Path) -> None:
        """Subdirectories are not read until the consumer gets there."""
        import pickview.filesystem.scanner as scanner_module

        real = scanner_module._sorted_entries
        with patch(
            "pickview.filesystem.scanner._sorted_entries", side_effect=real
        ) as mock_entries:
            candidates = PathScanner(ScanFilter.create(".")).scan(sample_tree)
            assert mock_entries.call_count == 1  # root only
            next(candidates)

        assert mock_entries.call_count == 2  # root and "a"
