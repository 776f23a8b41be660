"""Tests for directory size calculation."""

import os
from pathlib import Path
from unittest.mock import patch

from nmprune.finder import find
from nmprune.sizer import measure, scan, size_of


def write_bytes(path: Path, size: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


class TestSizeOf:
    def test_empty_directory(self, tmp_path):
        assert size_of(tmp_path) == 0

    def test_sums_files_recursively(self, tmp_path):
        write_bytes(tmp_path / "a.txt", 10)
        write_bytes(tmp_path / "sub" / "b.txt", 20)
        write_bytes(tmp_path / "sub" / "deeper" / "c.txt", 30)

        assert size_of(tmp_path) == 60

    def test_includes_nested_node_modules_and_hidden(self, tmp_path):
        write_bytes(tmp_path / "pkg" / "node_modules" / "dep" / "index.js", 100)
        write_bytes(tmp_path / ".bin" / "tool", 5)

        assert size_of(tmp_path) == 105

    def test_missing_directory_is_zero(self, tmp_path):
        assert size_of(tmp_path / "gone") == 0

    def test_symlinks_are_not_counted(self, tmp_path):
        write_bytes(tmp_path / "real" / "big.bin", 1000)
        (tmp_path / "target").mkdir()
        (tmp_path / "target" / "link").symlink_to(tmp_path / "real" / "big.bin")
        (tmp_path / "target" / "dirlink").symlink_to(tmp_path / "real", target_is_directory=True)
        (tmp_path / "target" / "broken").symlink_to(tmp_path / "nowhere")

        assert size_of(tmp_path / "target") == 0

    def test_unreadable_children_are_zero(self, tmp_path):
        """Subdirectories that can't be listed contribute nothing."""
        write_bytes(tmp_path / "locked1" / "a.txt", 10)
        write_bytes(tmp_path / "locked2" / "b.txt", 10)
        root = str(tmp_path)
        real_scandir = os.scandir

        def fake_scandir(path):
            if str(path) != root:
                raise PermissionError("Access denied")
            return real_scandir(path)

        with patch("os.scandir", side_effect=fake_scandir):
            assert size_of(tmp_path) == 0

    def test_stat_failure_is_zero(self, tmp_path):
        """A file vanishing between listing and stat counts as zero."""
        write_bytes(tmp_path / "keep.txt", 7)
        write_bytes(tmp_path / "vanish.txt", 50)
        vanish = str(tmp_path / "vanish.txt")
        real_lstat = os.lstat

        def fake_lstat(path, *args, **kwargs):
            if str(path) == vanish:
                raise FileNotFoundError(vanish)
            return real_lstat(path, *args, **kwargs)

        with patch("os.lstat", side_effect=fake_lstat):
            assert size_of(tmp_path) == 7

    def test_wide_tree_with_small_gate(self, tmp_path):
        for i in range(50):
            write_bytes(tmp_path / f"d{i}" / "f.txt", 2)

        assert size_of(tmp_path, max_concurrency=1) == 100


class TestMeasure:
    def test_sorted_largest_first(self, tmp_path):
        small = tmp_path / "small"
        large = tmp_path / "large"
        write_bytes(small / "f", 10)
        write_bytes(large / "f", 500)

        entries = measure([str(small), str(large)])

        assert [e.path for e in entries] == [str(large), str(small)]
        assert [e.size_bytes for e in entries] == [500, 10]

    def test_empty_input(self):
        assert measure([]) == []


class TestScan:
    def test_scenario(self, tmp_path):
        """Three files of 10, 20 and 30 bytes; hidden matches ignored."""
        node_modules = tmp_path / "a" / "node_modules"
        write_bytes(node_modules / "one.js", 10)
        write_bytes(node_modules / "two.js", 20)
        write_bytes(node_modules / "three.js", 30)
        (node_modules / ".bin").mkdir()
        write_bytes(tmp_path / "b" / ".git" / "node_modules" / "x", 999)

        assert find(tmp_path) == [str(node_modules)]
        assert size_of(node_modules) == 60

        report = scan(tmp_path)
        assert report.count == 1
        assert report.entries[0].path == str(node_modules)
        assert report.total_bytes == 60

    def test_empty_root(self, tmp_path):
        report = scan(tmp_path)
        assert report.is_empty
        assert report.total_bytes == 0
