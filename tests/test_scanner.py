"""Tests for directory sizing and scan orchestration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from devjunk import scanner
from devjunk.categories import JunkKind
from devjunk.errors import MetadataError, NotADirectory, PathNotFound
from devjunk.models import ScanConfig, ScanProgress
from devjunk.scanner import (
    get_directory_size,
    get_directory_stats,
    scan,
    scan_with_progress,
    validate_roots,
)


def make_tree(root: Path, files: dict[str, bytes]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


class TestGetDirectoryStats:
    def test_empty_directory(self, tmp_path):
        assert get_directory_stats(tmp_path) == (0, 0)

    def test_directory_with_files(self, tmp_path):
        (tmp_path / "test.txt").write_text("Hello, World!")
        assert get_directory_stats(tmp_path) == (13, 1)

    def test_nested_directory(self, tmp_path):
        make_tree(tmp_path, {"a/b/c.txt": b"test", "a/d.txt": b"12345678", "e.bin": b"x"})
        assert get_directory_stats(tmp_path) == (13, 3)
        assert get_directory_size(tmp_path) == 13

    def test_does_not_follow_symlinks(self, tmp_path):
        outside = tmp_path / "outside"
        make_tree(outside, {"big.bin": b"x" * 1000})
        inside = tmp_path / "inside"
        make_tree(inside, {"small.txt": b"abc"})
        (inside / "link_dir").symlink_to(outside, target_is_directory=True)
        (inside / "link_file").symlink_to(outside / "big.bin")

        assert get_directory_stats(inside) == (3, 1)

    def test_unreadable_metadata_counts_as_nothing(self, tmp_path):
        make_tree(tmp_path, {"ok.txt": b"12345", "bad.txt": b"1234567890"})
        real_file_size = scanner._file_size

        def flaky(path):
            if path.endswith("bad.txt"):
                raise MetadataError(Path(path), PermissionError("denied"))
            return real_file_size(path)

        with patch("devjunk.scanner._file_size", side_effect=flaky):
            assert get_directory_stats(tmp_path) == (5, 1)

    def test_file_vanishing_during_walk(self, tmp_path):
        make_tree(tmp_path, {"gone.txt": b"abc"})
        with patch("devjunk.scanner.os.lstat", side_effect=FileNotFoundError("gone")):
            assert get_directory_stats(tmp_path) == (0, 0)

    def test_parallel_and_sequential_agree(self, tmp_path, monkeypatch):
        files = {f"d{i % 7}/f{i}.txt": b"x" * (i % 13) for i in range(1200)}
        make_tree(tmp_path, files)
        expected = (sum(len(c) for c in files.values()), len(files))

        assert get_directory_stats(tmp_path) == expected

        monkeypatch.setattr(scanner, "PARALLEL_THRESHOLD", 10**9)
        assert get_directory_stats(tmp_path) == expected

    def test_large_tree_uses_thread_pool(self, tmp_path, monkeypatch):
        make_tree(tmp_path, {f"f{i}": b"ab" for i in range(20)})
        monkeypatch.setattr(scanner, "PARALLEL_THRESHOLD", 5)
        monkeypatch.setattr(scanner, "CHUNK_SIZE", 3)

        with patch("devjunk.scanner.ThreadPoolExecutor", wraps=scanner.ThreadPoolExecutor) as pool:
            assert get_directory_stats(tmp_path) == (40, 20)
            assert pool.called


class TestValidateRoots:
    def test_missing_root(self, tmp_path):
        with pytest.raises(PathNotFound) as exc:
            validate_roots([tmp_path / "missing"])
        assert "Path does not exist" in str(exc.value)
        assert exc.value.path == tmp_path / "missing"

    def test_file_root(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(NotADirectory) as exc:
            validate_roots([f])
        assert "Path is not a directory" in str(exc.value)

    def test_valid_roots(self, tmp_path):
        validate_roots([tmp_path, tmp_path])


class TestScan:
    def test_finds_node_modules(self, tmp_path):
        nm = tmp_path / "project" / "node_modules"
        make_tree(nm, {"test.js": b"console.log('test');"})

        result = scan(ScanConfig.new([tmp_path]).with_hidden(True))

        assert result.item_count == 1
        assert result.items[0].kind == JunkKind.NODE_MODULES
        assert result.items[0].path == nm

    def test_finds_multiple_types(self, tmp_path):
        make_tree(
            tmp_path,
            {
                "proj1/node_modules/index.js": b"module.exports = 1;",
                "proj2/target/main.rs": b"fn main() {}",
                "proj3/__pycache__/module.pyc": b"\x00\x01\x02",
            },
        )

        result = scan(ScanConfig.new([tmp_path]).with_hidden(True))

        assert result.item_count == 3
        by_kind = {i.kind: i for i in result.items}
        assert set(by_kind) == {
            JunkKind.NODE_MODULES,
            JunkKind.RUST_TARGET,
            JunkKind.PYTHON_CACHE,
        }
        assert by_kind[JunkKind.NODE_MODULES].size_bytes == len(b"module.exports = 1;")
        assert by_kind[JunkKind.RUST_TARGET].size_bytes == len(b"fn main() {}")
        assert by_kind[JunkKind.PYTHON_CACHE].size_bytes == 3
        assert all(i.file_count == 1 for i in result.items)

    def test_sorted_by_size_descending(self, tmp_path):
        make_tree(
            tmp_path,
            {
                "a/dist/x": b"x" * 10,
                "b/build/x": b"x" * 300,
                "c/out/x": b"x" * 50,
            },
        )
        result = scan(ScanConfig.new([tmp_path]))
        assert [i.size_bytes for i in result.items] == [300, 50, 10]

    def test_multiple_roots_merged(self, tmp_path):
        one = tmp_path / "one"
        two = tmp_path / "two"
        make_tree(one, {"p/node_modules/a.js": b"aa"})
        make_tree(two, {"q/target/b.rs": b"bbbb", "r/dist/c": b"c"})

        result = scan(ScanConfig.new([one, two]))

        assert result.item_count == 3
        assert result.items[0].path == two / "q" / "target"

    def test_invalid_root_fails_whole_scan(self, tmp_path):
        make_tree(tmp_path, {"p/node_modules/a.js": b"a"})
        with patch("devjunk.recursive_scanner.scan_root") as scan_root:
            with pytest.raises(PathNotFound):
                scan(ScanConfig.new([tmp_path, tmp_path / "nope"]))
            scan_root.assert_not_called()

    def test_no_roots(self):
        result = scan(ScanConfig())
        assert result.item_count == 0

    def test_idempotent(self, tmp_path):
        make_tree(
            tmp_path,
            {
                "a/node_modules/x/y.js": b"12",
                "b/.venv/lib/site.py": b"123",
                "c/src/__pycache__/m.pyc": b"1",
            },
        )
        config = ScanConfig.new([tmp_path])

        first = scan(config)
        second = scan(config)

        assert {(i.path, i.kind, i.size_bytes, i.file_count) for i in first.items} == {
            (i.path, i.kind, i.size_bytes, i.file_count) for i in second.items
        }


class TestScanWithProgress:
    def test_reports_progress(self, tmp_path):
        make_tree(tmp_path, {"a/node_modules/x.js": b"abc", "b/target/y": b"de"})
        updates: list[ScanProgress] = []

        result = scan_with_progress(ScanConfig.new([tmp_path]), updates.append)

        assert result.item_count == 2
        assert updates
        final = updates[-1]
        assert final.items_found == 2
        assert final.bytes_found == 5
        assert final.directories_scanned >= 3

    def test_counts_directories_across_roots(self, tmp_path, monkeypatch):
        monkeypatch.setattr(scanner, "PROGRESS_INTERVAL", 1)
        for name in ("r1", "r2"):
            (tmp_path / name / "sub").mkdir(parents=True)
        updates: list[ScanProgress] = []

        scan_with_progress(ScanConfig.new([tmp_path / "r1", tmp_path / "r2"]), updates.append)

        assert updates[-1].directories_scanned == 4
        assert updates[-1].items_found == 0

    def test_validation_happens_before_progress(self, tmp_path):
        updates = []
        with pytest.raises(NotADirectory):
            f = tmp_path / "f"
            f.write_text("x")
            scan_with_progress(ScanConfig.new([f]), updates.append)
        assert updates == []
