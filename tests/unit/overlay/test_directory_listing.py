"""Directory listings are merged across roots, lowest priority first."""
from __future__ import annotations

import threading
from pathlib import Path

import pytest

from fsmerger import FSMerger
from fsmerger.core.exceptions import InvalidArgumentError, NotFoundError
from helpers.fs import GatedListingFilesystem, RecordingFilesystem, make_tree


class TestListDirectory:
    def test_union_without_duplicates(self, three_roots) -> None:
        names = FSMerger(three_roots).list_directory("docs")
        assert sorted(names) == ["api.md", "guide.md"]
        assert len(names) == len(set(names))

    def test_first_seen_order_follows_ascending_roots(self, tmp_path: Path) -> None:
        low = make_tree(tmp_path / "low", {"d/b.txt": "", "d/a.txt": ""})
        high = make_tree(tmp_path / "high", {"d/c.txt": "", "d/a.txt": ""})
        names = FSMerger([str(low), str(high)]).list_directory("d")
        # Per-root order is whatever the host returns; roots are concatenated low → high.
        assert sorted(names[:2]) == ["a.txt", "b.txt"]
        assert names[2:] == ["c.txt"]

    def test_roots_without_the_directory_are_skipped(self, three_roots) -> None:
        assert FSMerger(three_roots).list_directory("only-middle") == []

    def test_scan_is_ascending(self, three_roots) -> None:
        host = RecordingFilesystem()
        FSMerger(three_roots, host=host).list_directory("docs")
        assert host.ops("exists") == [str(r / "docs") for r in three_roots]

    def test_listing_the_roots_themselves(self, three_roots) -> None:
        names = FSMerger(three_roots).list_directory("")
        assert sorted(names) == ["a.txt", "docs", "only-middle", "shared.txt"]

    def test_missing_everywhere_raises_host_error(self, three_roots) -> None:
        with pytest.raises(FileNotFoundError):
            FSMerger(three_roots).list_directory("nope")

    def test_no_roots_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            FSMerger([]).list_directory("")

    def test_absolute_path_is_rejected(self, three_roots) -> None:
        with pytest.raises(InvalidArgumentError):
            FSMerger(three_roots).list_directory(str(three_roots[0]))


class TestListDirectoryAsync:
    def test_success_invokes_callback_once_with_merged_names(self, three_roots) -> None:
        calls = []
        done = threading.Event()

        def callback(error, names):
            calls.append((error, names))
            done.set()

        future = FSMerger(three_roots).list_directory_async("docs", callback)
        assert sorted(future.result(timeout=5)) == ["api.md", "guide.md"]
        assert done.wait(timeout=5)
        assert len(calls) == 1
        error, names = calls[0]
        assert error is None
        assert sorted(names) == ["api.md", "guide.md"]

    def test_merge_is_ordered_by_root_position(self, tmp_path: Path) -> None:
        low = make_tree(tmp_path / "low", {"d/low.txt": ""})
        high = make_tree(tmp_path / "high", {"d/high.txt": ""})
        names = FSMerger([str(low), str(high)]).list_directory_async("d").result(timeout=5)
        assert names == ["low.txt", "high.txt"]

    def test_first_error_is_reported_once(self, three_roots) -> None:
        failing = str(three_roots[0] / "docs")
        host = GatedListingFilesystem(failures={failing: PermissionError("denied")})
        calls = []
        done = threading.Event()

        def callback(error, names):
            calls.append((error, names))
            done.set()

        future = FSMerger(three_roots, host=host).list_directory_async("docs", callback)
        assert done.wait(timeout=5)
        # Let the abandoned reads finish; they must not trigger the callback again.
        host.release.set()
        with pytest.raises(PermissionError):
            future.result(timeout=5)

        assert len(calls) == 1
        error, names = calls[0]
        assert isinstance(error, PermissionError)
        assert names is None

    def test_missing_everywhere_reports_host_error(self, three_roots) -> None:
        calls = []
        future = FSMerger(three_roots).list_directory_async("nope", lambda e, n: calls.append((e, n)))
        with pytest.raises(FileNotFoundError):
            future.result(timeout=5)
        assert len(calls) == 1
        assert isinstance(calls[0][0], FileNotFoundError)

    def test_without_callback_returns_future(self, three_roots) -> None:
        future = FSMerger(three_roots).list_directory_async("")
        assert "a.txt" in future.result(timeout=5)


def test_root_missing_from_disk(tmp_path: Path) -> None:
    merger = FSMerger([str(tmp_path / "dirX")])

    with pytest.raises(FileNotFoundError) as exc_info:
        merger.list_directory("missing")
    assert not isinstance(exc_info.value, NotFoundError)
    assert merger.collect_entries("missing") == []
