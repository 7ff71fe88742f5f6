"""Lookups scan roots from the highest priority down."""
from __future__ import annotations

from pathlib import Path

import pytest

from fsmerger import FSMerger
from fsmerger.core.exceptions import InvalidArgumentError, NotFoundError
from helpers.fs import RecordingFilesystem, make_tree


class TestResolve:
    def test_last_root_wins(self, three_roots) -> None:
        merger = FSMerger(three_roots)
        assert merger.resolve("shared.txt") == three_roots[2] / "shared.txt"
        assert merger.read_file("shared.txt") == b"top"

    def test_falls_through_to_lower_roots(self, three_roots) -> None:
        merger = FSMerger(three_roots)
        assert merger.resolve("docs/api.md") == three_roots[1] / "docs/api.md"
        assert merger.resolve("a.txt") == three_roots[0] / "a.txt"

    def test_directories_resolve_too(self, three_roots) -> None:
        merger = FSMerger(three_roots)
        assert merger.resolve("only-middle") == three_roots[1] / "only-middle"

    def test_empty_path_is_the_highest_root(self, three_roots) -> None:
        assert FSMerger(three_roots).resolve("") == three_roots[2]

    def test_missing_everywhere_raises_not_found(self, three_roots) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            FSMerger(three_roots).resolve("nope.txt")
        assert isinstance(exc_info.value, FileNotFoundError)
        assert exc_info.value.context["path"] == "nope.txt"

    def test_absolute_path_is_rejected_before_any_probe(self, three_roots) -> None:
        host = RecordingFilesystem()
        merger = FSMerger(three_roots, host=host)
        with pytest.raises(InvalidArgumentError, match="Relative path is expected"):
            merger.resolve(str(three_roots[0] / "a.txt"))
        assert host.calls == []

    def test_probe_order_is_descending(self, three_roots) -> None:
        host = RecordingFilesystem()
        FSMerger(three_roots, host=host).resolve("a.txt")
        assert host.ops("exists") == [str(r / "a.txt") for r in reversed(three_roots)]

    def test_read_file_with_encoding(self, three_roots) -> None:
        assert FSMerger(three_roots).read_file("docs/guide.md", encoding="utf-8") == "top guide"


class TestReadFileMeta:
    def test_reports_prefix_of_the_winning_root(self, tmp_path: Path) -> None:
        lib = make_tree(tmp_path / "lib", {"x.js": "x"})
        vendor = make_tree(tmp_path / "vendor", {"y.js": "y"})
        merger = FSMerger([str(lib), {"root": str(vendor), "prefix": "vendor"}])

        meta = merger.read_file_meta("y.js")
        assert meta.path == vendor / "y.js"
        assert meta.prefix == "vendor"
        assert meta.destination_mapper is None

        meta = merger.read_file_meta("x.js")
        assert meta.path == lib / "x.js"
        assert meta.prefix is None

    def test_reports_destination_mapper(self, tmp_path: Path) -> None:
        lib = make_tree(tmp_path / "lib", {"a.ts": "a"})

        def mapper(rel: str) -> str:
            return rel.replace(".ts", ".js")

        meta = FSMerger([{"root": str(lib), "destination_mapper": mapper}]).read_file_meta("a.ts")
        assert meta.destination_mapper is mapper

    def test_base_path_matching_a_root_skips_probing(self, tmp_path: Path) -> None:
        lib = make_tree(tmp_path / "lib", {})
        vendor = make_tree(tmp_path / "vendor", {})
        host = RecordingFilesystem()
        merger = FSMerger([str(lib), {"root": str(vendor), "prefix": "v"}], host=host)

        meta = merger.read_file_meta("missing.js", base_path=str(vendor))
        assert meta.path == vendor / "missing.js"
        assert meta.prefix == "v"
        assert host.ops("exists") == []

    def test_unknown_base_path_falls_back_to_scan(self, tmp_path: Path) -> None:
        lib = make_tree(tmp_path / "lib", {"a.js": "a"})
        meta = FSMerger([str(lib)]).read_file_meta("a.js", base_path=str(tmp_path / "elsewhere"))
        assert meta.path == lib / "a.js"

    def test_missing_everywhere_raises_not_found(self, tmp_path: Path) -> None:
        lib = make_tree(tmp_path / "lib", {})
        with pytest.raises(NotFoundError):
            FSMerger([str(lib)]).read_file_meta("missing.js")
