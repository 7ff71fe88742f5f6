from __future__ import annotations

from pathlib import Path

import pytest

from fsmerger import FSMerger
from fsmerger.core.exceptions import InvalidArgumentError
from helpers.fs import make_tree


def test_at_returns_single_root_view(three_roots) -> None:
    merger = FSMerger(three_roots)
    view = merger.at(0)
    assert [d.root for d in view.roots] == [three_roots[0]]
    assert view.read_file("shared.txt") == b"base"


def test_at_is_memoized(three_roots) -> None:
    merger = FSMerger(three_roots)
    assert merger.at(1) is merger.at(1)
    assert merger.at(-1) is merger.at(2)


def test_at_out_of_range(three_roots) -> None:
    with pytest.raises(InvalidArgumentError):
        FSMerger(three_roots).at(3)
    with pytest.raises(InvalidArgumentError):
        FSMerger(three_roots).at(-4)


def test_nested_list_is_reachable_through_at(tmp_path: Path) -> None:
    a = make_tree(tmp_path / "a", {"x.txt": "a"})
    b = make_tree(tmp_path / "b", {"x.txt": "b", "y.txt": "b"})
    c = make_tree(tmp_path / "c", {"z.txt": "c"})

    merger = FSMerger([[str(a), str(b)], str(c)])
    nested = merger.at(0)
    assert len(nested) == 2
    assert nested.read_file("x.txt") == b"b"
    assert sorted(nested.list_directory("")) == ["x.txt", "y.txt"]
    assert merger.at(1).resolve("z.txt") == c / "z.txt"


def test_nested_list_cannot_be_used_at_top_level(tmp_path: Path) -> None:
    merger = FSMerger([[str(tmp_path)], str(tmp_path)])
    with pytest.raises(InvalidArgumentError):
        merger.resolve("anything")


def test_nested_views_share_host_and_config(three_roots) -> None:
    merger = FSMerger(three_roots)
    assert merger.at(0).host is merger.host
    assert merger.at(0).config is merger.config


def test_single_root_input(tmp_path: Path) -> None:
    root = make_tree(tmp_path / "only", {"f": "1"})
    merger = FSMerger(str(root))
    assert len(merger) == 1
    assert merger.fs.read_file("f") == b"1"


def test_roots_and_repr(three_roots) -> None:
    merger = FSMerger([str(r) for r in three_roots])
    assert [d.root for d in merger.roots] == three_roots
    assert "FSMerger(" in repr(merger)


def test_from_manifest(tmp_path: Path) -> None:
    make_tree(tmp_path / "lib", {"a.js": "lib"})
    make_tree(tmp_path / "vendor", {"a.js": "vendor"})
    manifest = tmp_path / "overlay.yaml"
    manifest.write_text("roots:\n  - lib\n  - root: vendor\n    prefix: vendor\n", encoding="utf-8")

    merger = FSMerger.from_manifest(manifest)
    assert [e.relative_path for e in merger.collect_entries()] == ["a.js", "vendor/a.js"]
    assert merger.read_file_meta("a.js").prefix == "vendor"
