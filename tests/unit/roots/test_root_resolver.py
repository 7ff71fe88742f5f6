"""Root inputs are normalized to (root, prefix, destination_mapper)."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from fsmerger.core.exceptions import InvalidArgumentError
from fsmerger.core.roots import (
    ExplicitDescriptor,
    ExternalNode,
    NodeInfo,
    PlainPath,
    RootDescriptor,
    normalize_root,
    resolve_root,
    to_root_spec,
)


class FakeNode:
    def __init__(self, node_type, *, source_directory=None, output_path=None, prefix=None, mapper=None):
        self.node_type = node_type
        self.source_directory = source_directory
        self.output_path = output_path
        self.prefix = prefix
        self.destination_mapper = mapper


class TestToRootSpec:
    def test_string_and_pathlike_are_plain_paths(self, tmp_path: Path) -> None:
        assert to_root_spec("lib") == PlainPath("lib")
        assert to_root_spec(tmp_path) == PlainPath(tmp_path)

    def test_mapping_with_root_is_explicit(self) -> None:
        spec = to_root_spec({"root": "vendor", "prefix": "v"})
        assert spec == ExplicitDescriptor(root="vendor", prefix="v")

    def test_root_descriptor_becomes_explicit(self, tmp_path: Path) -> None:
        spec = to_root_spec(RootDescriptor(root=tmp_path, prefix="x"))
        assert isinstance(spec, ExplicitDescriptor)
        assert spec.prefix == "x"

    def test_other_objects_are_external_nodes(self) -> None:
        node = FakeNode("source", source_directory="/src")
        assert to_root_spec(node) == ExternalNode(node)

    def test_nested_list_is_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="at\\(index\\)"):
            to_root_spec(["a", "b"])


class TestResolveRoot:
    def test_plain_path_is_normalized_and_has_no_prefix(self, tmp_path: Path) -> None:
        raw = str(tmp_path / "lib" / ".." / "lib")
        descriptor = resolve_root(raw)
        assert descriptor == RootDescriptor(root=tmp_path / "lib")
        assert descriptor.prefix is None
        assert descriptor.destination_mapper is None

    def test_relative_plain_path_is_made_absolute(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_root("lib").root == tmp_path / "lib"

    def test_explicit_descriptor_keeps_prefix_and_mapper(self, tmp_path: Path) -> None:
        mapper = str.upper
        descriptor = resolve_root({"root": str(tmp_path), "prefix": "vendor", "destination_mapper": mapper})
        assert descriptor.root == tmp_path
        assert descriptor.prefix == "vendor"
        assert descriptor.destination_mapper is mapper

    def test_empty_prefix_means_no_prefix(self, tmp_path: Path) -> None:
        assert resolve_root({"root": str(tmp_path), "prefix": ""}).prefix is None

    @pytest.mark.parametrize("raw", [{"root": None}, {"root": ""}, ExplicitDescriptor(root=None), ""])
    def test_missing_root_is_invalid(self, raw) -> None:
        with pytest.raises(InvalidArgumentError, match="must be instantiated with a path"):
            resolve_root(raw)

    def test_source_node_uses_source_directory(self, tmp_path: Path) -> None:
        node = FakeNode("source", source_directory=str(tmp_path / "src"), output_path="/ignored")
        assert resolve_root(node).root == tmp_path / "src"

    def test_output_node_uses_output_path_prefix_and_mapper(self, tmp_path: Path) -> None:
        node = FakeNode("transform", output_path=str(tmp_path / "out"), prefix="gen", mapper=str.lower)
        descriptor = resolve_root(node)
        assert descriptor.root == tmp_path / "out"
        assert descriptor.prefix == "gen"
        assert descriptor.destination_mapper is str.lower

    def test_node_without_output_path_is_invalid(self) -> None:
        with pytest.raises(InvalidArgumentError):
            resolve_root(FakeNode("transform"))

    def test_custom_introspector_is_used(self, tmp_path: Path) -> None:
        node = object()
        seen = []

        def introspect(n):
            seen.append(n)
            return NodeInfo(node_type="source", source_directory=str(tmp_path))

        assert resolve_root(node, introspect).root == tmp_path
        assert seen == [node]

    def test_get_node_info_mapping(self, tmp_path: Path) -> None:
        class Node:
            def get_node_info(self):
                return {"node_type": "source", "source_directory": str(tmp_path)}

        assert resolve_root(Node()).root == tmp_path

    def test_uninspectable_node_is_invalid(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Cannot introspect"):
            resolve_root(object())


def test_normalize_root_folds_dots(tmp_path: Path) -> None:
    assert normalize_root(f"{tmp_path}{os.sep}a{os.sep}..{os.sep}b") == tmp_path / "b"
